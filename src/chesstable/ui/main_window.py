"""MainWindow — top-level window assembling the board, move list and opponent."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QAction, QCloseEvent
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QStatusBar,
    QWidget,
)

from chesstable.core.enums import Color, PieceType
from chesstable.core.move import Move
from chesstable.core.position import ChessPosition
from chesstable.game.errors import EngineError
from chesstable.game.interaction import choose_first, prefer_piece
from chesstable.game.interfaces import (
    DisambiguationHook,
    IOpponent,
    TurnOutcome,
    TurnPhase,
)
from chesstable.game.sequencer import TurnSequencer
from chesstable.ui.board.board_view import BoardView
from chesstable.ui.dialogs.promotion_dialog import dialog_chooser
from chesstable.ui.dialogs.settings_dialog import AppSettings, SettingsDialog
from chesstable.ui.i18n import set_language, t
from chesstable.ui.opponent_session import OpponentSession
from chesstable.ui.panels.move_panel import MovePanel
from chesstable.ui.styles.theme import THEMES, BoardTheme

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window: one human against the computer."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        opponent: IOpponent | None = None,
    ) -> None:
        super().__init__()
        self.setMinimumSize(760, 560)
        self.resize(960, 680)

        self._settings = settings if settings is not None else AppSettings()
        set_language(self._settings.language)

        self._session: OpponentSession | None = None
        if opponent is None:
            self._session = OpponentSession(
                parent=self,
                max_depth=self._settings.engine_depth,
                time_limit_ms=self._settings.engine_time_ms,
            )
            self._session.setup()
            opponent = self._session
        self._opponent = opponent
        self._sequencer: TurnSequencer | None = None

        self._setup_ui()
        self._setup_menu()
        self._connect_signals()
        self._apply_view_settings()
        self.retranslate_ui()

        self.new_game()

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        self._board_view = BoardView()
        root.addWidget(self._board_view, stretch=3)

        self._move_panel = MovePanel()
        self._move_panel.setFixedWidth(220)
        root.addWidget(self._move_panel)

        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self._status_label = QLabel()
        self._status.addWidget(self._status_label)

    def _setup_menu(self) -> None:
        menu_bar = self.menuBar()
        assert menu_bar is not None

        self._menu_game = menu_bar.addMenu("")
        assert self._menu_game is not None

        self._act_new_game = QAction(self)
        self._act_new_game.setShortcut("Ctrl+N")
        self._act_new_game.triggered.connect(self.new_game)
        self._menu_game.addAction(self._act_new_game)

        self._act_flip = QAction(self)
        self._act_flip.setShortcut("F")
        self._act_flip.triggered.connect(self._on_flip)
        self._menu_game.addAction(self._act_flip)

        self._menu_game.addSeparator()

        self._act_quit = QAction(self)
        self._act_quit.setShortcut("Ctrl+Q")
        self._act_quit.triggered.connect(self.close)
        self._menu_game.addAction(self._act_quit)

        self._menu_settings = menu_bar.addMenu("")
        assert self._menu_settings is not None

        self._act_settings = QAction(self)
        self._act_settings.setShortcut("Ctrl+,")
        self._act_settings.triggered.connect(self._on_settings)
        self._menu_settings.addAction(self._act_settings)

    def retranslate_ui(self) -> None:
        s = t()
        self.setWindowTitle(s.window_title)
        assert self._menu_game is not None and self._menu_settings is not None
        self._menu_game.setTitle(s.menu_game)
        self._act_new_game.setText(s.menu_new_game)
        self._act_flip.setText(s.menu_flip_board)
        self._act_quit.setText(s.menu_quit)
        self._menu_settings.setTitle(s.menu_settings)
        self._act_settings.setText(s.menu_settings_action)
        self._move_panel.retranslate_ui()
        self._update_status()

    def _connect_signals(self) -> None:
        self._move_panel.move_clicked.connect(self._on_listed_move)
        self._move_panel.undo_clicked.connect(self._on_undo)
        self._move_panel.auto_clicked.connect(self._on_auto)

    def _apply_view_settings(self) -> None:
        s = self._settings
        scene = self._board_view.board_scene
        scene.set_theme(THEMES.get(s.board_theme, BoardTheme.default()))
        scene.set_show_coordinates(s.show_coordinates)
        scene.set_show_legal_moves(s.show_legal_moves)
        scene.set_animate_moves(s.animate_moves, s.animation_ms)

    # ── Accessors ────────────────────────────────────────────────────────

    @property
    def sequencer(self) -> TurnSequencer | None:
        return self._sequencer

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    @property
    def move_panel(self) -> MovePanel:
        return self._move_panel

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def status_text(self) -> str:
        return self._status_label.text()

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self) -> None:
        """Drop the current game and start from the configured position."""
        if self._sequencer is not None:
            self._sequencer.shutdown()

        position = self._create_position(self._settings.start_fen)
        human = self._settings.human_color
        sequencer = TurnSequencer(
            position=position,
            opponent=self._opponent,
            board=self._board_view.board_scene,
            move_list=self._move_panel,
            human_color=human,
            chooser=self._create_chooser(position),
        )
        events = sequencer.events
        events.on_phase_changed.append(self._on_phase_changed)
        events.on_move.append(self._on_move)
        events.on_game_over.append(self._on_game_over)
        events.on_fatal.append(self._on_fatal)
        self._sequencer = sequencer

        scene = self._board_view.board_scene
        scene.bind(sequencer.interaction)
        scene.set_flipped(human == Color.BLACK)

        _LOGGER.info("New game: human plays %s from %s", human, position.fen())
        sequencer.start()
        self._update_status()

    @staticmethod
    def _create_position(fen: str | None) -> ChessPosition:
        if fen:
            try:
                return ChessPosition(fen)
            except ValueError as exc:
                _LOGGER.warning("Invalid start FEN %r (%s); using the initial position", fen, exc)
        return ChessPosition()

    def _create_chooser(self, position: ChessPosition) -> DisambiguationHook:
        policy = self._settings.promotion_policy
        if policy == "queen":
            return prefer_piece(PieceType.QUEEN)
        if policy == "first":
            return choose_first
        return dialog_chooser(lambda: position.turn_color, self)

    # ── Actions ──────────────────────────────────────────────────────────

    def _on_listed_move(self, index: int) -> None:
        sequencer = self._sequencer
        if sequencer is None or sequencer.phase != TurnPhase.AWAITING_HUMAN_MOVE:
            return
        sequencer.interaction.select_listed(index)

    def _on_undo(self) -> None:
        if self._sequencer is not None and self._sequencer.can_undo:
            self._sequencer.undo()

    def _on_auto(self) -> None:
        if self._sequencer is not None and self._sequencer.can_auto:
            self._sequencer.auto_move()

    def _on_flip(self) -> None:
        scene = self._board_view.board_scene
        scene.set_flipped(not scene.is_flipped())

    def _on_settings(self) -> None:
        dialog = SettingsDialog(self._settings, self)
        if dialog.exec() != SettingsDialog.DialogCode.Accepted:
            return
        self.apply_settings()

    def apply_settings(self) -> None:
        """Apply settings that take effect without restarting the game."""
        s = self._settings
        set_language(s.language)
        self._apply_view_settings()
        if self._session is not None:
            self._session.set_limits(s.engine_depth, s.engine_time_ms)
        self.retranslate_ui()
        _LOGGER.debug("Settings applied: %s", s)

    # ── Sequencer events ─────────────────────────────────────────────────

    def _on_phase_changed(self, _phase: TurnPhase) -> None:
        self._update_status()

    def _on_move(self, move: Move, by_human: bool) -> None:
        _LOGGER.debug("%s played %s", "Human" if by_human else "Computer", move)

    def _on_game_over(self, outcome: TurnOutcome) -> None:
        _LOGGER.info("Result %s", outcome.result_text)
        self._update_status()

    def _on_fatal(self, err: EngineError) -> None:
        self._update_status()
        self._show_fatal(str(err))

    def _show_fatal(self, message: str) -> None:
        s = t()
        QMessageBox.critical(self, s.fatal_title, s.fatal_text.format(msg=message))

    def _update_status(self) -> None:
        s = t()
        sequencer = self._sequencer
        if sequencer is None:
            self._status_label.setText(s.status_ready)
            return
        phase = sequencer.phase
        if phase == TurnPhase.AWAITING_HUMAN_MOVE:
            color = s.color_white if sequencer.human_color == Color.WHITE else s.color_black
            text = s.status_your_move.format(color=color)
        elif phase in (TurnPhase.COMPUTING_OPPONENT_MOVE, TurnPhase.ANIMATING_OPPONENT_MOVE):
            text = s.status_thinking
        elif phase == TurnPhase.GAME_OVER:
            text = s.status_game_over.format(result=sequencer.outcome.result_text)
        elif phase == TurnPhase.HALTED:
            text = s.status_halted
        else:
            text = s.status_ready
        self._status_label.setText(text)

    # ── Qt overrides ─────────────────────────────────────────────────────

    def closeEvent(self, event: QCloseEvent | None) -> None:
        if self._sequencer is not None:
            self._sequencer.shutdown()
        if self._session is not None:
            self._session.shutdown()
        super().closeEvent(event)
