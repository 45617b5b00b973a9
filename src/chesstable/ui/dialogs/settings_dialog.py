"""SettingsDialog — user-configurable options and their backing dataclass."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace

from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from chesstable.core.enums import Color
from chesstable.ui.i18n import LANGUAGES, t
from chesstable.ui.styles.theme import THEMES

_LOGGER = logging.getLogger(__name__)

_ENV_PREFIX = "CHESSTABLE_"
PROMOTION_POLICIES = ("ask", "queen", "first")

# ── Settings data class ──────────────────────────────────────────────────────


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Game
    human_color: Color = Color.WHITE
    start_fen: str | None = None
    promotion_policy: str = "ask"  # one of PROMOTION_POLICIES

    # Board
    board_theme: str = "Classic"
    show_coordinates: bool = True
    show_legal_moves: bool = True
    animate_moves: bool = True
    animation_ms: int = 400

    # Engine
    engine_depth: int = 3
    engine_time_ms: int = 700

    # General
    language: str = "English"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppSettings:
        """Read ``CHESSTABLE_<FIELD>`` overrides; bad values keep the default."""
        env = os.environ if environ is None else environ
        settings = cls()
        for f in fields(cls):
            raw = env.get(_ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            try:
                value = _parse_value(f.name, raw, getattr(settings, f.name))
            except ValueError as exc:
                _LOGGER.warning("Ignoring %s%s=%r: %s", _ENV_PREFIX, f.name.upper(), raw, exc)
                continue
            settings = replace(settings, **{f.name: value})
        return settings


def _parse_value(name: str, raw: str, default: object) -> object:
    if name == "human_color":
        try:
            return Color[raw.strip().upper()]
        except KeyError:
            raise ValueError("expected 'white' or 'black'") from None
    if name == "promotion_policy":
        if raw not in PROMOTION_POLICIES:
            raise ValueError(f"expected one of {', '.join(PROMOTION_POLICIES)}")
        return raw
    if name == "start_fen":
        return raw or None
    if isinstance(default, bool):
        lowered = raw.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError("expected a boolean")
    if isinstance(default, int):
        value = int(raw)
        if value <= 0:
            raise ValueError("expected a positive integer")
        return value
    return raw


# ── Dialog ───────────────────────────────────────────────────────────────────


class SettingsDialog(QDialog):
    """Edits an :class:`AppSettings` instance in place on accept."""

    def __init__(self, settings: AppSettings, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._settings = settings
        s = t()
        self.setWindowTitle(s.settings_title)

        layout = QVBoxLayout(self)
        form = QFormLayout()
        form.setSpacing(10)
        layout.addLayout(form)

        self._color_combo = QComboBox()
        self._color_combo.addItem(s.color_white, Color.WHITE)
        self._color_combo.addItem(s.color_black, Color.BLACK)
        self._color_combo.setCurrentIndex(int(settings.human_color))
        form.addRow(s.settings_play_as, self._color_combo)

        self._depth_spin = QSpinBox()
        self._depth_spin.setRange(1, 8)
        self._depth_spin.setValue(settings.engine_depth)
        form.addRow(s.settings_engine_depth, self._depth_spin)

        self._time_spin = QSpinBox()
        self._time_spin.setRange(100, 30_000)
        self._time_spin.setSingleStep(100)
        self._time_spin.setSuffix(" ms")
        self._time_spin.setValue(settings.engine_time_ms)
        form.addRow(s.settings_engine_time, self._time_spin)

        self._animate_check = QCheckBox()
        self._animate_check.setChecked(settings.animate_moves)
        form.addRow(s.settings_animate_moves, self._animate_check)

        self._legal_check = QCheckBox()
        self._legal_check.setChecked(settings.show_legal_moves)
        form.addRow(s.settings_show_legal, self._legal_check)

        self._promo_combo = QComboBox()
        for policy, label in zip(
            PROMOTION_POLICIES,
            (s.settings_promotion_ask, s.settings_promotion_queen, s.settings_promotion_first),
        ):
            self._promo_combo.addItem(label, policy)
        self._promo_combo.setCurrentIndex(PROMOTION_POLICIES.index(settings.promotion_policy))
        form.addRow(s.settings_promotion, self._promo_combo)

        self._theme_combo = QComboBox()
        self._theme_combo.addItems(list(THEMES))
        self._theme_combo.setCurrentIndex(max(0, self._theme_combo.findText(settings.board_theme)))
        form.addRow(s.settings_board_theme, self._theme_combo)

        self._lang_combo = QComboBox()
        self._lang_combo.addItems(LANGUAGES)
        self._lang_combo.setCurrentIndex(max(0, self._lang_combo.findText(settings.language)))
        form.addRow(s.settings_language, self._lang_combo)

        note = QLabel(s.settings_note)
        note.setWordWrap(True)
        layout.addWidget(note)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def accept(self) -> None:
        s = self._settings
        s.human_color = self._color_combo.currentData()
        s.engine_depth = self._depth_spin.value()
        s.engine_time_ms = self._time_spin.value()
        s.animate_moves = self._animate_check.isChecked()
        s.show_legal_moves = self._legal_check.isChecked()
        s.promotion_policy = self._promo_combo.currentData()
        s.board_theme = self._theme_combo.currentText()
        s.language = self._lang_combo.currentText()
        super().accept()
