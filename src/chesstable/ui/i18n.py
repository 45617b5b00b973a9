"""Internationalisation strings for the chesstable UI.

Usage::

    from chesstable.ui.i18n import t, set_language

    set_language("Russian")
    print(t().undo)          # "Отменить"
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Strings:
    window_title: str

    # Move panel
    moves_header: str
    undo: str
    auto: str

    # Menus
    menu_game: str
    menu_new_game: str
    menu_flip_board: str
    menu_quit: str
    menu_settings: str
    menu_settings_action: str

    # Status bar
    status_ready: str
    status_your_move: str  # "{color} to move"
    status_thinking: str
    status_game_over: str  # "Game over: {result}"
    status_halted: str

    # Dialogs
    promote_title: str
    promote_label: str
    fatal_title: str
    fatal_text: str  # "{msg}"

    # Settings
    settings_title: str
    settings_play_as: str
    settings_engine_depth: str
    settings_engine_time: str
    settings_animate_moves: str
    settings_show_legal: str
    settings_promotion: str
    settings_promotion_ask: str
    settings_promotion_queen: str
    settings_promotion_first: str
    settings_board_theme: str
    settings_language: str
    settings_note: str

    color_white: str
    color_black: str
    piece_white: str
    piece_black: str


_EN = Strings(
    window_title="Chesstable",
    moves_header="Moves",
    undo="undo",
    auto="auto",
    menu_game="Game",
    menu_new_game="New game",
    menu_flip_board="Flip board",
    menu_quit="Quit",
    menu_settings="Settings",
    menu_settings_action="Preferences…",
    status_ready="Ready",
    status_your_move="{color} to move",
    status_thinking="Computer is thinking…",
    status_game_over="Game over: {result}",
    status_halted="Game halted after an internal error",
    promote_title="Promotion",
    promote_label="Choose a piece to promote to:",
    fatal_title="Internal error",
    fatal_text="The game cannot continue.\n\n{msg}",
    settings_title="Settings",
    settings_play_as="Play as:",
    settings_engine_depth="Search depth:",
    settings_engine_time="Time per move:",
    settings_animate_moves="Animate moves:",
    settings_show_legal="Show legal moves:",
    settings_promotion="Promotion:",
    settings_promotion_ask="Ask",
    settings_promotion_queen="Always queen",
    settings_promotion_first="First legal",
    settings_board_theme="Board theme:",
    settings_language="Language:",
    settings_note="Changes apply from the next game.",
    color_white="White",
    color_black="Black",
    piece_white="white",
    piece_black="black",
)

_RU = Strings(
    window_title="Chesstable",
    moves_header="Ходы",
    undo="отменить",
    auto="авто",
    menu_game="Игра",
    menu_new_game="Новая игра",
    menu_flip_board="Перевернуть доску",
    menu_quit="Выход",
    menu_settings="Настройки",
    menu_settings_action="Параметры…",
    status_ready="Готово",
    status_your_move="Ход: {color}",
    status_thinking="Компьютер думает…",
    status_game_over="Игра окончена: {result}",
    status_halted="Игра остановлена из-за внутренней ошибки",
    promote_title="Превращение пешки",
    promote_label="Выберите фигуру для превращения:",
    fatal_title="Внутренняя ошибка",
    fatal_text="Продолжить игру невозможно.\n\n{msg}",
    settings_title="Настройки",
    settings_play_as="Играть за:",
    settings_engine_depth="Глубина поиска:",
    settings_engine_time="Время на ход:",
    settings_animate_moves="Анимация ходов:",
    settings_show_legal="Показывать возможные ходы:",
    settings_promotion="Превращение:",
    settings_promotion_ask="Спрашивать",
    settings_promotion_queen="Всегда ферзь",
    settings_promotion_first="Первый допустимый",
    settings_board_theme="Тема доски:",
    settings_language="Язык:",
    settings_note="Изменения вступят в силу с начала следующей игры.",
    color_white="Белые",
    color_black="Чёрные",
    piece_white="белая",
    piece_black="чёрная",
)

_LOCALES: dict[str, Strings] = {
    "English": _EN,
    "Russian": _RU,
}

LANGUAGES: list[str] = list(_LOCALES.keys())

_current: Strings = _EN


def t() -> Strings:
    """Return the active locale strings."""
    return _current


def set_language(language: str) -> None:
    """Switch the global locale. Unknown names fall back to English."""
    global _current
    _current = _LOCALES.get(language, _EN)
