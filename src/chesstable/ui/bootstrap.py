"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

    from chesstable.ui.dialogs.settings_dialog import AppSettings

_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str | int = "WARNING") -> None:
    """Configure the root logger once; unknown level names fall back to WARNING."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING
        level = resolved
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger().setLevel(level)


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings and theme."""
    from chesstable.ui.styles.theme import APP_STYLE

    app.setApplicationName("Chesstable")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def run_application(
    settings: AppSettings | None = None,
    argv: list[str] | None = None,
) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from chesstable.ui.main_window import MainWindow

    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)

    window = MainWindow(settings)
    window.show()
    _LOGGER.debug("Main window shown")

    return app.exec()
