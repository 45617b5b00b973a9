"""Tests for AppSettings environment parsing and the settings dialog."""

from __future__ import annotations

import logging

import pytest

from chesstable.core.enums import Color
from chesstable.ui.dialogs.settings_dialog import AppSettings, SettingsDialog


def test_defaults() -> None:
    settings = AppSettings.from_env({})
    assert settings == AppSettings()
    assert settings.engine_time_ms == 700
    assert settings.promotion_policy == "ask"


def test_env_overrides() -> None:
    settings = AppSettings.from_env(
        {
            "CHESSTABLE_HUMAN_COLOR": "black",
            "CHESSTABLE_ENGINE_DEPTH": "5",
            "CHESSTABLE_ANIMATE_MOVES": "off",
            "CHESSTABLE_PROMOTION_POLICY": "queen",
            "CHESSTABLE_START_FEN": "8/8/8/8/8/8/8/K6k w - - 0 1",
        }
    )
    assert settings.human_color == Color.BLACK
    assert settings.engine_depth == 5
    assert settings.animate_moves is False
    assert settings.promotion_policy == "queen"
    assert settings.start_fen == "8/8/8/8/8/8/8/K6k w - - 0 1"


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("CHESSTABLE_HUMAN_COLOR", "green"),
        ("CHESSTABLE_ENGINE_DEPTH", "deep"),
        ("CHESSTABLE_ENGINE_TIME_MS", "-5"),
        ("CHESSTABLE_SHOW_COORDINATES", "maybe"),
        ("CHESSTABLE_PROMOTION_POLICY", "knight"),
    ],
)
def test_invalid_values_fall_back(
    key: str, value: str, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING):
        settings = AppSettings.from_env({key: value})
    assert settings == AppSettings()
    assert key in caplog.text


def test_dialog_accept_writes_back() -> None:
    settings = AppSettings()
    dialog = SettingsDialog(settings)
    dialog._color_combo.setCurrentIndex(1)
    dialog._depth_spin.setValue(6)
    dialog._animate_check.setChecked(False)
    dialog._promo_combo.setCurrentIndex(2)

    dialog.accept()

    assert settings.human_color == Color.BLACK
    assert settings.engine_depth == 6
    assert settings.animate_moves is False
    assert settings.promotion_policy == "first"


def test_dialog_reject_keeps_settings() -> None:
    settings = AppSettings()
    dialog = SettingsDialog(settings)
    dialog._depth_spin.setValue(7)
    dialog.reject()
    assert settings.engine_depth == 3
