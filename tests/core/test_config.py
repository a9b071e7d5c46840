"""Unit tests for src/core/config.py"""

import logging
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.core.config import LOG_LEVEL_ENV, RESET_DELAY_ENV, Settings, setup_logging


def test_defaults() -> None:
    settings = Settings()
    assert settings.reset_delay_seconds == 3.0
    assert settings.log_level == "INFO"


def test_log_level_is_normalized() -> None:
    assert Settings(log_level="debug").log_level == "DEBUG"


@pytest.mark.parametrize("overrides", [{"log_level": "chatty"}, {"reset_delay_seconds": -1}])
def test_invalid_settings(overrides: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        _ = Settings.model_validate(overrides)


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(RESET_DELAY_ENV, "0.5")
    monkeypatch.setenv(LOG_LEVEL_ENV, "warning")
    settings = Settings.from_env()
    assert settings.reset_delay_seconds == 0.5
    assert settings.log_level == "WARNING"


def test_from_env_without_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(RESET_DELAY_ENV, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert Settings.from_env() == Settings()


def test_from_env_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(RESET_DELAY_ENV, "soon")
    with pytest.raises(ValidationError):
        _ = Settings.from_env()


def test_setup_logging() -> None:
    with patch("src.core.config.logging.basicConfig") as basic_config:
        setup_logging(Settings(log_level="debug"))
    basic_config.assert_called_once()
    assert basic_config.call_args.kwargs["level"] == logging.DEBUG
