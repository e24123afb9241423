"""
Tests for environment-backed configuration accessors.
"""

from __future__ import annotations

import logging

import pytest

from routemethod.utils import config


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's .env from leaking into the assertions."""
    monkeypatch.setattr(config, "load_config", lambda: None)
    for key in (
        "ANTHROPIC_API_KEY",
        "ANTHROPIC_MODEL",
        "MAX_REFINEMENTS",
        "ITINERARY_CLOSING_MARKERS",
        "LOG_LEVEL",
        "LOG_FILE",
    ):
        monkeypatch.delenv(key, raising=False)


def test_required_key_missing_raises() -> None:
    with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
        config.anthropic_api_key()


def test_required_key_present(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "  sk-test  ")
    assert config.anthropic_api_key() == "sk-test"


def test_defaults() -> None:
    assert config.llm_model() == "claude-sonnet-4-5"
    assert config.max_refinements() == 10
    assert config.closing_markers() == config.DEFAULT_CLOSING_MARKERS
    assert config.log_level() == logging.INFO
    assert config.log_file() is None


def test_invalid_int_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAX_REFINEMENTS", "ten")
    assert config.max_refinements() == 10
    monkeypatch.setenv("MAX_REFINEMENTS", "3")
    assert config.max_refinements() == 3


def test_closing_markers_parsed(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pipe-separated markers are trimmed and blanks dropped."""
    monkeypatch.setenv("ITINERARY_CLOSING_MARKERS", " Here is your plan. | |Questions:")
    assert config.closing_markers() == ("Here is your plan.", "Questions:")


def test_log_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FILE", "logs/app.log")
    assert config.log_level() == logging.DEBUG
    assert config.log_file() == config.project_root() / "logs" / "app.log"
    monkeypatch.setenv("LOG_LEVEL", "loud")
    assert config.log_level() == logging.INFO
