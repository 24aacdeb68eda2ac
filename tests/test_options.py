"""Tests for ManagerOptions."""

from __future__ import annotations

import logging

import pytest

from voboost_config.options import ManagerOptions


def test_defaults() -> None:
    options = ManagerOptions()
    assert options.debounce_seconds == pytest.approx(0.15)
    assert options.encoding == "utf-8"
    assert options.notify_initial_reload is True


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VOBOOST_CONFIG_DEBOUNCE_MS", "250")
    monkeypatch.setenv("VOBOOST_CONFIG_ENCODING", "utf-16")
    monkeypatch.setenv("VOBOOST_CONFIG_NOTIFY_INITIAL", "off")

    options = ManagerOptions.from_env()

    assert options.debounce_seconds == pytest.approx(0.25)
    assert options.encoding == "utf-16"
    assert options.notify_initial_reload is False


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VOBOOST_CONFIG_DEBOUNCE_MS", "250")
    monkeypatch.setenv("VOBOOST_CONFIG_NOTIFY_INITIAL", "no")

    options = ManagerOptions.from_env(debounce_seconds=0.01, notify_initial_reload=True)

    assert options.debounce_seconds == pytest.approx(0.01)
    assert options.notify_initial_reload is True


def test_unrecognised_bool_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("VOBOOST_CONFIG_DEBOUNCE_MS", raising=False)
    monkeypatch.setenv("VOBOOST_CONFIG_NOTIFY_INITIAL", "maybe")
    assert ManagerOptions.from_env().notify_initial_reload is True


def test_unrecognised_bool_is_logged(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setenv("VOBOOST_CONFIG_NOTIFY_INITIAL", "maybe")
    with caplog.at_level(logging.WARNING, logger="voboost_config.options"):
        ManagerOptions.from_env()
    assert "VOBOOST_CONFIG_NOTIFY_INITIAL" in caplog.text


@pytest.mark.parametrize("raw", ["0", " FALSE ", "no", "Off"])
def test_false_words(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("VOBOOST_CONFIG_NOTIFY_INITIAL", raw)
    assert ManagerOptions.from_env().notify_initial_reload is False


def test_negative_debounce_is_rejected() -> None:
    with pytest.raises(ValueError):
        ManagerOptions(debounce_seconds=-1)
