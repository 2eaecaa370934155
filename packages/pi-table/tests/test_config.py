"""Tests for environment-driven table defaults."""

from __future__ import annotations

import logging

import pytest

from pi.table import Proportional, Table
from pi.table.config import (
    DEFAULT_AVAILABLE_WIDTH,
    STYLE_ENV,
    WIDTH_ENV,
    load_defaults,
    resolve_available_width,
)


class TestLoadDefaults:
    def test_defaults(self) -> None:
        defaults = load_defaults()
        assert defaults.available_width == DEFAULT_AVAILABLE_WIDTH == 120
        assert defaults.style == "classic"

    def test_width_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(WIDTH_ENV, "80")
        assert load_defaults().available_width == 80

    def test_invalid_width_warns(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv(WIDTH_ENV, "wide")
        with caplog.at_level(logging.WARNING, logger="pi.table.config"):
            assert load_defaults().available_width == DEFAULT_AVAILABLE_WIDTH
        assert WIDTH_ENV in caplog.text

    def test_negative_width_warns(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(WIDTH_ENV, "-4")
        assert load_defaults().available_width == DEFAULT_AVAILABLE_WIDTH

    def test_style_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(STYLE_ENV, " Modern ")
        assert load_defaults().style == "modern"

    def test_unknown_style_warns(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv(STYLE_ENV, "fancy")
        with caplog.at_level(logging.WARNING, logger="pi.table.config"):
            assert load_defaults().style == "classic"
        assert "fancy" in caplog.text


class TestResolveAvailableWidth:
    def test_first_candidate_wins(self) -> None:
        assert resolve_available_width(None, 50, 70) == 50

    def test_falls_back_to_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(WIDTH_ENV, "33")
        assert resolve_available_width(None, None) == 33

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            resolve_available_width(-1)


class TestTableUsesDefaults:
    def test_new_table_takes_env_style(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(STYLE_ENV, "markdown")
        assert Table().style == "markdown"

    def test_explicit_style_beats_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(STYLE_ENV, "markdown")
        assert Table(style="modern").style == "modern"

    def test_proportional_uses_env_width(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(WIDTH_ENV, "30")
        table = Table(rows=[["a", "b"]])
        table.set_constraint(0, Proportional(50))
        for line in table.render().split("\n"):
            assert len(line) == 30
