"""Tests for console tags/colors and configuration validation."""

from __future__ import annotations

import contextlib
import io

import pytest

from tortuga.config import Config
from tortuga.environment import GridMap
from tortuga.logging_utils import (
    Color,
    LOG_TAG_ERROR,
    LOG_TAG_SEARCH,
    colored,
    log_error,
    log_search,
)
from tortuga.search import AStarSearch


def capture(func, *args):
    buffer = io.StringIO()
    with contextlib.redirect_stdout(buffer):
        func(*args)
    return buffer.getvalue()


def test_colored_respects_no_color(monkeypatch):
    monkeypatch.setenv("TORTUGA_NO_COLOR", "1")
    assert colored("hello", Color.RED) == "hello"

    monkeypatch.delenv("TORTUGA_NO_COLOR")
    assert colored("hello", Color.RED) == f"{Color.RED.value}hello{Color.RESET.value}"
    assert colored("hello", Color.RED, bold=True).startswith(Color.BOLD.value)


def test_error_tag_is_always_printed(monkeypatch):
    monkeypatch.setenv("TORTUGA_NO_COLOR", "1")
    assert capture(log_error, "boom") == f"{LOG_TAG_ERROR} boom\n"


def test_search_traces_only_with_debug(monkeypatch):
    monkeypatch.setenv("TORTUGA_NO_COLOR", "1")
    monkeypatch.delenv("DEBUG_SEARCH", raising=False)
    assert capture(log_search, "expanding") == ""

    monkeypatch.setenv("DEBUG_SEARCH", "true")
    assert capture(log_search, "expanding") == f"{LOG_TAG_SEARCH} expanding\n"


def test_search_phases_are_traced(monkeypatch):
    monkeypatch.setenv("TORTUGA_NO_COLOR", "1")
    monkeypatch.setenv("DEBUG_SEARCH", "1")
    grid = GridMap.load("[0,0] [2,6] [7,7] [0,8] [8,8] [5,2]", 1)

    output = capture(AStarSearch(grid).find_path)

    assert "[AStar] searching direct route" in output
    assert "[AStar] searching route from Tortuga to the Chest" in output
    assert "Kraken at (7, 7) destroyed" in output
    assert "[AStar] resolved" in output


def test_config_validate_rejects_bad_values(monkeypatch):
    Config.validate()

    monkeypatch.setattr(Config, "MAX_SEARCH_DEPTH", 0)
    with pytest.raises(ValueError, match="TORTUGA_MAX_DEPTH"):
        Config.validate()

    monkeypatch.setattr(Config, "MAX_SEARCH_DEPTH", 25)
    monkeypatch.setattr(Config, "DEFAULT_SCENARIO", 3)
    with pytest.raises(ValueError, match="TORTUGA_DEFAULT_SCENARIO"):
        Config.validate()


def test_config_display_lists_settings():
    text = Config.display()
    assert text.startswith("Tortuga Configuration:")
    assert f"Max Search Depth: {Config.MAX_SEARCH_DEPTH}" in text
