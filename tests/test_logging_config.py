"""Tests for singleton logging configuration."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from unittest.mock import patch

import pytest

from llmcheck.logging_config import (
    _SUPPRESSED_LOGGERS,
    LOG_DATEFMT,
    LOG_FORMAT,
    set_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _reset_flag() -> Iterator[None]:
    """Reset the singleton flag and root level around each test."""
    import llmcheck.logging_config as mod

    root = logging.getLogger()
    level = root.level
    mod._setup_done = False
    yield
    mod._setup_done = False
    root.setLevel(level)


def test_setup_logging_is_idempotent() -> None:
    with patch("llmcheck.logging_config.logging.basicConfig") as mock_bc:
        setup_logging()
        setup_logging("DEBUG")  # second call is no-op
        mock_bc.assert_called_once()


def test_setup_logging_passes_format_and_level() -> None:
    with patch("llmcheck.logging_config.logging.basicConfig") as mock_bc:
        setup_logging("info")
    mock_bc.assert_called_once_with(
        level=logging.INFO, format=LOG_FORMAT, datefmt=LOG_DATEFMT
    )


def test_unknown_level_falls_back_to_warning() -> None:
    with patch("llmcheck.logging_config.logging.basicConfig") as mock_bc:
        setup_logging("LOUD")
    assert mock_bc.call_args.kwargs["level"] == logging.WARNING


def test_suppressed_loggers_at_warning() -> None:
    setup_logging()
    for name in _SUPPRESSED_LOGGERS:
        lg = logging.getLogger(name)
        assert lg.level == logging.WARNING, (
            f"Logger {name!r} level is {lg.level}, expected WARNING"
        )


def test_set_level_adjusts_root() -> None:
    set_level("DEBUG")
    assert logging.getLogger().level == logging.DEBUG
    set_level("warning")
    assert logging.getLogger().level == logging.WARNING
