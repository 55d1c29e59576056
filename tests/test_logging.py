"""Tests for logging setup."""

import logging

import pytest

from nextsemver.logging import GHAFilter, NOTICE, setup_logging


@pytest.mark.parametrize(
    "level,prefix",
    [
        (logging.DEBUG, "::debug::"),
        (logging.INFO, ""),
        (NOTICE, "::notice::"),
        (logging.WARNING, "::warning::"),
        (logging.ERROR, "::error::"),
        (logging.CRITICAL, "::error::"),
        (logging.INFO + 1, ""),
    ],
)
def test_gha_prefixes(level, prefix):
    """Test the GitHub Actions workflow command prefixes."""
    record = logging.LogRecord("nextsemver", level, __file__, 1, "msg", None, None)
    assert GHAFilter().filter(record)
    assert record.ghaprefix == prefix


@pytest.mark.parametrize(
    "github_actions,expected",
    [
        ("true", "::notice::Determined BUMP\n"),
        ("", "NOTICE: Determined BUMP\n"),
    ],
)
def test_setup_logging(monkeypatch, capsys, github_actions, expected):
    """Test the console and GitHub Actions formats."""
    monkeypatch.setenv("GITHUB_ACTIONS", github_actions)

    setup_logging()
    logging.getLogger("nextsemver.getversion").log(NOTICE, "Determined BUMP")
    logging.getLogger("nextsemver.getversion").debug("hidden")

    assert capsys.readouterr().err == expected


def test_setup_logging_reentrant(monkeypatch, capsys):
    """Test that repeated setup does not duplicate output."""
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)

    setup_logging()
    setup_logging(verbose=True)

    assert len(logging.getLogger("nextsemver").handlers) == 1

    logging.getLogger("nextsemver.utils").debug("shown")
    assert capsys.readouterr().err == "DEBUG: shown\n"
