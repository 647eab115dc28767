"""Tests for the command-line interface."""

import pytest

from tokyo_events.cli import main


def test_districts_japanese(capsys):
    """Test the catalog is printed grouped by area."""
    assert main(["districts"]) == 0

    out = capsys.readouterr().out
    assert out.index("23区") < out.index("多摩地域")
    assert "central" in out
    assert "都心エリア" in out


def test_districts_english(capsys):
    """Test English names are printed with --lang en."""
    assert main(["districts", "--lang", "en"]) == 0

    assert "Tama North (Fuchu, etc.)" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    """Test running without a command shows usage."""
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_version(capsys):
    """Test --version exits cleanly."""
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])

    assert exc_info.value.code == 0
    assert "0.1.0" in capsys.readouterr().out
