"""Tests for the typer CLI."""

import json

from typer.testing import CliRunner

from keycalc.__main__ import app

runner = CliRunner()


def test_press_prints_display_lines():
    result = runner.invoke(app, ["press", "7", "+", "3", "="])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["", "10"]


def test_press_compact_with_pending_operator():
    result = runner.invoke(app, ["press", "1234*"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["1,234 ×", ""]


def test_press_json():
    result = runner.invoke(app, ["press", "10/0=", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["display"] == {"previous_line": "", "current_line": "Error", "is_error": True}
    assert data["state"]["mode"] == "error"
    assert data["state"]["pending_operator"] is None


def test_press_precision_option():
    result = runner.invoke(app, ["press", "2/3=", "--precision", "4"])
    assert result.exit_code == 0
    assert result.output.splitlines()[-1] == "0.6667"


def test_press_unknown_key_fails():
    result = runner.invoke(app, ["press", "7?"])
    assert result.exit_code == 1


def test_press_invalid_config_fails():
    result = runner.invoke(app, ["press", "7", "--max-digits", "0"])
    assert result.exit_code == 1


def test_keys_lists_bindings():
    result = runner.invoke(app, ["keys"])
    assert result.exit_code == 0
    assert "Backspace" in result.output


def test_config_shows_values(monkeypatch):
    monkeypatch.setenv("KEYCALC_MAX_DIGITS", "9")
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "max_digits" in result.output
    assert "9" in result.output


def test_press_buttons():
    result = runner.invoke(app, ["press", "--buttons", "number:5", "number:0", "action:percentage"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["", "0.5"]


def test_press_bad_button_fails():
    result = runner.invoke(app, ["press", "--buttons", "action:sqrt"])
    assert result.exit_code == 1
