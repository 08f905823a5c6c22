"""Tests for key and button bindings."""

import pytest

from keycalc.keymap import (
    KEY_BINDINGS,
    button_label,
    event_for_button,
    event_for_key,
    normalize_keypress,
    parse_buttons,
    parse_keys,
)
from keycalc.models import CLEAR, DECIMAL, DELETE, EQUALS, PERCENT, Event, EventKind, Operator


# --- Key bindings (4 tests) ---

def test_digits_bound():
    for d in "0123456789":
        assert event_for_key(d) == Event.of_digit(d)


@pytest.mark.parametrize("key,op", [
    ("+", Operator.ADD),
    ("-", Operator.SUBTRACT),
    ("*", Operator.MULTIPLY),
    ("x", Operator.MULTIPLY),
    ("/", Operator.DIVIDE),
])
def test_operator_keys(key, op):
    assert event_for_key(key) == Event.of_operator(op)


def test_action_keys():
    assert event_for_key("Enter") is EQUALS
    assert event_for_key("=") is EQUALS
    assert event_for_key("Escape") is CLEAR
    assert event_for_key("Backspace") is DELETE
    assert event_for_key("%") is PERCENT
    assert event_for_key(".") is DECIMAL


def test_unbound_key_ignored():
    assert event_for_key("F5") is None
    assert event_for_key("a") is None
    assert "Tab" not in KEY_BINDINGS


# --- Buttons (3 tests) ---

def test_button_number_and_operator():
    assert event_for_button(number="7") == [Event.of_digit("7")]
    assert event_for_button(operator="×") == [Event.of_operator(Operator.MULTIPLY)]


def test_button_actions():
    assert event_for_button(action="percentage") == [PERCENT]
    assert event_for_button(action="decimal") == [DECIMAL]


def test_button_unknown_action():
    with pytest.raises(ValueError):
        event_for_button(action="sqrt")
    with pytest.raises(ValueError):
        event_for_button(operator="^")


# --- Raw keypresses (2 tests) ---

def test_normalize_control_characters():
    assert normalize_keypress("\r") == "Enter"
    assert normalize_keypress("\x1b") == "Escape"
    assert normalize_keypress("\x7f") == "Backspace"
    assert normalize_keypress("\x08") == "Backspace"


def test_normalize_passthrough():
    assert normalize_keypress("7") == "7"
    assert normalize_keypress("\x1b[A") is None


# --- CLI token parsing (3 tests) ---

def test_parse_compact_string():
    events = parse_keys(["12+3="])
    kinds = [e.kind for e in events]
    assert kinds == [EventKind.DIGIT, EventKind.DIGIT, EventKind.OPERATOR, EventKind.DIGIT, EventKind.EQUALS]


def test_parse_named_keys_whole():
    assert parse_keys(["5", "Enter", "Escape"]) == [Event.of_digit("5"), EQUALS, CLEAR]


def test_parse_unbound_raises():
    with pytest.raises(ValueError, match="'y'"):
        parse_keys(["7y"])


# --- Labels (1 test) ---

def test_button_labels():
    assert button_label(Event.of_digit("4")) == "4"
    assert button_label(Event.of_operator("/")) == "÷"
    assert button_label(CLEAR) == "AC"
    assert button_label(DELETE) == "DEL"


# --- Button tokens (2 tests) ---

def test_parse_button_tokens():
    events = parse_buttons(["number:5", "number:0", "action:percentage", "operator:÷"])
    assert events == [Event.of_digit("5"), Event.of_digit("0"), PERCENT, Event.of_operator(Operator.DIVIDE)]


@pytest.mark.parametrize("token", ["5", "digit:5", "action:sqrt", "number:55"])
def test_parse_button_tokens_rejects(token):
    with pytest.raises(ValueError):
        parse_buttons([token])


# --- Event payload checks (3 tests) ---

def test_digit_event_needs_digit():
    with pytest.raises(ValueError):
        Event(EventKind.DIGIT)
    with pytest.raises(ValueError):
        Event.of_digit("12")


def test_operator_event_needs_operator():
    with pytest.raises(ValueError):
        Event(EventKind.OPERATOR)
    with pytest.raises(ValueError):
        Event(EventKind.OPERATOR, operator="+")


def test_action_event_takes_no_payload():
    with pytest.raises(ValueError):
        Event(EventKind.EQUALS, digit="1")
    with pytest.raises(ValueError):
        Event(EventKind.CLEAR, operator=Operator.ADD)
