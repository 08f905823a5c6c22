"""Key and button bindings for keycalc.

Translates physical input (key names, raw terminal characters, keypad
buttons) into engine Events. The engine never sees raw keys.
"""

from __future__ import annotations

from typing import Iterable, Optional

from keycalc.models import (
    CLEAR,
    DECIMAL,
    DELETE,
    DIGITS,
    EQUALS,
    PERCENT,
    Event,
    EventKind,
    Operator,
)

KEY_BINDINGS: dict[str, Event] = {d: Event.of_digit(d) for d in DIGITS}
KEY_BINDINGS.update({
    ".": DECIMAL,
    "+": Event.of_operator(Operator.ADD),
    "-": Event.of_operator(Operator.SUBTRACT),
    "*": Event.of_operator(Operator.MULTIPLY),
    "x": Event.of_operator(Operator.MULTIPLY),
    "/": Event.of_operator(Operator.DIVIDE),
    "Enter": EQUALS,
    "=": EQUALS,
    "Escape": CLEAR,
    "Backspace": DELETE,
    "%": PERCENT,
})

# data-action values of the keypad buttons
BUTTON_ACTIONS: dict[str, Event] = {
    "clear": CLEAR,
    "delete": DELETE,
    "equals": EQUALS,
    "decimal": DECIMAL,
    "percentage": PERCENT,
}

# Raw characters typer.getchar() yields for the named keys
_RAW_KEYS: dict[str, str] = {
    "\r": "Enter",
    "\n": "Enter",
    "\x1b": "Escape",
    "\x7f": "Backspace",
    "\x08": "Backspace",
}

# Keypad face for each non-digit event kind
_BUTTON_LABELS: dict[EventKind, str] = {
    EventKind.DECIMAL: ".",
    EventKind.EQUALS: "=",
    EventKind.CLEAR: "AC",
    EventKind.DELETE: "DEL",
    EventKind.PERCENT: "%",
}


def event_for_key(key: str) -> Optional[Event]:
    """Look up a key name. Unbound keys return None and are ignored."""
    return KEY_BINDINGS.get(key)


def event_for_button(
    number: Optional[str] = None,
    operator: Optional[str] = None,
    action: Optional[str] = None,
) -> list[Event]:
    """Events for one keypad button, given its number/operator/action data.

    Raises:
        ValueError: on an unknown digit, operator or action.
    """
    events = []
    if number is not None:
        events.append(Event.of_digit(number))
    if operator is not None:
        events.append(Event.of_operator(operator))
    if action is not None:
        event = BUTTON_ACTIONS.get(action)
        if event is None:
            raise ValueError(f"Unknown button action: {action!r}")
        events.append(event)
    return events


def parse_buttons(tokens: Iterable[str]) -> list[Event]:
    """Turn 'number:7', 'operator:×' or 'action:clear' tokens into events.

    Raises:
        ValueError: on a malformed token or an unknown button.
    """
    events = []
    for token in tokens:
        attr, sep, value = token.partition(":")
        if not sep or attr not in ("number", "operator", "action"):
            raise ValueError(f"Bad button {token!r}, expected number:, operator: or action:")
        events.extend(event_for_button(**{attr: value}))
    return events


def normalize_keypress(raw: str) -> Optional[str]:
    """Map a raw terminal character to a key name, None if unrecognised."""
    if raw in _RAW_KEYS:
        return _RAW_KEYS[raw]
    if len(raw) == 1:
        return raw
    return None


def parse_keys(tokens: Iterable[str]) -> list[Event]:
    """Turn CLI tokens into events.

    A token that is itself a key name ('Enter', '7', '%') is used whole;
    anything else is split into single-character keys, so '12+3=' works.

    Raises:
        ValueError: naming the first unbound key.
    """
    events = []
    for token in tokens:
        event = KEY_BINDINGS.get(token)
        if event is not None:
            events.append(event)
            continue
        for ch in token:
            if ch.isspace():
                continue
            event = KEY_BINDINGS.get(ch)
            if event is None:
                raise ValueError(f"Unbound key {ch!r} in {token!r}")
            events.append(event)
    return events


def button_label(event: Event) -> str:
    """The keypad label that produces this event."""
    if event.kind is EventKind.DIGIT:
        return event.digit
    if event.kind is EventKind.OPERATOR:
        return event.operator.glyph
    return _BUTTON_LABELS[event.kind]
