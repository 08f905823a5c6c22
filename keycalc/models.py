"""Data models for the keycalc engine.

Operator, Mode, EventKind, Event, EngineState, Display — the typed structures
that flow through keymap → engine → shell/CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union

ERROR_SENTINEL = "Error"
DIGITS = "0123456789"


class Operator(str, Enum):
    """Binary operators. The value is the display glyph."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"

    @property
    def glyph(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> Operator:
        """Resolve a glyph, an ASCII key or a name to an Operator.

        Raises:
            ValueError: if text names no operator.
        """
        op = _OPERATOR_ALIASES.get(text) or _OPERATOR_ALIASES.get(text.lower())
        if op is None:
            raise ValueError(f"Unknown operator: {text!r}")
        return op

    def apply(self, left: float, right: float) -> float:
        """Apply to two operands. Division by zero is the caller's concern."""
        if self is Operator.ADD:
            return left + right
        if self is Operator.SUBTRACT:
            return left - right
        if self is Operator.MULTIPLY:
            return left * right
        return left / right


_OPERATOR_ALIASES: dict[str, Operator] = {
    "+": Operator.ADD,
    "-": Operator.SUBTRACT,
    "×": Operator.MULTIPLY,
    "*": Operator.MULTIPLY,
    "x": Operator.MULTIPLY,
    "÷": Operator.DIVIDE,
    "/": Operator.DIVIDE,
    "add": Operator.ADD,
    "subtract": Operator.SUBTRACT,
    "multiply": Operator.MULTIPLY,
    "divide": Operator.DIVIDE,
}


class Mode(str, Enum):
    """Logical phase of the state machine."""

    ENTRY = "entry"
    ERROR = "error"
    RESULT = "result"  # next digit starts a new operand


class EventKind(str, Enum):
    """Abstract input events accepted by the engine."""

    DIGIT = "digit"
    DECIMAL = "decimal"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR = "clear"
    DELETE = "delete"
    PERCENT = "percent"


@dataclass(frozen=True)
class Event:
    """One key press or button click, already mapped by the shell."""

    kind: EventKind
    digit: Optional[str] = None
    operator: Optional[Operator] = None

    def __post_init__(self) -> None:
        if self.kind is EventKind.DIGIT:
            if not isinstance(self.digit, str) or len(self.digit) != 1 or self.digit not in DIGITS:
                raise ValueError(f"Not a digit: {self.digit!r}")
        elif self.digit is not None:
            raise ValueError(f"{self.kind.value} event takes no digit")
        if self.kind is EventKind.OPERATOR:
            if not isinstance(self.operator, Operator):
                raise ValueError(f"Not an operator: {self.operator!r}")
        elif self.operator is not None:
            raise ValueError(f"{self.kind.value} event takes no operator")

    @classmethod
    def of_digit(cls, d: str) -> Event:
        return cls(EventKind.DIGIT, digit=d)

    @classmethod
    def of_operator(cls, op: Union[Operator, str]) -> Event:
        if not isinstance(op, Operator):
            op = Operator.parse(op)
        return cls(EventKind.OPERATOR, operator=op)

    def __str__(self) -> str:
        if self.kind is EventKind.DIGIT:
            return f"digit({self.digit})"
        if self.kind is EventKind.OPERATOR:
            return f"operator({self.operator.glyph})"
        return self.kind.value


DECIMAL = Event(EventKind.DECIMAL)
EQUALS = Event(EventKind.EQUALS)
CLEAR = Event(EventKind.CLEAR)
DELETE = Event(EventKind.DELETE)
PERCENT = Event(EventKind.PERCENT)


@dataclass
class EngineState:
    """Mutable state record, exclusively owned by one CalculatorEngine."""

    current_operand: str = "0"
    previous_operand: str = ""
    pending_operator: Optional[Operator] = None
    mode: Mode = Mode.ENTRY

    @property
    def is_error(self) -> bool:
        return self.mode is Mode.ERROR

    @property
    def awaiting_fresh_entry(self) -> bool:
        return self.mode is Mode.RESULT

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "current_operand": self.current_operand,
            "previous_operand": self.previous_operand,
            "pending_operator": self.pending_operator.name.lower() if self.pending_operator else None,
            "mode": self.mode.value,
        }


@dataclass(frozen=True)
class Display:
    """The two render-ready display lines."""

    previous_line: str
    current_line: str
    is_error: bool = False

    def __iter__(self) -> Iterator[str]:
        # Unpacks as (previous_line, current_line)
        yield self.previous_line
        yield self.current_line

    def to_dict(self) -> dict:
        return {
            "previous_line": self.previous_line,
            "current_line": self.current_line,
            "is_error": self.is_error,
        }
