"""keycalc engine — the calculator state machine.

Consumes abstract input events and exposes a two-line display. No I/O: the
shell (terminal UI, CLI, tests) owns keys, drawing and cosmetic feedback.

State transitions:
    ENTRY   typing the current operand, an operator may be pending
    RESULT  a compute just finished; the next digit starts a new operand
    ERROR   division by zero or non-finite result; most events clear it

Chained operators reduce strictly left to right (running accumulator, no
precedence): 1 + 2 × 3 = gives 9.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Iterable, Optional

from keycalc.config import EngineConfig
from keycalc.formatting import canonical, format_number, parse_operand
from keycalc.models import (
    DIGITS,
    ERROR_SENTINEL,
    Display,
    EngineState,
    Event,
    EventKind,
    Mode,
    Operator,
)

logger = logging.getLogger(__name__)


class CalculatorEngine:
    """Keystroke-driven four-function calculator.

    Args:
        config: Digit limit, rounding precision and display separator.
            Defaults to EngineConfig().
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()
        self._state = EngineState()

    @property
    def state(self) -> EngineState:
        """Copy of the current state; mutating it does not affect the engine."""
        return replace(self._state)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def clear(self) -> None:
        self._state = EngineState()

    def delete(self) -> None:
        s = self._state
        if s.is_error:
            self.clear()
            return
        if len(s.current_operand) <= 1 or s.current_operand == "0":
            s.current_operand = "0"
        else:
            s.current_operand = s.current_operand[:-1]

    def append_digit(self, d: str) -> None:
        """Append one digit character, subject to the digit limit."""
        if len(d) != 1 or d not in DIGITS:
            raise ValueError(f"Not a digit: {d!r}")
        self._begin_entry()
        s = self._state
        if s.current_operand == "0":
            s.current_operand = d
        elif not self._at_digit_limit():
            s.current_operand += d

    def append_decimal_point(self) -> None:
        self._begin_entry()
        s = self._state
        if "." in s.current_operand or self._at_digit_limit():
            return
        s.current_operand += "."

    def choose_operator(self, op: Operator) -> None:
        """Select the pending operator, collapsing any chain first."""
        s = self._state
        if s.is_error:
            self.clear()
            return
        if s.current_operand == "":
            return
        if s.previous_operand != "":
            self.compute()
            if s.is_error:
                return
        s.pending_operator = op
        s.previous_operand = s.current_operand
        s.current_operand = ""

    def compute(self) -> None:
        """Apply the pending operator to the two operands.

        Silently does nothing when either operand is not a complete number
        or no operator is pending (e.g. '=' pressed twice).
        """
        s = self._state
        prev = parse_operand(s.previous_operand)
        current = parse_operand(s.current_operand)
        if prev is None or current is None or s.pending_operator is None:
            return

        if s.pending_operator is Operator.DIVIDE and current == 0:
            self._enter_error("division by zero")
            return
        try:
            result = s.pending_operator.apply(prev, current)
        except OverflowError:
            result = math.inf
        if not math.isfinite(result):
            self._enter_error(f"non-finite result {result}")
            return

        s.current_operand = canonical(result, self.config.decimal_precision)
        s.previous_operand = ""
        s.pending_operator = None
        s.mode = Mode.RESULT

    def percent(self) -> None:
        s = self._state
        if s.is_error:
            self.clear()
            return
        value = parse_operand(s.current_operand)
        if value is None:
            return
        result = value / 100
        if not math.isfinite(result):
            self._enter_error(f"non-finite percentage {result}")
            return
        s.current_operand = canonical(result)

    # ------------------------------------------------------------------
    # Queries and dispatch
    # ------------------------------------------------------------------

    def render(self) -> Display:
        s = self._state
        sep = self.config.group_separator
        current_line = format_number(s.current_operand, sep)
        if s.pending_operator is None:
            previous_line = ""
        else:
            previous_line = f"{format_number(s.previous_operand, sep)} {s.pending_operator.glyph}"
        return Display(previous_line, current_line, is_error=s.is_error)

    def dispatch(self, event: Event) -> Display:
        """Apply one event and return the resulting display."""
        logger.debug("event %s in mode %s", event, self._state.mode.value)
        kind = event.kind
        if kind is EventKind.DIGIT:
            self.append_digit(event.digit)
        elif kind is EventKind.DECIMAL:
            self.append_decimal_point()
        elif kind is EventKind.OPERATOR:
            self.choose_operator(event.operator)
        elif kind is EventKind.EQUALS:
            self.compute()
        elif kind is EventKind.CLEAR:
            self.clear()
        elif kind is EventKind.DELETE:
            self.delete()
        elif kind is EventKind.PERCENT:
            self.percent()
        return self.render()

    def feed(self, events: Iterable[Event]) -> Display:
        """Dispatch events in order; return the display after the last one."""
        for event in events:
            self.dispatch(event)
        return self.render()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _begin_entry(self) -> None:
        """Shared gating for digit and point: leave error/result mode."""
        if self._state.is_error:
            self.clear()
        if self._state.awaiting_fresh_entry:
            self._state.current_operand = "0"
            self._state.mode = Mode.ENTRY

    def _at_digit_limit(self) -> bool:
        return len(self._state.current_operand.replace(".", "")) >= self.config.max_digits

    def _enter_error(self, reason: str) -> None:
        logger.debug("entering error mode: %s", reason)
        s = self._state
        s.current_operand = ERROR_SENTINEL
        s.previous_operand = ""
        s.pending_operator = None
        s.mode = Mode.ERROR
