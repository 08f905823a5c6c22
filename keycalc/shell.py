"""Rich terminal shell for keycalc.

Reads single keypresses, forwards them to a CalculatorEngine and draws the
display plus a keypad with rich.live.Live. Cosmetic feedback (error flash,
pressed key, active operator) lives here and never touches engine state.
Timed effects are monotonic deadlines that Live's refresh picks up, so they
revert without any callback into the engine.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

import typer
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from keycalc.engine import CalculatorEngine
from keycalc.keymap import button_label, event_for_key, normalize_keypress
from keycalc.models import Display

ERROR_FLASH_S = 0.5
PRESS_HIGHLIGHT_S = 0.1

_QUIT_KEYS = ("q",)

_KEYPAD_ROWS = [
    ["AC", "DEL", "%", "÷"],
    ["7", "8", "9", "×"],
    ["4", "5", "6", "-"],
    ["1", "2", "3", "+"],
    ["0", ".", "="],
]
_OPERATOR_LABELS = ("÷", "×", "-", "+")


class TimedFlag:
    """A flag that switches itself off after a fixed duration.

    Fire-and-forget: trigger() again restarts the window, nothing cancels it.
    """

    def __init__(self, duration_s: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.duration_s = duration_s
        self._clock = clock
        self._until = 0.0

    def trigger(self) -> None:
        self._until = self._clock() + self.duration_s

    @property
    def active(self) -> bool:
        return self._clock() < self._until


class PressHighlight(TimedFlag):
    """Remembers which keypad label was pressed last, for a short window."""

    def __init__(self, duration_s: float = PRESS_HIGHLIGHT_S, clock: Callable[[], float] = time.monotonic) -> None:
        super().__init__(duration_s, clock)
        self.label: Optional[str] = None

    def press(self, label: str) -> None:
        self.label = label
        self.trigger()

    @property
    def current(self) -> Optional[str]:
        return self.label if self.active else None


class CalculatorView:
    """Rich renderable for the display and keypad.

    Re-evaluated on every Live refresh, so expired flashes disappear on
    their own.
    """

    def __init__(self, engine: CalculatorEngine, error_flash: TimedFlag, pressed: PressHighlight) -> None:
        self.engine = engine
        self.error_flash = error_flash
        self.pressed = pressed

    def active_operator(self) -> Optional[str]:
        """Glyph of the operator awaiting its right-hand operand, if any."""
        s = self.engine.state
        if s.pending_operator is not None and s.current_operand == "":
            return s.pending_operator.glyph
        return None

    def _display_panel(self, display: Display) -> Panel:
        body = Text(justify="right")
        body.append(display.previous_line or " ", style="dim")
        body.append("\n")
        body.append(display.current_line, style="bold red" if display.is_error else "bold")
        border = "red" if self.error_flash.active else "blue"
        return Panel(body, border_style=border, width=30)

    def _keypad(self) -> Table:
        table = Table.grid(padding=(0, 1))
        for _ in range(4):
            table.add_column(justify="center", min_width=5)

        pressed = self.pressed.current
        active = self.active_operator()
        for row in _KEYPAD_ROWS:
            cells = []
            for label in row:
                if label == pressed:
                    style = "reverse"
                elif label == active:
                    style = "bold black on yellow"
                elif label in _OPERATOR_LABELS or label == "=":
                    style = "yellow"
                else:
                    style = ""
                cells.append(Text(f"[{label:^3}]", style=style))
            table.add_row(*cells)
        return table

    def __rich__(self) -> Group:
        return Group(
            self._display_panel(self.engine.render()),
            self._keypad(),
            Text("q to quit", style="dim"),
        )


class CalculatorShell:
    """Connects keypresses to the engine and the view."""

    def __init__(
        self,
        engine: Optional[CalculatorEngine] = None,
        console: Optional[Console] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.engine = engine or CalculatorEngine()
        self.console = console or Console()
        self.error_flash = TimedFlag(ERROR_FLASH_S, clock)
        self.pressed = PressHighlight(PRESS_HIGHLIGHT_S, clock)
        self.view = CalculatorView(self.engine, self.error_flash, self.pressed)

    def handle_key(self, key: str) -> Display:
        """Apply one named key. Unbound keys leave everything unchanged."""
        event = event_for_key(key)
        if event is None:
            return self.engine.render()
        was_error = self.engine.state.is_error
        display = self.engine.dispatch(event)
        self.pressed.press(button_label(event))
        if display.is_error and not was_error:
            self.error_flash.trigger()
        return display

    def run(self, read_key: Callable[[], str] = typer.getchar) -> None:
        """Interactive loop until q / Ctrl-C / Ctrl-D."""
        with Live(self.view, console=self.console, refresh_per_second=20, transient=False):
            while True:
                # getchar raises on Ctrl-C / Ctrl-D rather than returning them
                try:
                    raw = read_key()
                except (KeyboardInterrupt, EOFError):
                    break
                if raw in _QUIT_KEYS:
                    break
                key = normalize_keypress(raw)
                if key is not None:
                    self.handle_key(key)
