"""CLI for the keycalc calculator.

Usage:
    python -m keycalc press 7 + 3 =             # Feed keys, print the display
    python -m keycalc press "12*3=" --json      # Same, as JSON with engine state
    python -m keycalc press --buttons number:5 action:percentage  # Keypad buttons
    python -m keycalc keys                      # Show key bindings
    python -m keycalc config                    # Show effective configuration
    python -m keycalc interactive               # Live terminal calculator
"""

from __future__ import annotations

import json
import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from keycalc.config import EngineConfig, load_config
from keycalc.engine import CalculatorEngine
from keycalc.keymap import BUTTON_ACTIONS, KEY_BINDINGS, parse_buttons, parse_keys
from keycalc.shell import CalculatorShell

app = typer.Typer(
    name="keycalc",
    help="Keystroke-driven four-function calculator",
    no_args_is_help=True,
)
console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    """Route keycalc's DEBUG trace through rich when --verbose is set."""
    logger = logging.getLogger("keycalc")
    logger.handlers = []
    if not verbose:
        logger.setLevel(logging.WARNING)
        return
    handler = RichHandler(console=console, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def _config_or_exit(max_digits: Optional[int], precision: Optional[int]) -> EngineConfig:
    try:
        return load_config(max_digits=max_digits, decimal_precision=precision)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every engine event"),
) -> None:
    """Keystroke-driven four-function calculator."""
    _setup_logging(verbose)


@app.command("press")
def cmd_press(
    keys: List[str] = typer.Argument(help="Keys to press, e.g. 7 + 3 = or '7+3='"),
    buttons: bool = typer.Option(False, "--buttons", help="Read tokens as keypad buttons: number:7, operator:×, action:clear"),
    as_json: bool = typer.Option(False, "--json", help="Print display and engine state as JSON"),
    max_digits: Optional[int] = typer.Option(None, "--max-digits", help="Operand digit limit"),
    precision: Optional[int] = typer.Option(None, "--precision", help="Fractional digits kept after compute"),
) -> None:
    """Feed keys to a fresh calculator and print the display."""
    try:
        events = parse_buttons(keys) if buttons else parse_keys(keys)
    except ValueError as e:
        console.print(f"[red]{e}[/red]. Run 'keycalc keys' for bindings")
        raise typer.Exit(1)

    engine = CalculatorEngine(_config_or_exit(max_digits, precision))
    display = engine.feed(events)

    if as_json:
        typer.echo(json.dumps({"display": display.to_dict(), "state": engine.state.to_dict()}, ensure_ascii=False))
        return
    typer.echo(display.previous_line)
    typer.echo(display.current_line)


@app.command("keys")
def cmd_keys() -> None:
    """Show key bindings and keypad actions."""
    table = Table(title="Key Bindings", show_header=True, header_style="bold")
    table.add_column("Key", style="green", min_width=10)
    table.add_column("Event", min_width=20)

    for key, event in KEY_BINDINGS.items():
        table.add_row(key, str(event))
    for action, event in BUTTON_ACTIONS.items():
        table.add_row(f"[dim]button:{action}[/dim]", str(event))

    console.print()
    console.print(table)
    console.print()


@app.command("config")
def cmd_config(
    max_digits: Optional[int] = typer.Option(None, "--max-digits", help="Operand digit limit"),
    precision: Optional[int] = typer.Option(None, "--precision", help="Fractional digits kept after compute"),
) -> None:
    """Show the effective configuration (environment plus overrides)."""
    config = _config_or_exit(max_digits, precision)

    table = Table(title="Configuration", show_header=True, header_style="bold")
    table.add_column("Option", style="green")
    table.add_column("Value", justify="right")
    table.add_row("max_digits", str(config.max_digits))
    table.add_row("decimal_precision", str(config.decimal_precision))
    table.add_row("group_separator", repr(config.group_separator))

    console.print()
    console.print(table)
    console.print()


@app.command("interactive")
def cmd_interactive(
    max_digits: Optional[int] = typer.Option(None, "--max-digits", help="Operand digit limit"),
    precision: Optional[int] = typer.Option(None, "--precision", help="Fractional digits kept after compute"),
) -> None:
    """Run the live terminal calculator (q to quit)."""
    engine = CalculatorEngine(_config_or_exit(max_digits, precision))
    CalculatorShell(engine, Console()).run()


if __name__ == "__main__":
    app()
