"""keycalc — keystroke-driven four-function calculator.

A headless state machine (CalculatorEngine) that turns digit, operator and
action events into a two-line display, plus a rich terminal shell and a
typer CLI around it.

Usage:
    python -m keycalc press 7 + 3 =     # Prints the two display lines
    python -m keycalc interactive       # Live keypad in the terminal
"""
