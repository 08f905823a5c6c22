"""Engine configuration for keycalc.

Two engine options (digit limit, rounding precision) plus the display
grouping separator. Values come from KEYCALC_* environment variables with
command-line overrides on top. Self-contained — no external dependencies.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MAX_DIGITS = 12
DEFAULT_DECIMAL_PRECISION = 10
DEFAULT_GROUP_SEPARATOR = ","

# Above this, quantizing a float no longer changes anything meaningful.
_MAX_DECIMAL_PRECISION = 20

_ENV_MAX_DIGITS = "KEYCALC_MAX_DIGITS"
_ENV_DECIMAL_PRECISION = "KEYCALC_DECIMAL_PRECISION"
_ENV_GROUP_SEPARATOR = "KEYCALC_GROUP_SEPARATOR"


@dataclass(frozen=True)
class EngineConfig:
    """Options fixed when an engine is constructed."""

    max_digits: int = DEFAULT_MAX_DIGITS  # operand length, decimal point excluded
    decimal_precision: int = DEFAULT_DECIMAL_PRECISION  # fractional digits kept after compute
    group_separator: str = DEFAULT_GROUP_SEPARATOR

    def validate(self) -> list[str]:
        """Return a list of error messages (empty if valid)."""
        errors = []
        if self.max_digits < 1:
            errors.append("max_digits must be at least 1")
        if not 0 <= self.decimal_precision <= _MAX_DECIMAL_PRECISION:
            errors.append(f"decimal_precision must be between 0 and {_MAX_DECIMAL_PRECISION}")
        sep = self.group_separator
        if len(sep) != 1 or sep.isdigit() or sep == ".":
            errors.append("group_separator must be a single non-digit character other than '.'")
        return errors

    def __post_init__(self) -> None:
        errors = self.validate()
        if errors:
            raise ValueError(f"Configuration errors: {errors}")


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    """Parse an int env var, falling back to the default on garbage."""
    try:
        return int(env.get(key, default))
    except ValueError:
        return default


def load_config(
    env: Optional[Mapping[str, str]] = None,
    max_digits: Optional[int] = None,
    decimal_precision: Optional[int] = None,
    group_separator: Optional[str] = None,
) -> EngineConfig:
    """Build an EngineConfig from the environment plus explicit overrides.

    Args:
        env: Mapping to read KEYCALC_* variables from. Defaults to os.environ.
        max_digits: Overrides KEYCALC_MAX_DIGITS when not None.
        decimal_precision: Overrides KEYCALC_DECIMAL_PRECISION when not None.
        group_separator: Overrides KEYCALC_GROUP_SEPARATOR when not None.

    Raises:
        ValueError: if the resulting configuration is invalid.
    """
    env = os.environ if env is None else env
    if max_digits is None:
        max_digits = _get_int(env, _ENV_MAX_DIGITS, DEFAULT_MAX_DIGITS)
    if decimal_precision is None:
        decimal_precision = _get_int(env, _ENV_DECIMAL_PRECISION, DEFAULT_DECIMAL_PRECISION)
    if group_separator is None:
        group_separator = env.get(_ENV_GROUP_SEPARATOR, DEFAULT_GROUP_SEPARATOR)
    return EngineConfig(
        max_digits=max_digits,
        decimal_precision=decimal_precision,
        group_separator=group_separator,
    )
