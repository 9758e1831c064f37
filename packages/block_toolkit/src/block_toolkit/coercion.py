"""Value casts applied to block arguments before a handler runs.

The casts mirror the host's loose typing: any value can be read as a number,
string, or boolean, and unreadable values degrade to a neutral result instead
of raising.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from block_toolkit.types import ArgumentType

logger = logging.getLogger(__name__)

Number = int | float

MATRIX_SIZE = 25
DEFAULT_COLOR = "#000000"
DEFAULT_MATRIX = "0" * MATRIX_SIZE

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_FALSE_STRINGS = frozenset({"", "0", "false"})


def _parse_number(value: Any) -> Number | None:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) else value
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return 0
    if "_" in text:
        return None
    lowered = text.lower()
    if lowered.startswith(("0x", "0o", "0b")):
        try:
            return int(lowered, 0)
        except ValueError:
            return None
    if lowered in ("infinity", "+infinity", "-infinity"):
        return -math.inf if lowered.startswith("-") else math.inf
    if "inf" in lowered or "nan" in lowered:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if number.is_integer() else number


def is_numeric(value: Any) -> bool:
    """Return True when the value reads as a number without falling back."""
    return _parse_number(value) is not None


def to_number(value: Any) -> Number:
    """Cast a value to a number, treating anything unreadable as 0."""
    number = _parse_number(value)
    return 0 if number is None else number


def to_string(value: Any) -> str:
    """Cast a value to its display string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def to_boolean(value: Any) -> bool:
    """Cast a value to a boolean; "", "0" and "false" read as False."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def to_color(value: Any) -> str | None:
    """Cast a value to a ``#rrggbb`` color, or None when it is not a color."""
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value <= 0xFFFFFF:
            return f"#{value:06x}"
        return None
    if not isinstance(value, str) or not _HEX_COLOR.match(value.strip()):
        return None
    digits = value.strip()[1:].lower()
    if len(digits) == 3:  # noqa: PLR2004
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits}"


def to_matrix(value: Any) -> str | None:
    """Cast a value to a 5x5 LED matrix string, or None when malformed."""
    text = to_string(value).strip()
    if len(text) != MATRIX_SIZE or any(ch not in "01" for ch in text):
        return None
    return text


def coerce_argument(arg_type: ArgumentType, value: Any, default: Any = None) -> Any:
    """Coerce a raw argument value for the given argument type.

    Args:
        arg_type: Declared type of the argument.
        value: Raw value supplied by the host, or None when unset.
        default: Resolved default value from the argument spec.

    Returns:
        The coerced value. Values that cannot be read as the declared type are
        replaced by the coerced default.
    """
    if value is None:
        value = default

    if arg_type in (ArgumentType.NUMBER, ArgumentType.ANGLE, ArgumentType.NOTE):
        if value is not None and not is_numeric(value):
            logger.debug("Argument %r is not numeric; using default %r", value, default)
            value = default
        return to_number(value)

    if arg_type is ArgumentType.BOOLEAN:
        return to_boolean(value)

    if arg_type is ArgumentType.COLOR:
        color = to_color(value)
        if color is None:
            logger.debug("Argument %r is not a color; using default %r", value, default)
            color = to_color(default) or DEFAULT_COLOR
        return color

    if arg_type is ArgumentType.MATRIX:
        matrix = to_matrix(value)
        if matrix is None:
            logger.debug("Argument %r is not a matrix; using default %r", value, default)
            matrix = to_matrix(default) or DEFAULT_MATRIX
        return matrix

    if arg_type is ArgumentType.IMAGE:
        return default

    return to_string(value)
