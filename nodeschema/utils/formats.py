from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Optional, Pattern, Union

from ..exceptions import CastError, InvalidSchemaError

logger = logging.getLogger(__name__)


_DATE_RE = re.compile(r"([0-9]{4})-?(1[0-2]|0[1-9])-?(3[01]|0[1-9]|[12][0-9])")
_DATE_TIME_RE = re.compile(
    r"(-?(?:[1-9][0-9]*)?[0-9]{4})-(1[0-2]|0[1-9])-(3[01]|0[1-9]|[12][0-9])"
    r"T(2[0-3]|[01][0-9]):([0-5][0-9]):([0-5][0-9])(\.[0-9]+)?"
    r"(Z|[+-](?:2[0-3]|[01][0-9]):[0-5][0-9])?"
)
_EMAIL_RE = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)
_BOOLEAN_RE = re.compile(r"true|false")
_INTEGER_RE = re.compile(r"-?[0-9]+")
_NUMBER_RE = re.compile(r"-?[0-9]+(\.[0-9]+)?")

# Formats mapped to None are markers only and are never pattern-checked.
FORMAT_PATTERNS: Dict[str, Optional[Pattern[str]]] = {
    "date": _DATE_RE,
    "date-time": _DATE_TIME_RE,
    "email": _EMAIL_RE,
    "boolean": _BOOLEAN_RE,
    "binary": None,
    "integer": _INTEGER_RE,
    "number": _NUMBER_RE,
}

BUILTIN_FORMATS = frozenset(FORMAT_PATTERNS)


def normalize_format_name(name: Any) -> Any:
    if isinstance(name, str):
        return name.strip().replace("_", "-")
    return name


def is_supported_format(name: Any) -> bool:
    return isinstance(name, str) and name in FORMAT_PATTERNS


def format_pattern(name: str) -> Optional[Pattern[str]]:
    return FORMAT_PATTERNS.get(name)


def matches_format(name: str, value: str) -> bool:
    """Return True if ``value`` satisfies the match rule of format ``name``.

    Marker formats without a rule accept every value.
    """
    pattern = FORMAT_PATTERNS.get(name)
    if pattern is None:
        return True
    return pattern.fullmatch(value) is not None


def register_format(name: str, pattern: Union[str, Pattern[str], None]) -> None:
    """Register a user-defined string format.

    The pattern must match the whole string. Built-in formats cannot be
    replaced.
    """
    name = normalize_format_name(name)
    if not isinstance(name, str) or not name:
        raise InvalidSchemaError(f"Format name must be a non-empty string, got: {name!r}")
    if name in BUILTIN_FORMATS:
        raise InvalidSchemaError(f"Format {name!r} is built in and cannot be redefined.")

    if isinstance(pattern, str):
        try:
            pattern = re.compile(pattern)
        except re.error as exc:
            raise InvalidSchemaError(f"Invalid pattern for format {name!r}: {exc}") from exc

    logger.debug(f"Registering string format '{name}'")
    FORMAT_PATTERNS[name] = pattern


def unregister_format(name: str) -> None:
    name = normalize_format_name(name)
    if name in BUILTIN_FORMATS:
        raise InvalidSchemaError(f"Format {name!r} is built in and cannot be removed.")
    FORMAT_PATTERNS.pop(name, None)


# ---- casting -----------------------------------------------------------------


def _require_text(value: Any, format_name: str) -> str:
    if not isinstance(value, str):
        raise CastError(f"Cannot cast {type(value).__name__} value to format '{format_name}'")
    return value


def cast_boolean(value: Any) -> bool:
    # Only the literal token "true" is truthy; "false" and anything else map to False.
    if isinstance(value, bool):
        return value
    return value == "true"


def cast_integer(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = _require_text(value, "integer")
    if _INTEGER_RE.fullmatch(text) is None:
        raise CastError(f"Invalid integer value '{text}'")
    return int(text, 10)


def cast_number(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    text = _require_text(value, "number")
    if _NUMBER_RE.fullmatch(text) is None:
        raise CastError(f"Invalid number value '{text}'")
    return float(text)


def cast_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    text = _require_text(value, "date")
    m = _DATE_RE.fullmatch(text)
    if m is None:
        raise CastError(f"Invalid date value '{text}'")
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError as exc:
        raise CastError(f"Invalid date value '{text}': {exc}") from exc


def _parse_offset(token: Optional[str]) -> timezone:
    if token is None or token == "Z":
        return timezone.utc
    sign = -1 if token[0] == "-" else 1
    hours, minutes = token[1:].split(":")
    return timezone(sign * timedelta(hours=int(hours), minutes=int(minutes)))


def cast_date_time(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    text = _require_text(value, "date-time")
    m = _DATE_TIME_RE.fullmatch(text)
    if m is None:
        raise CastError(f"Invalid date-time value '{text}'")

    year, month, day, hour, minute, second, fraction, offset = m.groups()
    microsecond = int((fraction[1:] + "000000")[:6]) if fraction else 0
    try:
        return datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second),
            microsecond,
            tzinfo=_parse_offset(offset),
        )
    except ValueError as exc:
        raise CastError(f"Invalid date-time value '{text}': {exc}") from exc


FORMAT_CASTS = {
    "boolean": cast_boolean,
    "date": cast_date,
    "date-time": cast_date_time,
    "integer": cast_integer,
    "number": cast_number,
}


def cast_format(name: Optional[str], value: Any) -> Any:
    """Cast ``value`` according to format ``name``.

    Formats without a cast rule return the value unchanged.
    """
    caster = FORMAT_CASTS.get(name) if name else None
    if caster is None:
        return value
    return caster(value)
