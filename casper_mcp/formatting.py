"""
Display formatting for raw CSPR.cloud values.

Every helper is locale-invariant and total: bad or missing input renders as
``PLACEHOLDER`` instead of raising, so report rendering never fails on a single
odd field.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

PLACEHOLDER = "N/A"
MOTES_PER_CSPR = 10**9
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def text(value: Any) -> str:
    """Render a raw value, or the placeholder when it is missing."""
    if value is None or value == "":
        return PLACEHOLDER
    return str(value)


def parse_motes(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal):
        return int(value) if value.is_finite() and value == value.to_integral_value() else None
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.startswith("+"):
            stripped = stripped[1:]
        if stripped.isascii() and stripped.isdigit():
            try:
                return int(stripped)
            except ValueError:
                return None
    return None


def motes_to_cspr(motes: Any) -> str:
    """
    Convert an amount in motes (integer or decimal string) to CSPR.

    Uses integer arithmetic so balances of any size keep all nine fractional
    digits, e.g. ``1500000000000 -> "1,500.000000000 CSPR"``.
    """
    amount = parse_motes(motes)
    if amount is None or amount < 0:
        return PLACEHOLDER
    whole, fraction = divmod(amount, MOTES_PER_CSPR)
    try:
        return f"{whole:,}.{fraction:09d} CSPR"
    except ValueError:
        # Past the interpreter's int-to-str digit limit.
        return PLACEHOLDER


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            return None
    return None


def format_timestamp(value: Any) -> str:
    """Render a datetime or ISO-8601 string as ``YYYY-MM-DD HH:MM:SS UTC``."""
    if value is None or value == "":
        return PLACEHOLDER
    parsed = _parse_timestamp(value)
    if parsed is None:
        # Unparseable upstream values are shown as received.
        return str(value)
    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc)
        except (OverflowError, ValueError):
            # Shifting to UTC leaves the supported year range.
            return str(value)
    return parsed.strftime(TIMESTAMP_FORMAT)


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return None


def format_percentage(value: Any) -> str:
    number = _to_float(value)
    if number is None:
        return PLACEHOLDER
    return f"{number:.2f}%"


def format_hash(value: Any) -> str:
    return text(value)


def format_number(value: Any) -> str:
    """Thousands-grouped integer, e.g. ``1000000 -> "1,000,000"``."""
    if value is None or isinstance(value, bool):
        return PLACEHOLDER
    if isinstance(value, int):
        try:
            return f"{value:,}"
        except ValueError:
            return PLACEHOLDER
    number = _to_float(value)
    if number is None or number != number or number in (float("inf"), float("-inf")):
        return PLACEHOLDER
    return f"{round(number):,}"


def format_bool(value: Any) -> str:
    return "Yes" if value else "No"


def format_decimal(value: Any) -> str:
    """Shortest plain rendering of a score, rate or amount (``2.50 -> "2.5"``)."""
    if value is None or value == "" or isinstance(value, bool):
        return PLACEHOLDER
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return PLACEHOLDER
    if not number.is_finite():
        return PLACEHOLDER
    try:
        if number == number.to_integral_value():
            return str(int(number))
        return format(number.normalize(), "f")
    except (ValueError, OverflowError):
        return PLACEHOLDER
