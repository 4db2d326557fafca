# ==============================================
# Sample helpers
# ==============================================
#
# PURPOSE:
#   Compare and render the example values kept per field.
#
# FUNCTIONS:
# ----------
# - values_equal(a, b) -> bool
#     Deep structural equality over document values.
#       - booleans never equal numbers (True != 1)
#       - numbers compare by value (1 == 1.0), NaN equals NaN
#       - datetimes compare as UTC instants, naive counts as UTC
#       - mappings compare key sets, key order is irrelevant
#       - sequences compare element by element, order matters
#
# - render_example(value) -> Any
#     Output form of a sample:
#       ObjectId  → 24-char hex string
#       datetime  → "2024-01-01T00:00:00.000Z"
#       mapping   → "{...}"
#       sequence  → "[...]"
#       other     → unchanged
#
# - format_iso(dt) -> str
#     Millisecond-precision UTC ISO-8601 with a "Z" suffix.
#
# ==============================================

import datetime
import math
from collections.abc import Mapping
from typing import Any

from bson import Decimal128, ObjectId


DOCUMENT_PLACEHOLDER = "{...}"
ARRAY_PLACEHOLDER = "[...]"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _as_utc(dt: datetime.datetime) -> datetime.datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def values_equal(a: Any, b: Any) -> bool:
    """
    Deep structural equality between two document values.

    Args:
        a: First value
        b: Second value

    Returns:
        True if both values have the same structure and content
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b

    if _is_number(a) and _is_number(b):
        if _is_nan(a) or _is_nan(b):
            return _is_nan(a) and _is_nan(b)
        return a == b

    if isinstance(a, datetime.datetime) and isinstance(b, datetime.datetime):
        return _as_utc(a) == _as_utc(b)

    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys():
            return False
        return all(values_equal(a[key], b[key]) for key in a)

    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(values_equal(x, y) for x, y in zip(a, b))

    if type(a) is not type(b):
        return False

    return a == b


def format_iso(dt: datetime.datetime) -> str:
    """Render a datetime as UTC ISO-8601 with milliseconds, e.g. 2024-01-01T00:00:00.000Z."""
    dt = _as_utc(dt)
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
        f".{dt.microsecond // 1000:03d}Z"
    )


def render_example(value: Any) -> Any:
    """Return the output form of a stored sample value."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime.datetime):
        return format_iso(value)
    if isinstance(value, Mapping):
        return DOCUMENT_PLACEHOLDER
    if isinstance(value, (list, tuple)):
        return ARRAY_PLACEHOLDER
    if isinstance(value, Decimal128):
        return str(value)
    return value
