"""Price normalization and helpers for single-or-list values."""

from __future__ import annotations

import math
import re
from typing import Any

# First digit-led run of digits, separators and whitespace (\s covers NBSP)
_NUMERIC_RUN = re.compile(r"\d[\d.,\s]*")
_SPACES = re.compile(r"\s+")
# ASCII hyphen-minus and U+2212 directly before the digits mark a negative amount
_MINUS_SIGNS = "-\u2212"


def first_value(value: Any) -> Any:
    """Resolve a "single value or ordered list of values" to one value.

    Returns the first entry of a list/tuple (None when empty) and any other
    value unchanged.
    """
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def as_list(value: Any) -> list[Any]:
    """Resolve a "single value or ordered list of values" to a list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _normalize_separators(number: str) -> str:
    """Turn a digits-and-separators string into a float literal.

    The rightmost separator is the decimal point when both ``.`` and ``,``
    occur. With one kind only, repeated separators are grouping, and a single
    separator followed by exactly three digits is grouping too (``1.299``),
    except after a bare ``0`` (``0.999``).
    """
    last_dot = number.rfind(".")
    last_comma = number.rfind(",")

    if last_dot >= 0 and last_comma >= 0:
        decimal = "." if last_dot > last_comma else ","
        grouping = "," if decimal == "." else "."
        integer, _, fraction = number.replace(grouping, "").rpartition(decimal)
        return f"{integer}.{fraction}"

    separator = "." if last_dot >= 0 else "," if last_comma >= 0 else None
    if separator is None:
        return number

    parts = number.split(separator)
    if len(parts) > 2:
        return "".join(parts)

    integer, fraction = parts
    if len(fraction) == 3 and integer.strip("0"):
        return integer + fraction
    return f"{integer}.{fraction}"


def parse_price(value: Any) -> float | None:
    """Parse a price from free text or a JSON number.

    Returns a finite, non-negative float, or None when no price can be
    recovered. Never raises.

    Examples:
        "1 299,00"      -> 1299.0
        "1,299.50 SEK"  -> 1299.5
        "12,50"         -> 12.5
        "-15"           -> None
        "free"          -> None
    """
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, (int, float)):
        price = float(value)
    elif isinstance(value, str):
        match = _NUMERIC_RUN.search(value)
        if match is None:
            return None
        if match.start() > 0 and value[match.start() - 1] in _MINUS_SIGNS:
            return None
        number = _SPACES.sub("", match.group(0)).rstrip(".,")
        try:
            price = float(_normalize_separators(number))
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(price) or price < 0:
        return None
    return price
