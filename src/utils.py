"""General-purpose formatting helpers for system facts."""

from __future__ import annotations

from typing import Final, Tuple

_KILOBYTE_UNITS: Final[Tuple[str, ...]] = ("kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")
_UNIT_BASE: Final[float] = 1000.0

_MINUTE: Final[int] = 60
_HOUR: Final[int] = _MINUTE * 60
_DAY: Final[int] = _HOUR * 24


def _format_number(value: float) -> str:
    """Render ``value`` in plain decimal notation without trailing zeros (``2.50`` -> ``2.5``)."""

    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def convert_kilobytes(num: float) -> str:
    """
    Humanize a size given in kilobytes using decimal units.

    Values are scaled by powers of 1000 up to yottabytes and rounded to two decimals.

    Parameters:
        num (float): Size in kilobytes.

    Returns:
        str: Compact label such as ``"1.5 MB"``; values below one kilobyte are printed as-is in ``kB``.
    """
    if num < 1:
        return f"{_format_number(num)} kB"
    exponent = 0
    while exponent < len(_KILOBYTE_UNITS) - 1 and num >= _UNIT_BASE ** (exponent + 1):
        exponent += 1
    pretty = round(num / _UNIT_BASE**exponent, 2)
    return f"{_format_number(pretty)} {_KILOBYTE_UNITS[exponent]}"


def convert_seconds(seconds: float) -> str:
    """
    Humanize a duration as days, hours, and minutes.

    Zero-valued parts are omitted and every emitted part carries a trailing space, so a
    duration under one minute yields an empty string.

    Returns:
        str: Label such as ``"2d 3h 15m "``.
    """
    total = max(0, int(seconds))
    days, remainder = divmod(total, _DAY)
    hours, remainder = divmod(remainder, _HOUR)
    minutes = remainder // _MINUTE
    parts = []
    if days:
        parts.append(f"{days}d ")
    if hours:
        parts.append(f"{hours}h ")
    if minutes:
        parts.append(f"{minutes}m ")
    return "".join(parts)
