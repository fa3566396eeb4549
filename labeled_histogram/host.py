"""
Host-side resolution of persisted formatting properties.

These helpers read the host's persisted object model (nested dictionaries
of the form ``{'general': {'fill': {'solid': {'color': ...}}}}``) and apply
the documented fallbacks. The binner and the planner never call them; the
resolved strings are handed to the renderer as-is.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Mapping, Optional

from .utils import InvalidInputError, check_bucket_count


DEFAULT_FILL_COLOR = "#C9FFD8"
DEFAULT_FORMAT_STRING = "#"
DEFAULT_BUCKET_COUNT = 10

_FORMAT_PATTERN = re.compile(r"^(?P<int>[#0,]+)(?:\.(?P<frac>[#0]+))?$")


def resolve_fill_color(objects: Optional[Mapping[str, Any]]) -> str:
    """
    Return the persisted bar fill color, or ``#C9FFD8`` when unset.

    Parameters
    ----------
    objects : mapping or None
        Persisted objects of the visual.
    """
    try:
        color = objects["general"]["fill"]["solid"]["color"]
    except (KeyError, TypeError):
        return DEFAULT_FILL_COLOR
    return color or DEFAULT_FILL_COLOR


def resolve_format_string(column_objects: Optional[Mapping[str, Any]]) -> str:
    """Return the measure column's format string, or ``'#'`` when unset."""
    try:
        fmt = column_objects["general"]["formatString"]
    except (KeyError, TypeError):
        return DEFAULT_FORMAT_STRING
    return fmt or DEFAULT_FORMAT_STRING


def resolve_bucket_count(objects: Optional[Mapping[str, Any]]) -> int:
    """
    Return the persisted bucket count, or 10 when unset.

    Hosts store numeric properties as numbers, so an integral float such as
    ``12.0`` is accepted.

    Parameters
    ----------
    objects : mapping or None
        Persisted objects of the visual.

    Returns
    -------
    bucket_count : int
        Number of buckets, >= 1.

    Raises
    ------
    InvalidInputError
        If the persisted size is not an integer >= 1.
    """
    try:
        size = objects["general"]["size"]
    except (KeyError, TypeError):
        return DEFAULT_BUCKET_COUNT
    if size is None:
        return DEFAULT_BUCKET_COUNT
    if isinstance(size, float) and size.is_integer():
        size = int(size)
    return check_bucket_count(size)


def format_value(value: float, format_string: str = DEFAULT_FORMAT_STRING) -> str:
    """
    Format a number with a ``#``/``0`` digit pattern.

    Supported patterns are an integer part made of ``#``, ``0`` and an
    optional ``,`` for thousands grouping, followed by an optional fraction
    part. ``0`` digits are always shown, ``#`` digits only when non-zero.
    Rounding is half-up.

    Parameters
    ----------
    value : float
        Number to format.
    format_string : str, default='#'
        Digit pattern such as ``'#'``, ``'0.00'`` or ``'#,0.#'``.

    Returns
    -------
    text : str
        Formatted number.

    Raises
    ------
    InvalidInputError
        If the pattern is not supported.

    Examples
    --------
    >>> format_value(28.75, '#')
    '29'
    >>> format_value(1234.5, '#,0.00')
    '1,234.50'
    """
    match = _FORMAT_PATTERN.match(format_string)
    if match is None:
        raise InvalidInputError(f"Unsupported format string: {format_string!r}")

    int_part = match.group("int")
    frac_part = match.group("frac") or ""
    grouping = "," in int_part
    min_int_digits = int_part.count("0")
    max_decimals = len(frac_part)
    min_decimals = frac_part.rfind("0") + 1

    quantum = Decimal(1).scaleb(-max_decimals)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)

    text = f"{abs(rounded):{',' if grouping else ''}.{max_decimals}f}"
    whole, _, decimals = text.partition(".")

    if max_decimals > min_decimals:
        decimals = decimals.rstrip("0")
        if len(decimals) < min_decimals:
            decimals = decimals.ljust(min_decimals, "0")

    digits = whole.replace(",", "")
    if len(digits) < min_int_digits:
        whole = digits.zfill(min_int_digits)
        if grouping:
            whole = f"{int(whole):,}".rjust(len(whole), "0")

    sign = "-" if rounded < 0 else ""
    return f"{sign}{whole}.{decimals}" if decimals else f"{sign}{whole}"


def enumerate_object_instances(
    object_name: str,
    objects: Optional[Mapping[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """
    List the persisted property instances offered to the host's property pane.

    Parameters
    ----------
    object_name : str
        Requested object; only ``'general'`` is known.
    objects : mapping or None
        Current persisted objects, used for the current values.

    Returns
    -------
    instances : list of dict
        Empty for unknown object names.
    """
    if object_name != "general":
        return []

    return [{
        "object_name": "general",
        "display_name": "General",
        "selector": None,
        "properties": {
            "fill": {"solid": {"color": resolve_fill_color(objects)}},
            "size": resolve_bucket_count(objects),
        },
    }]
