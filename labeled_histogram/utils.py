"""
Utility functions for input validation and logging.

This module provides the validators shared by the binner and the layout
planner, the package's exception types, and the verbose-gated logging
helpers. All numeric validation is done with NumPy.
"""

from __future__ import annotations

import numbers
from typing import Any, Iterable, List, Tuple, Union

import numpy as np


# =============================================================================
# Type Aliases
# =============================================================================

ArrayLike = Union[np.ndarray, List[Any], Tuple[Any, ...]]


# =============================================================================
# Custom Exceptions
# =============================================================================

class InvalidInputError(ValueError):
    """
    Exception raised when the binner or planner receives unusable input.

    Raised for a bucket count below 1, for NaN or infinite values, and for
    rows the data adapter cannot interpret. The operation fails fast and
    never returns a best-effort result.
    """
    pass


class DegenerateViewportError(ValueError):
    """
    Exception raised for a viewport with no drawable area.

    Only raised by a planner created with ``strict=True``; by default a
    zero or negative viewport yields an empty layout plan instead.
    """
    pass


# =============================================================================
# Input Validation Functions
# =============================================================================

def check_values(values: Union[ArrayLike, Iterable[float]]) -> np.ndarray:
    """
    Validate and convert numeric values to a 1D float array.

    Parameters
    ----------
    values : array-like
        Numeric values to validate.

    Returns
    -------
    values_converted : np.ndarray of shape (n_values,)
        Validated float array. May be empty.

    Raises
    ------
    InvalidInputError
        If the values cannot be converted, are not 1D, or contain NaN or
        infinite entries.
    """
    if not isinstance(values, (np.ndarray, list, tuple)):
        values = list(values)

    try:
        values_out = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Values must be numeric: {e}")

    if values_out.ndim != 1:
        raise InvalidInputError(
            f"Expected 1D values, got {values_out.ndim}D array instead."
        )

    if np.any(np.isnan(values_out)):
        raise InvalidInputError("Values contain NaN entries.")

    if np.any(np.isinf(values_out)):
        raise InvalidInputError("Values contain infinite entries.")

    return values_out


def check_bucket_count(bucket_count: Any) -> int:
    """
    Validate the requested number of buckets.

    Parameters
    ----------
    bucket_count : int
        Number of equal-width buckets.

    Returns
    -------
    bucket_count : int
        The validated count as a plain int.

    Raises
    ------
    InvalidInputError
        If ``bucket_count`` is not an integer or is smaller than 1.
    """
    if isinstance(bucket_count, bool) or not isinstance(bucket_count, numbers.Integral):
        raise InvalidInputError(
            f"bucket_count must be an integer, got {type(bucket_count).__name__}"
        )

    if bucket_count < 1:
        raise InvalidInputError(f"bucket_count must be >= 1, got {bucket_count}")

    return int(bucket_count)


def validate_constraints(
    *,
    max_column_width: float,
    max_row_height: float,
    margin_bottom: float,
    column_padding: float,
    bar_gap: float,
) -> None:
    """
    Validate layout constraints.

    Parameters
    ----------
    max_column_width : float
        Upper bound for the width of one column.
    max_row_height : float
        Upper bound for the height of one label row.
    margin_bottom : float
        Space kept free below the baseline for the axis.
    column_padding : float
        Horizontal space subtracted from the label text length.
    bar_gap : float
        Horizontal space between neighbouring bars.

    Raises
    ------
    InvalidInputError
        If any constraint is invalid.
    """
    if max_column_width < 1:
        raise InvalidInputError(
            f"max_column_width must be >= 1, got {max_column_width}"
        )

    if max_row_height < 1:
        raise InvalidInputError(f"max_row_height must be >= 1, got {max_row_height}")

    if margin_bottom < 0:
        raise InvalidInputError(
            f"margin_bottom must be non-negative, got {margin_bottom}"
        )

    if column_padding < 0:
        raise InvalidInputError(
            f"column_padding must be non-negative, got {column_padding}"
        )

    if bar_gap < 0:
        raise InvalidInputError(f"bar_gap must be non-negative, got {bar_gap}")


# =============================================================================
# Logging Utilities
# =============================================================================

def log_message(message: str, *, verbose: int = 0) -> None:
    """
    Print a log message if verbose level is sufficient.

    Parameters
    ----------
    message : str
        Message to print.
    verbose : int, default=0
        Verbosity level. Message is printed if verbose >= 1.
    """
    if verbose >= 1:
        print(f"[LabeledHistogram] {message}")


def log_debug(message: str, *, verbose: int = 0) -> None:
    """Print a detail message when verbose >= 2."""
    if verbose >= 2:
        print(f"[LabeledHistogram] [debug] {message}")
