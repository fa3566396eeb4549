"""
Data adapter turning tabular rows into histogram records.

The adapter is the only place where labels are truncated and tooltip
annotations are built; the binner and the planner take records as they are.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence

import numpy as np

from .utils import InvalidInputError, check_values


DEFAULT_LABEL_MAX_LENGTH = 20


@dataclass(frozen=True)
class Record:
    """
    One categorised measurement.

    Attributes
    ----------
    label : str
        Category text shown in the column.
    value : float
        Measure used for bucketing.
    annotation : Any
        Opaque payload (tooltip text by default) passed through untouched.
    """
    label: str
    value: float
    annotation: Any = None


def format_number(value: float) -> str:
    """Render a number the short way: ``77.0`` becomes ``'77'``."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _iter_rows(rows: Any) -> Iterable[Sequence[Any]]:
    # pandas DataFrame / Series-like objects expose their data through `.values`
    if hasattr(rows, "values") and not isinstance(rows, (dict, np.ndarray)):
        rows = rows.values
    if isinstance(rows, np.ndarray):
        if rows.ndim != 2 or rows.shape[1] < 2:
            raise InvalidInputError(
                f"Expected rows of shape (n_rows, 2), got {rows.shape}"
            )
        return rows.tolist()
    return rows


def records_from_rows(
    rows: Any,
    *,
    label_max_length: int = DEFAULT_LABEL_MAX_LENGTH,
) -> List[Record]:
    """
    Convert ``(label, value)`` rows into records.

    Parameters
    ----------
    rows : iterable of (label, value), np.ndarray or pandas.DataFrame
        Table rows; only the first two columns are read.
    label_max_length : int, default=20
        Labels longer than this are cut to this many characters.

    Returns
    -------
    records : list of Record
        One record per row, in row order. Each annotation is
        ``"<label> <value>"`` built from the untruncated label.

    Raises
    ------
    InvalidInputError
        If a row has fewer than two columns or a non-numeric, NaN or
        infinite value.
    """
    if label_max_length < 1:
        raise InvalidInputError(
            f"label_max_length must be >= 1, got {label_max_length}"
        )

    labels = []
    raw_values = []
    for i, row in enumerate(_iter_rows(rows)):
        if len(row) < 2:
            raise InvalidInputError(f"Row {i} has {len(row)} column(s), expected 2")
        labels.append(str(row[0]))
        raw_values.append(row[1])

    values = check_values(raw_values)

    return [
        Record(
            label=label[:label_max_length],
            value=float(value),
            annotation=f"{label} {format_number(value)}",
        )
        for label, value in zip(labels, values)
    ]
