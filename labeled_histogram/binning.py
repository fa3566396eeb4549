"""
Equal-width histogram binning of records.

This module partitions record values into a fixed number of contiguous,
equal-width buckets spanning the value range and groups the records per
bucket, keeping input order inside each bucket.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from .records import Record
from .utils import check_bucket_count, check_values, log_debug, log_message


@dataclass
class Bucket:
    """
    A contiguous value range and the records falling in it.

    The range is half-open ``[range_start, range_end)`` except for the last
    bucket of a histogram, which also contains ``range_end``.

    Attributes
    ----------
    range_start : float
        Inclusive lower bound.
    range_end : float
        Upper bound.
    items : list of Record
        Records in the bucket, in input order.
    """
    range_start: float
    range_end: float
    items: List[Record] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def width(self) -> float:
        return self.range_end - self.range_start

    def to_dict(self) -> dict:
        """Convert the bucket to a JSON-friendly dictionary."""
        return {
            "range_start": self.range_start,
            "range_end": self.range_end,
            "items": [
                {"label": r.label, "value": r.value, "annotation": r.annotation}
                for r in self.items
            ],
        }


# =============================================================================
# Binning Primitives
# =============================================================================

def scale_offsets(values, low: float, high: float, scale: float) -> np.ndarray:
    """
    Map values in ``[low, high]`` linearly onto ``[0, scale]``.

    Works for any finite ``low < high``: when ``high - low`` overflows the
    operands are halved first, and when the product overflows the ratio is
    taken before multiplying.

    Parameters
    ----------
    values : array-like of shape (n_values,)
        Values within ``[low, high]``.
    low : float
        Start of the domain.
    high : float
        End of the domain, ``high > low``.
    scale : float
        Length of the target range.

    Returns
    -------
    offsets : np.ndarray of shape (n_values,)
        Finite offsets in ``[0, scale]`` up to rounding.
    """
    values = np.asarray(values, dtype=float)
    span = high - low
    if np.isfinite(span):
        diff = values - low
    else:
        diff = values / 2 - low / 2
        span = high / 2 - low / 2

    with np.errstate(over='ignore', invalid='ignore'):
        offsets = diff * scale / span
    if not np.all(np.isfinite(offsets)):
        offsets = diff / span * scale
    return offsets


def bucket_edges(low: float, high: float, bucket_count: int) -> np.ndarray:
    """
    Compute the ``bucket_count + 1`` boundaries of equal-width buckets.

    Edges are interpolated as ``low * (1 - k/n) + high * (k/n)``, which stays
    finite for any finite range. The first edge is exactly ``low`` and the
    last exactly ``high``.

    Parameters
    ----------
    low : float
        Smallest value.
    high : float
        Largest value, ``high > low``.
    bucket_count : int
        Number of buckets.

    Returns
    -------
    edges : np.ndarray of shape (bucket_count + 1,)
        Ascending bucket boundaries.
    """
    t = np.arange(bucket_count + 1) / bucket_count
    edges = low * (1 - t) + high * t
    edges[0] = low
    edges[-1] = high
    return np.minimum(np.maximum.accumulate(edges), high)


def assign_buckets(values: np.ndarray, low: float, high: float, bucket_count: int) -> np.ndarray:
    """
    Map each value to its bucket index.

    Index is ``floor((value - low) * bucket_count / (high - low))``, clamped
    to ``[0, bucket_count - 1]`` so ``value == high`` lands in the last bucket.

    Parameters
    ----------
    values : np.ndarray of shape (n_values,)
        Values within ``[low, high]``.
    low : float
        Smallest value.
    high : float
        Largest value, ``high > low``.
    bucket_count : int
        Number of buckets.

    Returns
    -------
    indices : np.ndarray of shape (n_values,)
        Bucket index per value.
    """
    indices = np.floor(scale_offsets(values, low, high, bucket_count)).astype(int)
    return np.clip(indices, 0, bucket_count - 1)


# =============================================================================
# Binner
# =============================================================================

class HistogramBinner:
    """
    Groups records into equal-width buckets.

    The binner only holds configuration; every call to :meth:`bin` works on
    the records it is given and keeps nothing afterwards.

    Parameters
    ----------
    bucket_count : int, default=10
        Number of buckets for non-constant input.
    verbose : int, default=0
        Verbosity level (0=silent, 1=summary, 2=per-bucket detail).
    """

    def __init__(self, bucket_count: int = 10, verbose: int = 0):
        self.bucket_count = check_bucket_count(bucket_count)
        self.verbose = verbose

    def bin(self, records: Sequence[Record]) -> List[Bucket]:
        """
        Partition records into buckets.

        Parameters
        ----------
        records : sequence of Record
            Records to bucket. May be empty.

        Returns
        -------
        buckets : list of Bucket
            Buckets in ascending range order. Empty input gives an empty
            list; constant input gives a single ``[v, v]`` bucket.

        Raises
        ------
        InvalidInputError
            If any record value is NaN or infinite.
        """
        records = list(records)
        if not records:
            log_message("No records to bin", verbose=self.verbose)
            return []

        values = check_values([r.value for r in records])
        low = float(values.min())
        high = float(values.max())

        if low == high:
            log_message(
                f"All {len(records)} values equal {low}; using a single bucket",
                verbose=self.verbose,
            )
            return [Bucket(range_start=low, range_end=high, items=records)]

        edges = bucket_edges(low, high, self.bucket_count)
        indices = assign_buckets(values, low, high, self.bucket_count)

        buckets = [
            Bucket(range_start=float(edges[k]), range_end=float(edges[k + 1]))
            for k in range(self.bucket_count)
        ]
        for record, idx in zip(records, indices):
            buckets[idx].items.append(record)

        log_message(
            f"Binned {len(records)} records into {self.bucket_count} buckets "
            f"over [{low}, {high}]",
            verbose=self.verbose,
        )
        for bucket in buckets:
            log_debug(
                f"[{bucket.range_start}, {bucket.range_end}): {bucket.count} item(s)",
                verbose=self.verbose,
            )

        return buckets


def bin_records(
    records: Sequence[Record],
    bucket_count: int,
    *,
    verbose: int = 0,
) -> List[Bucket]:
    """
    Partition records into ``bucket_count`` equal-width buckets.

    Parameters
    ----------
    records : sequence of Record
        Records to bucket.
    bucket_count : int
        Number of buckets, must be >= 1.
    verbose : int, default=0
        Verbosity level.

    Returns
    -------
    buckets : list of Bucket
        Buckets in ascending range order.
    """
    return HistogramBinner(bucket_count=bucket_count, verbose=verbose).bin(records)


__all__ = ['Bucket', 'HistogramBinner', 'bin_records', 'bucket_edges', 'assign_buckets', 'scale_offsets']
