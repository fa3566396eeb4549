"""
Configuration for the labeled histogram pipeline.

This module provides a dataclass that centralizes the binning, layout and
formatting options so a host can persist and restore them as JSON.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

from .host import (
    DEFAULT_BUCKET_COUNT,
    DEFAULT_FILL_COLOR,
    DEFAULT_FORMAT_STRING,
    resolve_bucket_count,
    resolve_fill_color,
    resolve_format_string,
)
from .layout import LayoutConstraints
from .utils import InvalidInputError, check_bucket_count


# =============================================================================
# Histogram Parameters Dataclass
# =============================================================================

@dataclass
class HistogramParams:
    """
    Dataclass containing all histogram options.

    Parameters
    ----------
    bucket_count : int
        Number of equal-width buckets.
    max_column_width : float
        Upper bound for the width of one column.
    max_row_height : float
        Upper bound for the height of one label row.
    margin_bottom : float
        Space kept below the baseline for the axis.
    column_padding : float
        Horizontal space around a label inside its column.
    bar_gap : float
        Horizontal space between neighbouring bars.
    fill_color : str
        Bar fill color handed to the renderer.
    format_string : str
        Digit pattern for axis tick labels.
    label_max_length : int
        Labels are truncated to this many characters.
    verbose : int
        Verbosity level (0=silent, 1=summary, 2=debug).
    """
    bucket_count: int = DEFAULT_BUCKET_COUNT
    max_column_width: float = 150
    max_row_height: float = 20
    margin_bottom: float = 40
    column_padding: float = 10
    bar_gap: float = 4
    fill_color: str = DEFAULT_FILL_COLOR
    format_string: str = DEFAULT_FORMAT_STRING
    label_max_length: int = 20
    verbose: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert parameters to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "HistogramParams":
        """Create HistogramParams from dictionary, ignoring unknown keys."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in params.items() if k in valid_keys}
        return cls(**filtered)

    @classmethod
    def from_host_objects(
        cls,
        objects: Optional[Mapping[str, Any]],
        column_objects: Optional[Mapping[str, Any]] = None,
        **overrides: Any,
    ) -> "HistogramParams":
        """
        Create HistogramParams from the host's persisted objects.

        Parameters
        ----------
        objects : mapping or None
            Persisted objects of the visual (``fill`` and ``size``).
        column_objects : mapping or None
            Objects of the measure column (``formatString``).
        **overrides
            Any other HistogramParams field.

        Raises
        ------
        InvalidInputError
            If the persisted bucket count is invalid.
        """
        params = {
            "bucket_count": resolve_bucket_count(objects),
            "fill_color": resolve_fill_color(objects),
            "format_string": resolve_format_string(column_objects),
        }
        params.update(overrides)
        return cls(**params)

    def to_constraints(self) -> LayoutConstraints:
        """Layout constraints described by these parameters."""
        return LayoutConstraints(
            max_column_width=self.max_column_width,
            max_row_height=self.max_row_height,
            margin_bottom=self.margin_bottom,
            column_padding=self.column_padding,
            bar_gap=self.bar_gap,
        )

    def validate(self) -> None:
        """
        Validate all parameters.

        Raises
        ------
        InvalidInputError
            If any parameter is invalid.
        """
        check_bucket_count(self.bucket_count)
        self.to_constraints().validate()
        if self.label_max_length < 1:
            raise InvalidInputError(
                f"label_max_length must be >= 1, got {self.label_max_length}"
            )
        if not self.fill_color:
            raise InvalidInputError("fill_color must not be empty")
        if not self.format_string:
            raise InvalidInputError("format_string must not be empty")

    def save(self, path: str) -> None:
        """
        Save the parameters to a JSON file.

        Parameters
        ----------
        path : str
            File path to save to.
        """
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> "HistogramParams":
        """
        Load parameters from a JSON file.

        Parameters
        ----------
        path : str
            File path to load from.

        Returns
        -------
        params : HistogramParams
            The validated parameters.
        """
        with open(path, 'r') as f:
            params = cls.from_dict(json.load(f))
        params.validate()
        return params
