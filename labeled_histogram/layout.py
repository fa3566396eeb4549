"""
Layout planning for labeled histograms.

Turns a sequence of buckets and a viewport into a renderer-agnostic
:class:`LayoutPlan`: one column per bucket with a bar growing upward from a
shared baseline, one label row per record stacked over the bar, and the axis
ticks at the bucket boundaries.

Geometry
--------
- ``column_width = min(max_column_width, floor(width / n_buckets))``, at least 1.
- ``row_height = min(max_row_height, floor((height - margin_bottom) / max_items))``,
  at least 1.
- ``bar_height = count * row_height + row_height / 2``.
- ``bar_top = height - bar_height - margin_bottom``.
- Label ``j`` sits ``row_height * j`` below the column's label origin
  (``bar_top + row_height / 2``).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .binning import Bucket, scale_offsets
from .host import DEFAULT_FILL_COLOR
from .records import Record
from .utils import (
    DegenerateViewportError,
    log_debug,
    log_message,
    validate_constraints,
)


# =============================================================================
# Inputs
# =============================================================================

@dataclass(frozen=True)
class Viewport:
    """Drawable canvas size in pixels."""
    width: float
    height: float

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class LayoutConstraints:
    """
    Sizing limits for the layout planner.

    Parameters
    ----------
    max_column_width : float, default=150
        Upper bound for the width of one column.
    max_row_height : float, default=20
        Upper bound for the height of one label row.
    margin_bottom : float, default=40
        Space kept below the baseline for the axis.
    column_padding : float, default=10
        Horizontal space around a label inside its column.
    bar_gap : float, default=4
        Horizontal space between neighbouring bars; each bar is inset by
        half of it on both sides of its column.
    """
    max_column_width: float = 150
    max_row_height: float = 20
    margin_bottom: float = 40
    column_padding: float = 10
    bar_gap: float = 4

    def validate(self) -> None:
        validate_constraints(
            max_column_width=self.max_column_width,
            max_row_height=self.max_row_height,
            margin_bottom=self.margin_bottom,
            column_padding=self.column_padding,
            bar_gap=self.bar_gap,
        )


# =============================================================================
# Plan
# =============================================================================

@dataclass
class LabelPosition:
    """
    Placement of one record's label inside its column.

    Attributes
    ----------
    record : Record
        The labelled record.
    y : float
        Offset below the column's label origin.
    text_length : float
        Width the rendered text is squeezed or stretched to.
    """
    record: Record
    y: float
    text_length: float


@dataclass
class ColumnLayout:
    """
    Geometry of one bucket's column.

    All coordinates are absolute canvas pixels except the label ``y``
    offsets, which are relative to :attr:`label_origin`.
    """
    bucket: Bucket
    x_offset: float
    bar_top: float
    bar_height: float
    label_positions: List[LabelPosition] = field(default_factory=list)
    bar_x: float = 0.0
    bar_width: float = 0.0
    label_x: float = 0.0
    label_origin: float = 0.0

    def label_baseline(self, index: int) -> float:
        """Absolute y of label ``index``."""
        return self.label_origin + self.label_positions[index].y


@dataclass
class LayoutPlan:
    """
    Complete geometry for one render pass.

    Attributes
    ----------
    column_width : float
        Width of every column.
    row_height : float
        Height of every label row.
    columns : list of ColumnLayout
        One column per bucket, left to right.
    axis_ticks : list of float
        Tick values: each bucket's ``range_start`` then the last ``range_end``.
    tick_positions : list of float
        Pixel x of each tick.
    baseline : float
        Shared y from which every bar grows upward.
    viewport : Viewport or None
        Viewport the plan was computed for.
    fill_color : str
        Bar colour handed through to the renderer.
    """
    column_width: float = 0.0
    row_height: float = 0.0
    columns: List[ColumnLayout] = field(default_factory=list)
    axis_ticks: List[float] = field(default_factory=list)
    tick_positions: List[float] = field(default_factory=list)
    baseline: float = 0.0
    viewport: Optional[Viewport] = None
    fill_color: str = DEFAULT_FILL_COLOR

    @classmethod
    def empty(
        cls,
        viewport: Optional[Viewport] = None,
        fill_color: str = DEFAULT_FILL_COLOR,
    ) -> "LayoutPlan":
        """A plan with nothing to draw."""
        return cls(viewport=viewport, fill_color=fill_color)

    @property
    def is_empty(self) -> bool:
        return not self.columns

    @property
    def chart_width(self) -> float:
        return self.column_width * len(self.columns)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the plan to a JSON-friendly dictionary."""
        return {
            "column_width": self.column_width,
            "row_height": self.row_height,
            "baseline": self.baseline,
            "fill_color": self.fill_color,
            "viewport": (
                {"width": self.viewport.width, "height": self.viewport.height}
                if self.viewport is not None else None
            ),
            "axis_ticks": list(self.axis_ticks),
            "tick_positions": list(self.tick_positions),
            "columns": [
                {
                    "range_start": col.bucket.range_start,
                    "range_end": col.bucket.range_end,
                    "x_offset": col.x_offset,
                    "bar_x": col.bar_x,
                    "bar_width": col.bar_width,
                    "bar_top": col.bar_top,
                    "bar_height": col.bar_height,
                    "label_x": col.label_x,
                    "label_origin": col.label_origin,
                    "labels": [
                        {
                            "label": pos.record.label,
                            "value": pos.record.value,
                            "annotation": pos.record.annotation,
                            "y": pos.y,
                            "text_length": pos.text_length,
                        }
                        for pos in col.label_positions
                    ],
                }
                for col in self.columns
            ],
        }

    def to_json(self, **kwargs: Any) -> str:
        """Serialize the plan with :func:`json.dumps`."""
        return json.dumps(self.to_dict(), **kwargs)


# =============================================================================
# Scale
# =============================================================================

def linear_scale(
    values: Sequence[float],
    domain: Sequence[float],
    output_range: Sequence[float],
) -> np.ndarray:
    """
    Map values linearly from ``domain`` onto ``output_range``.

    A zero-width domain maps every value to the start of the range. Extreme
    finite domains such as ``(-1e308, 1e308)`` still give finite positions.
    """
    values = np.asarray(values, dtype=float)
    d0, d1 = float(domain[0]), float(domain[1])
    r0, r1 = float(output_range[0]), float(output_range[1])
    if d1 == d0:
        return np.full_like(values, r0)
    return r0 + scale_offsets(values, d0, d1, r1 - r0)


# =============================================================================
# Planner
# =============================================================================

class LayoutPlanner:
    """
    Computes layout plans from buckets.

    The planner holds only its settings; :meth:`plan` is a pure function
    of its arguments.

    Parameters
    ----------
    constraints : LayoutConstraints or None
        Sizing limits. Defaults to ``LayoutConstraints()``.
    strict : bool, default=False
        If True, a viewport without drawable area raises
        :class:`DegenerateViewportError` instead of returning an empty plan.
    fill_color : str, default="#C9FFD8"
        Bar colour recorded on every plan.
    verbose : int, default=0
        Verbosity level.
    """

    def __init__(
        self,
        constraints: Optional[LayoutConstraints] = None,
        *,
        strict: bool = False,
        fill_color: str = DEFAULT_FILL_COLOR,
        verbose: int = 0,
    ):
        self.constraints = constraints if constraints is not None else LayoutConstraints()
        self.constraints.validate()
        self.strict = strict
        self.fill_color = fill_color
        self.verbose = verbose

    def column_width(self, n_buckets: int, viewport: Viewport) -> float:
        width = int(np.floor(viewport.width / max(1, n_buckets)))
        return float(max(1, min(self.constraints.max_column_width, width)))

    def row_height(self, max_items: int, viewport: Viewport) -> float:
        usable = viewport.height - self.constraints.margin_bottom
        height = int(np.floor(usable / max(1, max_items)))
        return float(max(1, min(self.constraints.max_row_height, height)))

    def plan(self, buckets: Sequence[Bucket], viewport: Viewport) -> LayoutPlan:
        """
        Compute the layout of a histogram.

        Parameters
        ----------
        buckets : sequence of Bucket
            Buckets in ascending range order, as produced by the binner.
        viewport : Viewport
            Canvas size.

        Returns
        -------
        plan : LayoutPlan
            Column and axis geometry. Empty when there are no buckets or
            the viewport has no drawable area.

        Raises
        ------
        DegenerateViewportError
            If ``strict`` is set and the viewport width or height is <= 0.
        """
        if viewport.is_degenerate:
            if self.strict:
                raise DegenerateViewportError(
                    f"Viewport {viewport.width}x{viewport.height} has no drawable area"
                )
            log_message(
                f"Viewport {viewport.width}x{viewport.height} is degenerate; nothing to draw",
                verbose=self.verbose,
            )
            return LayoutPlan.empty(viewport, self.fill_color)

        buckets = list(buckets)
        if not buckets:
            log_message("No buckets; nothing to draw", verbose=self.verbose)
            return LayoutPlan.empty(viewport, self.fill_color)

        c = self.constraints
        n_buckets = len(buckets)
        max_items = max(max(b.count for b in buckets), 1)

        column_width = self.column_width(n_buckets, viewport)
        row_height = self.row_height(max_items, viewport)
        baseline = viewport.height - c.margin_bottom
        text_length = max(0.0, column_width - c.column_padding)
        bar_width = max(0.0, column_width - c.bar_gap)

        columns = []
        for i, bucket in enumerate(buckets):
            x_offset = column_width * i
            bar_height = bucket.count * row_height + row_height / 2
            bar_top = viewport.height - bar_height - c.margin_bottom
            columns.append(
                ColumnLayout(
                    bucket=bucket,
                    x_offset=x_offset,
                    bar_top=bar_top,
                    bar_height=bar_height,
                    label_positions=[
                        LabelPosition(record=record, y=row_height * j, text_length=text_length)
                        for j, record in enumerate(bucket.items)
                    ],
                    bar_x=x_offset + min(c.bar_gap, column_width) / 2,
                    bar_width=bar_width,
                    label_x=x_offset + min(c.column_padding, column_width) / 2,
                    label_origin=bar_top + row_height / 2,
                )
            )
            log_debug(
                f"column {i}: x={x_offset} bar_top={bar_top} bar_height={bar_height}",
                verbose=self.verbose,
            )

        axis_ticks = [b.range_start for b in buckets] + [buckets[-1].range_end]
        low, high = buckets[0].range_start, buckets[-1].range_end
        chart_width = n_buckets * column_width
        if high == low:
            # zero-width domain: ticks sit on the column edges
            tick_positions = [column_width * k for k in range(len(axis_ticks))]
        else:
            tick_positions = [
                float(x) for x in linear_scale(axis_ticks, (low, high), (0.0, chart_width))
            ]

        log_message(
            f"Planned {n_buckets} columns: column_width={column_width}, "
            f"row_height={row_height}",
            verbose=self.verbose,
        )

        return LayoutPlan(
            column_width=column_width,
            row_height=row_height,
            columns=columns,
            axis_ticks=axis_ticks,
            tick_positions=tick_positions,
            baseline=baseline,
            viewport=viewport,
            fill_color=self.fill_color,
        )


def plan_layout(
    buckets: Sequence[Bucket],
    viewport: Viewport,
    constraints: Optional[LayoutConstraints] = None,
    *,
    strict: bool = False,
    fill_color: str = DEFAULT_FILL_COLOR,
    verbose: int = 0,
) -> LayoutPlan:
    """
    Compute the layout of a histogram.

    Convenience wrapper around :meth:`LayoutPlanner.plan`.
    """
    planner = LayoutPlanner(constraints, strict=strict, fill_color=fill_color, verbose=verbose)
    return planner.plan(buckets, viewport)


__all__ = [
    'Viewport',
    'LayoutConstraints',
    'LabelPosition',
    'ColumnLayout',
    'LayoutPlan',
    'LayoutPlanner',
    'plan_layout',
    'linear_scale',
]
