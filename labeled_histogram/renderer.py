"""
Renderer contract for layout plans.

A drawing backend implements :class:`Renderer`; :func:`render_plan` walks a
:class:`~labeled_histogram.layout.LayoutPlan` and emits one rectangle per
column, one text per label and one axis, all in absolute canvas pixels.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from .binning import HistogramBinner
from .config import HistogramParams
from .host import DEFAULT_FORMAT_STRING, format_value
from .layout import LayoutPlan, LayoutPlanner, Viewport
from .records import Record, records_from_rows
from .utils import log_message


# =============================================================================
# Renderer Base Class
# =============================================================================

class Renderer(ABC):
    """
    Abstract base class for drawing backends.

    Implementations draw shapes; they never compute geometry.
    """

    @abstractmethod
    def draw_rect(self, x: float, y: float, width: float, height: float, fill: str) -> None:
        """
        Draw a filled rectangle.

        Parameters
        ----------
        x, y : float
            Top-left corner.
        width, height : float
            Size of the rectangle.
        fill : str
            Fill color.
        """
        pass

    @abstractmethod
    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        text_length: float,
        annotation: Any = None,
    ) -> None:
        """
        Draw one label.

        Parameters
        ----------
        x, y : float
            Start of the text baseline.
        text : str
            Label text.
        text_length : float
            Width the text must be fitted into.
        annotation : Any
            Tooltip payload attached to the label.
        """
        pass

    @abstractmethod
    def draw_axis(
        self,
        y: float,
        ticks: Sequence[float],
        positions: Sequence[float],
        labels: Sequence[str],
    ) -> None:
        """
        Draw a horizontal axis.

        Parameters
        ----------
        y : float
            Vertical position of the axis line.
        ticks : sequence of float
            Tick values.
        positions : sequence of float
            Pixel x of each tick.
        labels : sequence of str
            Formatted tick labels.
        """
        pass


# =============================================================================
# Recording Renderer
# =============================================================================

@dataclass
class Primitive:
    """One recorded drawing call."""
    kind: str
    attrs: Dict[str, Any] = field(default_factory=dict)


class RecordingRenderer(Renderer):
    """Renderer that stores every drawing call as a :class:`Primitive`."""

    def __init__(self):
        self.primitives: List[Primitive] = []

    def draw_rect(self, x, y, width, height, fill):
        self.primitives.append(
            Primitive("rect", {"x": x, "y": y, "width": width, "height": height, "fill": fill})
        )

    def draw_text(self, x, y, text, text_length, annotation=None):
        self.primitives.append(
            Primitive("text", {
                "x": x,
                "y": y,
                "text": text,
                "text_length": text_length,
                "annotation": annotation,
            })
        )

    def draw_axis(self, y, ticks, positions, labels):
        self.primitives.append(
            Primitive("axis", {
                "y": y,
                "ticks": list(ticks),
                "positions": list(positions),
                "labels": list(labels),
            })
        )

    def of_kind(self, kind: str) -> List[Primitive]:
        return [p for p in self.primitives if p.kind == kind]

    def clear(self) -> None:
        self.primitives = []


# =============================================================================
# Plan Rendering
# =============================================================================

def render_plan(
    plan: LayoutPlan,
    renderer: Renderer,
    *,
    fill_color: Optional[str] = None,
    format_string: str = DEFAULT_FORMAT_STRING,
) -> None:
    """
    Emit the drawing calls for a plan.

    Each column yields its bar first, then its labels top to bottom; the
    axis comes last. An empty plan draws nothing.

    Parameters
    ----------
    plan : LayoutPlan
        Geometry to draw.
    renderer : Renderer
        Drawing backend.
    fill_color : str or None
        Bar fill, passed through untouched. Defaults to ``plan.fill_color``.
    format_string : str, default='#'
        Digit pattern for the tick labels.
    """
    if plan.is_empty:
        return

    # formatted up front so a bad format string fails before anything is drawn
    tick_labels = [format_value(t, format_string) for t in plan.axis_ticks]
    fill = fill_color if fill_color is not None else plan.fill_color

    for column in plan.columns:
        renderer.draw_rect(
            column.bar_x, column.bar_top, column.bar_width, column.bar_height, fill
        )
        for j, position in enumerate(column.label_positions):
            renderer.draw_text(
                column.label_x,
                column.label_baseline(j),
                position.record.label,
                position.text_length,
                position.record.annotation,
            )

    renderer.draw_axis(plan.baseline, plan.axis_ticks, plan.tick_positions, tick_labels)


def render_histogram(
    data: Union[Sequence[Record], Any],
    renderer: Renderer,
    viewport: Viewport,
    params: Optional[HistogramParams] = None,
) -> LayoutPlan:
    """
    Adapt, bin, plan and draw in one call.

    All validation happens before the first drawing call, so an invalid
    input never leaves a half-drawn chart.

    Parameters
    ----------
    data : sequence of Record, or rows accepted by ``records_from_rows``
        Input data.
    renderer : Renderer
        Drawing backend.
    viewport : Viewport
        Canvas size.
    params : HistogramParams or None
        Options; defaults to ``HistogramParams()``.

    Returns
    -------
    plan : LayoutPlan
        The plan that was drawn.

    Raises
    ------
    InvalidInputError
        If the data or the parameters are invalid.
    """
    params = params if params is not None else HistogramParams()
    params.validate()

    if isinstance(data, (list, tuple)) and all(isinstance(r, Record) for r in data):
        records = list(data)
    else:
        records = records_from_rows(data, label_max_length=params.label_max_length)

    buckets = HistogramBinner(params.bucket_count, verbose=params.verbose).bin(records)
    planner = LayoutPlanner(
        params.to_constraints(), fill_color=params.fill_color, verbose=params.verbose
    )
    plan = planner.plan(buckets, viewport)

    render_plan(plan, renderer, format_string=params.format_string)
    log_message(f"Rendered {len(plan.columns)} columns", verbose=params.verbose)
    return plan
