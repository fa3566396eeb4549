"""
Labeled Histogram - binning and layout for labeled histograms.

This package turns (category, value) pairs into a renderer-agnostic layout
plan: values are split into equal-width buckets and every bucket becomes a
column with one label per record stacked over a bar sized to its count.

Features:
- Equal-width binning with stable in-bucket order
- Layout planning bounded by a fixed canvas
- Axis ticks at bucket boundaries on a linear scale
- Renderer contract (rectangles, texts, axis) with a recording renderer
- Host helpers for persisted fill color and number formats

Example usage:
    >>> from labeled_histogram import records_from_rows, bin_records, plan_layout, Viewport
    >>>
    >>> records = records_from_rows([("A", 10), ("B", 20), ("C", 30), ("D", 85)])
    >>> buckets = bin_records(records, bucket_count=4)
    >>> [b.count for b in buckets]
    [2, 1, 0, 1]
    >>> plan = plan_layout(buckets, Viewport(width=1200, height=800))
    >>> plan.column_width
    150.0
"""

__version__ = "0.1.0"
__author__ = "Labeled Histogram Contributors"

# Data adapter
from .records import Record, records_from_rows, format_number

# Binning
from .binning import Bucket, HistogramBinner, bin_records, bucket_edges, assign_buckets

# Layout
from .layout import (
    Viewport,
    LayoutConstraints,
    LabelPosition,
    ColumnLayout,
    LayoutPlan,
    LayoutPlanner,
    plan_layout,
    linear_scale,
)

# Configuration
from .config import HistogramParams

# Rendering
from .renderer import (
    Renderer,
    RecordingRenderer,
    Primitive,
    render_plan,
    render_histogram,
)

# Host collaborators
from .host import (
    DEFAULT_BUCKET_COUNT,
    DEFAULT_FILL_COLOR,
    DEFAULT_FORMAT_STRING,
    resolve_fill_color,
    resolve_format_string,
    resolve_bucket_count,
    format_value,
    enumerate_object_instances,
)
from .capabilities import HISTOGRAM_CAPABILITIES, VisualCapabilities

# Utility functions
from .utils import (
    check_values,
    check_bucket_count,
    InvalidInputError,
    DegenerateViewportError,
    log_message,
)

# Public API
__all__ = [
    # Version
    "__version__",
    # Records
    "Record",
    "records_from_rows",
    "format_number",
    # Binning
    "Bucket",
    "HistogramBinner",
    "bin_records",
    "bucket_edges",
    "assign_buckets",
    # Layout
    "Viewport",
    "LayoutConstraints",
    "LabelPosition",
    "ColumnLayout",
    "LayoutPlan",
    "LayoutPlanner",
    "plan_layout",
    "linear_scale",
    # Configuration
    "HistogramParams",
    # Rendering
    "Renderer",
    "RecordingRenderer",
    "Primitive",
    "render_plan",
    "render_histogram",
    # Host
    "DEFAULT_BUCKET_COUNT",
    "DEFAULT_FILL_COLOR",
    "DEFAULT_FORMAT_STRING",
    "resolve_fill_color",
    "resolve_format_string",
    "resolve_bucket_count",
    "format_value",
    "enumerate_object_instances",
    "HISTOGRAM_CAPABILITIES",
    "VisualCapabilities",
    # Utilities
    "check_values",
    "check_bucket_count",
    "InvalidInputError",
    "DegenerateViewportError",
    "log_message",
]
