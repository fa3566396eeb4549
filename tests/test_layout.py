"""
Test suite for layout planning.
"""

import json

import numpy as np
import pytest

from labeled_histogram import (
    Bucket,
    DegenerateViewportError,
    InvalidInputError,
    LayoutConstraints,
    LayoutPlan,
    LayoutPlanner,
    Record,
    Viewport,
    bin_records,
    linear_scale,
    plan_layout,
)


@pytest.fixture
def example_buckets():
    records = [Record("A", 10), Record("B", 20), Record("C", 30), Record("D", 85)]
    return bin_records(records, 4)


@pytest.fixture
def viewport():
    return Viewport(width=1200, height=800)


# =============================================================================
# Reference Geometry
# =============================================================================

def test_column_and_row_sizes(example_buckets, viewport):
    """Test column width and row height for the reference scenario."""
    plan = plan_layout(example_buckets, viewport)

    assert plan.column_width == 150
    assert plan.row_height == 20
    assert plan.baseline == 760
    assert plan.viewport == viewport


def test_column_geometry(example_buckets, viewport):
    """Test offsets, bar sizes and bar tops per column."""
    plan = plan_layout(example_buckets, viewport)

    assert [c.x_offset for c in plan.columns] == [0, 150, 300, 450]
    assert [c.bar_height for c in plan.columns] == [50, 30, 10, 30]
    assert [c.bar_top for c in plan.columns] == [710, 730, 750, 730]
    assert [c.bucket for c in plan.columns] == example_buckets


def test_bar_and_label_insets(example_buckets, viewport):
    """Test that bars and labels are inset inside their column."""
    plan = plan_layout(example_buckets, viewport)
    second = plan.columns[1]

    assert second.bar_x == 152
    assert second.bar_width == 146
    assert second.label_x == 155


def test_label_positions(example_buckets, viewport):
    """Test label row offsets, text length and absolute baselines."""
    plan = plan_layout(example_buckets, viewport)
    first = plan.columns[0]

    assert [p.record.label for p in first.label_positions] == ["A", "B"]
    assert [p.y for p in first.label_positions] == [0, 20]
    assert all(p.text_length == 140 for p in first.label_positions)
    assert first.label_origin == 720
    assert first.label_baseline(0) == 720
    assert first.label_baseline(1) == 740


def test_axis_ticks(example_buckets, viewport):
    """Test tick values and their pixel positions."""
    plan = plan_layout(example_buckets, viewport)

    assert plan.axis_ticks == pytest.approx([10, 28.75, 47.5, 66.25, 85])
    assert plan.tick_positions == pytest.approx([0, 150, 300, 450, 600])
    assert plan.chart_width == 600


def test_single_bucket_ticks_sit_on_column_edges(viewport):
    """Test that a zero-width domain maps ticks to the column edges."""
    buckets = bin_records([Record("a", 5), Record("b", 5)], 3)
    plan = plan_layout(buckets, viewport)

    assert plan.axis_ticks == [5, 5]
    assert plan.tick_positions == [0, 150]


# =============================================================================
# Sizing Limits
# =============================================================================

def test_column_width_shrinks_to_fit_viewport(example_buckets):
    """Test that narrow viewports shrink the columns."""
    plan = plan_layout(example_buckets, Viewport(width=100, height=800))
    assert plan.column_width == 25


def test_column_width_never_below_one(example_buckets):
    """Test the one-pixel floor when the viewport is narrower than the bucket count."""
    plan = plan_layout(example_buckets, Viewport(width=2, height=800))
    assert plan.column_width == 1
    # four 1px columns overflow the 2px viewport
    assert plan.chart_width == 4
    assert plan.tick_positions[-1] == 4


def test_row_height_shrinks_for_long_columns():
    """Test that a crowded bucket lowers the row height."""
    records = [Record(f"r{i}", 1.0) for i in range(50)]
    buckets = bin_records(records, 1)
    plan = plan_layout(buckets, Viewport(width=400, height=300))

    assert plan.row_height == 5
    column = plan.columns[0]
    assert column.bar_top + column.bar_height + 40 == 300


def test_row_height_never_below_one():
    """Test the one-pixel floor when usable height is tiny."""
    records = [Record(f"r{i}", 1.0) for i in range(50)]
    plan = plan_layout(bin_records(records, 1), Viewport(width=400, height=45))
    assert plan.row_height == 1


def test_custom_constraints(example_buckets, viewport):
    """Test that constraint maxima are honoured."""
    constraints = LayoutConstraints(
        max_column_width=80, max_row_height=12, margin_bottom=10, column_padding=6, bar_gap=0
    )
    plan = plan_layout(example_buckets, viewport, constraints)

    assert plan.column_width == 80
    assert plan.row_height == 12
    assert plan.baseline == 790
    assert plan.columns[0].label_positions[0].text_length == 74
    assert plan.columns[0].bar_width == 80
    assert plan.columns[0].bar_x == 0


def test_text_length_never_negative():
    """Test that padding wider than the column clamps text length to zero."""
    buckets = bin_records([Record("a", 0), Record("b", 1)], 2)
    plan = plan_layout(buckets, Viewport(width=10, height=200))

    assert plan.column_width == 5
    assert plan.columns[0].label_positions[0].text_length == 0


def test_all_empty_buckets_do_not_divide_by_zero(viewport):
    """Test max item count is floored at one."""
    buckets = [Bucket(0.0, 1.0), Bucket(1.0, 2.0)]
    plan = plan_layout(buckets, viewport)

    assert plan.row_height == 20
    assert [c.bar_height for c in plan.columns] == [10, 10]


@pytest.mark.parametrize("seed", range(5))
def test_layout_stays_inside_viewport(seed):
    """Test bar and column bounds over random inputs."""
    rng = np.random.RandomState(seed)
    constraints = LayoutConstraints()
    for _ in range(20):
        n_records = rng.randint(1, 120)
        bucket_count = rng.randint(1, 30)
        viewport = Viewport(width=float(rng.randint(30, 1500)), height=float(rng.randint(60, 900)))
        records = [Record(f"r{i}", v) for i, v in enumerate(rng.randn(n_records))]

        plan = plan_layout(bin_records(records, bucket_count), viewport, constraints)

        for column in plan.columns:
            assert column.bar_top + column.bar_height + constraints.margin_bottom <= viewport.height + 1e-9
            assert column.x_offset + plan.column_width <= viewport.width + plan.column_width
            if column.label_positions:
                assert column.label_baseline(len(column.label_positions) - 1) <= plan.baseline
        ys = [p.y for c in plan.columns for p in c.label_positions]
        assert all(y >= 0 for y in ys)


# =============================================================================
# Empty Plans and Errors
# =============================================================================

def test_empty_buckets_give_empty_plan(viewport):
    """Test that no buckets means no columns and no ticks."""
    plan = plan_layout([], viewport)

    assert plan.columns == []
    assert plan.axis_ticks == []
    assert plan.is_empty


@pytest.mark.parametrize("size", [(0, 800), (1200, 0), (-5, 100), (100, -1)])
def test_degenerate_viewport_gives_empty_plan(example_buckets, size):
    """Test that a viewport with no area yields an empty plan."""
    plan = plan_layout(example_buckets, Viewport(*size))

    assert plan.is_empty
    assert plan.axis_ticks == []


def test_degenerate_viewport_raises_in_strict_mode(example_buckets):
    """Test that strict planners signal degenerate viewports."""
    planner = LayoutPlanner(strict=True)
    with pytest.raises(DegenerateViewportError):
        planner.plan(example_buckets, Viewport(0, 800))


def test_invalid_constraints_are_rejected():
    """Test constraint validation at planner construction."""
    with pytest.raises(InvalidInputError, match="margin_bottom"):
        LayoutPlanner(LayoutConstraints(margin_bottom=-1))
    with pytest.raises(InvalidInputError, match="max_row_height"):
        LayoutPlanner(LayoutConstraints(max_row_height=0))


# =============================================================================
# Purity and Serialization
# =============================================================================

def test_plan_is_idempotent(example_buckets, viewport):
    """Test that identical calls give identical plans."""
    planner = LayoutPlanner()
    assert planner.plan(example_buckets, viewport) == planner.plan(example_buckets, viewport)


def test_plan_to_json(example_buckets, viewport):
    """Test that the plan serializes to JSON."""
    plan = plan_layout(example_buckets, viewport)
    data = json.loads(plan.to_json())

    assert data["column_width"] == 150
    assert data["viewport"] == {"width": 1200, "height": 800}
    assert len(data["columns"]) == 4
    assert data["columns"][0]["labels"][1]["label"] == "B"
    assert data["columns"][2]["labels"] == []
    assert data["fill_color"] == "#C9FFD8"


def test_plan_carries_fill_color(example_buckets, viewport):
    """Test that the planner's fill colour is recorded on every plan, empty ones included."""
    planner = LayoutPlanner(fill_color="#112233")

    assert planner.plan(example_buckets, viewport).fill_color == "#112233"
    assert planner.plan([], viewport).fill_color == "#112233"
    assert json.loads(planner.plan(example_buckets, viewport).to_json())["fill_color"] == "#112233"


def test_empty_plan_to_dict():
    """Test the dictionary form of an empty plan."""
    data = LayoutPlan.empty().to_dict()
    assert data["columns"] == []
    assert data["viewport"] is None


def test_linear_scale():
    """Test linear mapping and the zero-width domain fallback."""
    np.testing.assert_allclose(linear_scale([0, 5, 10], (0, 10), (0, 100)), [0, 50, 100])
    np.testing.assert_allclose(linear_scale([3, 3], (3, 3), (7, 20)), [7, 7])


def test_linear_scale_extreme_domain():
    """Test that a domain whose width overflows still maps to finite positions."""
    result = linear_scale([-1e308, 0.0, 1e308], (-1e308, 1e308), (0, 600))
    np.testing.assert_allclose(result, [0, 300, 600])


def test_tick_positions_finite_for_widest_range():
    """Test tick positions when the value range spans almost all finite floats."""
    records = [Record("lo", -1e308), Record("hi", 1e308)]
    plan = plan_layout(bin_records(records, 4), Viewport(width=600, height=400))

    assert np.all(np.isfinite(plan.axis_ticks))
    np.testing.assert_allclose(plan.tick_positions, [0, 150, 300, 450, 600])
