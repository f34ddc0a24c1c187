"""Tests for make_chart_data in single, both and difference modes."""

import math

import numpy as np
import pytest

from landhist.histogram_builder.builder import difference_values, make_chart_data, symmetric_half_range
from landhist.histogram_builder.histogram_state import ChartStyle, ScaleRange


# --- single scenario ---


def test_single_scenario_datasets(scenario_a, scale, fake_colormap):
    """Single mode: mean marker first, then the filled bars."""
    chart = make_chart_data("carbon", scenario_a, None, 5, scale=scale, colormap=fake_colormap)

    assert chart.labels == [0.5, 1.5, 2.5, 3.5, 4.5]
    assert chart.tick_step_size == 1
    assert [ds.type for ds in chart.datasets] == ["scatter", "bar"]

    marker, bars = chart.datasets
    assert marker.label == "Mean: 3.00"
    assert marker.data[0] == {"x": 3.0, "y": 5}
    assert marker.data[1]["x"] == 3.0
    assert marker.data[1]["y"] == pytest.approx(2 * 1.1)
    assert marker.border_color == "#000000"
    assert marker.border_dash == [6, 3]

    assert bars.label == "A"
    assert bars.data == [0, 1, 1, 1, 2]
    assert bars.background_color == [f"carbon-{i}" for i in range(5)]
    assert fake_colormap.calls == [("carbon", 5)]


def test_single_scenario_payload_keys(scenario_a, scale, fake_colormap):
    """Single-mode payload serializes with camelCase keys."""
    d = make_chart_data("carbon", scenario_a, None, 5, scale=scale, colormap=fake_colormap).to_dict()
    assert set(d) == {"labels", "datasets", "tickStepSize"}
    marker, bars = d["datasets"]
    assert marker == {
        "type": "scatter",
        "label": "Mean: 3.00",
        "data": marker["data"],
        "borderWidth": 1.5,
        "borderColor": "#000000",
        "borderDash": [6, 3],
        "showLine": True,
        "pointStyle": "line",
        "pointRadius": 0,
    }
    assert bars["borderWidth"] == 0
    assert bars["categoryPercentage"] == 1.0
    assert bars["barPercentage"] == 1.0
    assert bars["pointStyle"] == "rect"
    assert "grouped" not in bars
    assert "order" not in bars


def test_compare_none_ignores_chart_style(scenario_a, scale, fake_colormap):
    """Without a comparison scenario the style is never looked at."""
    chart = make_chart_data("carbon", scenario_a, None, 5, "not-a-style", scale=scale, colormap=fake_colormap)
    assert len(chart.datasets) == 2


def test_single_scenario_empty_gives_nan_mean(scale, fake_colormap, scenario_factory):
    """An empty scenario gets a NaN mean label."""
    empty = scenario_factory("E", [])
    chart = make_chart_data("carbon", empty, None, 4, scale=scale, colormap=fake_colormap)
    marker, bars = chart.datasets
    assert marker.label == "Mean: NaN"
    assert math.isnan(marker.data[0]["x"])
    assert bars.data == [0, 0, 0, 0]


def test_mean_label_rounds_exact_ties_up(fake_colormap, scenario_factory):
    """A mean of exactly 0.125 is labelled 0.13, not 0.12."""
    scenario = scenario_factory("S", [0.0, 0.25])
    chart = make_chart_data("carbon", scenario, None, 2, scale=ScaleRange(0, 1), colormap=fake_colormap)
    assert chart.datasets[0].label == "Mean: 0.13"


def test_single_scenario_drops_out_of_range_values(fake_colormap, scenario_factory):
    """Values outside the scale are not counted."""
    scenario = scenario_factory("S", [-1.0, 0.0, 0.5, 1.0, 2.0, None])
    chart = make_chart_data("carbon", scenario, None, 2, scale=ScaleRange(0, 1), colormap=fake_colormap)
    assert chart.datasets[1].data == [1, 2]


# --- both ---


def test_both_datasets(scenario_a, scenario_b, scale, fake_colormap):
    """Both mode: two mean markers, red outline bars, filled bars."""
    chart = make_chart_data("carbon", scenario_a, scenario_b, 5, "both", scale=scale, colormap=fake_colormap)

    assert [ds.type for ds in chart.datasets] == ["scatter", "scatter", "bar", "bar"]
    cmp_marker, marker, cmp_bars, bars = chart.datasets

    assert cmp_marker.label == "B mean: 2.80"
    assert cmp_marker.border_color == "#ff0000"
    assert cmp_marker.data[0]["x"] == pytest.approx(2.8)
    assert marker.label == "A mean: 3.00"
    assert marker.border_color == "#000000"

    assert cmp_bars.label == "B"
    assert cmp_bars.data == [1, 0, 2, 0, 2]
    assert cmp_bars.background_color == "rgba(1, 1, 1, 0)"
    assert cmp_bars.border_color == "#f00"
    assert cmp_bars.border_width == 1
    assert cmp_bars.grouped is False
    assert cmp_bars.order == 1

    assert bars.label == "A"
    assert bars.data == [0, 1, 1, 1, 2]
    assert bars.grouped is False
    assert bars.order == 2
    assert bars.background_color == [f"carbon-{i}" for i in range(5)]
    assert chart.tick_step_size == 1


def test_both_accepts_enum(scenario_a, scenario_b, scale, fake_colormap):
    """ChartStyle.BOTH works as well as "both"."""
    chart = make_chart_data("carbon", scenario_a, scenario_b, 5, ChartStyle.BOTH, scale=scale, colormap=fake_colormap)
    assert len(chart.bar_datasets()) == 2


def test_both_counts_each_scenario_independently(fake_colormap, scenario_factory):
    """Each scenario is binned on its own values."""
    a = scenario_factory("A", [0.1, 0.2, 0.9, 1.5])
    b = scenario_factory("B", [-3.0, 0.5, 0.5, 1.0])
    chart = make_chart_data("carbon", a, b, 4, "both", scale=ScaleRange(0, 1), colormap=fake_colormap)
    cmp_bars, bars = chart.bar_datasets()
    assert sum(bars.data) == 3
    assert sum(cmp_bars.data) == 3


# --- difference ---


def test_difference_datasets(scenario_a, scenario_b, scale, fake_colormap):
    """Difference mode: one bar dataset over a symmetric range."""
    chart = make_chart_data("carbon", scenario_a, scenario_b, 5, "difference", scale=scale, colormap=fake_colormap)

    assert len(chart.datasets) == 1
    bars = chart.datasets[0]
    assert bars.type == "bar"
    assert bars.label == "Difference"
    assert bars.data == [1, 0, 0, 0, 3]
    assert bars.background_color == [f"diff-{i}" for i in range(5)]
    assert fake_colormap.calls == [("diff", 5)]
    assert chart.labels == pytest.approx([-0.4, -0.2, 0.0, 0.2, 0.4])
    assert chart.tick_step_size == 0.5


def test_difference_identical_scenarios_use_floor_range(scenario_a, fake_colormap):
    """No changed areas falls back to the minimum half-range."""
    chart = make_chart_data(
        "carbon", scenario_a, scenario_a, 4, "difference", scale=ScaleRange(0, 5), colormap=fake_colormap
    )
    assert chart.datasets[0].data == [0, 0, 0, 0]
    assert chart.labels[0] == pytest.approx(-0.075)
    assert chart.labels[-1] == pytest.approx(0.075)


def test_difference_range_is_symmetric(fake_colormap, scenario_factory):
    """Labels are symmetric about zero."""
    a = scenario_factory("A", [10.0, 0.0, 5.0])
    b = scenario_factory("B", [7.0, 0.0, 6.0])
    chart = make_chart_data("carbon", a, b, 6, "difference", scale=ScaleRange(0, 1), colormap=fake_colormap)
    assert chart.labels[0] == pytest.approx(-chart.labels[-1])
    assert chart.labels[-1] == pytest.approx(2.5)
    assert sum(chart.datasets[0].data) == 2


def test_difference_values_drop_zeros_keep_nan(scenario_factory):
    """Unchanged areas are dropped; NaN differences are kept."""
    a = scenario_factory("A", [1.0, 2.0, None, 4.0])
    b = scenario_factory("B", [1.0, 1.5, 3.0, 5.0])
    diffs = difference_values("carbon", a, b)
    assert len(diffs) == 3
    assert diffs[0] == 0.5
    assert math.isnan(diffs[1])
    assert diffs[2] == -1.0
    assert symmetric_half_range(diffs) == 1.0


def test_symmetric_half_range_floor():
    """Small or empty differences use the floor."""
    assert symmetric_half_range(np.array([])) == 0.1
    assert symmetric_half_range(np.array([0.01, -0.02])) == 0.1
    assert symmetric_half_range(np.array([float("inf"), 0.3])) == 0.3


def test_difference_misaligned_scenarios_raise(scenario_a, fake_colormap, scenario_factory):
    """Scenarios with different area counts cannot be differenced."""
    short = scenario_factory("S", [1.0, 2.0])
    with pytest.raises(ValueError):
        make_chart_data("carbon", scenario_a, short, 5, "difference", scale=ScaleRange(0, 5), colormap=fake_colormap)


# --- dispatch ---


@pytest.mark.parametrize("style", ["overlay", "", ChartStyle.SINGLE])
def test_invalid_style_with_compare_raises(style, scenario_a, scenario_b, scale, fake_colormap):
    """Only "both" and "difference" are valid with a comparison scenario."""
    with pytest.raises(ValueError):
        make_chart_data("carbon", scenario_a, scenario_b, 5, style, scale=scale, colormap=fake_colormap)


def test_repeated_calls_are_identical(scenario_a, scenario_b, scale, fake_colormap):
    """Same inputs give the same payload."""
    first = make_chart_data("carbon", scenario_a, scenario_b, 5, "both", scale=scale, colormap=fake_colormap)
    second = make_chart_data("carbon", scenario_a, scenario_b, 5, "both", scale=scale, colormap=fake_colormap)
    assert first.to_dict() == second.to_dict()


def test_default_colormap_is_used(scenario_a, scale):
    """Without a colormap argument the Plotly ramp is used."""
    chart = make_chart_data("carbon", scenario_a, None, 5, scale=scale)
    colors = chart.datasets[1].background_color
    assert len(colors) == 5
    assert all(c.startswith("rgb") for c in colors)
