"""Chart data assembly for scenario histograms.

``make_chart_data`` is the single entry point. It picks one of three layouts:

- single scenario: bars for one scenario plus a dashed mean marker;
- both: the comparison scenario drawn as red outlined bars underneath the
  main scenario's bars, with a mean marker for each;
- difference: one histogram of per-area differences over a range that is
  symmetric about zero.

The colormap and the display range are passed in, so the result depends
only on the arguments.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from landhist.histogram_builder.binning import BucketSet, bin_values, get_mean
from landhist.histogram_builder.colorscales import DIFF_SENTINEL, Colormap, make_colormap
from landhist.histogram_builder.datasets import ChartData, ChartDataset
from landhist.histogram_builder.histogram_state import ChartStyle, ScaleRange, resolve_chart_style
from landhist.histogram_builder.scenario import Scenario, get_values
from landhist.histogram_builder.ticks import tick_step_size, to_fixed
from landhist.utils.logging import get_logger

logger = get_logger(__name__)

MEAN_LINE_BASE_Y = 5
MEAN_LINE_HEADROOM = 1.1
MAIN_MEAN_COLOR = "#000000"
COMPARE_MEAN_COLOR = "#ff0000"
COMPARE_BAR_BORDER = "#f00"
TRANSPARENT = "rgba(1, 1, 1, 0)"

# Floor for the symmetric difference range, used when no area changed.
MIN_DIFF_HALF_RANGE = 0.1


def _mean_marker(label: str, mean: float, bins: BucketSet, color: str) -> ChartDataset:
    """Dashed vertical line at the mean, drawn as a two-point scatter."""
    return ChartDataset(
        type="scatter",
        label=label,
        data=[
            {"x": mean, "y": MEAN_LINE_BASE_Y},
            {"x": mean, "y": max(bins.counts) * MEAN_LINE_HEADROOM},
        ],
        show_line=True,
        point_style="line",
        point_radius=0,
        border_dash=[6, 3],
        border_width=1.5,
        border_color=color,
    )


def _filled_bars(label: str, bins: BucketSet, colors: list[str], order: Optional[int] = None) -> ChartDataset:
    return ChartDataset(
        type="bar",
        label=label,
        data=list(bins.counts),
        background_color=list(colors),
        border_width=0,
        grouped=False if order is not None else None,
        order=order,
        category_percentage=1.0,
        bar_percentage=1.0,
        point_style="rect",
    )


def _make_chart_data_one_scenario(
    indicator: str,
    scenario: Scenario,
    nbars: int,
    scale: ScaleRange,
    colormap: Colormap,
) -> ChartData:
    colors = colormap(indicator, nbars)
    raw_values = get_values(indicator, scenario)
    bins = bin_values(raw_values, scale.min, scale.max, nbars)
    mean = get_mean(raw_values)

    return ChartData(
        labels=bins.centres,
        datasets=[
            _mean_marker(f"Mean: {to_fixed(mean)}", mean, bins, MAIN_MEAN_COLOR),
            _filled_bars(scenario.metadata.short, bins, colors),
        ],
        tick_step_size=tick_step_size(scale.max, scale.min),
    )


def _make_chart_data_two_scenarios(
    indicator: str,
    scenario: Scenario,
    compare_scenario: Scenario,
    nbars: int,
    scale: ScaleRange,
    colormap: Colormap,
) -> ChartData:
    colors = colormap(indicator, nbars)
    raw_values = get_values(indicator, scenario)
    cmp_raw_values = get_values(indicator, compare_scenario)
    bins = bin_values(raw_values, scale.min, scale.max, nbars)
    cmp_bins = bin_values(cmp_raw_values, scale.min, scale.max, nbars)
    mean = get_mean(raw_values)
    cmp_mean = get_mean(cmp_raw_values)

    short = scenario.metadata.short
    cmp_short = compare_scenario.metadata.short

    # comparison bars: outline only, drawn beneath the main scenario (order 1)
    cmp_bars = ChartDataset(
        type="bar",
        label=cmp_short,
        data=list(cmp_bins.counts),
        background_color=TRANSPARENT,
        border_width=1,
        border_color=COMPARE_BAR_BORDER,
        bar_percentage=1,
        grouped=False,
        order=1,
        category_percentage=1.0,
        point_style="rect",
    )

    return ChartData(
        labels=bins.centres,
        datasets=[
            _mean_marker(f"{cmp_short} mean: {to_fixed(cmp_mean)}", cmp_mean, cmp_bins, COMPARE_MEAN_COLOR),
            _mean_marker(f"{short} mean: {to_fixed(mean)}", mean, bins, MAIN_MEAN_COLOR),
            cmp_bars,
            _filled_bars(short, bins, colors, order=2),
        ],
        tick_step_size=tick_step_size(scale.max, scale.min),
    )


def difference_values(indicator: str, scenario: Scenario, compare_scenario: Scenario) -> np.ndarray:
    """Per-area ``scenario - compare_scenario``, with unchanged areas removed.

    Areas are paired by position, so both scenarios must list the same areas
    in the same order. NaN differences are kept (binning ignores them).

    Raises:
        ValueError: If the scenarios have different numbers of areas.
    """
    values = np.asarray(get_values(indicator, scenario), dtype=float)
    cmp_values = np.asarray(get_values(indicator, compare_scenario), dtype=float)
    if values.size != cmp_values.size:
        raise ValueError(
            f"cannot difference scenarios with {values.size} and {cmp_values.size} areas"
        )
    diffs = values - cmp_values
    return diffs[diffs != 0]


def symmetric_half_range(diffs: np.ndarray) -> float:
    """Largest finite |difference|, floored at MIN_DIFF_HALF_RANGE."""
    finite = diffs[np.isfinite(diffs)]
    if finite.size == 0:
        return MIN_DIFF_HALF_RANGE
    return float(max(abs(finite.min()), abs(finite.max()), MIN_DIFF_HALF_RANGE))


def _make_chart_data_difference(
    indicator: str,
    scenario: Scenario,
    compare_scenario: Scenario,
    nbars: int,
    colormap: Colormap,
) -> ChartData:
    colors = colormap(DIFF_SENTINEL, nbars)
    raw_values = difference_values(indicator, scenario, compare_scenario)
    hi = symmetric_half_range(raw_values)
    lo = -hi

    bins = bin_values(raw_values, lo, hi, nbars)

    return ChartData(
        labels=bins.centres,
        datasets=[
            ChartDataset(
                type="bar",
                label="Difference",
                data=list(bins.counts),
                background_color=list(colors),
                border_width=0,
                category_percentage=1.0,
                bar_percentage=1.0,
                point_style="rect",
            ),
        ],
        tick_step_size=tick_step_size(hi, lo),
    )


def make_chart_data(
    indicator: str,
    scenario: Scenario,
    compare_scenario: Optional[Scenario],
    nbars: int,
    chart_style: Union[str, ChartStyle] = ChartStyle.SINGLE,
    *,
    scale: ScaleRange,
    colormap: Colormap = make_colormap,
) -> ChartData:
    """Generate histogram chart data for one indicator.

    Args:
        indicator: Indicator to plot.
        scenario: Main scenario.
        compare_scenario: Scenario to compare against, or None for a
            single-scenario chart (chart_style is then ignored).
        nbars: Number of histogram buckets.
        chart_style: "both" or "difference" when compare_scenario is given.
        scale: Display range for the indicator axis (not used by difference charts).
        colormap: ``colormap(name, count) -> colors``; called with "diff" for
            difference charts.

    Returns:
        ChartData with bucket-centre labels, datasets and tick step.

    Raises:
        ValueError: If chart_style is not "both"/"difference" while a
            comparison scenario is given, or on an invalid range / nbars.
    """
    if compare_scenario is None:
        logger.debug(f"single-scenario histogram: {indicator!r} in {scenario.metadata.short!r}")
        return _make_chart_data_one_scenario(indicator, scenario, nbars, scale, colormap)

    style = resolve_chart_style(chart_style)
    logger.debug(
        f"{style.value} histogram: {indicator!r} in {scenario.metadata.short!r} "
        f"vs {compare_scenario.metadata.short!r}"
    )
    if style is ChartStyle.BOTH:
        return _make_chart_data_two_scenarios(indicator, scenario, compare_scenario, nbars, scale, colormap)
    if style is ChartStyle.DIFFERENCE:
        return _make_chart_data_difference(indicator, scenario, compare_scenario, nbars, colormap)
    raise ValueError(f"chart style {style.value!r} needs no comparison scenario; use 'both' or 'difference'")
