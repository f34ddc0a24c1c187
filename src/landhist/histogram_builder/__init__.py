"""Histogram builder: per-area indicator values -> chart-ready histogram data."""

from landhist.histogram_builder.binning import BucketSet, bin_values, get_mean
from landhist.histogram_builder.builder import make_chart_data
from landhist.histogram_builder.colorscales import DIFF_SENTINEL, make_colormap
from landhist.histogram_builder.datasets import ChartData, ChartDataset
from landhist.histogram_builder.histogram_state import ChartStyle, ScaleRange
from landhist.histogram_builder.plotly_chart import chart_data_to_plotly
from landhist.histogram_builder.scenario import Scenario, ScenarioMetadata, get_values
from landhist.histogram_builder.settings import HistogramSettings
from landhist.histogram_builder.ticks import pretty_label, tick_step_size

__all__ = [
    "BucketSet",
    "ChartData",
    "ChartDataset",
    "ChartStyle",
    "DIFF_SENTINEL",
    "HistogramSettings",
    "ScaleRange",
    "Scenario",
    "ScenarioMetadata",
    "bin_values",
    "chart_data_to_plotly",
    "get_mean",
    "get_values",
    "make_chart_data",
    "make_colormap",
    "pretty_label",
    "tick_step_size",
]
