"""Build single, both and difference histograms for two random scenarios.

Writes one HTML file per chart style into the current directory.
"""

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from landhist import ChartStyle, ScaleRange, Scenario, chart_data_to_plotly, make_chart_data
from landhist.utils.logging import configure_logging, get_logger

configure_logging(level="DEBUG")
logger = get_logger(__name__)

rng = np.random.default_rng(0)
areas = [f"E{i:05d}" for i in range(500)]
baseline_df = pd.DataFrame({"area": areas, "carbon": rng.normal(0.5, 0.15, len(areas))})
rewild_df = baseline_df.assign(carbon=baseline_df["carbon"] + rng.normal(0.05, 0.05, len(areas)))

baseline = Scenario.from_dataframe(baseline_df, short="Baseline", area_col="area")
rewild = Scenario.from_dataframe(rewild_df, short="Rewilding", area_col="area")
scale = ScaleRange(min=0.0, max=1.0)

charts = {
    "single": make_chart_data("carbon", baseline, None, 20, scale=scale),
    "both": make_chart_data("carbon", rewild, baseline, 20, ChartStyle.BOTH, scale=scale),
    "difference": make_chart_data("carbon", rewild, baseline, 20, ChartStyle.DIFFERENCE, scale=scale),
}

for name, chart in charts.items():
    fig = go.Figure(chart_data_to_plotly(chart, x_title="carbon"))
    out = f"histogram_{name}.html"
    fig.write_html(out)
    logger.info(f"wrote {out}")
