"""
landhist: histograms of per-area land-use indicators across scenarios.

This package provides:
- Scenario: per-area indicator values for one modelling run
- make_chart_data: histogram chart payloads for one scenario, two scenarios
  overlaid, or the difference between two scenarios
- chart_data_to_plotly: Plotly figure dicts for those payloads
- Logging utilities for library and application use

For logging configuration in standalone scripts:
    ```python
    from landhist.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from landhist.utils.logging import configure_logging, get_logger

from landhist.histogram_builder import (
    ChartData,
    ChartStyle,
    ScaleRange,
    Scenario,
    ScenarioMetadata,
    chart_data_to_plotly,
    make_chart_data,
)

# NullHandler so logs don't propagate to root when no application has
# configured logging.
_logger = logging.getLogger("landhist")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "ChartData",
    "ChartStyle",
    "ScaleRange",
    "Scenario",
    "ScenarioMetadata",
    "chart_data_to_plotly",
    "configure_logging",
    "get_logger",
    "make_chart_data",
]

__version__ = "0.1.0"
