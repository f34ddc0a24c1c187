"""Default color ramps for histogram bars, sampled from Plotly colorscales.

``make_colormap`` is what the dataset assembler calls by default; any
callable with the same signature can be passed instead.
"""

from __future__ import annotations

from typing import Callable, List, Mapping, Optional

from plotly.colors import sample_colorscale

# Sentinel indicator name selecting the diverging ramp used by difference charts.
DIFF_SENTINEL = "diff"

DEFAULT_COLORSCALE = "Viridis"
DIFF_COLORSCALE = "RdBu"

Colormap = Callable[[str, int], List[str]]


def make_colormap(
    name: str,
    count: int,
    *,
    colorscales: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Sample ``count`` colors for the bars of a histogram.

    Each bar gets the color at its bucket centre, so the first and last bars
    are half a bucket in from the ends of the scale.

    Args:
        name: Indicator name, or DIFF_SENTINEL for the difference ramp.
        count: Number of bars.
        colorscales: Optional indicator -> Plotly colorscale name overrides.

    Raises:
        ValueError: If count < 1.
    """
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")
    if name == DIFF_SENTINEL:
        scale = DIFF_COLORSCALE
    else:
        scale = (colorscales or {}).get(name, DEFAULT_COLORSCALE)
    points = [(i + 0.5) / count for i in range(count)]
    return sample_colorscale(scale, points)


def colormap_with_overrides(colorscales: Mapping[str, str]) -> Colormap:
    """Bind per-indicator colorscale overrides into a two-argument colormap."""
    overrides = dict(colorscales)

    def _colormap(name: str, count: int) -> List[str]:
        return make_colormap(name, count, colorscales=overrides)

    return _colormap
