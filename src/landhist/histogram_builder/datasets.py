"""Chart payload types produced by the histogram builder.

The payload is renderer-neutral. ``to_dict()`` emits the camelCase keys a
chart front end expects and leaves out style attributes that were not set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

Point = dict[str, float]  # {"x": ..., "y": ...}

# dataclass field -> payload key
_STYLE_KEYS: dict[str, str] = {
    "background_color": "backgroundColor",
    "border_width": "borderWidth",
    "border_color": "borderColor",
    "border_dash": "borderDash",
    "show_line": "showLine",
    "grouped": "grouped",
    "order": "order",
    "category_percentage": "categoryPercentage",
    "bar_percentage": "barPercentage",
    "point_style": "pointStyle",
    "point_radius": "pointRadius",
}


@dataclass
class ChartDataset:
    """One renderable series: a bar histogram or a scatter line."""

    type: str  # "bar" | "scatter"
    label: str
    data: Union[list[float], list[Point]]
    background_color: Optional[Union[str, list[str]]] = None
    border_width: Optional[float] = None
    border_color: Optional[str] = None
    border_dash: Optional[list[float]] = None
    show_line: Optional[bool] = None
    grouped: Optional[bool] = None
    order: Optional[int] = None
    category_percentage: Optional[float] = None
    bar_percentage: Optional[float] = None
    point_style: Optional[str] = None
    point_radius: Optional[float] = None

    def __post_init__(self) -> None:
        if self.type not in ("bar", "scatter"):
            raise ValueError(f"dataset type must be 'bar' or 'scatter', got {self.type!r}")

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": self.type, "label": self.label, "data": list(self.data)}
        for attr, key in _STYLE_KEYS.items():
            v = getattr(self, attr)
            if v is not None:
                d[key] = list(v) if isinstance(v, list) else v
        return d


@dataclass
class ChartData:
    """Complete chart payload: shared bucket-centre labels plus datasets."""

    labels: list[float]
    datasets: list[ChartDataset] = field(default_factory=list)
    tick_step_size: float = 1

    def bar_datasets(self) -> list[ChartDataset]:
        return [ds for ds in self.datasets if ds.type == "bar"]

    def to_dict(self) -> dict[str, Any]:
        return {
            "labels": list(self.labels),
            "datasets": [ds.to_dict() for ds in self.datasets],
            "tickStepSize": self.tick_step_size,
        }
