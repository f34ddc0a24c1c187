"""Chart style enum and display range used by the histogram builder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union


class ChartStyle(str, Enum):
    """How a histogram is drawn.

    SINGLE is used whenever there is no comparison scenario; BOTH and
    DIFFERENCE need one.
    """

    SINGLE = "single"
    BOTH = "both"
    DIFFERENCE = "difference"


def resolve_chart_style(style: Union[str, ChartStyle]) -> ChartStyle:
    """Convert str to ChartStyle.

    Raises:
        ValueError: If style is not one of the ChartStyle values.
    """
    if isinstance(style, ChartStyle):
        return style
    try:
        return ChartStyle(str(style).lower())
    except ValueError:
        valid = ", ".join(repr(s.value) for s in ChartStyle)
        raise ValueError(f"unknown chart style {style!r}; expected one of {valid}") from None


@dataclass(frozen=True)
class ScaleRange:
    """Fixed display range for an indicator axis, shared by all scenarios."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if not self.max > self.min:
            raise ValueError(f"scale max must be greater than min, got min={self.min}, max={self.max}")

    @property
    def width(self) -> float:
        return self.max - self.min

    @classmethod
    def from_mapping(cls, d: Mapping[str, Any]) -> "ScaleRange":
        """Build from a ``{"min": ..., "max": ...}`` mapping."""
        return cls(min=float(d["min"]), max=float(d["max"]))
