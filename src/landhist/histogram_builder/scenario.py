"""Scenario data model and per-indicator value extraction.

A scenario is one modelling run: a display name plus, for every area, a
record mapping indicator name -> numeric value. Only the multiset of values
across areas matters for histograms, but area order is kept so that two
scenarios built from the same area list can be differenced positionally.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Hashable, Mapping, Optional

import pandas as pd

from landhist.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScenarioMetadata:
    """Display metadata for a scenario."""

    short: str
    long: Optional[str] = None


@dataclass(frozen=True, eq=False)
class Scenario:
    """One modelling run: area id -> {indicator name: value}.

    Frozen; ``values`` is wrapped in a read-only mapping on construction.
    Equality and hashing are by identity.
    """

    metadata: ScenarioMetadata
    values: Mapping[Hashable, Mapping[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {area: MappingProxyType(dict(record)) for area, record in self.values.items()}
        object.__setattr__(self, "values", MappingProxyType(frozen))

    @property
    def n_areas(self) -> int:
        return len(self.values)

    def indicators(self) -> list[str]:
        """Indicator names present in any area record, in first-seen order."""
        seen: dict[str, None] = {}
        for record in self.values.values():
            for name in record:
                seen.setdefault(name, None)
        return list(seen)

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        *,
        short: str,
        area_col: Optional[str] = None,
        long: Optional[str] = None,
    ) -> "Scenario":
        """Build a scenario from a table with one row per area.

        Args:
            df: One row per area, one column per indicator.
            short: Display name of the scenario.
            area_col: Column holding area identifiers. If None, the index is used.
            long: Optional long display name.

        Raises:
            ValueError: If area_col is missing or area ids are not unique.
        """
        if area_col is not None:
            if area_col not in df.columns:
                raise ValueError(f"df must contain area column {area_col!r}")
            df = df.set_index(area_col)
        if not df.index.is_unique:
            raise ValueError("area identifiers must be unique")
        values = {area: row.to_dict() for area, row in df.iterrows()}
        logger.debug(f"scenario {short!r}: {len(values)} areas, {len(df.columns)} indicators")
        return cls(metadata=ScenarioMetadata(short=short, long=long), values=values)


def get_values(indicator: str, scenario: Scenario) -> list[float]:
    """Get the value of one indicator for every area, in area order.

    Missing or non-numeric entries come back as NaN; nothing is filtered.
    """
    raw = [record.get(indicator) for record in scenario.values.values()]
    s = pd.to_numeric(pd.Series(raw, dtype=object), errors="coerce")
    return s.astype(float).tolist()
