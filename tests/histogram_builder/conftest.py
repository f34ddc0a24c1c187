"""Fixtures for histogram builder tests."""

import pytest

from landhist.histogram_builder.histogram_state import ScaleRange
from landhist.histogram_builder.scenario import Scenario, ScenarioMetadata


def make_scenario(short: str, values: list, indicator: str = "carbon") -> Scenario:
    """Scenario with one area per value, areas named a0, a1, ..."""
    return Scenario(
        metadata=ScenarioMetadata(short=short),
        values={f"a{i}": {indicator: v} for i, v in enumerate(values)},
    )


@pytest.fixture
def scenario_a() -> Scenario:
    return make_scenario("A", [1.0, 2.0, 3.0, 4.0, 5.0])


@pytest.fixture
def scenario_b() -> Scenario:
    return make_scenario("B", [0.5, 2.0, 2.5, 4.5, 4.5])


@pytest.fixture
def scale() -> ScaleRange:
    return ScaleRange(min=0.0, max=5.0)


@pytest.fixture
def fake_colormap():
    """Colormap that records calls and returns predictable color names."""
    calls: list[tuple[str, int]] = []

    def colormap(name: str, count: int) -> list[str]:
        calls.append((name, count))
        return [f"{name}-{i}" for i in range(count)]

    colormap.calls = calls
    return colormap


@pytest.fixture
def scenario_factory():
    return make_scenario
