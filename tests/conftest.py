"""Shared fixtures for metro-lines tests."""

import json
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    return json.loads((FIXTURES / name).read_text())


@pytest.fixture
def two_arcs() -> dict:
    """One red route over two forward arcs meeting at (1, 1)."""
    return load_fixture("two_arcs.json")


@pytest.fixture
def shared_corridor() -> dict:
    """Red, blue and green routes sharing a corridor, blue running reversed."""
    return load_fixture("shared_corridor.json")


@pytest.fixture
def world_viewbox() -> list[list[float]]:
    return [[-180, -85], [180, -85], [180, 85], [-180, 85], [-180, -85]]
