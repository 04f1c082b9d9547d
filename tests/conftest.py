"""
Pytest configuration and fixtures for stockroute tests.
"""

import os

import pytest

# Keep a developer's environment out of the settings tests
for _key in [k for k in os.environ if k.startswith("STOCKROUTE_")]:
    del os.environ[_key]

from stockroute.backends.memory import MemoryInventory, MemoryWorld
from stockroute.core.cycle import CycleContext
from stockroute.observability.sinks import RecordingSink

from helpers import stack


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def wood_chest():
    return MemoryInventory("A", slots={1: stack("wood", 10)})


@pytest.fixture
def stone_chest():
    return MemoryInventory("B", slots={1: stack("stone", 3)})


@pytest.fixture
def fallback_chest():
    return MemoryInventory("F")


@pytest.fixture
def source_chest():
    return MemoryInventory("S", slots={1: stack("stone", 5, "Stone")})


@pytest.fixture
def ctx(source_chest, wood_chest, stone_chest, fallback_chest, sink):
    """A over wood, B over stone, F as fallback, S holding 5 stone in slot 1."""
    return CycleContext(
        source=source_chest,
        destinations=(wood_chest, stone_chest),
        fallback=fallback_chest,
        sink=sink,
        batch_size=200,
    )


@pytest.fixture
def world(source_chest, wood_chest, stone_chest, fallback_chest):
    return MemoryWorld([source_chest, wood_chest, stone_chest, fallback_chest], source="S")
