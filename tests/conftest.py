# tests/conftest.py
import sys
import os

# Add src directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest
from contextlib import contextmanager
from typing import List, Optional

from wall_opening_generator.core.host_interfaces import RayCaster
from wall_opening_generator.core.opening_types import (
    Crossing,
    DuctRecord,
    ElementKey,
    Segment,
    SurfaceCandidate,
)
from wall_opening_generator.crossing.planar_ray_caster import PlanarWall


class KeyCandidate(SurfaceCandidate):
    """Candidate that only carries a key."""

    def __init__(self, key: ElementKey):
        self._key = key

    @property
    def key(self) -> ElementKey:
        return self._key


class ScriptedRayCaster(RayCaster):
    """Returns a fixed list of raw crossings for every cast and records calls."""

    def __init__(self, crossings: List[Crossing]):
        self.crossings = list(crossings)
        self.calls = []

    def cast(self, origin, direction, max_distance, candidate_filter=None):
        self.calls.append((origin, direction, max_distance, candidate_filter))
        return list(self.crossings)


@pytest.fixture
def make_candidates():
    """Factory turning element keys into candidates."""
    def _make(*keys: ElementKey) -> List[SurfaceCandidate]:
        return [KeyCandidate(k) for k in keys]
    return _make


@pytest.fixture
def scripted_caster():
    """Factory for ScriptedRayCaster."""
    return ScriptedRayCaster


@pytest.fixture
def x_segment():
    """Segment from the origin along +X, 10 units long."""
    return Segment(origin=(0.0, 0.0, 0.0), direction=(1.0, 0.0, 0.0), length=10.0)


@pytest.fixture
def cross_walls():
    """
    Two walls perpendicular to the X axis.

    W1 is centered on x=4 and W2 on x=7, both 0.2 thick, 3 high, so a duct
    along +X at z=1 passes through both.
    """
    return [
        PlanarWall(
            wall_key=ElementKey(local=101),
            start=(4.0, -5.0),
            end=(4.0, 5.0),
            thickness=0.2,
            height=3.0,
            level_id="L1",
        ),
        PlanarWall(
            wall_key=ElementKey(local=102),
            start=(7.0, -5.0),
            end=(7.0, 5.0),
            thickness=0.2,
            height=3.0,
            level_id="L1",
        ),
    ]


@pytest.fixture
def round_duct():
    """Round duct along +X at z=1 crossing both cross_walls."""
    return DuctRecord(id="D1", start=(0.0, 0.0, 1.0), end=(10.0, 0.0, 1.0), diameter=0.3)


@pytest.fixture
def transaction_log():
    """
    Transaction factory that records start/commit/rollback events.

    The recorded events are available as ``factory.events``.
    """
    events = []

    @contextmanager
    def factory(name: str):
        events.append(("start", name))
        try:
            yield
        except Exception:
            events.append(("rollback", name))
            raise
        events.append(("commit", name))

    factory.events = events
    return factory
