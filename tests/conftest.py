"""Shared pytest fixtures for test modules."""

import pytest

from pitch_intel.domain.arsenal import ArsenalBaseline
from pitch_intel.services.context_store import ContextStore


@pytest.fixture
def baseline() -> ArsenalBaseline:
    """Arsenal baseline for pitcher 100: fastball-heavy with a slider and a changeup."""
    return ArsenalBaseline.from_mappings(
        {"100": {"fastball": 0.55, "breaking": 0.30, "change": 0.15}},
        {"100": {"fastball": {"FF": 0.7, "SI": 0.3}, "breaking": {"SL": 0.8, "CU": 0.2}, "change": {"CH": 1.0}}},
    )


@pytest.fixture
def store() -> ContextStore:
    return ContextStore()
