from __future__ import annotations

from dataclasses import dataclass

from pitch_intel.domain.context import PredictionContext
from pitch_intel.domain.distribution import Distribution
from pitch_intel.domain.pitch_family import PitchFamily


@dataclass(frozen=True)
class SpecificPitch:
    label: str
    code: str
    family: PitchFamily
    probability: float


@dataclass(frozen=True)
class OptimalPitch:
    distribution: Distribution
    best_family: PitchFamily


@dataclass(frozen=True)
class Decision:
    pitch_index: int
    context: PredictionContext | None
    likely: Distribution
    optimal: OptimalPitch
    likely_pitch: SpecificPitch
    optimal_pitch: SpecificPitch
    actual_code: str | None = None
