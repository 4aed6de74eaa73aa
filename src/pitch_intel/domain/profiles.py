from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from pitch_intel.domain.pitch_family import PitchFamily

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pitch_intel.domain.distribution import Distribution

VELOCITY_WINDOW = 8

WHIFF_WEIGHT = 0.6
HIT_WEIGHT = 0.25
HARD_HIT_WEIGHT = 0.15


def _rate(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator > 0 else 0.0


@dataclass
class OutcomeCounters:
    seen: int = 0
    swings: int = 0
    whiffs: int = 0
    in_play: int = 0
    hits: int = 0
    hard_hit: int = 0

    @property
    def whiff_rate(self) -> float:
        return _rate(self.whiffs, self.swings)

    @property
    def hit_rate(self) -> float:
        return _rate(self.hits, self.in_play)

    @property
    def hard_hit_rate(self) -> float:
        return _rate(self.hard_hit, self.in_play)

    def vulnerability(self) -> float:
        """Weighted score where higher means the batter fares worse."""
        return (
            WHIFF_WEIGHT * self.whiff_rate
            + HIT_WEIGHT * (1.0 - self.hit_rate)
            + HARD_HIT_WEIGHT * (1.0 - self.hard_hit_rate)
        )


@dataclass
class CommandStats:
    pitches: int = 0
    misses_high: int = 0
    misses_low: int = 0
    misses_arm_side: int = 0
    misses_glove_side: int = 0
    recent_speeds: deque[float] = field(default_factory=lambda: deque(maxlen=VELOCITY_WINDOW))

    @property
    def total_misses(self) -> int:
        return self.misses_high + self.misses_low + self.misses_arm_side + self.misses_glove_side


@dataclass
class PitcherProfile:
    pitcher_id: int
    arsenal: Distribution | None = None
    subtypes: dict[PitchFamily, dict[str, float]] = field(default_factory=dict)
    family_counts: dict[PitchFamily, int] = field(default_factory=dict)
    total_pitches: int = 0
    command: CommandStats = field(default_factory=CommandStats)


@dataclass
class BatterProfile:
    batter_id: int
    pitches_seen: int = 0
    swings: int = 0
    by_family: dict[PitchFamily, OutcomeCounters] = field(default_factory=dict)
    by_zone: dict[tuple[str, PitchFamily], OutcomeCounters] = field(default_factory=dict)


@dataclass(frozen=True)
class VulnerabilityReport:
    scores: Mapping[PitchFamily, float]
    most_vulnerable: PitchFamily | None

    def score(self, family: PitchFamily) -> float | None:
        return self.scores.get(family)


@dataclass(frozen=True)
class PitcherSnapshot:
    """Read-only view of a pitcher profile taken at a decision point."""

    pitcher_id: int
    arsenal: Distribution | None = None
    subtypes: Mapping[PitchFamily, Mapping[str, float]] = field(default_factory=lambda: MappingProxyType({}))
    game_mix: Distribution | None = None
    wildness: float = 0.0
    velocity_trend: float = 0.0


@dataclass(frozen=True)
class BatterSnapshot:
    """Read-only view of a batter profile taken at a decision point."""

    batter_id: int
    aggression: float | None = None
    vulnerability: VulnerabilityReport | None = None
    zone_scores: Mapping[tuple[str, PitchFamily], float] = field(default_factory=lambda: MappingProxyType({}))

    def zone_effectiveness(self, zone: str | None, family: PitchFamily) -> float | None:
        if zone is None:
            return None
        return self.zone_scores.get((zone, family))
