"""Scores each family on what *should* be thrown, independent of the mixer.

Per family: arsenal share (league-by-count fallback), blended 40/60 with
batter vulnerability when known, times a count-leverage factor, blended
50/50 with the zone-specific score for the previous pitch's zone when one
exists, then normalized.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pitch_intel.domain.decision import OptimalPitch
from pitch_intel.domain.distribution import Distribution
from pitch_intel.domain.pitch_family import FAMILIES, PitchFamily
from pitch_intel.pipeline.stages.league_seed import league_distribution

if TYPE_CHECKING:
    from pitch_intel.domain.context import PredictionContext

VULNERABILITY_BLEND_WEIGHT = 0.6
ZONE_BLEND_WEIGHT = 0.5

_NEUTRAL = Distribution(fastball=1.0, breaking=1.0, change=1.0)
_PITCHER_AHEAD = Distribution(fastball=0.8, breaking=1.25, change=1.15)
_HITTER_AHEAD = Distribution(fastball=1.2, breaking=0.9, change=0.9)
_FULL_COUNT = Distribution(fastball=1.05, breaking=0.95, change=1.0)


def count_leverage_factors(balls: int, strikes: int) -> Distribution:
    if balls == 3 and strikes == 2:
        return _FULL_COUNT
    if balls <= 1 and strikes >= 2:
        return _PITCHER_AHEAD
    if balls >= 2 and strikes <= 1:
        return _HITTER_AHEAD
    return _NEUTRAL


class OptimalPitchRecommender:
    def recommend(self, context: PredictionContext) -> OptimalPitch:
        pitcher = context.pitcher
        batter = context.batter
        base = pitcher.arsenal if pitcher is not None and pitcher.arsenal is not None else None
        if base is None:
            base = league_distribution(context.count)
        vulnerability = batter.vulnerability if batter is not None else None
        leverage = count_leverage_factors(context.balls, context.strikes)

        scores: dict[PitchFamily, float] = {}
        for family in FAMILIES:
            score = base.get(family)
            vuln = vulnerability.score(family) if vulnerability is not None else None
            if vuln is not None:
                score = (1.0 - VULNERABILITY_BLEND_WEIGHT) * score + VULNERABILITY_BLEND_WEIGHT * vuln
            score *= leverage.get(family)
            zone_score = batter.zone_effectiveness(context.last_zone, family) if batter is not None else None
            if zone_score is not None:
                score = (1.0 - ZONE_BLEND_WEIGHT) * score + ZONE_BLEND_WEIGHT * zone_score
            scores[family] = score

        distribution = Distribution.from_mapping(scores).normalized()
        return OptimalPitch(distribution=distribution, best_family=distribution.top())
