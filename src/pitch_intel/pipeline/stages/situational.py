from pitch_intel.domain.context import PredictionContext
from pitch_intel.domain.distribution import Distribution

# (pitcher hand, batter side) -> additive shift
HANDEDNESS_DELTAS: dict[tuple[str, str], Distribution] = {
    ("R", "R"): Distribution(fastball=-0.02, breaking=0.04, change=-0.02),
    ("L", "L"): Distribution(fastball=-0.03, breaking=0.05, change=-0.02),
    ("R", "L"): Distribution(fastball=-0.02, breaking=-0.03, change=0.05),
    ("L", "R"): Distribution(fastball=0.02, breaking=-0.05, change=0.03),
}

RUNNERS_ON_DELTA = Distribution(fastball=-0.03, breaking=0.03, change=0.0)


class HandednessStage:
    def apply(self, distribution: Distribution, context: PredictionContext) -> Distribution:
        matchup = (context.pitcher_hand.upper(), context.batter_side.upper())
        delta = HANDEDNESS_DELTAS.get(matchup)
        if delta is None:
            return distribution
        return distribution.plus(delta)


class RunnersOnStage:
    def apply(self, distribution: Distribution, context: PredictionContext) -> Distribution:
        if not context.runners_on:
            return distribution
        return distribution.plus(RUNNERS_ON_DELTA)
