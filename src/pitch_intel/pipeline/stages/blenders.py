from pitch_intel.domain.context import PredictionContext
from pitch_intel.domain.distribution import Distribution

ARSENAL_BLEND_WEIGHT = 0.5
GAME_MIX_BLEND_WEIGHT = 0.2


class ArsenalBlendStage:
    def __init__(self, weight: float = ARSENAL_BLEND_WEIGHT) -> None:
        self._weight = weight

    def apply(self, distribution: Distribution, context: PredictionContext) -> Distribution:
        arsenal = context.pitcher.arsenal if context.pitcher is not None else None
        if arsenal is None:
            return distribution
        return distribution.blend(arsenal, self._weight)


class GameMixBlendStage:
    """Pull toward what the pitcher has actually thrown so far this game."""

    def __init__(self, weight: float = GAME_MIX_BLEND_WEIGHT) -> None:
        self._weight = weight

    def apply(self, distribution: Distribution, context: PredictionContext) -> Distribution:
        game_mix = context.pitcher.game_mix if context.pitcher is not None else None
        if game_mix is None:
            return distribution
        return distribution.blend(game_mix, self._weight)
