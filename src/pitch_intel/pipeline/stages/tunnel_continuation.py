from pitch_intel.domain.context import PredictionContext
from pitch_intel.domain.distribution import Distribution
from pitch_intel.domain.pitch_family import PitchFamily

TUNNEL_CONTINUATION_DELTAS: dict[PitchFamily, Distribution] = {
    PitchFamily.FASTBALL: Distribution(breaking=0.03, change=0.02),
    PitchFamily.BREAKING: Distribution(fastball=0.03),
    PitchFamily.CHANGE: Distribution(fastball=0.02, breaking=0.01),
}


class TunnelContinuationStage:
    def apply(self, distribution: Distribution, context: PredictionContext) -> Distribution:
        family = context.last_family
        if context.tunnel is None or family is None:
            return distribution
        return distribution.plus(TUNNEL_CONTINUATION_DELTAS[family])
