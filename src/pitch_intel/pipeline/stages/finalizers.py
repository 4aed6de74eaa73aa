from pitch_intel.domain.context import PredictionContext
from pitch_intel.domain.distribution import Distribution


class RescaleStage:
    """Intermediate normalization: divide by the sum, negatives untouched."""

    def apply(self, distribution: Distribution, context: PredictionContext) -> Distribution:
        return distribution.rescaled()


class FinalNormalizeStage:
    """Floor shares at zero, then divide by the sum."""

    def apply(self, distribution: Distribution, context: PredictionContext) -> Distribution:
        return distribution.normalized()
