from pitch_intel.domain.context import PredictionContext
from pitch_intel.domain.distribution import Distribution
from pitch_intel.domain.pitch_family import PitchFamily
from pitch_intel.domain.zone import HIGH_ZONES, LOW_ARM, LOW_GLOVE, MIDDLE_MIDDLE


def location_shift(context: PredictionContext) -> Distribution:
    """Shift keyed on where the last pitch ended up and what it was."""
    family = context.last_family
    zone = context.last_zone
    if family is None or zone is None:
        return Distribution()

    shift = Distribution()
    if family is PitchFamily.FASTBALL and zone in HIGH_ZONES:
        shift = shift.shift(fastball=-0.08, breaking=0.08, change=0.04)
    if family is PitchFamily.BREAKING and zone == LOW_GLOVE:
        shift = shift.shift(fastball=0.10, breaking=-0.05)
    if family is PitchFamily.CHANGE and zone == LOW_ARM:
        shift = shift.shift(fastball=0.02, breaking=0.08, change=-0.06)
    if family is PitchFamily.FASTBALL and zone == MIDDLE_MIDDLE:
        shift = shift.shift(fastball=-0.10, breaking=0.08, change=0.04)
    return shift


class LocationSequencingStage:
    def apply(self, distribution: Distribution, context: PredictionContext) -> Distribution:
        return distribution.plus(location_shift(context))
