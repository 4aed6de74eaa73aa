from pitch_intel.domain.context import PredictionContext
from pitch_intel.domain.distribution import Distribution
from pitch_intel.domain.pitch_family import PitchFamily

VULNERABILITY_TILT = 0.35


class VulnerabilityTiltStage:
    """Multiply each family by ``1 + score * tilt`` where the batter has a score.

    The result is left unnormalized; the final stage rescales it.
    """

    def __init__(self, tilt: float = VULNERABILITY_TILT) -> None:
        self._tilt = tilt

    def _factor(self, score: float | None) -> float:
        return 1.0 + score * self._tilt if score is not None else 1.0

    def apply(self, distribution: Distribution, context: PredictionContext) -> Distribution:
        report = context.batter.vulnerability if context.batter is not None else None
        if report is None:
            return distribution
        return distribution.scale(
            fastball=self._factor(report.score(PitchFamily.FASTBALL)),
            breaking=self._factor(report.score(PitchFamily.BREAKING)),
            change=self._factor(report.score(PitchFamily.CHANGE)),
        )
