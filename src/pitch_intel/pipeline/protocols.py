from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pitch_intel.domain.context import PredictionContext
    from pitch_intel.domain.distribution import Distribution


class DistributionStage(Protocol):
    def apply(self, distribution: Distribution, context: PredictionContext) -> Distribution: ...


class LikelyPitchPipelineProtocol(Protocol):
    def predict(self, context: PredictionContext) -> Distribution: ...
