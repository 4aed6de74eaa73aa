from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pitch_intel.domain.distribution import Distribution

if TYPE_CHECKING:
    from pitch_intel.domain.context import PredictionContext
    from pitch_intel.pipeline.protocols import DistributionStage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LikelyPitchPipeline:
    """Ordered stages applied to one working distribution.

    Every stage returns a new Distribution; the value the last stage returns
    is the prediction. Build canonical pipelines via ``pipeline.presets``.
    """

    name: str
    stages: tuple[DistributionStage, ...]

    def predict(self, context: PredictionContext) -> Distribution:
        distribution = Distribution()
        for stage in self.stages:
            distribution = stage.apply(distribution, context)
        logger.debug(
            "%s at %s: fb=%.3f br=%.3f ch=%.3f",
            self.name,
            context.count,
            distribution.fastball,
            distribution.breaking,
            distribution.change,
        )
        return distribution
