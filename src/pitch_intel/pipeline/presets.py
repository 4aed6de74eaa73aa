"""Pre-configured prediction pipelines.

Available pipelines:
- likely: the full "likely next pitch" mixer
- baseline: league seed + pitcher arsenal only, no in-game signals
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pitch_intel.pipeline.engine import LikelyPitchPipeline
from pitch_intel.pipeline.stages.blenders import ArsenalBlendStage, GameMixBlendStage
from pitch_intel.pipeline.stages.finalizers import FinalNormalizeStage, RescaleStage
from pitch_intel.pipeline.stages.league_seed import LeagueSeedStage
from pitch_intel.pipeline.stages.location_sequencing import LocationSequencingStage
from pitch_intel.pipeline.stages.sequencing import SequencingStage
from pitch_intel.pipeline.stages.situational import HandednessStage, RunnersOnStage
from pitch_intel.pipeline.stages.tunnel_continuation import TunnelContinuationStage
from pitch_intel.pipeline.stages.vulnerability import VulnerabilityTiltStage

if TYPE_CHECKING:
    from collections.abc import Callable


def likely_pitch_pipeline() -> LikelyPitchPipeline:
    return LikelyPitchPipeline(
        name="likely",
        stages=(
            LeagueSeedStage(),
            ArsenalBlendStage(),
            HandednessStage(),
            RunnersOnStage(),
            RescaleStage(),
            SequencingStage(),
            LocationSequencingStage(),
            RescaleStage(),
            VulnerabilityTiltStage(),
            TunnelContinuationStage(),
            GameMixBlendStage(),
            FinalNormalizeStage(),
        ),
    )


def baseline_pipeline() -> LikelyPitchPipeline:
    return LikelyPitchPipeline(
        name="baseline",
        stages=(LeagueSeedStage(), ArsenalBlendStage(), FinalNormalizeStage()),
    )


PIPELINES: dict[str, Callable[[], LikelyPitchPipeline]] = {
    "likely": likely_pitch_pipeline,
    "baseline": baseline_pipeline,
}


def build_pipeline(name: str) -> LikelyPitchPipeline:
    if name not in PIPELINES:
        raise ValueError(f"Unknown pipeline: {name!r}")
    return PIPELINES[name]()
