"""Count-leverage and pitch-sequencing deltas.

Each rule maps a context to an additive shift; rules are independent and
their shifts accumulate. Shares may go negative here and are only floored
by the final normalization.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pitch_intel.domain.distribution import Distribution
from pitch_intel.domain.outcome import is_called_strike, is_foul, is_taken_ball, is_whiff
from pitch_intel.domain.pitch_family import PitchFamily, classify

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from pitch_intel.domain.context import PredictionContext

NO_SHIFT = Distribution()

WILDNESS_THRESHOLD = 0.3
VELOCITY_DROP_THRESHOLD = -1.0

_PITCHER_AHEAD_COUNTS = frozenset({"0-2", "1-2"})
_HITTER_AHEAD_COUNTS = frozenset({"2-0", "3-1"})

_FULL_COUNT_ARSENAL_WEIGHTS = Distribution(fastball=0.10, breaking=0.05, change=0.05)

_AFTER_FAMILY: dict[PitchFamily, Distribution] = {
    PitchFamily.FASTBALL: Distribution(fastball=-0.06, breaking=0.06, change=0.02),
    PitchFamily.BREAKING: Distribution(fastball=0.04, breaking=-0.04, change=0.03),
    PitchFamily.CHANGE: Distribution(fastball=0.02, breaking=0.04, change=-0.06),
}

_AFTER_REPEAT: dict[PitchFamily, Distribution] = {
    PitchFamily.FASTBALL: Distribution(breaking=0.10),
    PitchFamily.BREAKING: Distribution(fastball=0.08),
    PitchFamily.CHANGE: Distribution(breaking=0.07),
}


def _one_hot(family: PitchFamily, amount: float) -> Distribution:
    return Distribution.from_mapping({family: amount})


def count_leverage_shift(context: PredictionContext) -> Distribution:
    if context.count in _PITCHER_AHEAD_COUNTS:
        return Distribution(fastball=-0.10, breaking=0.12, change=0.05)
    if context.count in _HITTER_AHEAD_COUNTS:
        return Distribution(fastball=0.10, breaking=-0.06, change=-0.04)
    return NO_SHIFT


def full_count_shift(context: PredictionContext) -> Distribution:
    arsenal = context.pitcher.arsenal if context.pitcher is not None else None
    if context.count != "3-2" or arsenal is None:
        return NO_SHIFT
    return arsenal.scale(
        fastball=_FULL_COUNT_ARSENAL_WEIGHTS.fastball,
        breaking=_FULL_COUNT_ARSENAL_WEIGHTS.breaking,
        change=_FULL_COUNT_ARSENAL_WEIGHTS.change,
    )


def last_family_shift(context: PredictionContext) -> Distribution:
    family = context.last_family
    if family is None:
        return NO_SHIFT
    return _AFTER_FAMILY[family]


def last_result_shift(context: PredictionContext) -> Distribution:
    family = context.last_family
    description = context.last_pitch_description
    if family is None or not description:
        return NO_SHIFT
    if is_whiff(description):
        return _one_hot(family, 0.10)
    if is_foul(description):
        if family is PitchFamily.FASTBALL:
            return Distribution(breaking=0.05, change=0.03)
        return Distribution(fastball=0.07)
    if is_taken_ball(description):
        return Distribution(fastball=0.06, breaking=-0.03, change=-0.03)
    if is_called_strike(description):
        return Distribution(breaking=0.04)
    return NO_SHIFT


def repeat_family_shift(context: PredictionContext) -> Distribution:
    if len(context.last_two_codes) < 2:
        return NO_SHIFT
    first, second = (classify(code) for code in context.last_two_codes[-2:])
    if first is not second:
        return NO_SHIFT
    return _AFTER_REPEAT[first]


def tunnel_setup_shift(context: PredictionContext) -> Distribution:
    if context.tunnel is None or context.last_family is not PitchFamily.FASTBALL:
        return NO_SHIFT
    return Distribution(breaking=0.05, change=0.03)


def wildness_shift(context: PredictionContext) -> Distribution:
    if context.pitcher is None or not context.pitcher.wildness > WILDNESS_THRESHOLD:
        return NO_SHIFT
    return Distribution(fastball=0.08, breaking=-0.05, change=-0.03)


def velocity_drop_shift(context: PredictionContext) -> Distribution:
    if context.pitcher is None or not context.pitcher.velocity_trend < VELOCITY_DROP_THRESHOLD:
        return NO_SHIFT
    return Distribution(fastball=-0.04, breaking=0.01, change=0.03)


SEQUENCING_RULES: tuple[Callable[[PredictionContext], Distribution], ...] = (
    count_leverage_shift,
    full_count_shift,
    last_family_shift,
    last_result_shift,
    repeat_family_shift,
    tunnel_setup_shift,
    wildness_shift,
    velocity_drop_shift,
)


class SequencingStage:
    def __init__(self, rules: Sequence[Callable[[PredictionContext], Distribution]] = SEQUENCING_RULES) -> None:
        self._rules = tuple(rules)

    def apply(self, distribution: Distribution, context: PredictionContext) -> Distribution:
        for rule in self._rules:
            distribution = distribution.plus(rule(context))
        return distribution
