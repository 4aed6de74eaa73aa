from __future__ import annotations

from typing import TYPE_CHECKING

from pitch_intel.domain.decision import SpecificPitch
from pitch_intel.domain.pitch_family import REPRESENTATIVE_CODES, pitch_name

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pitch_intel.domain.distribution import Distribution
    from pitch_intel.domain.pitch_family import PitchFamily
    from pitch_intel.domain.profiles import PitcherSnapshot


def refine_pitch(
    family: PitchFamily,
    distribution: Distribution,
    subtypes: Mapping[PitchFamily, Mapping[str, float]] | None,
) -> SpecificPitch:
    """Pick the pitcher's most-used code within ``family``.

    Probability is the family share times the subtype's share within the
    family; without subtype data the family's representative code is used
    at full family share.
    """
    family_share = distribution.get(family)
    codes = subtypes.get(family) if subtypes else None
    if not codes:
        code = REPRESENTATIVE_CODES[family]
        return SpecificPitch(label=pitch_name(code), code=code, family=family, probability=family_share)

    code = max(codes, key=lambda c: codes[c])
    return SpecificPitch(label=pitch_name(code), code=code, family=family, probability=family_share * codes[code])


class SpecificPitchRefiner:
    def refine(self, distribution: Distribution, pitcher: PitcherSnapshot | None) -> SpecificPitch:
        """Refine the distribution's top family for this pitcher."""
        subtypes = pitcher.subtypes if pitcher is not None else None
        return refine_pitch(distribution.top(), distribution, subtypes)
