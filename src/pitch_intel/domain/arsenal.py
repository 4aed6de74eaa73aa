from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pitch_intel.domain.distribution import Distribution
from pitch_intel.domain.pitch_family import PitchFamily

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class ArsenalBaseline:
    """Pre-parsed season arsenal data, keyed by pitcher id.

    ``families`` holds each pitcher's 3-family usage shares; ``subtypes``
    holds per-family pitch-code usage shares (each family's codes sum to 1).
    """

    families: Mapping[int, Distribution] = field(default_factory=dict)
    subtypes: Mapping[int, Mapping[PitchFamily, Mapping[str, float]]] = field(default_factory=dict)

    @classmethod
    def from_mappings(
        cls,
        families: Mapping[Any, Mapping[str, float]],
        subtypes: Mapping[Any, Mapping[str, Mapping[str, float]]] | None = None,
    ) -> ArsenalBaseline:
        """Build from plain mappings such as decoded JSON (string ids and family names allowed)."""
        family_shares = {int(pid): Distribution.from_mapping(shares).rescaled() for pid, shares in families.items()}
        subtype_shares: dict[int, dict[PitchFamily, dict[str, float]]] = {}
        for pid, by_family in (subtypes or {}).items():
            subtype_shares[int(pid)] = {
                PitchFamily(family): {code.upper(): float(share) for code, share in codes.items()}
                for family, codes in by_family.items()
            }
        return cls(families=family_shares, subtypes=subtype_shares)

    def family_shares(self, pitcher_id: int) -> Distribution | None:
        return self.families.get(pitcher_id)

    def subtype_shares(self, pitcher_id: int) -> Mapping[PitchFamily, Mapping[str, float]]:
        return self.subtypes.get(pitcher_id, {})
