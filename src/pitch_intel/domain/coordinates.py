from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from pitch_intel.domain.zone import zone_label


class ResolutionTier(StrEnum):
    DIRECT = "direct"
    MOVEMENT = "movement"
    CACHE = "cache"
    CROSS_REFERENCE = "cross_reference"


@dataclass(frozen=True)
class PitchKey:
    at_bat_index: int
    pitch_number: int


@dataclass(frozen=True)
class CoordinateRecord:
    """Best-available spatial data for one pitch.

    Location mode carries ``px``/``pz`` and zone bounds; movement-only mode
    carries the break components and leaves ``px``/``pz`` unset.
    """

    tier: ResolutionTier
    px: float | None = None
    pz: float | None = None
    zone_top: float | None = None
    zone_bottom: float | None = None
    horizontal_break: float | None = None
    vertical_break: float | None = None
    break_angle: float | None = None
    break_length: float | None = None
    movement_only: bool = False

    @property
    def has_location(self) -> bool:
        return self.px is not None and self.pz is not None

    @property
    def zone(self) -> str | None:
        if self.px is None or self.pz is None or self.zone_top is None or self.zone_bottom is None:
            return None
        return zone_label(self.px, self.pz, self.zone_top, self.zone_bottom)

    def with_tier(self, tier: ResolutionTier) -> CoordinateRecord:
        return replace(self, tier=tier)
