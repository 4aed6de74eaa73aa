from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pitch_intel.domain.pitch_family import FAMILIES, PitchFamily

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class Distribution:
    """Shares over the three pitch families.

    Values produced by intermediate pipeline stages may be unnormalized or
    slightly negative; ``normalized()`` is the only way to get an output-grade
    distribution (non-negative, summing to 1).
    """

    fastball: float = 0.0
    breaking: float = 0.0
    change: float = 0.0

    @classmethod
    def uniform(cls) -> Distribution:
        third = 1.0 / 3.0
        return cls(fastball=third, breaking=third, change=third)

    @classmethod
    def from_mapping(cls, shares: Mapping[str, float]) -> Distribution:
        """Build from a family-keyed mapping; missing families get 0."""
        return cls(
            fastball=float(shares.get(PitchFamily.FASTBALL, 0.0)),
            breaking=float(shares.get(PitchFamily.BREAKING, 0.0)),
            change=float(shares.get(PitchFamily.CHANGE, 0.0)),
        )

    def get(self, family: PitchFamily) -> float:
        return getattr(self, family.value)

    def as_dict(self) -> dict[PitchFamily, float]:
        return {family: self.get(family) for family in FAMILIES}

    @property
    def total(self) -> float:
        return self.fastball + self.breaking + self.change

    def shift(self, fastball: float = 0.0, breaking: float = 0.0, change: float = 0.0) -> Distribution:
        return Distribution(
            fastball=self.fastball + fastball,
            breaking=self.breaking + breaking,
            change=self.change + change,
        )

    def plus(self, other: Distribution) -> Distribution:
        return self.shift(other.fastball, other.breaking, other.change)

    def scale(self, fastball: float = 1.0, breaking: float = 1.0, change: float = 1.0) -> Distribution:
        return Distribution(
            fastball=self.fastball * fastball,
            breaking=self.breaking * breaking,
            change=self.change * change,
        )

    def blend(self, other: Distribution, weight: float) -> Distribution:
        """Return ``(1 - weight) * self + weight * other``."""
        keep = 1.0 - weight
        return Distribution(
            fastball=keep * self.fastball + weight * other.fastball,
            breaking=keep * self.breaking + weight * other.breaking,
            change=keep * self.change + weight * other.change,
        )

    def rescaled(self) -> Distribution:
        """Divide by the sum without flooring negatives (intermediate stages)."""
        total = self.total or 1.0
        return Distribution(self.fastball / total, self.breaking / total, self.change / total)

    def normalized(self) -> Distribution:
        """Floor each share at zero, then divide by the sum (1 when all shares are zero)."""
        floored = Distribution(max(self.fastball, 0.0), max(self.breaking, 0.0), max(self.change, 0.0))
        return floored.rescaled()

    def top(self) -> PitchFamily:
        """The family with the largest share; earlier families win ties."""
        best = FAMILIES[0]
        for family in FAMILIES[1:]:
            if self.get(family) > self.get(best):
                best = family
        return best
