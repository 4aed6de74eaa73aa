"""Rolling per-player aggregates for the current game.

Every read returns ``None`` (or a documented zero) until enough observations
exist. The store is owned by one game session; ``reset()`` clears every
in-game aggregate while keeping the externally supplied arsenal baseline.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from pitch_intel.domain.arsenal import ArsenalBaseline
from pitch_intel.domain.distribution import Distribution
from pitch_intel.domain.pitch_family import FAMILIES, PitchFamily
from pitch_intel.domain.profiles import (
    BatterProfile,
    BatterSnapshot,
    OutcomeCounters,
    PitcherProfile,
    PitcherSnapshot,
    VulnerabilityReport,
)

if TYPE_CHECKING:
    from pitch_intel.domain.coordinates import CoordinateRecord
    from pitch_intel.domain.outcome import PitchOutcome

logger = logging.getLogger(__name__)

MIN_FAMILY_OBSERVATIONS = 3
MIN_WILDNESS_PITCHES = 10
MIN_VELOCITY_SAMPLES = 4
ZONE_MISS_MARGIN = 0.1
HORIZONTAL_MISS_LIMIT = 1.7


def _count_result(buckets: list[OutcomeCounters], outcome: PitchOutcome) -> None:
    for counters in buckets:
        if outcome.hit:
            counters.hits += 1
        if outcome.hard_hit:
            counters.hard_hit += 1


class ContextStore:
    def __init__(self, baseline: ArsenalBaseline | None = None) -> None:
        self._baseline = baseline or ArsenalBaseline()
        self._pitchers: dict[int, PitcherProfile] = {}
        self._batters: dict[int, BatterProfile] = {}

    @property
    def baseline(self) -> ArsenalBaseline:
        return self._baseline

    def reset(self) -> None:
        logger.debug("Resetting %d pitcher and %d batter profiles", len(self._pitchers), len(self._batters))
        self._pitchers.clear()
        self._batters.clear()

    # -- profile access ------------------------------------------------------

    def pitcher_profile(self, pitcher_id: int) -> PitcherProfile:
        profile = self._pitchers.get(pitcher_id)
        if profile is None:
            profile = PitcherProfile(
                pitcher_id=pitcher_id,
                arsenal=self._baseline.family_shares(pitcher_id),
                subtypes={family: dict(codes) for family, codes in self._baseline.subtype_shares(pitcher_id).items()},
            )
            self._pitchers[pitcher_id] = profile
        return profile

    def batter_profile(self, batter_id: int) -> BatterProfile:
        profile = self._batters.get(batter_id)
        if profile is None:
            profile = BatterProfile(batter_id=batter_id)
            self._batters[batter_id] = profile
        return profile

    # -- pitcher usage -------------------------------------------------------

    def update_pitcher_usage(self, pitcher_id: int, family: PitchFamily) -> None:
        profile = self.pitcher_profile(pitcher_id)
        profile.family_counts[family] = profile.family_counts.get(family, 0) + 1
        profile.total_pitches += 1

    def pitcher_game_mix(self, pitcher_id: int) -> Distribution | None:
        profile = self._pitchers.get(pitcher_id)
        if profile is None or profile.total_pitches == 0:
            return None
        total = profile.total_pitches
        return Distribution.from_mapping({family: count / total for family, count in profile.family_counts.items()})

    # -- batter aggression ---------------------------------------------------

    def update_batter_aggression(self, batter_id: int, was_swing: bool) -> None:
        profile = self.batter_profile(batter_id)
        profile.pitches_seen += 1
        if was_swing:
            profile.swings += 1

    def batter_aggression(self, batter_id: int) -> float | None:
        profile = self._batters.get(batter_id)
        if profile is None or profile.pitches_seen == 0:
            return None
        return profile.swings / profile.pitches_seen

    # -- batter vs family / zone ---------------------------------------------

    def _outcome_buckets(self, batter_id: int, family: PitchFamily, zone: str | None) -> list[OutcomeCounters]:
        profile = self.batter_profile(batter_id)
        buckets = [profile.by_family.setdefault(family, OutcomeCounters())]
        if zone is not None:
            buckets.append(profile.by_zone.setdefault((zone, family), OutcomeCounters()))
        return buckets

    def update_batter_vs_family(
        self,
        batter_id: int,
        family: PitchFamily,
        outcome: PitchOutcome,
        is_final_pitch: bool,
        zone: str | None,
    ) -> None:
        buckets = self._outcome_buckets(batter_id, family, zone)

        swing = outcome.swing
        whiff = outcome.whiff
        for counters in buckets:
            counters.seen += 1
            if swing:
                counters.swings += 1
            if whiff:
                counters.whiffs += 1
            if outcome.in_play:
                counters.in_play += 1
        if is_final_pitch:
            _count_result(buckets, outcome)

    def record_at_bat_result(
        self,
        batter_id: int,
        family: PitchFamily,
        outcome: PitchOutcome,
        zone: str | None,
    ) -> None:
        """Credit hit / hard-hit for a final pitch that was absorbed before its at-bat closed."""
        buckets = self._outcome_buckets(batter_id, family, zone)
        _count_result(buckets, outcome)

    def batter_vulnerability(self, batter_id: int) -> VulnerabilityReport | None:
        profile = self._batters.get(batter_id)
        if profile is None:
            return None
        scores: dict[PitchFamily, float] = {}
        for family in FAMILIES:
            counters = profile.by_family.get(family)
            if counters is not None and counters.seen >= MIN_FAMILY_OBSERVATIONS:
                scores[family] = counters.vulnerability()
        if not scores:
            return None
        most_vulnerable = max(scores, key=lambda f: scores[f])
        return VulnerabilityReport(scores=MappingProxyType(scores), most_vulnerable=most_vulnerable)

    def zone_effectiveness(self, batter_id: int, zone: str, family: PitchFamily) -> float | None:
        profile = self._batters.get(batter_id)
        if profile is None:
            return None
        counters = profile.by_zone.get((zone, family))
        if counters is None or counters.seen < MIN_FAMILY_OBSERVATIONS:
            return None
        return counters.vulnerability()

    # -- pitcher command / fatigue -------------------------------------------

    def update_pitcher_command(
        self,
        pitcher_id: int,
        release_speed: float | None,
        record: CoordinateRecord | None,
    ) -> None:
        command = self.pitcher_profile(pitcher_id).command
        command.pitches += 1
        if release_speed is not None:
            command.recent_speeds.append(release_speed)
        if record is None or record.px is None or record.pz is None:
            return
        if record.zone_top is not None and record.pz > record.zone_top + ZONE_MISS_MARGIN:
            command.misses_high += 1
        elif record.zone_bottom is not None and record.pz < record.zone_bottom - ZONE_MISS_MARGIN:
            command.misses_low += 1
        if record.px > HORIZONTAL_MISS_LIMIT:
            command.misses_arm_side += 1
        elif record.px < -HORIZONTAL_MISS_LIMIT:
            command.misses_glove_side += 1

    def pitcher_wildness(self, pitcher_id: int) -> float:
        profile = self._pitchers.get(pitcher_id)
        if profile is None or profile.command.pitches < MIN_WILDNESS_PITCHES:
            return 0.0
        return profile.command.total_misses / profile.command.pitches

    def pitcher_velocity_trend(self, pitcher_id: int) -> float:
        """Recent-minus-oldest velocity across the rolling window; negative means declining."""
        profile = self._pitchers.get(pitcher_id)
        if profile is None:
            return 0.0
        speeds = list(profile.command.recent_speeds)
        if len(speeds) < MIN_VELOCITY_SAMPLES:
            return 0.0
        return (speeds[-1] + speeds[-2]) / 2.0 - (speeds[0] + speeds[1]) / 2.0

    # -- snapshots -----------------------------------------------------------

    def pitcher_snapshot(self, pitcher_id: int) -> PitcherSnapshot:
        profile = self._pitchers.get(pitcher_id)
        if profile is not None:
            arsenal, subtypes = profile.arsenal, profile.subtypes
        else:
            arsenal, subtypes = self._baseline.family_shares(pitcher_id), self._baseline.subtype_shares(pitcher_id)
        return PitcherSnapshot(
            pitcher_id=pitcher_id,
            arsenal=arsenal,
            subtypes=MappingProxyType({family: MappingProxyType(dict(codes)) for family, codes in subtypes.items()}),
            game_mix=self.pitcher_game_mix(pitcher_id),
            wildness=self.pitcher_wildness(pitcher_id),
            velocity_trend=self.pitcher_velocity_trend(pitcher_id),
        )

    def batter_snapshot(self, batter_id: int) -> BatterSnapshot:
        zone_scores: dict[tuple[str, PitchFamily], float] = {}
        profile = self._batters.get(batter_id)
        if profile is not None:
            for (zone, family), counters in profile.by_zone.items():
                if counters.seen >= MIN_FAMILY_OBSERVATIONS:
                    zone_scores[(zone, family)] = counters.vulnerability()
        return BatterSnapshot(
            batter_id=batter_id,
            aggression=self.batter_aggression(batter_id),
            vulnerability=self.batter_vulnerability(batter_id),
            zone_scores=MappingProxyType(zone_scores),
        )
