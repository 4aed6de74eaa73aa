"""Tiered lookup of a pitch's location or movement data.

Resolution order, first match wins:

1. direct: the pitch carries plate coordinates (primary source before legacy)
2. movement: no coordinates, but a horizontal/vertical break pair is present
3. cache: an earlier resolution of the same (at-bat, pitch-number) key
4. cross_reference: any other event in the game with the same key that
   passes tier 1 or 2

Tiers 1, 2 and 4 write to the per-game cache. Exhausting every tier yields
``None``; missing location data is a normal outcome, never an error.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pitch_intel.domain.coordinates import CoordinateRecord, PitchKey, ResolutionTier
from pitch_intel.domain.zone import DEFAULT_ZONE_BOTTOM, DEFAULT_ZONE_TOP

if TYPE_CHECKING:
    from pitch_intel.domain.pitch import Game, PitchEvent, PlateLocation

logger = logging.getLogger(__name__)


def _from_location(location: PlateLocation, event: PitchEvent) -> CoordinateRecord:
    movement = event.movement
    return CoordinateRecord(
        tier=ResolutionTier.DIRECT,
        px=location.px,
        pz=location.pz,
        zone_top=location.zone_top if location.zone_top is not None else DEFAULT_ZONE_TOP,
        zone_bottom=location.zone_bottom if location.zone_bottom is not None else DEFAULT_ZONE_BOTTOM,
        horizontal_break=movement.horizontal_break if movement else None,
        vertical_break=movement.vertical_break if movement else None,
        break_angle=movement.break_angle if movement else None,
        break_length=movement.break_length if movement else None,
    )


def record_from_event(event: PitchEvent) -> CoordinateRecord | None:
    """Apply the direct and movement tiers to a single event."""
    location = event.location or event.legacy_location
    if location is not None:
        return _from_location(location, event)
    movement = event.movement
    if movement is not None and movement.has_break_pair:
        return CoordinateRecord(
            tier=ResolutionTier.MOVEMENT,
            horizontal_break=movement.horizontal_break,
            vertical_break=movement.vertical_break,
            break_angle=movement.break_angle,
            break_length=movement.break_length,
            movement_only=True,
        )
    return None


class CoordinateCache:
    """Same-game cache of resolved records; last write wins."""

    def __init__(self) -> None:
        self._records: dict[PitchKey, CoordinateRecord] = {}

    def get(self, key: PitchKey) -> CoordinateRecord | None:
        return self._records.get(key)

    def put(self, key: PitchKey, record: CoordinateRecord) -> None:
        self._records[key] = record

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


class CoordinateResolver:
    def __init__(self, cache: CoordinateCache | None = None) -> None:
        self._cache = cache if cache is not None else CoordinateCache()

    @property
    def cache(self) -> CoordinateCache:
        return self._cache

    def reset(self) -> None:
        self._cache.clear()

    def resolve(self, game: Game, at_bat_position: int, pitch_position: int) -> CoordinateRecord | None:
        """Resolve a pitch addressed by its at-bat slot and pitch slot in ``game``.

        Out-of-range positions resolve to ``None``.
        """
        try:
            if at_bat_position < 0 or pitch_position < 0:
                raise IndexError(at_bat_position, pitch_position)
            event = game.at_bats[at_bat_position].pitches[pitch_position]
        except IndexError:
            logger.debug("No pitch at at-bat slot %d, pitch slot %d", at_bat_position, pitch_position)
            return None
        return self.resolve_event(game, event)

    def resolve_event(self, game: Game, event: PitchEvent) -> CoordinateRecord | None:
        key = PitchKey(event.at_bat_index, event.pitch_number)

        record = record_from_event(event)
        if record is not None:
            self._cache.put(key, record)
            logger.debug("Resolved %s via %s", key, record.tier)
            return record

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return cached.with_tier(ResolutionTier.CACHE)

        for candidate in game.all_pitch_events():
            if candidate is event:
                continue
            if candidate.at_bat_index != key.at_bat_index or candidate.pitch_number != key.pitch_number:
                continue
            found = record_from_event(candidate)
            if found is not None:
                found = found.with_tier(ResolutionTier.CROSS_REFERENCE)
                self._cache.put(key, found)
                logger.debug("Resolved %s via cross-reference", key)
                return found

        logger.debug("No coordinate data for %s", key)
        return None
