"""Assembly of PredictionContext snapshots from a parsed game."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pitch_intel.domain.context import PredictionContext

if TYPE_CHECKING:
    from pitch_intel.domain.context import TunnelResult
    from pitch_intel.domain.coordinates import CoordinateRecord
    from pitch_intel.domain.pitch import AtBat, Game
    from pitch_intel.services.context_store import ContextStore
    from pitch_intel.services.coordinate_resolver import CoordinateResolver

logger = logging.getLogger(__name__)

MAX_OUTS_BEFORE_PITCH = 2


@dataclass
class SequenceMemory:
    """Pitch-sequence memory for the current at-bat and pitcher.

    Holds the last two pitches' codes, the last pitch's description and zone,
    one context of tunnel lookback, and the tunnel detected on the last pitch.
    """

    at_bat_index: int | None = None
    pitcher_id: int | None = None
    recent_codes: deque[str] = field(default_factory=lambda: deque(maxlen=2))
    last_description: str | None = None
    last_zone: str | None = None
    previous_context: PredictionContext | None = None
    pending_tunnel: TunnelResult | None = None

    def clear(self) -> None:
        self.recent_codes.clear()
        self.last_description = None
        self.last_zone = None
        self.previous_context = None
        self.pending_tunnel = None

    def enter(self, at_bat_index: int, pitcher_id: int) -> None:
        """Scope memory to an at-bat; a new at-bat or a new pitcher clears it."""
        if self.pitcher_id is not None and pitcher_id != self.pitcher_id:
            logger.info("Pitcher change: %d -> %d, clearing sequence memory", self.pitcher_id, pitcher_id)
            self.clear()
        elif at_bat_index != self.at_bat_index:
            self.clear()
        self.at_bat_index = at_bat_index
        self.pitcher_id = pitcher_id

    def observe(self, context: PredictionContext, description: str, tunnel: TunnelResult | None) -> None:
        if context.pitch_code:
            self.recent_codes.append(context.pitch_code)
        self.last_description = description
        self.last_zone = context.location.zone if context.location is not None else None
        self.previous_context = context
        self.pending_tunnel = tunnel


def outs_before(game: Game, at_bat_position: int) -> int:
    """Outs recorded by earlier at-bats in the same half-inning, capped at two."""
    current = game.at_bats[at_bat_position]
    outs_by_index: dict[int, int] = {}
    for at_bat in game.at_bats[:at_bat_position]:
        same_half = at_bat.inning == current.inning and at_bat.half == current.half
        if same_half and at_bat.at_bat_index != current.at_bat_index:
            outs_by_index[at_bat.at_bat_index] = at_bat.outs_recorded
    return min(sum(outs_by_index.values()), MAX_OUTS_BEFORE_PITCH)


def _assemble(
    at_bat: AtBat,
    pitch_number: int,
    balls: int,
    strikes: int,
    outs: int,
    location: CoordinateRecord | None,
    pitch_code: str | None,
    store: ContextStore,
    memory: SequenceMemory,
) -> PredictionContext:
    codes = tuple(memory.recent_codes)
    return PredictionContext(
        at_bat_index=at_bat.at_bat_index,
        pitch_number=pitch_number,
        pitcher_id=at_bat.pitcher_id,
        batter_id=at_bat.batter_id,
        balls=balls,
        strikes=strikes,
        outs=outs,
        on_first=at_bat.on_first,
        on_second=at_bat.on_second,
        on_third=at_bat.on_third,
        inning=at_bat.inning,
        half=at_bat.half,
        pitcher_hand=at_bat.pitcher_hand,
        batter_side=at_bat.batter_side,
        last_pitch_code=codes[-1] if codes else None,
        last_pitch_description=memory.last_description,
        last_zone=memory.last_zone,
        last_two_codes=codes,
        location=location,
        pitch_code=pitch_code,
        tunnel=memory.pending_tunnel,
        pitcher=store.pitcher_snapshot(at_bat.pitcher_id),
        batter=store.batter_snapshot(at_bat.batter_id),
    )


def build_context(
    game: Game,
    pitch_index: int,
    store: ContextStore,
    resolver: CoordinateResolver,
    memory: SequenceMemory,
) -> PredictionContext | None:
    """Context for the ``pitch_index``-th thrown pitch, or ``None`` if there is no such pitch."""
    try:
        ref = game.pitch_ref(pitch_index)
    except IndexError:
        logger.debug("No pitch at index %d (game has %d)", pitch_index, game.pitch_count)
        return None
    at_bat = game.at_bat_for(ref)
    event = game.pitch_for(ref)
    memory.enter(at_bat.at_bat_index, at_bat.pitcher_id)
    return _assemble(
        at_bat,
        pitch_number=event.pitch_number,
        balls=event.balls,
        strikes=event.strikes,
        outs=outs_before(game, ref.at_bat_position),
        location=resolver.resolve(game, ref.at_bat_position, ref.pitch_position),
        pitch_code=event.code,
        store=store,
        memory=memory,
    )


def build_upcoming_context(game: Game, store: ContextStore, memory: SequenceMemory) -> PredictionContext | None:
    """Context for the next, not-yet-thrown pitch of the in-progress at-bat."""
    if not game.at_bats:
        return None
    at_bat_position = len(game.at_bats) - 1
    at_bat = game.at_bats[at_bat_position]
    if at_bat.is_complete:
        return None
    thrown = [p for p in at_bat.pitches if p.is_pitch]
    memory.enter(at_bat.at_bat_index, at_bat.pitcher_id)
    return _assemble(
        at_bat,
        pitch_number=(thrown[-1].pitch_number + 1) if thrown else 1,
        balls=at_bat.balls,
        strikes=at_bat.strikes,
        outs=outs_before(game, at_bat_position),
        location=None,
        pitch_code=None,
        store=store,
        memory=memory,
    )
