"""Per-game driver for the decision-point control flow.

For each thrown pitch, in chronological order:

1. snapshot the player profiles and resolve coordinates into a context
2. run the likely-pitch pipeline and the optimal recommender on that context
3. refine both distributions to a specific pitch
4. only then fold the observed pitch into the profiles, detect a tunnel
   against the previous context, and advance sequence memory
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pitch_intel.domain.decision import Decision, OptimalPitch
from pitch_intel.domain.distribution import Distribution
from pitch_intel.domain.outcome import PitchOutcome
from pitch_intel.domain.pitch_family import PitchFamily, classify
from pitch_intel.pipeline.presets import likely_pitch_pipeline
from pitch_intel.services.context_builder import SequenceMemory, build_context, build_upcoming_context
from pitch_intel.services.context_store import ContextStore
from pitch_intel.services.coordinate_resolver import CoordinateResolver
from pitch_intel.services.optimal_recommender import OptimalPitchRecommender
from pitch_intel.services.pitch_refiner import SpecificPitchRefiner
from pitch_intel.services.tunnel_detector import detect_tunnel

if TYPE_CHECKING:
    from pitch_intel.domain.arsenal import ArsenalBaseline
    from pitch_intel.domain.context import PredictionContext
    from pitch_intel.domain.pitch import AtBat, Game, PitchEvent
    from pitch_intel.pipeline.protocols import LikelyPitchPipelineProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _OpenAtBat:
    """Latest absorbed pitch of an at-bat whose result was not yet known."""

    batter_id: int
    pitch_number: int
    family: PitchFamily
    zone: str | None


class GameSession:
    def __init__(
        self,
        baseline: ArsenalBaseline | None = None,
        *,
        store: ContextStore | None = None,
        resolver: CoordinateResolver | None = None,
        pipeline: LikelyPitchPipelineProtocol | None = None,
        recommender: OptimalPitchRecommender | None = None,
        refiner: SpecificPitchRefiner | None = None,
    ) -> None:
        self._store = store if store is not None else ContextStore(baseline)
        self._resolver = resolver if resolver is not None else CoordinateResolver()
        self._pipeline = pipeline if pipeline is not None else likely_pitch_pipeline()
        self._recommender = recommender or OptimalPitchRecommender()
        self._refiner = refiner or SpecificPitchRefiner()
        self._memory = SequenceMemory()
        self._game: Game | None = None
        self._open_at_bats: dict[int, _OpenAtBat] = {}
        self._cursor = 0

    @property
    def store(self) -> ContextStore:
        return self._store

    @property
    def resolver(self) -> CoordinateResolver:
        return self._resolver

    @property
    def game(self) -> Game | None:
        return self._game

    @property
    def cursor(self) -> int:
        """Index of the next pitch to process."""
        return self._cursor

    @property
    def finished(self) -> bool:
        return self._game is None or self._cursor >= self._game.pitch_count

    # -- lifecycle -------------------------------------------------------------

    def reset(self) -> None:
        self._store.reset()
        self._resolver.reset()
        self._memory = SequenceMemory()
        self._open_at_bats.clear()
        self._cursor = 0

    def load(self, game: Game) -> None:
        """Adopt a (possibly newer) snapshot of a game; a different game resets everything."""
        if self._game is None or self._game.game_pk != game.game_pk:
            logger.info(
                "Loading game %d (%s @ %s, %d pitches)", game.game_pk, game.away_team, game.home_team, game.pitch_count
            )
            self.reset()
        self._game = game

    def restart(self) -> None:
        """Restart replay from pitch zero with empty profiles and cache."""
        logger.info("Restarting replay from pitch 0")
        self.reset()

    # -- decisions -------------------------------------------------------------

    def decide(self, pitch_index: int, context: PredictionContext | None) -> Decision:
        """Compute outputs for a context without touching any session state."""
        if context is None:
            likely = Distribution.uniform()
            optimal = OptimalPitch(distribution=likely, best_family=likely.top())
            return Decision(
                pitch_index=pitch_index,
                context=None,
                likely=likely,
                optimal=optimal,
                likely_pitch=self._refiner.refine(likely, None),
                optimal_pitch=self._refiner.refine(optimal.distribution, None),
            )
        likely = self._pipeline.predict(context)
        optimal = self._recommender.recommend(context)
        return Decision(
            pitch_index=pitch_index,
            context=context,
            likely=likely,
            optimal=optimal,
            likely_pitch=self._refiner.refine(likely, context.pitcher),
            optimal_pitch=self._refiner.refine(optimal.distribution, context.pitcher),
            actual_code=context.pitch_code,
        )

    def step(self) -> Decision | None:
        """Replay tick: produce the decision for the next pitch, then learn from it."""
        if self._game is None or self.finished:
            return None
        index = self._cursor
        context = build_context(self._game, index, self._store, self._resolver, self._memory)
        decision = self.decide(index, context)
        if context is not None:
            self._observe(index, context)
        self._cursor += 1
        return decision

    def run(self, limit: int | None = None) -> list[Decision]:
        decisions: list[Decision] = []
        while not self.finished and (limit is None or len(decisions) < limit):
            decision = self.step()
            if decision is None:
                break
            decisions.append(decision)
        return decisions

    def sync(self, game: Game) -> Decision:
        """Live update: absorb every newly thrown pitch, then decide the upcoming one."""
        self.load(game)
        self._settle_open_at_bats(game)
        caught_up = len(self.run())
        if caught_up:
            logger.debug("Absorbed %d new pitches", caught_up)
        context = build_upcoming_context(game, self._store, self._memory)
        return self.decide(game.pitch_count, context)

    # -- learning --------------------------------------------------------------

    def _observe(self, index: int, context: PredictionContext) -> None:
        assert self._game is not None
        ref = self._game.pitch_ref(index)
        at_bat = self._game.at_bat_for(ref)
        event = self._game.pitch_for(ref)
        family = classify(event.code)
        is_last_pitch = all(not later.is_pitch for later in at_bat.pitches[ref.pitch_position + 1 :])
        is_final_pitch = at_bat.is_complete and is_last_pitch
        outcome = PitchOutcome(
            description=event.description,
            in_play=event.in_play,
            exit_speed=event.exit_speed,
            at_bat_event=at_bat.event_type,
        )
        zone = context.location.zone if context.location is not None else None

        self._store.update_pitcher_usage(at_bat.pitcher_id, family)
        self._store.update_batter_aggression(at_bat.batter_id, outcome.swing)
        self._store.update_batter_vs_family(at_bat.batter_id, family, outcome, is_final_pitch, zone)
        self._store.update_pitcher_command(at_bat.pitcher_id, event.release_speed, context.location)

        self._open_at_bats.pop(at_bat.at_bat_index, None)
        if is_last_pitch and not at_bat.is_complete:
            self._open_at_bats[at_bat.at_bat_index] = _OpenAtBat(at_bat.batter_id, event.pitch_number, family, zone)

        tunnel = detect_tunnel(self._memory.previous_context, context)
        self._memory.observe(context, event.description, tunnel)

    def _settle_open_at_bats(self, game: Game) -> None:
        """Credit results for at-bats that closed after their final pitch was absorbed."""
        at_bats = {at_bat.at_bat_index: at_bat for at_bat in game.at_bats}
        for index, pending in list(self._open_at_bats.items()):
            at_bat = at_bats.get(index)
            if at_bat is None:
                continue
            last = _last_thrown(at_bat)
            if last is None or last.pitch_number != pending.pitch_number:
                # newer pitches are still ahead of the cursor
                del self._open_at_bats[index]
                continue
            if not at_bat.is_complete:
                continue
            outcome = PitchOutcome(
                description=last.description,
                in_play=last.in_play,
                exit_speed=last.exit_speed,
                at_bat_event=at_bat.event_type,
            )
            self._store.record_at_bat_result(pending.batter_id, pending.family, outcome, pending.zone)
            logger.debug("At-bat %d closed as %s after its final pitch was absorbed", index, at_bat.event_type)
            del self._open_at_bats[index]


def _last_thrown(at_bat: AtBat) -> PitchEvent | None:
    thrown = [pitch for pitch in at_bat.pitches if pitch.is_pitch]
    return thrown[-1] if thrown else None
