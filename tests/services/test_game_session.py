import pytest

from pitch_intel.domain.arsenal import ArsenalBaseline
from pitch_intel.domain.pitch import Game, Movement, PitchEvent
from pitch_intel.domain.pitch_family import PitchFamily
from pitch_intel.pipeline.presets import baseline_pipeline
from pitch_intel.services.game_session import GameSession
from tests.helpers import make_at_bat, make_game, make_pitch

_FASTBALL_MOVE = Movement(horizontal_break=-6.0, vertical_break=16.0, break_angle=20.0, break_length=4.0)
_SLIDER_MOVE = Movement(horizontal_break=5.0, vertical_break=1.0, break_angle=9.0, break_length=8.0)


def _game(*, game_pk: int = 745000, last_complete: bool = True) -> Game:
    first = make_at_bat(
        [
            make_pitch(at_bat_index=0, pitch_number=1, code="FF", description="Ball", movement=_FASTBALL_MOVE),
            make_pitch(
                at_bat_index=0,
                pitch_number=2,
                code="SL",
                description="Swinging Strike",
                balls=1,
                px=0.1,
                pz=2.4,
                movement=_SLIDER_MOVE,
            ),
            make_pitch(
                at_bat_index=0,
                pitch_number=3,
                code="FF",
                description="In play, run(s)",
                balls=1,
                strikes=1,
                in_play=True,
                exit_speed=104.0,
            ),
        ],
        at_bat_index=0,
        event_type="double",
    )
    second = make_at_bat(
        [make_pitch(at_bat_index=1, pitch_number=1, code="CH", description="Called Strike")],
        at_bat_index=1,
        batter_id=201,
        is_complete=last_complete,
        event_type="strikeout" if last_complete else None,
        strikes=1,
        on_second=True,
    )
    return make_game([first, second], game_pk=game_pk)


def _in_play_game(*, complete: bool, first: PitchEvent | None = None) -> Game:
    number = 1 if first is None else 2
    in_play = make_pitch(
        pitch_number=number,
        code="FF",
        description="In play, no out",
        strikes=0 if first is None else 1,
        in_play=True,
        exit_speed=101.0,
    )
    pitches = [in_play] if first is None else [first, in_play]
    return make_game([make_at_bat(pitches, is_complete=complete, event_type="single" if complete else None)])


class TestReplay:
    def test_steps_through_every_pitch(self) -> None:
        session = GameSession()
        session.load(_game())
        decisions = session.run()
        assert [d.pitch_index for d in decisions] == [0, 1, 2, 3]
        assert [d.actual_code for d in decisions] == ["FF", "SL", "FF", "CH"]
        assert session.finished
        assert session.step() is None

    def test_first_decision_favors_fastball(self) -> None:
        session = GameSession()
        session.load(_game())
        decision = session.step()
        assert decision is not None
        assert decision.likely.total == pytest.approx(1.0)
        assert decision.likely.top() is PitchFamily.FASTBALL
        assert decision.likely_pitch.code == "FF"
        assert decision.optimal.distribution.total == pytest.approx(1.0)

    def test_outputs_use_only_prior_observations(self) -> None:
        session = GameSession()
        session.load(_game())
        first = session.step()
        assert first is not None and first.context is not None
        assert first.context.pitcher is not None
        assert first.context.pitcher.game_mix is None
        assert session.store.pitcher_game_mix(100) is not None

        second = session.step()
        assert second is not None and second.context is not None
        assert second.context.pitcher is not None
        assert second.context.pitcher.game_mix is not None
        assert second.context.pitcher.game_mix.fastball == pytest.approx(1.0)

    def test_tunnel_surfaces_on_following_pitch(self) -> None:
        session = GameSession()
        session.load(_game())
        decisions = session.run()
        assert decisions[1].context is not None
        assert decisions[1].context.tunnel is None
        assert decisions[2].context is not None
        assert decisions[2].context.tunnel is not None
        assert decisions[2].context.tunnel.label == "fastball→slider tunnel"
        # new at-bat drops the lookback
        assert decisions[3].context is not None
        assert decisions[3].context.tunnel is None

    def test_hit_recorded_on_final_pitch(self) -> None:
        session = GameSession()
        session.load(_game())
        session.run()
        counters = session.store.batter_profile(200).by_family[PitchFamily.FASTBALL]
        assert counters.hits == 1
        assert counters.hard_hit == 1
        assert session.store.batter_aggression(200) == pytest.approx(2 / 3)

    def test_limit(self) -> None:
        session = GameSession()
        session.load(_game())
        assert len(session.run(limit=2)) == 2
        assert session.cursor == 2

    def test_restart_replays_from_zero(self) -> None:
        session = GameSession()
        session.load(_game())
        first_pass = session.run()
        session.restart()
        assert session.cursor == 0
        assert session.store.pitcher_game_mix(100) is None
        assert len(session.resolver.cache) == 0
        assert session.run() == first_pass

    def test_new_game_resets_state(self) -> None:
        session = GameSession()
        session.load(_game())
        session.run()
        session.load(_game(game_pk=745001))
        assert session.cursor == 0
        assert session.store.pitcher_game_mix(100) is None

    def test_alternate_pipeline_and_baseline(self, baseline: ArsenalBaseline) -> None:
        session = GameSession(baseline, pipeline=baseline_pipeline())
        session.load(_game())
        decision = session.step()
        assert decision is not None
        # league 0-0 blended evenly with the pitcher's arsenal
        assert decision.likely.fastball == pytest.approx((0.63 + 0.55) / 2)
        assert decision.likely_pitch.code == "FF"
        assert decision.likely_pitch.probability == pytest.approx(0.7 * (0.63 + 0.55) / 2)


class TestLiveSync:
    def test_upcoming_pitch_of_in_progress_at_bat(self) -> None:
        session = GameSession()
        decision = session.sync(_game(last_complete=False))
        assert session.cursor == 4
        assert decision.pitch_index == 4
        assert decision.context is not None
        assert decision.context.count == "0-1"
        assert decision.context.last_pitch_code == "CH"
        assert decision.actual_code is None

    def test_resync_only_processes_new_pitches(self) -> None:
        session = GameSession()
        session.sync(_game(last_complete=False))
        aggression = session.store.batter_aggression(201)
        session.sync(_game(last_complete=False))
        assert session.cursor == 4
        assert session.store.batter_aggression(201) == aggression
        assert session.store.pitcher_profile(100).total_pitches == 4

    def test_no_at_bat_in_progress_gives_uniform(self) -> None:
        decision = GameSession().sync(_game())
        assert decision.context is None
        assert decision.likely.fastball == pytest.approx(1 / 3)
        assert decision.optimal.best_family is PitchFamily.FASTBALL
        assert decision.likely_pitch.code == "FF"
        assert decision.likely_pitch.probability == pytest.approx(1 / 3)

    def test_result_arriving_after_in_play_pitch_is_credited(self) -> None:
        live = GameSession()
        live.sync(_in_play_game(complete=False))
        live.sync(_in_play_game(complete=True))

        replay = GameSession()
        replay.load(_in_play_game(complete=True))
        replay.run()

        live_profile = live.store.batter_profile(200)
        replay_profile = replay.store.batter_profile(200)
        counters = live_profile.by_family[PitchFamily.FASTBALL]
        assert (counters.hits, counters.hard_hit) == (1, 1)
        assert live_profile.by_family == replay_profile.by_family
        assert live_profile.by_zone == replay_profile.by_zone
        assert len(live_profile.by_zone) == 1

    def test_result_is_credited_once(self) -> None:
        session = GameSession()
        session.sync(_in_play_game(complete=False))
        session.sync(_in_play_game(complete=True))
        session.sync(_in_play_game(complete=True))
        assert session.store.batter_profile(200).by_family[PitchFamily.FASTBALL].hits == 1

    def test_open_at_bat_with_later_pitches_is_not_credited_early(self) -> None:
        foul = make_pitch(pitch_number=1, code="FF", description="Foul", strikes=0)
        session = GameSession()
        session.sync(make_game([make_at_bat([foul], is_complete=False, event_type=None)]))
        session.sync(_in_play_game(complete=True, first=foul))
        counters = session.store.batter_profile(200).by_family[PitchFamily.FASTBALL]
        assert counters.seen == 2
        assert (counters.hits, counters.hard_hit) == (1, 1)


class TestDecide:
    def test_absent_context(self) -> None:
        decision = GameSession().decide(0, None)
        assert decision.optimal_pitch.code == "FF"
        assert decision.likely.total == pytest.approx(1.0)
