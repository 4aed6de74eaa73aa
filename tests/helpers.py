from typing import Any

from pitch_intel.domain.context import PredictionContext
from pitch_intel.domain.coordinates import CoordinateRecord, ResolutionTier
from pitch_intel.domain.pitch import AtBat, Game, Movement, PitchEvent, PlateLocation
from pitch_intel.domain.profiles import BatterSnapshot, PitcherSnapshot


def make_pitch(
    *,
    at_bat_index: int = 0,
    pitch_number: int = 1,
    code: str | None = "FF",
    description: str = "Ball",
    balls: int = 0,
    strikes: int = 0,
    px: float | None = 0.0,
    pz: float | None = 2.5,
    zone_top: float | None = 3.5,
    zone_bottom: float | None = 1.5,
    movement: Movement | None = None,
    release_speed: float | None = 95.0,
    in_play: bool = False,
    exit_speed: float | None = None,
    is_pitch: bool = True,
) -> PitchEvent:
    location = None
    if px is not None and pz is not None:
        location = PlateLocation(px=px, pz=pz, zone_top=zone_top, zone_bottom=zone_bottom)
    return PitchEvent(
        at_bat_index=at_bat_index,
        pitch_number=pitch_number,
        code=code,
        description=description,
        balls=balls,
        strikes=strikes,
        location=location,
        movement=movement,
        release_speed=release_speed,
        is_pitch=is_pitch,
        in_play=in_play,
        exit_speed=exit_speed,
    )


def make_at_bat(
    pitches: list[PitchEvent] | None = None,
    *,
    at_bat_index: int = 0,
    pitcher_id: int = 100,
    batter_id: int = 200,
    inning: int = 1,
    half: str = "top",
    event_type: str | None = "strikeout",
    is_complete: bool = True,
    balls: int = 0,
    strikes: int = 0,
    **kwargs: Any,
) -> AtBat:
    return AtBat(
        at_bat_index=at_bat_index,
        pitcher_id=pitcher_id,
        batter_id=batter_id,
        inning=inning,
        half=half,
        event_type=event_type,
        is_complete=is_complete,
        balls=balls,
        strikes=strikes,
        pitches=tuple(pitches or ()),
        **kwargs,
    )


def make_game(at_bats: list[AtBat], *, game_pk: int = 745000, is_final: bool = False) -> Game:
    return Game(game_pk=game_pk, at_bats=tuple(at_bats), away_team="Away", home_team="Home", is_final=is_final)


def make_record(
    *,
    px: float | None = 0.0,
    pz: float | None = 2.5,
    zone_top: float | None = 3.5,
    zone_bottom: float | None = 1.5,
    horizontal_break: float | None = None,
    vertical_break: float | None = None,
    break_angle: float | None = None,
    break_length: float | None = None,
    tier: ResolutionTier = ResolutionTier.DIRECT,
) -> CoordinateRecord:
    return CoordinateRecord(
        tier=tier,
        px=px,
        pz=pz,
        zone_top=zone_top,
        zone_bottom=zone_bottom,
        horizontal_break=horizontal_break,
        vertical_break=vertical_break,
        break_angle=break_angle,
        break_length=break_length,
    )


def make_context(
    *,
    balls: int = 0,
    strikes: int = 0,
    pitcher: PitcherSnapshot | None = None,
    batter: BatterSnapshot | None = None,
    **kwargs: Any,
) -> PredictionContext:
    return PredictionContext(
        at_bat_index=kwargs.pop("at_bat_index", 0),
        pitch_number=kwargs.pop("pitch_number", 1),
        pitcher_id=kwargs.pop("pitcher_id", 100),
        batter_id=kwargs.pop("batter_id", 200),
        balls=balls,
        strikes=strikes,
        pitcher=pitcher,
        batter=batter,
        **kwargs,
    )


def feed_pitch_event(
    *,
    pitch_number: int,
    code: str = "FF",
    description: str = "Ball",
    balls_after: int = 0,
    strikes_after: int = 0,
    coordinates: dict[str, float] | None = None,
    flat: dict[str, float] | None = None,
    breaks: dict[str, float] | None = None,
    start_speed: float | None = 95.1,
    in_play: bool = False,
    launch_speed: float | None = None,
) -> dict[str, Any]:
    pitch_data: dict[str, Any] = {"strikeZoneTop": 3.4, "strikeZoneBottom": 1.6}
    if coordinates is not None:
        pitch_data["coordinates"] = coordinates
    if flat is not None:
        pitch_data.update(flat)
    if breaks is not None:
        pitch_data["breaks"] = breaks
    if start_speed is not None:
        pitch_data["startSpeed"] = start_speed
    event: dict[str, Any] = {
        "isPitch": True,
        "pitchNumber": pitch_number,
        "details": {"type": {"code": code}, "description": description, "isInPlay": in_play},
        "count": {"balls": balls_after, "strikes": strikes_after},
        "pitchData": pitch_data,
    }
    if launch_speed is not None:
        event["hitData"] = {"launchSpeed": launch_speed}
    return event


def feed_play(
    events: list[dict[str, Any]],
    *,
    at_bat_index: int = 0,
    pitcher_id: int = 100,
    batter_id: int = 200,
    inning: int = 1,
    half: str = "top",
    event_type: str | None = "strikeout",
    is_complete: bool = True,
    runner_origins: list[str] | None = None,
) -> dict[str, Any]:
    play: dict[str, Any] = {
        "about": {"atBatIndex": at_bat_index, "inning": inning, "halfInning": half, "isComplete": is_complete},
        "matchup": {
            "pitcher": {"id": pitcher_id},
            "pitchHand": {"code": "R"},
            "batter": {"id": batter_id},
            "batSide": {"code": "L"},
        },
        "playEvents": events,
        "runners": [
            {"details": {"runner": {"id": 900 + slot}}, "movement": {"originBase": base}}
            for slot, base in enumerate(runner_origins or [])
        ],
    }
    if event_type is not None:
        play["result"] = {"eventType": event_type}
    return play


def feed_payload(
    plays: list[dict[str, Any]],
    *,
    game_pk: int = 745000,
    state: str = "Live",
    linescore: dict[str, Any] | None = None,
) -> dict[str, Any]:
    live_data: dict[str, Any] = {"plays": {"allPlays": plays}}
    if linescore is not None:
        live_data["linescore"] = linescore
    return {
        "gamePk": game_pk,
        "gameData": {
            "teams": {"away": {"name": "Visitors"}, "home": {"name": "Hosts"}},
            "status": {"abstractGameState": state, "detailedState": "In Progress" if state == "Live" else state},
        },
        "liveData": live_data,
    }


def feed_linescore(
    *, away_runs: int | None = 0, home_runs: int | None = 0, inning: int | None = 1, state: str = "Top"
) -> dict[str, Any]:
    return {
        "currentInning": inning,
        "inningState": state,
        "outs": 1,
        "teams": {"away": {"runs": away_runs}, "home": {"runs": home_runs}},
    }
