"""Convert MLB live-feed (GUMBO) JSON into ``Game`` / ``AtBat`` / ``PitchEvent``.

The feed's per-event ``count`` is the count *after* the pitch; the parser
records the count the pitch was thrown in by carrying the previous event's
count forward within the at-bat, including non-pitch events.
"""

import logging
from typing import Any

from pitch_intel.domain.pitch import AtBat, Game, Linescore, Movement, PitchEvent, PlateLocation

logger = logging.getLogger(__name__)

_FINAL_STATE = "Final"
_BREAK_KEYS = ("breakHorizontal", "breakVerticalInduced", "breakAngle", "breakLength")


def _as_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _location(px: Any, pz: Any, top: float | None, bottom: float | None) -> PlateLocation | None:
    x, z = _as_float(px), _as_float(pz)
    if x is None or z is None:
        return None
    return PlateLocation(px=x, pz=z, zone_top=top, zone_bottom=bottom)


def _movement(breaks: dict[str, Any]) -> Movement | None:
    values = [_as_float(breaks.get(key)) for key in _BREAK_KEYS]
    if all(value is None for value in values):
        return None
    return Movement(*values)


def _parse_pitch(event: dict[str, Any], at_bat_index: int, balls: int, strikes: int) -> PitchEvent:
    details = event.get("details") or {}
    pitch_data = event.get("pitchData") or {}
    hit_data = event.get("hitData") or {}
    top = _as_float(pitch_data.get("strikeZoneTop"))
    bottom = _as_float(pitch_data.get("strikeZoneBottom"))
    coordinates = pitch_data.get("coordinates") or {}
    code = (details.get("type") or {}).get("code")
    return PitchEvent(
        at_bat_index=at_bat_index,
        pitch_number=int(event["pitchNumber"]),
        code=code.strip().upper() if code else None,
        description=details.get("description") or "",
        balls=balls,
        strikes=strikes,
        location=_location(coordinates.get("pX"), coordinates.get("pZ"), top, bottom),
        legacy_location=_location(pitch_data.get("pX"), pitch_data.get("pZ"), top, bottom),
        movement=_movement(pitch_data.get("breaks") or {}),
        release_speed=_as_float(pitch_data.get("startSpeed")),
        is_pitch=True,
        in_play=bool(details.get("isInPlay", False)),
        exit_speed=_as_float(hit_data.get("launchSpeed")),
    )


def _runner_flags(play: dict[str, Any]) -> tuple[bool, bool, bool]:
    """Bases occupied when the at-bat began; only each runner's first movement counts."""
    origins: dict[Any, str] = {}
    for position, runner in enumerate(play.get("runners") or []):
        runner_id = ((runner.get("details") or {}).get("runner") or {}).get("id", f"#{position}")
        if runner_id not in origins:
            origins[runner_id] = (runner.get("movement") or {}).get("originBase") or ""
    bases = set(origins.values())
    return "1B" in bases, "2B" in bases, "3B" in bases


def _parse_at_bat(play: dict[str, Any]) -> AtBat:
    about = play["about"]
    matchup = play["matchup"]
    result = play.get("result") or {}
    at_bat_index = int(about["atBatIndex"])

    pitches: list[PitchEvent] = []
    balls = strikes = 0
    for event in play.get("playEvents") or []:
        if event.get("isPitch", False):
            try:
                pitches.append(_parse_pitch(event, at_bat_index, balls, strikes))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed pitch event in at-bat %d: %s", at_bat_index, exc)
        # automatic balls and strikes arrive as non-pitch events
        count = event.get("count") or {}
        balls = int(count.get("balls", balls))
        strikes = int(count.get("strikes", strikes))

    on_first, on_second, on_third = _runner_flags(play)
    return AtBat(
        at_bat_index=at_bat_index,
        pitcher_id=int(matchup["pitcher"]["id"]),
        batter_id=int(matchup["batter"]["id"]),
        pitcher_hand=(matchup.get("pitchHand") or {}).get("code", "R"),
        batter_side=(matchup.get("batSide") or {}).get("code", "R"),
        inning=int(about.get("inning", 1)),
        half=str(about.get("halfInning", "top")).lower(),
        on_first=on_first,
        on_second=on_second,
        on_third=on_third,
        event_type=result.get("eventType"),
        is_complete=bool(about.get("isComplete", True)),
        balls=balls,
        strikes=strikes,
        pitches=tuple(pitches),
    )


def _parse_linescore(data: dict[str, Any] | None, game_pk: int) -> Linescore | None:
    if not data:
        return None
    teams = data.get("teams") or {}
    try:
        inning = data.get("currentInning")
        outs = data.get("outs")
        return Linescore(
            away_runs=int((teams.get("away") or {}).get("runs") or 0),
            home_runs=int((teams.get("home") or {}).get("runs") or 0),
            current_inning=int(inning) if inning is not None else None,
            inning_state=data.get("inningState") or "",
            outs=int(outs) if outs is not None else None,
        )
    except (TypeError, ValueError) as exc:
        logger.warning("Ignoring malformed linescore in game %d: %s", game_pk, exc)
        return None


def parse_live_feed(data: dict[str, Any]) -> Game:
    """Build a ``Game`` from a decoded live-feed payload; malformed plays are skipped."""
    game_data = data.get("gameData") or {}
    teams = game_data.get("teams") or {}
    status = game_data.get("status") or {}
    game_pk = int(data.get("gamePk") or (game_data.get("game") or {}).get("pk") or 0)

    live_data = data.get("liveData") or {}
    at_bats: list[AtBat] = []
    for play in (live_data.get("plays") or {}).get("allPlays") or []:
        try:
            at_bats.append(_parse_at_bat(play))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed play in game %d: %s", game_pk, exc)

    game = Game(
        game_pk=game_pk,
        at_bats=tuple(at_bats),
        away_team=(teams.get("away") or {}).get("name", ""),
        home_team=(teams.get("home") or {}).get("name", ""),
        status=status.get("detailedState", ""),
        is_final=status.get("abstractGameState") == _FINAL_STATE,
        linescore=_parse_linescore(live_data.get("linescore"), game_pk),
    )
    logger.debug("Parsed game %d: %d at-bats, %d pitches", game.game_pk, len(game.at_bats), game.pitch_count)
    return game
