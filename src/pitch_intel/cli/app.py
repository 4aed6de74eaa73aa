import json
import logging
import time
from pathlib import Path
from typing import Annotated

import typer

from pitch_intel.cli._logging import configure_logging
from pitch_intel.cli._output import (
    print_classifications,
    print_decision,
    print_decisions,
    print_error,
    print_scoreboard,
)
from pitch_intel.config import ConfigError, SessionConfig, load_arsenal, load_session_config
from pitch_intel.domain.arsenal import ArsenalBaseline
from pitch_intel.domain.result import Err, Ok
from pitch_intel.ingest.live_feed_parser import parse_live_feed
from pitch_intel.ingest.mlb_live_feed_source import MLBLiveFeedSource
from pitch_intel.pipeline.presets import PIPELINES, build_pipeline
from pitch_intel.services.game_session import GameSession

logger = logging.getLogger(__name__)

app = typer.Typer(name="pitch-intel", help="Pitch Intelligence Engine — per-pitch predictions from MLB feeds")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log warnings and errors")] = False,
) -> None:
    """Pitch Intelligence Engine — per-pitch predictions from MLB feeds."""
    configure_logging(verbose=verbose, quiet=quiet)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_ConfigDirOpt = Annotated[Path, typer.Option("--config-dir", help="Directory containing pitchintel.toml")]
_ArsenalOpt = Annotated[Path | None, typer.Option("--arsenal", help="Pre-parsed arsenal baseline JSON")]
_PipelineOpt = Annotated[
    str, typer.Option("--pipeline", help=f"Mixer pipeline: {', '.join(sorted(PIPELINES))}")
]


def _load_config(config_dir: Path) -> SessionConfig:
    try:
        return load_session_config(config_dir)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def _build_session(config: SessionConfig, arsenal: Path | None, pipeline: str) -> GameSession:
    baseline: ArsenalBaseline | None = None
    arsenal_path = arsenal or config.arsenal_path
    try:
        if arsenal_path is not None:
            baseline = load_arsenal(arsenal_path)
            logger.info("Loaded arsenal baseline for %d pitchers from %s", len(baseline.families), arsenal_path)
        return GameSession(baseline, pipeline=build_pipeline(pipeline))
    except (ConfigError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def _build_source(config: SessionConfig) -> MLBLiveFeedSource:
    return MLBLiveFeedSource(url_template=config.feed_url_template, timeout=config.request_timeout_seconds)


@app.command()
def replay(
    feed_json: Annotated[Path, typer.Argument(help="Saved live-feed JSON for one game")],
    arsenal: _ArsenalOpt = None,
    limit: Annotated[int | None, typer.Option("--limit", help="Stop after N decision points")] = None,
    tick: Annotated[
        float | None, typer.Option("--tick", help="Seconds between decision points (default from config)")
    ] = None,
    pipeline: _PipelineOpt = "likely",
    config_dir: _ConfigDirOpt = Path("."),
) -> None:
    """Replay a finished game one decision point at a time."""
    config = _load_config(config_dir)
    if not feed_json.exists():
        print_error(f"feed file not found: {feed_json}")
        raise typer.Exit(code=1)
    try:
        data = json.loads(feed_json.read_text())
    except json.JSONDecodeError as e:
        print_error(f"{feed_json} is not valid JSON: {e}")
        raise typer.Exit(code=1)

    session = _build_session(config, arsenal, pipeline)
    session.load(parse_live_feed(data))
    pause = config.replay_tick_seconds if tick is None else tick

    decisions = []
    while not session.finished and (limit is None or len(decisions) < limit):
        decision = session.step()
        if decision is None:
            break
        decisions.append(decision)
        if pause > 0 and not session.finished:
            time.sleep(pause)
    print_decisions(decisions, title=f"Game {session.game.game_pk if session.game else '?'}")
    typer.echo(f"Replayed {len(decisions)} pitches")


@app.command()
def live(
    game_pk: Annotated[int, typer.Argument(help="MLB game id")],
    polls: Annotated[int | None, typer.Option("--polls", help="Stop after N polls (default: until final)")] = None,
    interval: Annotated[
        float | None, typer.Option("--interval", help="Seconds between polls (default from config)")
    ] = None,
    arsenal: _ArsenalOpt = None,
    pipeline: _PipelineOpt = "likely",
    config_dir: _ConfigDirOpt = Path("."),
) -> None:
    """Follow a live game and print the decision for each upcoming pitch."""
    config = _load_config(config_dir)
    session = _build_session(config, arsenal, pipeline)
    pause = config.poll_interval_seconds if interval is None else interval

    done = 0
    last_count: int | None = None
    with _build_source(config) as source:
        while polls is None or done < polls:
            if done:
                time.sleep(pause)
            done += 1
            match source.fetch(game_pk):
                case Ok(game):
                    decision = session.sync(game)
                    if game.pitch_count != last_count:
                        print_scoreboard(game)
                        print_decision(decision)
                        last_count = game.pitch_count
                    if game.is_final:
                        typer.echo(f"Game {game_pk} is final ({game.pitch_count} pitches)")
                        return
                case Err(e):
                    logger.warning("Poll %d for game %d failed: %s", done, game_pk, e.message)


@app.command()
def classify(codes: Annotated[list[str], typer.Argument(help="Pitch-type codes, e.g. FF SL CH")]) -> None:
    """Print the pitch family for each code."""
    print_classifications(codes)
