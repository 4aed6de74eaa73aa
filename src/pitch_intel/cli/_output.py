from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from pitch_intel.domain.decision import Decision, SpecificPitch
from pitch_intel.domain.distribution import Distribution
from pitch_intel.domain.pitch import Game
from pitch_intel.domain.pitch_family import classify, pitch_name
from pitch_intel.services.win_probability import win_probability

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def _shares(distribution: Distribution) -> str:
    return f"{distribution.fastball:.2f}/{distribution.breaking:.2f}/{distribution.change:.2f}"


def _pitch(pitch: SpecificPitch) -> str:
    return f"{pitch.label} ({pitch.probability:.0%})"


def _situation(decision: Decision) -> tuple[str, str, str]:
    ctx = decision.context
    if ctx is None:
        return "—", "—", "—"
    return f"{ctx.half[:3]} {ctx.inning}", f"{ctx.pitcher_id} v {ctx.batter_id}", ctx.count


def _decision_table(title: str | None = None) -> Table:
    table = Table(title=title, show_edge=False, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Inn")
    table.add_column("Matchup")
    table.add_column("Count")
    table.add_column("Likely fb/br/ch", justify="right")
    table.add_column("Likely pitch")
    table.add_column("Optimal")
    table.add_column("Actual")
    table.add_column("Tunnel")
    return table


def _add_decision_row(table: Table, decision: Decision) -> None:
    inning, matchup, count = _situation(decision)
    tunnel = decision.context.tunnel if decision.context is not None else None
    table.add_row(
        str(decision.pitch_index),
        inning,
        matchup,
        count,
        _shares(decision.likely),
        _pitch(decision.likely_pitch),
        _pitch(decision.optimal_pitch),
        decision.actual_code or "—",
        tunnel.label if tunnel is not None else "",
    )


def print_decisions(decisions: Sequence[Decision], title: str | None = None) -> None:
    if not decisions:
        console.print("No decision points.")
        return
    table = _decision_table(title)
    for decision in decisions:
        _add_decision_row(table, decision)
    console.print(table)


def print_scoreboard(game: Game) -> None:
    """Score, inning and home win probability, as the linescore reports them."""
    linescore = game.linescore
    if linescore is None:
        score = f"{game.away_team} @ {game.home_team}"
        inning = "no linescore"
    else:
        score = f"{game.away_team} {linescore.away_runs} - {linescore.home_runs} {game.home_team}"
        inning = f"{linescore.inning_state} {linescore.current_inning or ''}".strip() or "not started"
    console.print(f"[bold]{score}[/bold]  {inning}  home win {win_probability(game):.0%}")


def print_decision(decision: Decision) -> None:
    """Summarize the decision for the upcoming pitch."""
    inning, matchup, count = _situation(decision)
    if decision.context is None:
        console.print(f"[bold]Pitch {decision.pitch_index}[/bold]: no at-bat in progress")
    else:
        console.print(f"[bold]Pitch {decision.pitch_index}[/bold] {inning}, {matchup}, count {count}")
    console.print(f"  Likely:  {_shares(decision.likely)} -> {_pitch(decision.likely_pitch)}")
    console.print(f"  Optimal: {_shares(decision.optimal.distribution)} -> {_pitch(decision.optimal_pitch)}")
    tunnel = decision.context.tunnel if decision.context is not None else None
    if tunnel is not None:
        console.print(f"  Tunnel:  {tunnel.label}")


def print_classifications(codes: Sequence[str]) -> None:
    for code in codes:
        console.print(f"{code.strip().upper()}\t{classify(code)}\t{pitch_name(code)}")
