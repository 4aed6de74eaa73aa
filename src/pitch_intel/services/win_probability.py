from pitch_intel.domain.pitch import Game

# Win-probability swing per run of lead, at full (ninth-inning) weight.
RUN_WEIGHT = 0.05
REGULATION_INNINGS = 9


def win_probability(game: Game) -> float:
    """Home-team win probability from the run differential, weighted by how late the game is."""
    linescore = game.linescore
    if linescore is None:
        return 0.5
    inning = linescore.current_inning or 1
    probability = 0.5 + linescore.run_differential * RUN_WEIGHT * inning / REGULATION_INNINGS
    return max(0.0, min(1.0, probability))
