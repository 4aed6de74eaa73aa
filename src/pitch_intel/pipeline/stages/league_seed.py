from pitch_intel.domain.context import PredictionContext
from pitch_intel.domain.distribution import Distribution

LEAGUE_COUNT_TABLE: dict[str, Distribution] = {
    "0-0": Distribution(fastball=0.63, breaking=0.25, change=0.12),
    "0-1": Distribution(fastball=0.55, breaking=0.32, change=0.13),
    "0-2": Distribution(fastball=0.48, breaking=0.38, change=0.14),
    "1-0": Distribution(fastball=0.62, breaking=0.24, change=0.14),
    "1-1": Distribution(fastball=0.54, breaking=0.31, change=0.15),
    "1-2": Distribution(fastball=0.47, breaking=0.38, change=0.15),
    "2-0": Distribution(fastball=0.70, breaking=0.18, change=0.12),
    "2-1": Distribution(fastball=0.61, breaking=0.24, change=0.15),
    "2-2": Distribution(fastball=0.50, breaking=0.35, change=0.15),
    "3-0": Distribution(fastball=0.86, breaking=0.08, change=0.06),
    "3-1": Distribution(fastball=0.71, breaking=0.17, change=0.12),
    "3-2": Distribution(fastball=0.60, breaking=0.27, change=0.13),
}

DEFAULT_LEAGUE_DISTRIBUTION = Distribution(fastball=0.60, breaking=0.25, change=0.15)


def league_distribution(count: str) -> Distribution:
    return LEAGUE_COUNT_TABLE.get(count, DEFAULT_LEAGUE_DISTRIBUTION)


class LeagueSeedStage:
    """Replace the working distribution with the league-average mix for the count."""

    def apply(self, distribution: Distribution, context: PredictionContext) -> Distribution:
        return league_distribution(context.count)
