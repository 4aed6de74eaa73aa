from dataclasses import dataclass


@dataclass(frozen=True)
class PitchIntelError:
    message: str


@dataclass(frozen=True)
class FeedError(PitchIntelError):
    game_pk: int
    source_detail: str = "live_feed"
