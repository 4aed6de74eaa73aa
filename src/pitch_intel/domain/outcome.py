from dataclasses import dataclass

from pitch_intel.domain.pitch import HIT_EVENTS

HARD_HIT_EXIT_SPEED = 95.0


def _lower(description: str | None) -> str:
    return (description or "").lower()


def is_foul(description: str | None) -> bool:
    return "foul" in _lower(description)


def is_in_play_description(description: str | None) -> bool:
    return "in play" in _lower(description)


def is_swing(description: str | None, in_play: bool = False) -> bool:
    text = _lower(description)
    return in_play or "swinging" in text or "foul" in text or "in play" in text


def is_whiff(description: str | None) -> bool:
    """A swing with no contact: swinging, but neither foul nor in play."""
    return is_swing(description) and not is_foul(description) and not is_in_play_description(description)


def is_called_strike(description: str | None) -> bool:
    return "called strike" in _lower(description)


def is_taken_ball(description: str | None) -> bool:
    text = _lower(description)
    return "ball" in text and not is_swing(description)


@dataclass(frozen=True)
class PitchOutcome:
    """What happened on one pitch, as far as batter profiles care."""

    description: str = ""
    in_play: bool = False
    exit_speed: float | None = None
    at_bat_event: str | None = None

    @property
    def swing(self) -> bool:
        return is_swing(self.description, self.in_play)

    @property
    def whiff(self) -> bool:
        return self.swing and not self.in_play and is_whiff(self.description)

    @property
    def hit(self) -> bool:
        return (self.at_bat_event or "").lower() in HIT_EVENTS

    @property
    def hard_hit(self) -> bool:
        return self.exit_speed is not None and self.exit_speed >= HARD_HIT_EXIT_SPEED
