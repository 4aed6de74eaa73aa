from __future__ import annotations

from dataclasses import dataclass

from pitch_intel.domain.coordinates import CoordinateRecord
from pitch_intel.domain.pitch_family import PitchFamily, classify
from pitch_intel.domain.profiles import BatterSnapshot, PitcherSnapshot


@dataclass(frozen=True)
class TunnelResult:
    label: str
    px_diff: float
    pz_diff: float
    horizontal_break_diff: float
    vertical_break_diff: float
    break_angle_diff: float
    break_length_diff: float

    @property
    def break_diff_total(self) -> float:
        return (
            self.horizontal_break_diff
            + self.vertical_break_diff
            + self.break_angle_diff
            + self.break_length_diff
        )


@dataclass(frozen=True)
class PredictionContext:
    """Snapshot of everything known at a decision point.

    ``location`` and ``pitch_code`` describe the pitch about to be thrown.
    They are read only after the prediction outputs exist (profile updates
    and tunnel detection); the prediction stages use the ``last_*`` fields.
    """

    at_bat_index: int
    pitch_number: int
    pitcher_id: int
    batter_id: int
    balls: int = 0
    strikes: int = 0
    outs: int = 0
    on_first: bool = False
    on_second: bool = False
    on_third: bool = False
    inning: int = 1
    half: str = "top"
    pitcher_hand: str = "R"
    batter_side: str = "R"
    last_pitch_code: str | None = None
    last_pitch_description: str | None = None
    last_zone: str | None = None
    last_two_codes: tuple[str, ...] = ()
    location: CoordinateRecord | None = None
    pitch_code: str | None = None
    tunnel: TunnelResult | None = None
    pitcher: PitcherSnapshot | None = None
    batter: BatterSnapshot | None = None

    @property
    def count(self) -> str:
        return f"{self.balls}-{self.strikes}"

    @property
    def runners_on(self) -> bool:
        return self.on_first or self.on_second or self.on_third

    @property
    def last_family(self) -> PitchFamily | None:
        if self.last_pitch_code is None:
            return None
        return classify(self.last_pitch_code)
