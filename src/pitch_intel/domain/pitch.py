from dataclasses import dataclass, field

# Terminal at-bat outcomes that count as hits.
HIT_EVENTS = frozenset({"single", "double", "triple", "home_run"})

_OUTS_BY_EVENT: dict[str, int] = {
    "strikeout": 1,
    "field_out": 1,
    "groundout": 1,
    "flyout": 1,
    "lineout": 1,
    "pop_out": 1,
    "force_out": 1,
    "fielders_choice_out": 1,
    "sac_fly": 1,
    "sac_bunt": 1,
    "other_out": 1,
    "double_play": 2,
    "grounded_into_double_play": 2,
    "strikeout_double_play": 2,
    "sac_fly_double_play": 2,
    "sac_bunt_double_play": 2,
    "triple_play": 3,
}


def outs_recorded(event_type: str | None) -> int:
    if not event_type:
        return 0
    return _OUTS_BY_EVENT.get(event_type.strip().lower(), 0)


@dataclass(frozen=True)
class PlateLocation:
    px: float
    pz: float
    zone_top: float | None = None
    zone_bottom: float | None = None


@dataclass(frozen=True)
class Movement:
    horizontal_break: float | None = None
    vertical_break: float | None = None
    break_angle: float | None = None
    break_length: float | None = None

    @property
    def has_break_pair(self) -> bool:
        return self.horizontal_break is not None and self.vertical_break is not None


@dataclass(frozen=True)
class PitchEvent:
    at_bat_index: int
    pitch_number: int
    code: str | None = None
    description: str = ""
    balls: int = 0
    strikes: int = 0
    location: PlateLocation | None = None
    legacy_location: PlateLocation | None = None
    movement: Movement | None = None
    release_speed: float | None = None
    is_pitch: bool = True
    in_play: bool = False
    exit_speed: float | None = None

    @property
    def count(self) -> str:
        return f"{self.balls}-{self.strikes}"


@dataclass(frozen=True)
class AtBat:
    at_bat_index: int
    pitcher_id: int
    batter_id: int
    pitcher_hand: str = "R"
    batter_side: str = "R"
    inning: int = 1
    half: str = "top"
    on_first: bool = False
    on_second: bool = False
    on_third: bool = False
    event_type: str | None = None
    is_complete: bool = True
    # Count after the latest pitch of the at-bat.
    balls: int = 0
    strikes: int = 0
    pitches: tuple[PitchEvent, ...] = ()

    @property
    def runners_on(self) -> bool:
        return self.on_first or self.on_second or self.on_third

    @property
    def outs_recorded(self) -> int:
        return outs_recorded(self.event_type)

    @property
    def is_hit(self) -> bool:
        return (self.event_type or "").lower() in HIT_EVENTS


@dataclass(frozen=True)
class PitchRef:
    """Position of one thrown pitch inside a game: at-bat slot and pitch slot."""

    at_bat_position: int
    pitch_position: int


@dataclass(frozen=True)
class Linescore:
    away_runs: int = 0
    home_runs: int = 0
    current_inning: int | None = None
    inning_state: str = ""
    outs: int | None = None

    @property
    def run_differential(self) -> int:
        """Home minus away."""
        return self.home_runs - self.away_runs


@dataclass(frozen=True)
class Game:
    game_pk: int
    at_bats: tuple[AtBat, ...] = ()
    away_team: str = ""
    home_team: str = ""
    status: str = ""
    is_final: bool = False
    linescore: Linescore | None = None
    _pitch_refs: tuple[PitchRef, ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        refs = [
            PitchRef(ab_pos, p_pos)
            for ab_pos, at_bat in enumerate(self.at_bats)
            for p_pos, pitch in enumerate(at_bat.pitches)
            if pitch.is_pitch
        ]
        refs.sort(key=lambda r: (self.at_bat_for(r).at_bat_index, self.pitch_for(r).pitch_number))
        object.__setattr__(self, "_pitch_refs", tuple(refs))

    @property
    def pitch_count(self) -> int:
        return len(self._pitch_refs)

    def pitch_ref(self, index: int) -> PitchRef:
        """Ref for the ``index``-th thrown pitch in chronological order; raises IndexError."""
        if index < 0:
            raise IndexError(index)
        return self._pitch_refs[index]

    def at_bat_for(self, ref: PitchRef) -> AtBat:
        return self.at_bats[ref.at_bat_position]

    def pitch_for(self, ref: PitchRef) -> PitchEvent:
        return self.at_bats[ref.at_bat_position].pitches[ref.pitch_position]

    def all_pitch_events(self) -> list[PitchEvent]:
        return [pitch for at_bat in self.at_bats for pitch in at_bat.pitches]
