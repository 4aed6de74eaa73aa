from enum import StrEnum

DEFAULT_ZONE_TOP = 3.5
DEFAULT_ZONE_BOTTOM = 1.5

# Horizontal plate offset beyond which a pitch leaves the middle band.
_HORIZONTAL_BAND_EDGE = 0.5


class VerticalBand(StrEnum):
    HIGH = "high"
    MID = "mid"
    LOW = "low"


class HorizontalBand(StrEnum):
    ARM = "arm"
    MIDDLE = "middle"
    GLOVE = "glove"


HIGH_ZONES = frozenset(f"{VerticalBand.HIGH}_{h}" for h in HorizontalBand)
MIDDLE_MIDDLE = f"{VerticalBand.MID}_{HorizontalBand.MIDDLE}"
LOW_GLOVE = f"{VerticalBand.LOW}_{HorizontalBand.GLOVE}"
LOW_ARM = f"{VerticalBand.LOW}_{HorizontalBand.ARM}"


def horizontal_band(px: float) -> HorizontalBand:
    if px > _HORIZONTAL_BAND_EDGE:
        return HorizontalBand.ARM
    if px < -_HORIZONTAL_BAND_EDGE:
        return HorizontalBand.GLOVE
    return HorizontalBand.MIDDLE


def vertical_band(pz: float, top: float, bottom: float) -> VerticalBand:
    third = (top - bottom) / 3.0
    if pz >= top - third:
        return VerticalBand.HIGH
    if pz <= bottom + third:
        return VerticalBand.LOW
    return VerticalBand.MID


def zone_label(px: float, pz: float, top: float = DEFAULT_ZONE_TOP, bottom: float = DEFAULT_ZONE_BOTTOM) -> str:
    """Label a plate location as ``{vertical}_{horizontal}``, e.g. ``low_glove``."""
    return f"{vertical_band(pz, top, bottom)}_{horizontal_band(px)}"
