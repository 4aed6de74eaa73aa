from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pitch_intel.domain.context import TunnelResult
from pitch_intel.domain.pitch_family import normalize_code

if TYPE_CHECKING:
    from pitch_intel.domain.context import PredictionContext
    from pitch_intel.domain.coordinates import CoordinateRecord

logger = logging.getLogger(__name__)

# Strict inequalities: a diff equal to a threshold does not qualify.
MAX_HORIZONTAL_RELEASE_DIFF = 0.3
MAX_VERTICAL_RELEASE_DIFF = 0.3
MIN_BREAK_DIVERGENCE = 3.0

GENERIC_TUNNEL_LABEL = "tunnel pair"

_CODE_GROUPS: dict[str, str] = {
    "FF": "fastball",
    "FA": "fastball",
    "SI": "sinker",
    "FC": "cutter",
    "SL": "slider",
    "ST": "slider",
    "SV": "slider",
    "CU": "curveball",
    "CS": "curveball",
    "CH": "changeup",
    "FS": "splitter",
    "FO": "splitter",
}

_LABELED_TRANSITIONS = frozenset(
    {
        ("fastball", "slider"),
        ("fastball", "curveball"),
        ("fastball", "changeup"),
        ("fastball", "splitter"),
        ("sinker", "slider"),
        ("sinker", "changeup"),
        ("cutter", "slider"),
        ("cutter", "curveball"),
        ("slider", "fastball"),
        ("curveball", "fastball"),
        ("changeup", "fastball"),
        ("changeup", "slider"),
    }
)


def tunnel_label(previous_code: str | None, current_code: str | None) -> str:
    prev_group = _CODE_GROUPS.get(normalize_code(previous_code))
    cur_group = _CODE_GROUPS.get(normalize_code(current_code))
    if prev_group is None or cur_group is None or (prev_group, cur_group) not in _LABELED_TRANSITIONS:
        return GENERIC_TUNNEL_LABEL
    return f"{prev_group}→{cur_group} tunnel"


def _diff(a: float | None, b: float | None) -> float:
    return abs((a or 0.0) - (b or 0.0))


def _has_reading(record: CoordinateRecord | None) -> bool:
    if record is None:
        return False
    return record.has_location or record.horizontal_break is not None or record.vertical_break is not None


def detect_tunnel(previous: PredictionContext | None, current: PredictionContext | None) -> TunnelResult | None:
    """Compare two consecutive pitches for matching early flight and diverging late break."""
    if previous is None or current is None:
        return None
    prev_rec, cur_rec = previous.location, current.location
    if prev_rec is None or cur_rec is None or not _has_reading(prev_rec) or not _has_reading(cur_rec):
        return None

    px_diff = _diff(prev_rec.px, cur_rec.px)
    pz_diff = _diff(prev_rec.pz, cur_rec.pz)
    if not (px_diff < MAX_HORIZONTAL_RELEASE_DIFF and pz_diff < MAX_VERTICAL_RELEASE_DIFF):
        return None

    result = TunnelResult(
        label=tunnel_label(previous.pitch_code, current.pitch_code),
        px_diff=px_diff,
        pz_diff=pz_diff,
        horizontal_break_diff=_diff(prev_rec.horizontal_break, cur_rec.horizontal_break),
        vertical_break_diff=_diff(prev_rec.vertical_break, cur_rec.vertical_break),
        break_angle_diff=_diff(prev_rec.break_angle, cur_rec.break_angle),
        break_length_diff=_diff(prev_rec.break_length, cur_rec.break_length),
    )
    if not result.break_diff_total > MIN_BREAK_DIVERGENCE:
        return None
    logger.debug("Detected %s (break divergence %.2f)", result.label, result.break_diff_total)
    return result
