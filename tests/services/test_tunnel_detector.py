import pytest

from pitch_intel.domain.context import PredictionContext
from pitch_intel.domain.coordinates import ResolutionTier
from pitch_intel.services.tunnel_detector import GENERIC_TUNNEL_LABEL, detect_tunnel, tunnel_label
from tests.helpers import make_context, make_record


def _ctx(code: str, **record_fields: float | None) -> PredictionContext:
    return make_context(pitch_code=code, location=make_record(**record_fields))


class TestTunnelLabel:
    @pytest.mark.parametrize(
        ("previous", "current", "label"),
        [
            ("FF", "SL", "fastball→slider tunnel"),
            ("FF", "CH", "fastball→changeup tunnel"),
            ("SI", "CH", "sinker→changeup tunnel"),
            ("SL", "FF", "slider→fastball tunnel"),
            ("FT", "ST", "sinker→slider tunnel"),
        ],
    )
    def test_named_transitions(self, previous: str, current: str, label: str) -> None:
        assert tunnel_label(previous, current) == label

    def test_other_pairs_are_generic(self) -> None:
        assert tunnel_label("CU", "SL") == GENERIC_TUNNEL_LABEL
        assert tunnel_label(None, "FF") == GENERIC_TUNNEL_LABEL


class TestDetectTunnel:
    def test_similar_path_divergent_break(self) -> None:
        previous = _ctx("FF", px=0.1, pz=2.6, horizontal_break=-6.0, vertical_break=16.0, break_angle=20.0)
        current = _ctx("SL", px=0.2, pz=2.5, horizontal_break=4.0, vertical_break=2.0, break_angle=8.0)
        result = detect_tunnel(previous, current)
        assert result is not None
        assert result.label == "fastball→slider tunnel"
        assert result.px_diff == pytest.approx(0.1)
        assert result.break_diff_total == pytest.approx(10.0 + 14.0 + 12.0)

    def test_location_diff_at_threshold_is_rejected(self) -> None:
        previous = _ctx("FF", px=0.0, pz=2.5, horizontal_break=0.0)
        current = _ctx("SL", px=0.3, pz=2.5, horizontal_break=10.0)
        assert detect_tunnel(previous, current) is None

    def test_break_divergence_at_threshold_is_rejected(self) -> None:
        previous = _ctx("FF", px=0.0, pz=2.5, horizontal_break=0.0)
        current = _ctx("SL", px=0.0, pz=2.5, horizontal_break=3.0)
        assert detect_tunnel(previous, current) is None

    def test_just_over_break_threshold(self) -> None:
        previous = _ctx("FF", px=0.0, pz=2.5, horizontal_break=0.0)
        current = _ctx("SL", px=0.0, pz=2.5, horizontal_break=3.5)
        assert detect_tunnel(previous, current) is not None

    def test_movement_only_records(self) -> None:
        previous = _ctx("FF", px=None, pz=None, horizontal_break=-5.0, vertical_break=15.0)
        current = _ctx("CH", px=None, pz=None, horizontal_break=-9.0, vertical_break=6.0)
        result = detect_tunnel(previous, current)
        assert result is not None
        assert result.px_diff == 0.0

    def test_missing_inputs(self) -> None:
        current = _ctx("SL", px=0.0, pz=2.5, horizontal_break=9.0)
        assert detect_tunnel(None, current) is None
        assert detect_tunnel(make_context(pitch_code="FF"), current) is None
        empty = make_context(pitch_code="FF", location=make_record(px=None, pz=None, tier=ResolutionTier.CACHE))
        assert detect_tunnel(empty, current) is None
