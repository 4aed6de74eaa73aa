import pytest

from pitch_intel.domain.pitch_family import (
    FAMILIES,
    REPRESENTATIVE_CODES,
    PitchFamily,
    classify,
    normalize_code,
    pitch_name,
)


class TestClassify:
    @pytest.mark.parametrize("code", ["FF", "FA", "SI", "FT", "FC"])
    def test_fastball_codes(self, code: str) -> None:
        assert classify(code) is PitchFamily.FASTBALL

    @pytest.mark.parametrize("code", ["SL", "ST", "SV", "CU", "KC", "CS", "KN"])
    def test_breaking_codes(self, code: str) -> None:
        assert classify(code) is PitchFamily.BREAKING

    @pytest.mark.parametrize("code", ["CH", "FS", "FO", "SC", "EP"])
    def test_change_codes(self, code: str) -> None:
        assert classify(code) is PitchFamily.CHANGE

    def test_case_and_whitespace_insensitive(self) -> None:
        assert classify(" sl ") is PitchFamily.BREAKING

    @pytest.mark.parametrize("code", [None, "", "ZZ", "PO"])
    def test_unknown_or_missing_defaults_to_fastball(self, code: str | None) -> None:
        assert classify(code) is PitchFamily.FASTBALL


class TestNormalizeCode:
    def test_aliases(self) -> None:
        assert normalize_code("ft") == "SI"
        assert normalize_code("KC") == "ST"

    def test_empty(self) -> None:
        assert normalize_code(None) == ""


class TestPitchName:
    def test_known(self) -> None:
        assert pitch_name("ff") == "Four-Seam Fastball"

    def test_unknown_code_is_echoed(self) -> None:
        assert pitch_name("zz") == "ZZ"

    def test_missing(self) -> None:
        assert pitch_name(None) == "Unknown"


def test_family_order_and_representatives() -> None:
    assert [str(f) for f in FAMILIES] == ["fastball", "breaking", "change"]
    assert {classify(code) for code in REPRESENTATIVE_CODES.values()} == set(FAMILIES)
    for family, code in REPRESENTATIVE_CODES.items():
        assert classify(code) is family
