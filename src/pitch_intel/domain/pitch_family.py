from enum import StrEnum


class PitchFamily(StrEnum):
    FASTBALL = "fastball"
    BREAKING = "breaking"
    CHANGE = "change"


FAMILIES: tuple[PitchFamily, ...] = (PitchFamily.FASTBALL, PitchFamily.BREAKING, PitchFamily.CHANGE)

# Codes that share a family row with another code.
_CODE_ALIASES: dict[str, str] = {
    "FT": "SI",
    "KC": "ST",
}

_FAMILY_BY_CODE: dict[str, PitchFamily] = {
    "FF": PitchFamily.FASTBALL,
    "FA": PitchFamily.FASTBALL,
    "SI": PitchFamily.FASTBALL,
    "FC": PitchFamily.FASTBALL,
    "SL": PitchFamily.BREAKING,
    "ST": PitchFamily.BREAKING,
    "SV": PitchFamily.BREAKING,
    "CU": PitchFamily.BREAKING,
    "CS": PitchFamily.BREAKING,
    "KN": PitchFamily.BREAKING,
    "CH": PitchFamily.CHANGE,
    "FS": PitchFamily.CHANGE,
    "FO": PitchFamily.CHANGE,
    "SC": PitchFamily.CHANGE,
    "EP": PitchFamily.CHANGE,
}

PITCH_NAMES: dict[str, str] = {
    "FF": "Four-Seam Fastball",
    "FA": "Fastball",
    "SI": "Sinker",
    "FT": "Two-Seam Fastball",
    "FC": "Cutter",
    "SL": "Slider",
    "ST": "Sweeper",
    "SV": "Slurve",
    "CU": "Curveball",
    "KC": "Knuckle Curve",
    "CS": "Slow Curve",
    "KN": "Knuckleball",
    "CH": "Changeup",
    "FS": "Splitter",
    "FO": "Forkball",
    "SC": "Screwball",
    "EP": "Eephus",
}

REPRESENTATIVE_CODES: dict[PitchFamily, str] = {
    PitchFamily.FASTBALL: "FF",
    PitchFamily.BREAKING: "SL",
    PitchFamily.CHANGE: "CH",
}


def normalize_code(code: str | None) -> str:
    if not code:
        return ""
    cleaned = code.strip().upper()
    return _CODE_ALIASES.get(cleaned, cleaned)


def classify(code: str | None) -> PitchFamily:
    """Map a raw pitch-type code to its family. Unknown or missing codes are fastballs."""
    return _FAMILY_BY_CODE.get(normalize_code(code), PitchFamily.FASTBALL)


def pitch_name(code: str | None) -> str:
    if not code:
        return "Unknown"
    cleaned = code.strip().upper()
    return PITCH_NAMES.get(cleaned, cleaned)
