"""Natural position and field line normalization."""

import enum
import re


class PositionCategory(str, enum.Enum):
    GOALKEEPER = "goalkeeper"
    DEFENDER = "defender"
    MIDFIELDER = "midfielder"
    FORWARD = "forward"
    UNKNOWN = "unknown"


class LineType(str, enum.Enum):
    GK = "GK"
    DEF = "DEF"
    MID = "MID"
    FWD = "FWD"
    BENCH = "BENCH"


# Field lines in pitch order (goal → attack)
FIELD_LINES: tuple[LineType, ...] = (LineType.GK, LineType.DEF, LineType.MID, LineType.FWD)

POSITION_TO_LINE: dict[PositionCategory, LineType] = {
    PositionCategory.GOALKEEPER: LineType.GK,
    PositionCategory.DEFENDER: LineType.DEF,
    PositionCategory.MIDFIELDER: LineType.MID,
    PositionCategory.FORWARD: LineType.FWD,
}

POSITION_ALIASES: dict[str, PositionCategory] = {
    # Goalkeepers
    "portero": PositionCategory.GOALKEEPER,
    "arquero": PositionCategory.GOALKEEPER,
    "goalkeeper": PositionCategory.GOALKEEPER,
    "keeper": PositionCategory.GOALKEEPER,
    "gk": PositionCategory.GOALKEEPER,
    "por": PositionCategory.GOALKEEPER,
    "g": PositionCategory.GOALKEEPER,
    # Defenders
    "defensa": PositionCategory.DEFENDER,
    "defensor": PositionCategory.DEFENDER,
    "defender": PositionCategory.DEFENDER,
    "def": PositionCategory.DEFENDER,
    "d": PositionCategory.DEFENDER,
    "cb": PositionCategory.DEFENDER,
    "lb": PositionCategory.DEFENDER,
    "rb": PositionCategory.DEFENDER,
    "lateral": PositionCategory.DEFENDER,
    # Midfielders
    "mediocentro": PositionCategory.MIDFIELDER,
    "centrocampista": PositionCategory.MIDFIELDER,
    "medio": PositionCategory.MIDFIELDER,
    "midfielder": PositionCategory.MIDFIELDER,
    "med": PositionCategory.MIDFIELDER,
    "mid": PositionCategory.MIDFIELDER,
    "m": PositionCategory.MIDFIELDER,
    "cm": PositionCategory.MIDFIELDER,
    "dm": PositionCategory.MIDFIELDER,
    "am": PositionCategory.MIDFIELDER,
    "lm": PositionCategory.MIDFIELDER,
    "rm": PositionCategory.MIDFIELDER,
    # Forwards
    "delantero": PositionCategory.FORWARD,
    "forward": PositionCategory.FORWARD,
    "striker": PositionCategory.FORWARD,
    "del": PositionCategory.FORWARD,
    "fwd": PositionCategory.FORWARD,
    "fw": PositionCategory.FORWARD,
    "f": PositionCategory.FORWARD,
    "st": PositionCategory.FORWARD,
    "cf": PositionCategory.FORWARD,
}

LINE_ALIASES: dict[str, LineType] = {
    "gk": LineType.GK,
    "por": LineType.GK,
    "def": LineType.DEF,
    "mid": LineType.MID,
    "med": LineType.MID,
    "fwd": LineType.FWD,
    "del": LineType.FWD,
    "bench": LineType.BENCH,
}


def _normalize(value: str) -> str:
    value = value.lower().strip()
    value = re.sub(r"[-_/()]+", " ", value)
    value = re.sub(r"\s+", " ", value)
    return value


def normalize_position(value: str | PositionCategory | None) -> PositionCategory:
    """
    Map a natural position string to its category.

    Accepts the club's Spanish vocabulary ("Portero", "DEFENSA"), English names
    and short codes. Anything unmapped becomes UNKNOWN.
    """
    if isinstance(value, PositionCategory):
        return value
    if not isinstance(value, str) or not value.strip():
        return PositionCategory.UNKNOWN

    normalized = _normalize(value)
    mapped = POSITION_ALIASES.get(normalized)
    if mapped:
        return mapped

    try:
        return PositionCategory(normalized)
    except ValueError:
        return PositionCategory.UNKNOWN


def line_for_position(position: str | PositionCategory | None) -> LineType | None:
    """Field line a natural position belongs to, None when unknown."""
    return POSITION_TO_LINE.get(normalize_position(position))


def parse_line(value: str | LineType) -> LineType:
    """Parse a line code in either vocabulary (POR/GK, MED/MID, DEL/FWD)."""
    if isinstance(value, LineType):
        return value
    if isinstance(value, str):
        line = LINE_ALIASES.get(value.strip().lower())
        if line:
            return line
    raise ValueError(f"Unknown line: {value!r}")


def is_position_compatible(position: str | PositionCategory | None, line: LineType) -> bool:
    """Strict-mode check: natural position must map to the slot's line."""
    if line == LineType.BENCH:
        return True
    expected = line_for_position(position)
    return expected is not None and expected == line
