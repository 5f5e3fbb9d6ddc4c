"""
Formation catalog for 11-a-side and 7-a-side football.

Each formation fixes the slot count per field line. The goalkeeper line always
has exactly one slot. Pure data, no I/O.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from app.services.exceptions import FormationNotFoundError
from app.utils.positions import LineType


class GameMode(str, enum.Enum):
    ELEVEN = "11"
    SEVEN = "7"


@dataclass(frozen=True)
class FormationShape:
    defenders: int
    midfielders: int
    forwards: int

    @property
    def total_slots(self) -> int:
        return 1 + self.defenders + self.midfielders + self.forwards

    def counts(self) -> dict[LineType, int]:
        return {
            LineType.GK: 1,
            LineType.DEF: self.defenders,
            LineType.MID: self.midfielders,
            LineType.FWD: self.forwards,
        }

    def is_valid(self) -> bool:
        return min(self.defenders, self.midfielders, self.forwards) >= 0


@dataclass(frozen=True)
class Formation:
    id: str
    name: str
    game_mode: GameMode
    shape: FormationShape
    description: str | None = None


def _f11(formation_id: str, d: int, m: int, f: int, description: str, name: str | None = None) -> Formation:
    return Formation(formation_id, name or formation_id, GameMode.ELEVEN, FormationShape(d, m, f), description)


def _f7(formation_id: str, d: int, m: int, f: int, description: str) -> Formation:
    return Formation(formation_id, formation_id, GameMode.SEVEN, FormationShape(d, m, f), description)


# Line counts follow the club's formation sheet, including the youth
# layouts whose names carry more lines than the pitch has.
FORMATIONS_11: tuple[Formation, ...] = (
    _f11("2-2-2-2-2", 2, 2, 2, "Formación juvenil con líneas equilibradas"),
    _f11("3-2-3-2", 3, 2, 3, "Sistema ofensivo con 3 defensores"),
    _f11("3-3-2-2", 3, 3, 2, "Equilibrio con medio campo fuerte"),
    _f11("3-3-3-1", 3, 3, 1, "Un delantero de referencia con apoyo desde atrás"),
    _f11("3-4-1-2", 3, 4, 1, "Medio campo poblado con un delantero"),
    _f11("3-4-2-1", 3, 4, 1, "Sistema con mediapunta y delantero"),
    _f11("3-4-3", 3, 4, 3, "Sistema ofensivo clásico"),
    _f11("3-4-3-diamond", 3, 4, 3, "Variante con medio campo en rombo", name="3-4-3 sistema (de diamante)"),
    _f11("3-5-2", 3, 5, 2, "Control del centro del campo"),
    _f11("4-1-3-2", 4, 1, 3, "Pivote defensivo con creativos arriba"),
    _f11("4-1-4-1", 4, 1, 4, "Línea defensiva sólida con banda"),
    _f11("4-2-2-2", 4, 2, 2, "Sistema equilibrado línea por línea"),
    _f11("4-4-2", 4, 4, 2, "Formación clásica y equilibrada"),
    _f11("4-3-3", 4, 3, 3, "Sistema ofensivo moderno"),
)

FORMATIONS_7: tuple[Formation, ...] = (
    _f7("2-3-1", 2, 3, 1, "Sistema equilibrado - Más control del medio campo"),
    _f7("3-2-1", 3, 2, 1, "Sistema defensivo - Mayor presencia atrás"),
    _f7("1-3-2", 1, 3, 2, "Sistema versátil - Equilibrio defensivo-ofensivo"),
    _f7("2-1-2-1", 2, 1, 2, "Sistema dinámico - Transiciones rápidas"),
    _f7("1-1-3-1", 1, 1, 3, "Sistema arriesgado - Contraataques rápidos"),
    _f7("2-2-2", 2, 2, 2, "Sistema ofensivo - Juego dinámico y divertido"),
)

FORMATIONS_BY_MODE: dict[GameMode, tuple[Formation, ...]] = {
    GameMode.ELEVEN: FORMATIONS_11,
    GameMode.SEVEN: FORMATIONS_7,
}

DEFAULT_FORMATION_IDS: dict[GameMode, str] = {
    GameMode.ELEVEN: "4-4-2",
    GameMode.SEVEN: "2-3-1",
}


def parse_game_mode(value: str | int | GameMode) -> GameMode:
    if isinstance(value, GameMode):
        return value
    try:
        return GameMode(str(value).strip())
    except ValueError:
        raise ValueError(f"Unsupported game mode: {value!r}") from None


def get_formations_by_game_mode(mode: str | int | GameMode) -> list[Formation]:
    """All formations for a game mode, in catalog order. Never empty."""
    return list(FORMATIONS_BY_MODE[parse_game_mode(mode)])


def get_formation(formation_id: str, game_mode: str | int | GameMode | None = None) -> Formation:
    modes = [parse_game_mode(game_mode)] if game_mode is not None else list(GameMode)
    for mode in modes:
        for formation in FORMATIONS_BY_MODE[mode]:
            if formation.id == formation_id:
                return formation
    raise FormationNotFoundError(formation_id)


def default_formation(mode: str | int | GameMode) -> Formation:
    mode = parse_game_mode(mode)
    return get_formation(DEFAULT_FORMATION_IDS[mode], mode)


def resolve_formation(mode: str | int | GameMode, formation_id: str | None = None) -> Formation:
    """
    Requested formation if it belongs to `mode`, otherwise the mode default.

    Used after a game mode change, when the previous selection may no longer
    be valid.
    """
    mode = parse_game_mode(mode)
    if formation_id:
        for formation in FORMATIONS_BY_MODE[mode]:
            if formation.id == formation_id:
                return formation
    return default_formation(mode)
