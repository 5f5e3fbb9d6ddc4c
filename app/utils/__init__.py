"""Utility functions."""

from app.utils.error_messages import get_error_message
from app.utils.formations import (
    Formation,
    FormationShape,
    GameMode,
    default_formation,
    get_formation,
    get_formations_by_game_mode,
    resolve_formation,
)
from app.utils.positions import (
    FIELD_LINES,
    LineType,
    PositionCategory,
    is_position_compatible,
    line_for_position,
    normalize_position,
    parse_line,
)

__all__ = [
    "get_error_message",
    "Formation",
    "FormationShape",
    "GameMode",
    "default_formation",
    "get_formation",
    "get_formations_by_game_mode",
    "resolve_formation",
    "FIELD_LINES",
    "LineType",
    "PositionCategory",
    "is_position_compatible",
    "line_for_position",
    "normalize_position",
    "parse_line",
]
