"""Normalize roster records from the club API into `PlayerRef`."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from app.services.exceptions import InvalidRosterRecordError
from app.services.lineup import PlayerRef

logger = logging.getLogger(__name__)

DEFAULT_PLAYER_NAME = "Sin nombre"
DEFAULT_SHIRT_NUMBER = 0
DEFAULT_POSITION = "DEFENSA"

_ID_KEYS = ("player_id", "playerId", "id")
_NAME_KEYS = ("name", "playerName")
_NUMBER_KEYS = ("shirt_number", "jerseyNumber", "number", "playerNumber")
_POSITION_KEYS = ("position", "playerPosition")


def _first(record: Any, keys: tuple[str, ...]) -> Any:
    for key in keys:
        if isinstance(record, Mapping):
            value = record.get(key)
        else:
            value = getattr(record, key, None)
        if value is not None and value != "":
            return value
    return None


def _parse_shirt_number(value: Any) -> int:
    if value is None:
        return DEFAULT_SHIRT_NUMBER
    try:
        return int(str(value).strip())
    except ValueError:
        logger.warning(f"Invalid shirt number {value!r}, using {DEFAULT_SHIRT_NUMBER}")
        return DEFAULT_SHIRT_NUMBER


def player_ref_from_record(record: Any) -> PlayerRef:
    """
    Build a PlayerRef from a roster row (mapping or object).

    Missing name, number and position fall back to the club defaults.
    A record without an id is rejected.
    """
    if isinstance(record, PlayerRef):
        return record

    player_id = _first(record, _ID_KEYS)
    if player_id is None:
        raise InvalidRosterRecordError(f"Roster record has no player id: {record!r}")

    name = _first(record, _NAME_KEYS) or DEFAULT_PLAYER_NAME
    position = _first(record, _POSITION_KEYS) or DEFAULT_POSITION
    return PlayerRef(
        player_id=str(player_id),
        name=str(name),
        shirt_number=_parse_shirt_number(_first(record, _NUMBER_KEYS)),
        position=str(position).upper(),
    )


def normalize_roster(records: Iterable[Any]) -> list[PlayerRef]:
    """Normalize a roster, keeping the first occurrence of each player id."""
    roster: list[PlayerRef] = []
    seen: set[str] = set()
    for record in records:
        player = player_ref_from_record(record)
        if player.player_id in seen:
            logger.warning(f"Duplicate roster entry for player {player.player_id}, keeping the first")
            continue
        seen.add(player.player_id)
        roster.append(player)
    return roster
