"""
Attendance snapshot consumed by the lineup.

Attendance is owned by the host application. The lineup only reads a
snapshot and reacts to transitions: newly confirmed players are
auto-assigned, newly absent players are taken out of the lineup.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from app.services.lineup import AttendanceStatus, Lineup, PlayerRef
from app.services.lineup_operations import LineupOperations
from app.utils.positions import LineType, is_position_compatible

logger = logging.getLogger(__name__)

__all__ = [
    "AttendanceStatus",
    "AttendanceMap",
    "AttendanceSyncResult",
    "CallupSummary",
    "OccupantFlag",
    "categorize_callup",
    "confirmed_transitions",
    "absent_transitions",
    "flag_occupants",
    "sync_attendance",
]


def _coerce_status(value: Any, player_id: str) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value).strip().lower())
    except ValueError:
        logger.warning(f"Unknown attendance status {value!r} for player {player_id}, treating as pending")
        return AttendanceStatus.PENDING


class AttendanceMap(Mapping[str, AttendanceStatus]):
    """Read-only player id → status snapshot. Missing players read as pending."""

    def __init__(self, statuses: Mapping[str, AttendanceStatus | str] | None = None):
        self._statuses: dict[str, AttendanceStatus] = {
            str(pid): _coerce_status(status, str(pid)) for pid, status in (statuses or {}).items()
        }

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> AttendanceMap:
        """
        Build from attendance rows as served by the club API.

        Rows carry the player under `userId` (club API) or `player_id`.
        Rows without a player id are skipped.
        """
        statuses: dict[str, AttendanceStatus | str] = {}
        for record in records:
            player_id = record.get("userId") or record.get("player_id") or record.get("playerId")
            if not player_id:
                logger.warning(f"Skipping attendance record without player id: {record!r}")
                continue
            statuses[str(player_id)] = record.get("status", AttendanceStatus.PENDING)
        return cls(statuses)

    def __getitem__(self, player_id: str) -> AttendanceStatus:
        return self._statuses[player_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._statuses)

    def __len__(self) -> int:
        return len(self._statuses)

    def __repr__(self) -> str:
        return f"AttendanceMap({self._statuses!r})"

    def status_of(self, player_id: str) -> AttendanceStatus:
        return self._statuses.get(player_id, AttendanceStatus.PENDING)

    def with_status(self, player_id: str, status: AttendanceStatus | str) -> AttendanceMap:
        statuses = dict(self._statuses)
        statuses[player_id] = _coerce_status(status, player_id)
        return AttendanceMap(statuses)

    def ids_with_status(self, status: AttendanceStatus) -> list[str]:
        return [pid for pid, s in self._statuses.items() if s == status]


def _transitions(
    previous: AttendanceMap | None,
    current: AttendanceMap,
    status: AttendanceStatus,
) -> list[str]:
    return [
        pid
        for pid in current.ids_with_status(status)
        if previous is None or previous.status_of(pid) != status
    ]


def confirmed_transitions(previous: AttendanceMap | None, current: AttendanceMap) -> list[str]:
    """Players confirmed in `current` but not in `previous` (all confirmed when no previous)."""
    return _transitions(previous, current, AttendanceStatus.CONFIRMED)


def absent_transitions(previous: AttendanceMap | None, current: AttendanceMap) -> list[str]:
    return _transitions(previous, current, AttendanceStatus.ABSENT)


@dataclass
class AttendanceSyncResult:
    auto_assigned: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    already_placed: list[str] = field(default_factory=list)


def sync_attendance(
    operations: LineupOperations,
    roster: Iterable[PlayerRef],
    previous: AttendanceMap | None,
    current: AttendanceMap,
    *,
    remove_absent: bool = True,
) -> AttendanceSyncResult:
    """
    React to attendance changes between two snapshots.

    Roster players that became confirmed and are not placed are auto-assigned.
    With `remove_absent`, players that became absent leave the lineup.
    Players missing from the roster are ignored.
    """
    result = AttendanceSyncResult()
    newly_confirmed = set(confirmed_transitions(previous, current))
    newly_absent = set(absent_transitions(previous, current)) if remove_absent else set()
    lineup = operations.lineup

    for player in roster:
        pid = player.player_id
        if pid in newly_absent:
            if operations.remove_player(pid).changed:
                result.removed.append(pid)
        elif pid in newly_confirmed:
            if lineup.find_player_position(pid) is not None:
                result.already_placed.append(pid)
                continue
            operations.auto_assign_player(player)
            result.auto_assigned.append(pid)

    if result.auto_assigned or result.removed:
        logger.info(
            f"Attendance sync: {len(result.auto_assigned)} auto-assigned, {len(result.removed)} removed"
        )
    return result


@dataclass
class CallupSummary:
    confirmed: list[PlayerRef] = field(default_factory=list)
    pending: list[PlayerRef] = field(default_factory=list)
    absent: list[PlayerRef] = field(default_factory=list)
    total: int = 0

    @property
    def all(self) -> list[PlayerRef]:
        return self.confirmed + self.pending + self.absent

    def counts(self) -> dict[str, int]:
        return {
            "confirmed": len(self.confirmed),
            "pending": len(self.pending),
            "absent": len(self.absent),
            "total": self.total,
        }


def _matches_search(player: PlayerRef, term: str) -> bool:
    if not term:
        return True
    if term in player.name.lower():
        return True
    return player.shirt_number is not None and term in str(player.shirt_number)


def categorize_callup(
    roster: Iterable[PlayerRef],
    attendance: AttendanceMap,
    search: str = "",
) -> CallupSummary:
    """
    Split the squad by attendance status, filtered by name or shirt number.

    `total` counts the whole roster regardless of the search term.
    """
    roster = list(roster)
    term = search.strip().lower()
    summary = CallupSummary(total=len(roster))
    buckets = {
        AttendanceStatus.CONFIRMED: summary.confirmed,
        AttendanceStatus.PENDING: summary.pending,
        AttendanceStatus.ABSENT: summary.absent,
    }
    for player in roster:
        if _matches_search(player, term):
            buckets[attendance.status_of(player.player_id)].append(player)
    return summary


@dataclass(frozen=True)
class OccupantFlag:
    player_id: str
    line: LineType
    index: int
    status: AttendanceStatus
    out_of_position: bool

    @property
    def unconfirmed(self) -> bool:
        return self.status != AttendanceStatus.CONFIRMED


def flag_occupants(lineup: Lineup, attendance: AttendanceMap) -> list[OccupantFlag]:
    """Field occupants that are not confirmed or play outside their natural line."""
    flags = []
    for slot in lineup.iter_slots():
        player = slot.occupant
        if player is None:
            continue
        status = attendance.status_of(player.player_id)
        out_of_position = not is_position_compatible(player.position, slot.line)
        if status != AttendanceStatus.CONFIRMED or out_of_position:
            flags.append(
                OccupantFlag(
                    player_id=player.player_id,
                    line=slot.line,
                    index=slot.index,
                    status=status,
                    out_of_position=out_of_position,
                )
            )
    return flags
