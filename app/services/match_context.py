"""
Match contexts: one lineup per open match.

A `MatchSheet` owns the lineup, the roster and the latest attendance
snapshot for one match. The registry keeps the open sheets in memory; nothing
here is persisted.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Iterable, Mapping
from typing import Any

from app.config import get_settings
from app.services.attendance import AttendanceMap, AttendanceSyncResult, sync_attendance
from app.services.exceptions import MatchNotFoundError, PlayerNotFoundError
from app.services.lineup import AttendanceStatus, Lineup, PlayerRef
from app.services.lineup_operations import LineupOperations
from app.services.roster import normalize_roster
from app.utils.formations import (
    Formation,
    GameMode,
    default_formation,
    get_formation,
    parse_game_mode,
    resolve_formation,
)
from app.utils.positions import LineType, parse_line

logger = logging.getLogger(__name__)


def _as_attendance(attendance: AttendanceMap | Mapping[str, Any] | Iterable[Mapping[str, Any]] | None) -> AttendanceMap:
    if attendance is None:
        return AttendanceMap()
    if isinstance(attendance, AttendanceMap):
        return attendance
    if isinstance(attendance, Mapping):
        return AttendanceMap(attendance)
    return AttendanceMap.from_records(attendance)


class MatchSheet:
    """Lineup plus roster/attendance context for a single match."""

    def __init__(
        self,
        match_id: str,
        *,
        formation: Formation | None = None,
        game_mode: GameMode | str = GameMode.ELEVEN,
        strict: bool = True,
        sort_bench: bool = True,
        remove_absent: bool = True,
    ):
        self.match_id = match_id
        formation = formation or default_formation(game_mode)
        self.lineup = Lineup.empty(formation)
        self.roster: list[PlayerRef] = []
        self.attendance = AttendanceMap()
        self.strict = strict
        self.sort_bench = sort_bench
        self.remove_absent = remove_absent

    @property
    def game_mode(self) -> GameMode:
        return self.lineup.game_mode

    def operations(self) -> LineupOperations:
        return LineupOperations(self.lineup, strict=self.strict, sort_bench=self.sort_bench)

    def player(self, player_id: str) -> PlayerRef:
        for player in self.roster:
            if player.player_id == player_id:
                return player
        raise PlayerNotFoundError(player_id)

    def slot_candidates(self, line: LineType | str, slot_index: int = 0) -> list[PlayerRef] | None:
        """
        Players to offer when a slot is selected. None if the slot does not exist.

        An occupied slot offers the bench (substitution). An empty slot offers
        every roster player who is not on the field and not absent. Both lists
        go through the strict-mode filter of `LineupOperations`.
        """
        line = parse_line(line)
        slot = self.lineup.slot(line, slot_index)
        if slot is None:
            return None

        if slot.occupant is not None:
            pool = list(self.lineup.bench)
        else:
            on_field = {p.player_id for p in self.lineup.field_players()}
            pool = [
                p
                for p in self.roster
                if p.player_id not in on_field
                and self.attendance.status_of(p.player_id) != AttendanceStatus.ABSENT
            ]
        return self.operations().compatible_candidates(pool, line)

    def set_roster(self, records: Iterable[Any]) -> None:
        self.roster = normalize_roster(records)

    def set_strict(self, enabled: bool) -> None:
        self.strict = enabled
        logger.info(f"Match {self.match_id}: strict positions {'on' if enabled else 'off'}")

    def update_attendance(self, attendance: AttendanceMap | Mapping[str, Any] | Iterable[Mapping[str, Any]]) -> AttendanceSyncResult:
        """Replace the attendance snapshot and react to the transitions."""
        current = _as_attendance(attendance)
        previous = self.attendance
        result = sync_attendance(
            self.operations(),
            self.roster,
            previous,
            current,
            remove_absent=self.remove_absent,
        )
        self.attendance = current
        return result

    def reseed(
        self,
        roster: Iterable[Any],
        attendance: AttendanceMap | Mapping[str, Any] | Iterable[Mapping[str, Any]] | None = None,
        formation: Formation | None = None,
    ) -> AttendanceSyncResult:
        """Reset the lineup and auto-assign every confirmed roster player."""
        self.set_roster(roster)
        self.operations().reset_lineup(formation or self._current_formation())
        self.attendance = AttendanceMap()
        return self.update_attendance(attendance)

    def change_game_mode(self, game_mode: GameMode | str) -> bool:
        """
        Switch between 11 and 7-a-side.

        The current formation is re-resolved for the new mode and the lineup is
        reset and re-seeded from the confirmed players. Returns False when the
        mode is unchanged.
        """
        mode = parse_game_mode(game_mode)
        if mode == self.lineup.game_mode:
            return False
        formation = resolve_formation(mode, self.lineup.formation_id)
        attendance = self.attendance
        self.operations().reset_lineup(formation)
        self.attendance = AttendanceMap()
        self.update_attendance(attendance)
        logger.info(f"Match {self.match_id}: game mode {mode.value}, formation {formation.id}")
        return True

    def _current_formation(self) -> Formation:
        return resolve_formation(self.lineup.game_mode, self.lineup.formation_id)


class MatchContextRegistry:
    """
    Open match sheets keyed by match id.

    Opening a match that is already open resets and re-seeds it from the new
    roster and attendance.
    """

    def __init__(
        self,
        max_open_matches: int = 100,
        *,
        strict: bool = True,
        sort_bench: bool = True,
        remove_absent: bool = True,
    ):
        self.max_open_matches = max_open_matches
        self.strict = strict
        self.sort_bench = sort_bench
        self.remove_absent = remove_absent
        self._sheets: OrderedDict[str, MatchSheet] = OrderedDict()

    def open(
        self,
        match_id: str,
        roster: Iterable[Any] = (),
        attendance: AttendanceMap | Mapping[str, Any] | Iterable[Mapping[str, Any]] | None = None,
        *,
        game_mode: GameMode | str = GameMode.ELEVEN,
        formation_id: str | None = None,
        strict: bool | None = None,
    ) -> MatchSheet:
        mode = parse_game_mode(game_mode)
        formation = get_formation(formation_id, mode) if formation_id else default_formation(mode)

        sheet = MatchSheet(
            match_id,
            formation=formation,
            strict=self.strict if strict is None else strict,
            sort_bench=self.sort_bench,
            remove_absent=self.remove_absent,
        )
        result = sheet.reseed(roster, attendance, formation)

        replaced = self._sheets.pop(match_id, None) is not None
        self._sheets[match_id] = sheet
        self._evict()
        logger.info(
            f"{'Re-opened' if replaced else 'Opened'} lineup for match {match_id} "
            f"({formation.id}, {len(sheet.roster)} players, {len(result.auto_assigned)} auto-assigned)"
        )
        return sheet

    def get(self, match_id: str) -> MatchSheet:
        sheet = self._sheets.get(match_id)
        if sheet is None:
            raise MatchNotFoundError(match_id)
        self._sheets.move_to_end(match_id)
        return sheet

    def close(self, match_id: str) -> bool:
        closed = self._sheets.pop(match_id, None) is not None
        if closed:
            logger.info(f"Closed lineup for match {match_id}")
        return closed

    def clear(self) -> None:
        self._sheets.clear()

    def match_ids(self) -> list[str]:
        return list(self._sheets.keys())

    def __contains__(self, match_id: object) -> bool:
        return match_id in self._sheets

    def __len__(self) -> int:
        return len(self._sheets)

    def _evict(self) -> None:
        while len(self._sheets) > self.max_open_matches:
            match_id, _ = self._sheets.popitem(last=False)
            logger.info(f"Evicted lineup for match {match_id}")


# Global singleton instance
_registry: MatchContextRegistry | None = None


def get_match_registry() -> MatchContextRegistry:
    """Get the process-wide match context registry."""
    global _registry
    if _registry is None:
        settings = get_settings()
        _registry = MatchContextRegistry(
            settings.max_open_matches,
            strict=settings.strict_positions,
            sort_bench=settings.sort_bench_by_number,
            remove_absent=settings.remove_absent_from_lineup,
        )
    return _registry
