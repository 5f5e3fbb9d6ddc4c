"""
In-memory lineup state for a single match.

The aggregate holds one slot array per field line plus an ordered bench.
It only exposes read accessors; every write goes through
`app.services.lineup_operations.LineupOperations`.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from app.utils.formations import Formation, FormationShape, GameMode
from app.utils.positions import (
    FIELD_LINES,
    LineType,
    PositionCategory,
    is_position_compatible,
    line_for_position,
    normalize_position,
)


class AttendanceStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ABSENT = "absent"


@dataclass(frozen=True)
class PlayerRef:
    """Roster player as seen by the lineup. Identity never changes once placed."""

    player_id: str
    name: str
    shirt_number: int | None = None
    position: str = ""

    @property
    def category(self) -> PositionCategory:
        return normalize_position(self.position)

    @property
    def line(self) -> LineType | None:
        return line_for_position(self.position)


@dataclass
class Slot:
    line: LineType
    index: int
    occupant: PlayerRef | None = None

    @property
    def is_empty(self) -> bool:
        return self.occupant is None


@dataclass(frozen=True)
class PlayerLocation:
    line: LineType
    index: int | None = None

    @property
    def on_bench(self) -> bool:
        return self.line == LineType.BENCH


@dataclass(frozen=True)
class SlotOccupancy:
    filled: int
    total: int

    @property
    def free(self) -> int:
        return self.total - self.filled


def _empty_slots(line: LineType, count: int) -> list[Slot]:
    return [Slot(line=line, index=i) for i in range(count)]


@dataclass
class Lineup:
    game_mode: GameMode
    formation_id: str | None
    lines: dict[LineType, list[Slot]]
    bench: list[PlayerRef] = field(default_factory=list)

    @classmethod
    def from_shape(
        cls,
        shape: FormationShape,
        game_mode: GameMode = GameMode.ELEVEN,
        formation_id: str | None = None,
    ) -> Lineup:
        counts = shape.counts()
        return cls(
            game_mode=game_mode,
            formation_id=formation_id,
            lines={line: _empty_slots(line, counts[line]) for line in FIELD_LINES},
        )

    @classmethod
    def empty(cls, formation: Formation) -> Lineup:
        return cls.from_shape(formation.shape, formation.game_mode, formation.id)

    # ----- structure -----

    @property
    def shape(self) -> FormationShape:
        return FormationShape(
            defenders=len(self.lines[LineType.DEF]),
            midfielders=len(self.lines[LineType.MID]),
            forwards=len(self.lines[LineType.FWD]),
        )

    def slots(self, line: LineType) -> list[Slot]:
        if line == LineType.BENCH:
            return []
        return self.lines[line]

    def slot(self, line: LineType, index: int) -> Slot | None:
        slots = self.slots(line)
        if 0 <= index < len(slots):
            return slots[index]
        return None

    def iter_slots(self) -> Iterator[Slot]:
        for line in FIELD_LINES:
            yield from self.lines[line]

    def field_players(self) -> list[PlayerRef]:
        return [s.occupant for s in self.iter_slots() if s.occupant is not None]

    def all_player_ids(self) -> list[str]:
        """Ids of every placed player (field then bench), duplicates included."""
        return [p.player_id for p in self.field_players()] + [p.player_id for p in self.bench]

    def bench_index(self, player_id: str) -> int | None:
        for i, player in enumerate(self.bench):
            if player.player_id == player_id:
                return i
        return None

    # ----- read accessors -----

    def get_slot_occupancy(self, line: LineType | None = None) -> SlotOccupancy:
        """Filled vs total slots for one line, or for the whole field."""
        if line == LineType.BENCH:
            return SlotOccupancy(filled=len(self.bench), total=len(self.bench))

        slots = list(self.iter_slots()) if line is None else self.lines[line]
        filled = sum(1 for s in slots if s.occupant is not None)
        return SlotOccupancy(filled=filled, total=len(slots))

    def find_player_position(self, player_id: str) -> PlayerLocation | None:
        for slot in self.iter_slots():
            if slot.occupant is not None and slot.occupant.player_id == player_id:
                return PlayerLocation(line=slot.line, index=slot.index)

        if self.bench_index(player_id) is not None:
            return PlayerLocation(line=LineType.BENCH)

        return None

    def get_available_bench_players(
        self,
        line: LineType | None = None,
        *,
        strict: bool = False,
        attendance: Mapping[str, AttendanceStatus] | None = None,
    ) -> list[PlayerRef]:
        """
        Bench players in bench order.

        With `attendance`, only confirmed players are returned. With `strict`
        and a field `line`, only players whose natural position fits that line.
        """
        players = list(self.bench)
        if attendance is not None:
            players = [p for p in players if attendance.get(p.player_id) == AttendanceStatus.CONFIRMED]
        if strict and line is not None:
            players = [p for p in players if is_position_compatible(p.position, line)]
        return players

    def snapshot(self) -> tuple:
        """Comparable structural copy: formation, occupant ids per line, bench ids."""
        lines = tuple(
            (line.value, tuple(s.occupant.player_id if s.occupant else None for s in self.lines[line]))
            for line in FIELD_LINES
        )
        return (
            self.game_mode.value,
            self.formation_id,
            lines,
            tuple(p.player_id for p in self.bench),
        )

    def copy(self) -> Lineup:
        return Lineup(
            game_mode=self.game_mode,
            formation_id=self.formation_id,
            lines={
                line: [Slot(line=s.line, index=s.index, occupant=s.occupant) for s in slots]
                for line, slots in self.lines.items()
            },
            bench=list(self.bench),
        )
