"""
Assignment operations over a `Lineup`.

All mutation of slots and bench goes through `LineupOperations`. Operations
never raise for rejected actions; they return an `OperationResult` whose
`reason` is an error key for `app.utils.error_messages.get_error_message`.
A rejected operation leaves the lineup untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from app.services.lineup import Lineup, PlayerRef, Slot
from app.utils.formations import Formation, FormationShape, default_formation, parse_game_mode
from app.utils.positions import FIELD_LINES, LineType, is_position_compatible, parse_line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationResult:
    ok: bool
    reason: str | None = None
    changed: bool = False

    @classmethod
    def success(cls, changed: bool = True) -> OperationResult:
        return cls(ok=True, changed=changed)

    @classmethod
    def failure(cls, reason: str) -> OperationResult:
        return cls(ok=False, reason=reason)

    def __bool__(self) -> bool:
        return self.ok


def _bench_sort_key(player: PlayerRef) -> tuple[int, int]:
    # Players without a shirt number go last
    if player.shirt_number is None:
        return (1, 0)
    return (0, player.shirt_number)


class LineupOperations:
    """
    Write access to one lineup under a placement policy.

    `strict` requires a player's natural position to match the slot line for
    direct assignment and substitution. `sort_bench` keeps the bench ordered
    by shirt number; otherwise players are appended in arrival order.
    """

    def __init__(self, lineup: Lineup, *, strict: bool = False, sort_bench: bool = False):
        self.lineup = lineup
        self.strict = strict
        self.sort_bench = sort_bench

    # ----- internal helpers -----

    def _add_to_bench(self, player: PlayerRef) -> None:
        self.lineup.bench.append(player)
        if self.sort_bench:
            self.lineup.bench.sort(key=_bench_sort_key)

    def _clear_player(self, player_id: str) -> PlayerRef | None:
        """Remove every occurrence of `player_id` from slots and bench."""
        found: PlayerRef | None = None
        for slot in self.lineup.iter_slots():
            if slot.occupant is not None and slot.occupant.player_id == player_id:
                found = slot.occupant
                slot.occupant = None

        remaining = []
        for player in self.lineup.bench:
            if player.player_id == player_id:
                found = found or player
            else:
                remaining.append(player)
        self.lineup.bench[:] = remaining
        return found

    def _check_placement(self, player: PlayerRef, line: LineType, slot_index: int) -> str | None:
        if self.lineup.slot(line, slot_index) is None:
            return "slot_not_found"
        if self.strict and not is_position_compatible(player.position, line):
            return "position_mismatch"
        return None

    # ----- read-only helpers for the presentation layer -----

    def can_place_in_slot(self, player: PlayerRef, line: LineType | str, slot_index: int = 0) -> bool:
        """Slot exists, is empty and accepts the player under the current policy."""
        try:
            line = parse_line(line)
        except ValueError:
            return False
        if line == LineType.BENCH:
            return True
        if self._check_placement(player, line, slot_index) is not None:
            return False
        return self.lineup.slot(line, slot_index).is_empty

    def compatible_candidates(self, candidates: Iterable[PlayerRef], line: LineType | str) -> list[PlayerRef]:
        """
        Candidates to offer for a slot in `line`.

        Under strict mode only players whose natural position fits a field
        line are offered, the same rule `assign_player_to_slot` and
        `swap_player_with_bench` enforce. The bench accepts everyone.
        """
        line = parse_line(line)
        candidates = list(candidates)
        if line == LineType.BENCH or not self.strict:
            return candidates
        return [p for p in candidates if is_position_compatible(p.position, line)]

    # ----- operations -----

    def assign_player_to_slot(
        self,
        player: PlayerRef,
        line: LineType | str,
        slot_index: int = 0,
        game_mode: str | None = None,
    ) -> OperationResult:
        """
        Place `player` at `line[slot_index]`.

        The player's previous location is cleared first. A previous occupant
        of the target slot is displaced to the bench.
        """
        try:
            line = parse_line(line)
        except ValueError:
            return OperationResult.failure("invalid_line")

        if game_mode is not None:
            try:
                mode = parse_game_mode(game_mode)
            except ValueError:
                return OperationResult.failure("invalid_game_mode")
            if mode != self.lineup.game_mode:
                return OperationResult.failure("game_mode_mismatch")

        if line == LineType.BENCH:
            self._clear_player(player.player_id)
            self._add_to_bench(player)
            return OperationResult.success()

        reason = self._check_placement(player, line, slot_index)
        if reason:
            logger.info(f"Rejected assignment of {player.player_id} to {line.value}[{slot_index}]: {reason}")
            return OperationResult.failure(reason)

        target = self.lineup.slot(line, slot_index)
        displaced = target.occupant
        if displaced is not None and displaced.player_id == player.player_id:
            return OperationResult.success(changed=False)

        self._clear_player(player.player_id)
        target.occupant = player
        if displaced is not None:
            self._add_to_bench(displaced)
            logger.debug(f"Displaced {displaced.player_id} from {line.value}[{slot_index}] to bench")

        logger.debug(f"Assigned {player.player_id} to {line.value}[{slot_index}]")
        return OperationResult.success()

    def move_to_bench(self, player_id: str) -> OperationResult:
        location = self.lineup.find_player_position(player_id)
        if location is None or location.on_bench:
            return OperationResult.success(changed=False)

        slot = self.lineup.slot(location.line, location.index)
        player = slot.occupant
        slot.occupant = None
        self._add_to_bench(player)
        logger.debug(f"Moved {player_id} from {location.line.value}[{location.index}] to bench")
        return OperationResult.success()

    def swap_player_with_bench(self, field_player_id: str, bench_player_id: str) -> OperationResult:
        """Substitution: the bench player takes the field slot, the field player sits."""
        location = self.lineup.find_player_position(field_player_id)
        if location is None or location.on_bench:
            return OperationResult.failure("field_player_not_found")

        bench_index = self.lineup.bench_index(bench_player_id)
        if bench_index is None:
            return OperationResult.failure("bench_player_not_found")

        bench_player = self.lineup.bench[bench_index]
        if self.strict and not is_position_compatible(bench_player.position, location.line):
            logger.info(
                f"Rejected swap {field_player_id} <-> {bench_player_id}: "
                f"{bench_player.position!r} does not fit {location.line.value}"
            )
            return OperationResult.failure("position_mismatch")

        slot = self.lineup.slot(location.line, location.index)
        field_player = slot.occupant
        slot.occupant = bench_player
        if self.sort_bench:
            del self.lineup.bench[bench_index]
            self._add_to_bench(field_player)
        else:
            self.lineup.bench[bench_index] = field_player

        logger.debug(f"Swapped {field_player_id} out for {bench_player_id} at {location.line.value}[{location.index}]")
        return OperationResult.success()

    def auto_assign_player(self, player: PlayerRef) -> OperationResult:
        """
        Place a newly confirmed player in the first empty slot of their line.

        Never displaces anyone. Falls back to the bench when the line is full
        or the position is unknown. No-op if the player is already placed.
        """
        if self.lineup.find_player_position(player.player_id) is not None:
            return OperationResult.success(changed=False)

        line = player.line
        if line is not None:
            for slot in self.lineup.slots(line):
                if slot.is_empty:
                    slot.occupant = player
                    logger.debug(f"Auto-assigned {player.player_id} to {line.value}[{slot.index}]")
                    return OperationResult.success()

        self._add_to_bench(player)
        logger.debug(f"Auto-assigned {player.player_id} to bench")
        return OperationResult.success()

    def set_formation(self, formation: Formation | FormationShape) -> OperationResult:
        """
        Resize the outfield lines.

        Lines keep their leading slots. Slots past the new count are dropped
        from the highest index down and their occupants go to the bench.
        """
        if isinstance(formation, Formation):
            if formation.game_mode != self.lineup.game_mode:
                return OperationResult.failure("game_mode_mismatch")
            shape = formation.shape
            formation_id = formation.id
        else:
            shape = formation
            formation_id = None

        if not shape.is_valid():
            return OperationResult.failure("invalid_formation")

        counts = shape.counts()
        for line in FIELD_LINES:
            if line == LineType.GK:
                continue
            slots = self.lineup.lines[line]
            count = counts[line]
            if len(slots) > count:
                removed = slots[count:]
                del slots[count:]
                for slot in removed:
                    if slot.occupant is not None:
                        self._add_to_bench(slot.occupant)
                        logger.debug(f"Formation change benched {slot.occupant.player_id} from {line.value}[{slot.index}]")
            else:
                slots.extend(Slot(line=line, index=i) for i in range(len(slots), count))

        self.lineup.formation_id = formation_id
        return OperationResult.success()

    def reset_lineup(self, formation: Formation | None = None) -> OperationResult:
        """Empty every slot and the bench, rebuilding at `formation` or the mode default."""
        formation = formation or default_formation(self.lineup.game_mode)
        fresh = Lineup.empty(formation)
        self.lineup.game_mode = fresh.game_mode
        self.lineup.formation_id = fresh.formation_id
        self.lineup.lines = fresh.lines
        self.lineup.bench.clear()
        logger.debug(f"Lineup reset to {formation.id}")
        return OperationResult.success()

    def remove_player(self, player_id: str) -> OperationResult:
        """Take a player out of the lineup entirely (slot or bench)."""
        removed = self._clear_player(player_id)
        return OperationResult.success(changed=removed is not None)
