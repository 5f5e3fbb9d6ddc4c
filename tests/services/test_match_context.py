import pytest

from app.services.exceptions import FormationNotFoundError, MatchNotFoundError, PlayerNotFoundError
from app.services.match_context import MatchContextRegistry, MatchSheet
from app.utils.formations import GameMode
from app.utils.positions import LineType


@pytest.fixture
def attendance():
    return {"u1": "confirmed", "u2": "confirmed", "u3": "confirmed", "u5": "absent", "u6": "confirmed"}


def _occupant_id(sheet, line, index):
    occupant = sheet.lineup.slot(line, index).occupant
    return occupant.player_id if occupant else None


class TestMatchSheet:
    def test_reseed_auto_assigns_confirmed(self, roster_records, attendance):
        sheet = MatchSheet("m1")

        result = sheet.reseed(roster_records, attendance)

        assert sorted(result.auto_assigned) == ["u1", "u2", "u3", "u6"]
        assert _occupant_id(sheet, LineType.GK, 0) == "u1"
        assert [_occupant_id(sheet, LineType.DEF, i) for i in range(3)] == ["u2", "u3", "u6"]
        assert sheet.lineup.find_player_position("u4") is None
        assert sheet.lineup.find_player_position("u5") is None

    def test_update_attendance_reacts_to_transitions(self, roster_records, attendance):
        sheet = MatchSheet("m1")
        sheet.reseed(roster_records, attendance)

        result = sheet.update_attendance({**attendance, "u4": "confirmed", "u2": "absent"})

        assert result.auto_assigned == ["u4"]
        assert result.removed == ["u2"]
        assert _occupant_id(sheet, LineType.MID, 0) == "u4"
        assert sheet.lineup.find_player_position("u2") is None
        assert sheet.attendance.status_of("u4") == "confirmed"

    def test_accepts_attendance_records(self, roster_records):
        sheet = MatchSheet("m1")
        sheet.reseed(roster_records, [{"userId": "u1", "status": "confirmed"}])
        assert _occupant_id(sheet, LineType.GK, 0) == "u1"

    def test_player_lookup(self, roster_records):
        sheet = MatchSheet("m1")
        sheet.set_roster(roster_records)
        assert sheet.player("u4").name == "Xavi"
        with pytest.raises(PlayerNotFoundError):
            sheet.player("nobody")

    def test_operations_follow_sheet_policy(self):
        sheet = MatchSheet("m1", strict=False, sort_bench=False)
        ops = sheet.operations()
        assert not ops.strict and not ops.sort_bench
        sheet.set_strict(True)
        assert sheet.operations().strict

    def test_slot_candidates_for_empty_slot(self, roster_records, attendance):
        sheet = MatchSheet("m1")
        sheet.reseed(roster_records, attendance)

        # u4 is the only pending player off the field, u5 is absent
        assert [p.player_id for p in sheet.slot_candidates("MID", 0)] == ["u4"]
        assert sheet.slot_candidates("DEF", 3) == []

        sheet.set_strict(False)
        assert [p.player_id for p in sheet.slot_candidates("DEF", 3)] == ["u4"]

    def test_slot_candidates_for_occupied_slot_come_from_bench(self, roster_records, attendance):
        sheet = MatchSheet("m1")
        sheet.reseed(roster_records, attendance)
        sheet.operations().move_to_bench("u6")
        sheet.operations().assign_player_to_slot(sheet.player("u4"), "BENCH")

        assert [p.player_id for p in sheet.slot_candidates("DEF", 0)] == ["u6"]
        assert [p.player_id for p in sheet.slot_candidates("MID", 0)] == ["u4"]

    def test_slot_candidates_missing_slot(self):
        assert MatchSheet("m1").slot_candidates("FWD", 2) is None

    def test_change_game_mode_rebuilds_lineup(self, roster_records, attendance):
        sheet = MatchSheet("m1")
        sheet.reseed(roster_records, attendance)

        assert sheet.change_game_mode("7")

        assert sheet.game_mode == GameMode.SEVEN
        assert sheet.lineup.formation_id == "2-3-1"
        assert _occupant_id(sheet, LineType.GK, 0) == "u1"
        assert [_occupant_id(sheet, LineType.DEF, i) for i in range(2)] == ["u2", "u3"]
        # third defender no longer fits
        assert [p.player_id for p in sheet.lineup.bench] == ["u6"]

    def test_change_to_same_game_mode_is_noop(self):
        sheet = MatchSheet("m1")
        assert not sheet.change_game_mode(GameMode.ELEVEN)


class TestMatchContextRegistry:
    def test_open_and_get(self, registry, roster_records, attendance):
        sheet = registry.open("m1", roster_records, attendance)
        assert registry.get("m1") is sheet
        assert "m1" in registry
        assert sheet.lineup.formation_id == "4-4-2"

    def test_open_with_formation(self, registry):
        sheet = registry.open("m1", game_mode="7", formation_id="2-2-2")
        assert sheet.game_mode == GameMode.SEVEN
        assert sheet.lineup.formation_id == "2-2-2"

    def test_formation_from_other_mode_rejected(self, registry):
        with pytest.raises(FormationNotFoundError):
            registry.open("m1", game_mode="7", formation_id="4-4-2")
        assert "m1" not in registry

    def test_reopen_resets(self, registry, roster_records, attendance):
        first = registry.open("m1", roster_records, attendance)
        first.operations().move_to_bench("u1")

        second = registry.open("m1", roster_records, attendance)

        assert second is not first
        assert _occupant_id(second, LineType.GK, 0) == "u1"
        assert len(registry) == 1

    def test_unknown_match(self, registry):
        with pytest.raises(MatchNotFoundError):
            registry.get("missing")

    def test_close(self, registry):
        registry.open("m1")
        assert registry.close("m1")
        assert not registry.close("m1")

    def test_evicts_least_recently_used(self):
        registry = MatchContextRegistry(max_open_matches=2)
        registry.open("m1")
        registry.open("m2")
        registry.get("m1")
        registry.open("m3")
        assert registry.match_ids() == ["m1", "m3"]

    def test_strict_override(self, registry):
        assert registry.open("m1").strict
        assert not registry.open("m2", strict=False).strict
