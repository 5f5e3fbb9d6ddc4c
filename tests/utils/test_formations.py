"""Tests for the formation catalog."""

import pytest

from app.services.exceptions import FormationNotFoundError
from app.utils.formations import (
    FormationShape,
    GameMode,
    default_formation,
    get_formation,
    get_formations_by_game_mode,
    parse_game_mode,
    resolve_formation,
)
from app.utils.positions import LineType


class TestGetFormationsByGameMode:
    def test_eleven_a_side(self):
        formations = get_formations_by_game_mode("11")
        assert len(formations) == 14
        assert all(f.game_mode == GameMode.ELEVEN for f in formations)

    def test_seven_a_side(self):
        formations = get_formations_by_game_mode(GameMode.SEVEN)
        assert [f.id for f in formations] == ["2-3-1", "3-2-1", "1-3-2", "2-1-2-1", "1-1-3-1", "2-2-2"]

    def test_accepts_int(self):
        assert get_formations_by_game_mode(7) == get_formations_by_game_mode("7")

    def test_returns_copy(self):
        formations = get_formations_by_game_mode("11")
        formations.clear()
        assert get_formations_by_game_mode("11")

    def test_invalid_mode(self):
        with pytest.raises(ValueError):
            get_formations_by_game_mode("5")

    def test_seven_a_side_never_exceeds_seven_slots(self):
        for formation in get_formations_by_game_mode("7"):
            assert formation.shape.total_slots <= 7
        assert get_formation("2-3-1").shape.total_slots == 7


class TestGetFormation:
    def test_442_counts(self):
        formation = get_formation("4-4-2")
        assert formation.shape == FormationShape(4, 4, 2)
        assert formation.shape.counts() == {
            LineType.GK: 1,
            LineType.DEF: 4,
            LineType.MID: 4,
            LineType.FWD: 2,
        }

    def test_diamond_display_name(self):
        assert get_formation("3-4-3-diamond").name == "3-4-3 sistema (de diamante)"

    def test_restricted_to_mode(self):
        with pytest.raises(FormationNotFoundError):
            get_formation("4-4-2", GameMode.SEVEN)

    def test_unknown(self):
        with pytest.raises(FormationNotFoundError):
            get_formation("9-9-9")


class TestDefaults:
    def test_default_formations(self):
        assert default_formation("11").id == "4-4-2"
        assert default_formation("7").id == "2-3-1"

    def test_resolve_keeps_compatible_selection(self):
        assert resolve_formation("11", "4-3-3").id == "4-3-3"

    def test_resolve_replaces_incompatible_selection(self):
        # 4-4-2 is not a 7-a-side formation
        assert resolve_formation("7", "4-4-2").id == "2-3-1"

    def test_resolve_without_selection(self):
        assert resolve_formation("11").id == "4-4-2"

    @pytest.mark.parametrize("value", ["11", 11, " 7 ", GameMode.SEVEN])
    def test_parse_game_mode(self, value):
        assert parse_game_mode(value) in (GameMode.ELEVEN, GameMode.SEVEN)

    def test_shape_validity(self):
        assert FormationShape(0, 3, 3).is_valid()
        assert not FormationShape(-1, 3, 3).is_valid()
