"""Tests for natural position and line normalization."""

import pytest

from app.utils.positions import (
    LineType,
    PositionCategory,
    is_position_compatible,
    line_for_position,
    normalize_position,
    parse_line,
)


# ---------------------------------------------------------------------------
# normalize_position
# ---------------------------------------------------------------------------

class TestNormalizePosition:
    @pytest.mark.parametrize("value", ["PORTERO", "Portero", "  portero ", "Goalkeeper", "GK", "POR"])
    def test_goalkeeper(self, value):
        assert normalize_position(value) == PositionCategory.GOALKEEPER

    @pytest.mark.parametrize("value", ["DEFENSA", "defensa", "Defender", "CB", "DEF"])
    def test_defender(self, value):
        assert normalize_position(value) == PositionCategory.DEFENDER

    @pytest.mark.parametrize("value", ["MEDIOCENTRO", "Midfielder", "MED", "mid"])
    def test_midfielder(self, value):
        assert normalize_position(value) == PositionCategory.MIDFIELDER

    @pytest.mark.parametrize("value", ["DELANTERO", "Forward", "striker", "DEL", "ST"])
    def test_forward(self, value):
        assert normalize_position(value) == PositionCategory.FORWARD

    @pytest.mark.parametrize("value", ["COMODIN", "libero", "", "   ", None])
    def test_unknown(self, value):
        assert normalize_position(value) == PositionCategory.UNKNOWN

    def test_category_passthrough(self):
        assert normalize_position(PositionCategory.FORWARD) == PositionCategory.FORWARD


# ---------------------------------------------------------------------------
# line_for_position / parse_line
# ---------------------------------------------------------------------------

class TestLineForPosition:
    def test_each_category_maps_to_its_line(self):
        assert line_for_position("Portero") == LineType.GK
        assert line_for_position("Defensa") == LineType.DEF
        assert line_for_position("Mediocentro") == LineType.MID
        assert line_for_position("Delantero") == LineType.FWD

    def test_unknown_has_no_line(self):
        assert line_for_position("COMODIN") is None


class TestParseLine:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("POR", LineType.GK),
            ("gk", LineType.GK),
            ("DEF", LineType.DEF),
            ("MED", LineType.MID),
            ("MID", LineType.MID),
            ("DEL", LineType.FWD),
            ("FWD", LineType.FWD),
            ("bench", LineType.BENCH),
            (LineType.MID, LineType.MID),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_line(value) == expected

    @pytest.mark.parametrize("value", ["", "striker", "WING"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_line(value)


# ---------------------------------------------------------------------------
# is_position_compatible
# ---------------------------------------------------------------------------

class TestPositionCompatibility:
    def test_matching_line(self):
        assert is_position_compatible("defensa", LineType.DEF)

    def test_other_line(self):
        assert not is_position_compatible("DELANTERO", LineType.DEF)

    def test_unknown_incompatible_with_every_field_line(self):
        for line in (LineType.GK, LineType.DEF, LineType.MID, LineType.FWD):
            assert not is_position_compatible("COMODIN", line)

    def test_bench_accepts_everyone(self):
        assert is_position_compatible("COMODIN", LineType.BENCH)
        assert is_position_compatible("PORTERO", LineType.BENCH)
