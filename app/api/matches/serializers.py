"""Build response schemas from match sheets."""

from app.schemas.lineup import (
    LineupResponse,
    OccupancyResponse,
    OccupantFlagResponse,
    PlayerRefResponse,
    SlotResponse,
)
from app.services.attendance import flag_occupants
from app.services.lineup import PlayerRef
from app.services.match_context import MatchSheet
from app.utils.positions import FIELD_LINES, is_position_compatible


def build_player(player: PlayerRef) -> PlayerRefResponse:
    return PlayerRefResponse(
        player_id=player.player_id,
        name=player.name,
        shirt_number=player.shirt_number,
        position=player.position,
        category=player.category.value,
    )


def build_lineup(sheet: MatchSheet) -> LineupResponse:
    lineup = sheet.lineup
    lines: dict[str, list[SlotResponse]] = {}
    for line in FIELD_LINES:
        slots = []
        for slot in lineup.slots(line):
            player = slot.occupant
            slots.append(SlotResponse(
                line=line.value,
                index=slot.index,
                player=build_player(player) if player else None,
                attendance_status=sheet.attendance.status_of(player.player_id) if player else None,
                out_of_position=bool(player) and not is_position_compatible(player.position, line),
            ))
        lines[line.value] = slots

    occupancy = lineup.get_slot_occupancy()
    return LineupResponse(
        match_id=sheet.match_id,
        game_mode=lineup.game_mode,
        formation_id=lineup.formation_id,
        strict=sheet.strict,
        lines=lines,
        bench=[build_player(p) for p in lineup.bench],
        occupancy=OccupancyResponse(
            filled=occupancy.filled,
            total=occupancy.total,
            free=occupancy.free,
        ),
        flags=[
            OccupantFlagResponse(
                player_id=flag.player_id,
                line=flag.line.value,
                index=flag.index,
                status=flag.status,
                out_of_position=flag.out_of_position,
            )
            for flag in flag_occupants(lineup, sheet.attendance)
        ],
    )
