"""Pydantic schemas for the /matches/{id}/lineup and /formations endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from app.services.lineup import AttendanceStatus
from app.utils.formations import GameMode


class OkResponse(BaseModel):
    ok: bool


# ----- formations -----

class FormationResponse(BaseModel):
    id: str
    name: str
    game_mode: GameMode
    defenders: int
    midfielders: int
    forwards: int
    total_slots: int
    description: str | None = None


class FormationListResponse(BaseModel):
    game_mode: GameMode
    default_id: str
    items: list[FormationResponse]


# ----- requests -----

class OpenLineupRequest(BaseModel):
    roster: list[dict[str, Any]] = Field(default_factory=list)
    attendance: dict[str, AttendanceStatus] = Field(default_factory=dict)
    game_mode: GameMode | None = None
    formation_id: str | None = None
    strict: bool | None = None


class AssignRequest(BaseModel):
    player_id: str
    line: str
    slot_index: int = Field(0, ge=0)
    game_mode: GameMode | None = None


class PlayerActionRequest(BaseModel):
    player_id: str


class SwapRequest(BaseModel):
    field_player_id: str
    bench_player_id: str


class FormationChangeRequest(BaseModel):
    formation_id: str | None = None
    defenders: int | None = None
    midfielders: int | None = None
    forwards: int | None = None


class GameModeRequest(BaseModel):
    game_mode: GameMode


class StrictModeRequest(BaseModel):
    enabled: bool


class AttendanceUpdateRequest(BaseModel):
    attendance: dict[str, AttendanceStatus]


# ----- responses -----

class PlayerRefResponse(BaseModel):
    player_id: str
    name: str
    shirt_number: int | None = None
    position: str
    category: str


class SlotResponse(BaseModel):
    line: str
    index: int
    player: PlayerRefResponse | None = None
    attendance_status: AttendanceStatus | None = None
    out_of_position: bool = False


class OccupantFlagResponse(BaseModel):
    player_id: str
    line: str
    index: int
    status: AttendanceStatus
    out_of_position: bool


class OccupancyResponse(BaseModel):
    filled: int
    total: int
    free: int


class LineupResponse(BaseModel):
    match_id: str
    game_mode: GameMode
    formation_id: str | None = None
    strict: bool
    lines: dict[str, list[SlotResponse]]
    bench: list[PlayerRefResponse] = []
    occupancy: OccupancyResponse
    flags: list[OccupantFlagResponse] = []


class OperationResponse(BaseModel):
    ok: bool
    changed: bool
    lineup: LineupResponse


class AttendanceSyncResponse(BaseModel):
    auto_assigned: list[str] = []
    removed: list[str] = []
    lineup: LineupResponse


class PlayerPositionResponse(BaseModel):
    player_id: str
    placed: bool
    line: str | None = None
    index: int | None = None


class CallupCounts(BaseModel):
    confirmed: int
    pending: int
    absent: int
    total: int


class CallupResponse(BaseModel):
    match_id: str
    confirmed: list[PlayerRefResponse] = []
    pending: list[PlayerRefResponse] = []
    absent: list[PlayerRefResponse] = []
    counts: CallupCounts
