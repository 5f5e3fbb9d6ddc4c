"""Domain exceptions for the lineup engine and its match contexts."""


class LineupError(Exception):
    """Base class for lineup errors that callers are expected to handle."""

    error_key = "lineup_error"


class MatchNotFoundError(LineupError):
    error_key = "match_not_found"

    def __init__(self, match_id: str):
        self.match_id = match_id
        super().__init__(f"No open lineup for match {match_id}")


class FormationNotFoundError(LineupError):
    error_key = "formation_not_found"

    def __init__(self, formation_id: str):
        self.formation_id = formation_id
        super().__init__(f"Unknown formation: {formation_id}")


class PlayerNotFoundError(LineupError):
    error_key = "player_not_found"

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player {player_id} is not in the roster")


class InvalidRosterRecordError(LineupError):
    error_key = "invalid_roster_record"
