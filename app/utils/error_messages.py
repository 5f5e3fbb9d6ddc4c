"""Localized error messages for API responses and rejected lineup actions."""

ERROR_MESSAGES = {
    "match_not_found": {
        "es": "No hay una alineación abierta para este partido",
        "en": "No open lineup for this match",
    },
    "formation_not_found": {
        "es": "Formación no encontrada",
        "en": "Formation not found",
    },
    "player_not_found": {
        "es": "Jugador no encontrado en la plantilla",
        "en": "Player not found in the roster",
    },
    "invalid_roster_record": {
        "es": "Registro de jugador inválido",
        "en": "Invalid roster record",
    },
    "invalid_game_mode": {
        "es": "Tipo de fútbol no soportado",
        "en": "Unsupported game mode",
    },
    "invalid_formation": {
        "es": "La formación tiene líneas con cantidades inválidas",
        "en": "Formation has invalid line counts",
    },
    "invalid_line": {
        "es": "Línea de alineación inválida",
        "en": "Invalid lineup line",
    },
    "slot_not_found": {
        "es": "La posición seleccionada no existe en esta formación",
        "en": "Selected slot does not exist in this formation",
    },
    "game_mode_mismatch": {
        "es": "La alineación es de otro tipo de fútbol",
        "en": "Lineup belongs to a different game mode",
    },
    "position_mismatch": {
        "es": "Los jugadores solo pueden ir a su posición natural",
        "en": "Players can only be placed in their natural position",
    },
    "field_player_not_found": {
        "es": "El jugador no está en el campo",
        "en": "Player is not on the field",
    },
    "bench_player_not_found": {
        "es": "El jugador no está en el banquillo",
        "en": "Player is not on the bench",
    },
}


def get_error_message(error_key: str, lang: str = "en") -> str:
    """Get localized error message.

    Args:
        error_key: Key for the error message
        lang: Language code (es, en)

    Returns:
        Localized error message, falls back to English if not found
    """
    if error_key not in ERROR_MESSAGES:
        return error_key

    messages = ERROR_MESSAGES[error_key]
    return messages.get(lang, messages.get("en", error_key))
