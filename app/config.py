from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    app_name: str = "Club Lineup Backend"
    log_level: str = "INFO"

    # CORS
    allowed_origins: str = "*"  # Comma-separated origins

    # Lineup defaults
    default_game_mode: str = "11"  # "11" or "7"
    # Out-of-position placement is disabled until a coach enables it
    strict_positions: bool = True
    sort_bench_by_number: bool = True
    remove_absent_from_lineup: bool = True

    # Open match contexts kept in memory; the oldest is evicted beyond this
    max_open_matches: int = 100

    # Error message language (es, en)
    default_language: str = "es"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()
