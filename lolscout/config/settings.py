"""
Configuration settings using Pydantic Settings.

All sensitive configuration must be loaded from environment variables.
Never hardcode API keys or credentials in the code.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Order: init kwargs > .env (dotenv) > env vars > file secrets
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ):
        return (
            init_settings,
            dotenv_settings,
            env_settings,
            file_secret_settings,
        )

    # Riot API Configuration
    # Optional at import time so the web server can start and report a clean 500.
    riot_api_key: str | None = Field(None, validation_alias=AliasChoices("RIOT_API_KEY"))
    http_timeout_seconds: float = Field(15.0, alias="HTTP_TIMEOUT_SECONDS")

    # Match window
    match_window_size: int = Field(20, ge=1, le=100, alias="MATCH_WINDOW_SIZE")
    match_id_queue_type: str | None = Field(
        None,
        alias="MATCH_ID_QUEUE_TYPE",
        description="Optional Match-V5 `type` filter for the match id list (e.g. 'ranked')",
    )
    ranked_queue_ids: list[int] = Field(
        default_factory=lambda: [420, 440],
        alias="RANKED_QUEUE_IDS",
        description="Queue ids counted in the ranked-only window (420 solo/duo, 440 flex)",
    )
    min_game_duration_seconds: int = Field(300, ge=0, alias="MIN_GAME_DURATION_SECONDS")
    tracked_summoner_spell_id: int = Field(4, alias="TRACKED_SUMMONER_SPELL_ID")

    # Duo partners
    duo_min_games: int = Field(2, ge=1, alias="DUO_MIN_GAMES")
    duo_ranked_only: bool = Field(False, alias="DUO_RANKED_ONLY")

    # Fan-out limits
    match_fetch_concurrency: int = Field(5, ge=1, alias="MATCH_FETCH_CONCURRENCY")
    analysis_deadline_seconds: float = Field(25.0, gt=0, alias="ANALYSIS_DEADLINE_SECONDS")

    # Data Dragon
    ddragon_version: str | None = Field(None, alias="DDRAGON_VERSION")
    ddragon_language: str = Field("en_US", alias="DDRAGON_LANGUAGE")

    # HTTP server
    server_host: str = Field("0.0.0.0", alias="SERVER_HOST")
    server_port: int = Field(3000, alias="SERVER_PORT")
    cors_allow_origin: str = Field("*", alias="CORS_ALLOW_ORIGIN")

    # Application Configuration
    app_name: str = Field("lolscout", alias="APP_NAME")
    app_version: str = Field("0.1.0", alias="APP_VERSION")
    app_env: str = Field("development", alias="APP_ENV")
    app_debug: bool = Field(False, alias="APP_DEBUG")
    app_log_level: str = Field("INFO", alias="APP_LOG_LEVEL")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the global settings instance.

    This function provides dependency injection support for settings.
    """
    return Settings()  # type: ignore[call-arg]
