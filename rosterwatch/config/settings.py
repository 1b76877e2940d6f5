import logging
from typing import Dict, Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SHEET_BASE_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vRmmWiBmMMD43m5VtZq54nKlmj0ZtythsA1qCpegwx-iRptx2HEsG0T3cQlG1r2AIiKxBWnaurJZQ9Q"
    "/pub?gid={{GID}}&output=csv"
)

DEFAULT_REGION_GIDS: Dict[str, str] = {
    "AMERICAS": "1856086064",
    "EMEA": "0",
    "CN": "1474170664",
    "PACIFIC": "1819901194",
}


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Sheet sources
    sheet_base_url: str = Field(
        DEFAULT_SHEET_BASE_URL,
        description="Published CSV export URL; '{{GID}}' is replaced by the region's sheet gid.",
    )
    region_gids: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_REGION_GIDS),
        description="Region name -> sheet gid. Processed in insertion order.",
    )
    poll_interval_minutes: int = Field(
        5, ge=1, description="Minutes between scheduled ticks."
    )
    fetch_timeout_seconds: float = Field(
        30.0, gt=0, description="Timeout for a single sheet export request."
    )

    # Storage Configuration
    storage_backend: Literal["json", "supabase"] = Field(
        "json", description="Durable store used for snapshots and logs."
    )
    data_dir: str = Field("./data", description="Root directory of the JSON store.")
    supabase_url: Optional[str] = Field(None, description="URL for the Supabase project.")
    supabase_key: Optional[str] = Field(None, description="Key for the Supabase project.")
    supabase_table: str = Field(
        "documents", description="Table holding key/body JSON documents."
    )

    # Notification Configuration
    expo_push_token: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("expo_push_token", "notf_token"),
        description="Expo push token receiving roster notifications.",
    )
    expo_push_url: str = "https://exp.host/--/api/v2/push/send"
    twitter_access_token: Optional[str] = Field(
        None, description="OAuth 2.0 user-context access token used to post tweets."
    )
    twitter_api_url: str = "https://api.twitter.com/2/tweets"
    twitter_handle: str = "VCTContract"
    notify_max_attempts: int = Field(
        3, ge=1, le=10, description="Attempts per outbound notification before giving up."
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    def sheet_url(self, gid: str) -> str:
        return self.sheet_base_url.replace("{{GID}}", gid)


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
