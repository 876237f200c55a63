"""Application configuration with environment variable support.

All settings can be overridden via environment variables prefixed with ``HUDDLE_``,
or via a ``.env`` file in the project root.

Examples::

    HUDDLE_PORT=9000 huddle start
    HUDDLE_DATA_DIR=/var/data/huddle huddle start
    HUDDLE_OPENAI_API_KEY=sk-... HUDDLE_LOG_LEVEL=DEBUG huddle start
"""

from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root: two levels up from this file (huddle/app/config.py -> repo root)
_BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Fixed domain limits
MESSAGE_MAX_LENGTH = 1000
CHANNEL_NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200
AI_DAILY_LIMIT = 3
AI_HISTORY_LIMIT = 50

AI_SYSTEM_PROMPT = (
    "You are a friendly chat assistant. Answer concisely and in plain language. "
    "You can handle technical questions, but always explain them so they are easy to follow."
)


class Settings(BaseSettings):
    """Huddle configuration — all values overridable via env vars."""

    model_config = SettingsConfigDict(
        env_prefix="HUDDLE_",
        env_file=str(_BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["http://localhost:3000"]

    # Paths
    data_dir: Path = _BASE_DIR / "data"
    # Defaults to a SQLite file under data_dir
    database_url: str = ""

    # Logging
    log_level: str = "INFO"

    # Identity provider token verification
    auth_secret: str = "dev-insecure-secret"
    auth_token_max_age: int = 60 * 60 * 24 * 7

    # AI assistant
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"

    # Return the existing DM instead of creating a second one for the same pair
    dedupe_direct_messages: bool = False

    @property
    def db_path(self) -> Path:
        return self.data_dir / "huddle.db"

    @model_validator(mode="after")
    def _default_database_url(self) -> "Settings":
        if not self.database_url:
            self.database_url = f"sqlite+aiosqlite:///{self.db_path}"
        return self


# Singleton instance — import this everywhere
settings = Settings()
