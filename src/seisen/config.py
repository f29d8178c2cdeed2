"""
Configuration management for Seisen.

Uses XDG base directories:
- Config: ~/.config/seisen/config.toml
- Data: ~/seisen/ (one text file per category)
"""

from pathlib import Path
from typing import Any, Literal
import os

from pydantic import BaseModel, Field, field_validator

from seisen.categories import CATEGORIES, DEFAULT_CATEGORY

# XDG defaults
DEFAULT_CONFIG_HOME = Path.home() / ".config"
DEFAULT_DATA_HOME = Path.home() / "seisen"

DEFAULT_INTERVAL_SECONDS = 3600.0
DEFAULT_NOTIFICATION_TITLE = "🧘 Message du Sensei"


class NotesSettings(BaseModel):
    """[notes] section."""

    home: str | None = Field(default=None, description="Folder holding the category files")
    default_category: str = Field(default=DEFAULT_CATEGORY, description="Category shown at startup")

    @field_validator("default_category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        if value not in CATEGORIES:
            raise ValueError(f"default_category must be one of: {', '.join(CATEGORIES)}")
        return value


class NotificationSettings(BaseModel):
    """[notifications] section."""

    backend: Literal["desktop", "telegram", "log"] = "desktop"
    interval_seconds: float = Field(default=DEFAULT_INTERVAL_SECONDS, gt=0)
    title: str = DEFAULT_NOTIFICATION_TITLE


class TelegramSettings(BaseModel):
    """[telegram] section. Env vars fill in whatever is missing."""

    token: str | None = None
    chat_id: str | None = None

    @field_validator("chat_id", mode="before")
    @classmethod
    def _chat_id_as_str(cls, value: Any) -> Any:
        # TOML users tend to write numeric chat ids unquoted
        if isinstance(value, int):
            return str(value)
        return value


class LoggingSettings(BaseModel):
    """[logging] section."""

    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {value}")
        return level


class Settings(BaseModel):
    """Validated view of config.toml."""

    notes: NotesSettings = Field(default_factory=NotesSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    telegram: TelegramSettings = Field(default_factory=TelegramSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def get_config_dir() -> Path:
    """Get the config directory (XDG_CONFIG_HOME/seisen)."""
    base = Path(os.environ.get("XDG_CONFIG_HOME", DEFAULT_CONFIG_HOME))
    return base / "seisen"


def get_config_path() -> Path:
    """Get the path to config.toml."""
    return get_config_dir() / "config.toml"


def get_seisen_home(settings: Settings | None = None) -> Path:
    """
    Get the notes folder.

    Resolution order: SEISEN_HOME env var, notes.home from config, ~/seisen.
    """
    if env_home := os.environ.get("SEISEN_HOME"):
        return Path(env_home).expanduser()

    settings = settings or load_settings()
    if settings.notes.home:
        return Path(settings.notes.home).expanduser()
    return DEFAULT_DATA_HOME


def load_config() -> dict[str, Any]:
    """
    Load raw configuration from config.toml.

    Returns default config if file doesn't exist.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return get_default_config()

    # Lazy import tomli only when needed
    import tomli

    with open(config_path, "rb") as f:
        return tomli.load(f)


def load_settings(config: dict[str, Any] | None = None) -> Settings:
    """
    Load and validate configuration.

    Raises ValueError (pydantic ValidationError) on invalid values.
    """
    if config is None:
        config = load_config()
    return Settings.model_validate(config)


def get_default_config() -> dict[str, Any]:
    """Return default configuration."""
    return {
        "notes": {
            "default_category": DEFAULT_CATEGORY,
        },
        "notifications": {
            "backend": "desktop",
            "interval_seconds": DEFAULT_INTERVAL_SECONDS,
            "title": DEFAULT_NOTIFICATION_TITLE,
        },
        "logging": {
            "level": "INFO",
        },
    }
