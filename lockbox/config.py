"""
Application settings.

Values are read once from the environment (or a local ``.env`` file) when
``get_settings`` is first called, and the resulting object is handed to
``create_app``. Nothing else reads the environment.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True)

    APP_NAME: str = "lockbox"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    RELOAD: bool = False
    LOG_LEVEL: str = "INFO"

    # session cookie
    SESSION_SECRET: str = "change-me"
    SESSION_MAX_AGE: int = 60 * 60 * 24  # seconds

    # the single account
    USER_NAME: str = "admin"
    USER_PASSWORD: str = "admin"

    # storage
    UPLOAD_DIR: str = "uploads"
    STRICT_UNIQUE_NAMES: bool = False  # off keeps plain <millis><ext> names, collisions overwrite

    # optional guards on routes that are public by default
    PROTECT_INDEX: bool = False
    PROTECT_UPLOADS: bool = False


@lru_cache
def get_settings() -> Settings:
    """Build the process-wide settings object."""
    return Settings()
