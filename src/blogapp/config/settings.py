from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase
from ..database.lifecycle import StoreConfig, ephemeral_store_config


class Settings(BaseSettings):
    """
    Application settings loaded from environment (and an optional `.env` file).
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Production store
    DATABASE_URL: str = "sqlite+aiosqlite:///./blog.db"

    # Disposable store used by the test suite
    TEST_DATABASE_URL: str | None = None
    TESTING: bool = False

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("logs")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Where a running instance is reachable for the browser suite
    E2E_BASE_URL: str = "http://localhost:8000"

    # --- Derived settings ---
    @property
    def store_config(self) -> StoreConfig:
        """
        Return the store the application should talk to.

        - `TESTING=True`: the disposable test store. `ephemeral_store_config` refuses
          a missing test URL or one that points at the production store, so a test
          run can never open (and later drop) production tables.
        - otherwise: the production store, never dropped on shutdown.
        """
        if self.TESTING:
            return ephemeral_store_config(self.TEST_DATABASE_URL, self.DATABASE_URL)
        return StoreConfig(connection_string=self.DATABASE_URL, is_ephemeral=False)

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before Literal validation runs, so
        `LOG_LEVEL=debug` is accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Settings are read from the environment once per process.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
