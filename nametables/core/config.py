from __future__ import annotations

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file explicitly
ENV_FILE_NAME = ".env"
env_path = Path(__file__).parent.parent.parent / ENV_FILE_NAME
load_dotenv(env_path, override=False)

SUPPORTED_FORMATS = ("json", "csv", "sqlite")


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/nametables.db"
    DATA_DIR: Optional[Path] = None  # overrides the packaged tables when set
    EXPORT_DIR: Path = Path("export")
    DEFAULT_FORMAT: str = "json"
    LOG_FILE: bool = False
    DEBUG: bool = False

    @field_validator("DATA_DIR", mode="before")
    @classmethod
    def empty_data_dir(cls, v):  # type: ignore
        if v in (None, ""):
            return None
        return v

    @field_validator("DEFAULT_FORMAT")
    @classmethod
    def check_format(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in SUPPORTED_FORMATS:
            raise ValueError(f"DEFAULT_FORMAT must be one of {', '.join(SUPPORTED_FORMATS)}")
        return v

    model_config = SettingsConfigDict(
        env_file=ENV_FILE_NAME,
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
