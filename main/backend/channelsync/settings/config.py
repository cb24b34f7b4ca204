from typing import Optional
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
import os


_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def _get_default_database_url() -> str:
    """根据环境自动选择选择集存储的数据库URL"""
    if os.getenv("DOCKER_ENV") == "true" or os.path.exists("/.dockerenv"):
        return "postgresql+psycopg2://postgres:postgres@db:5432/postgres"
    return f"sqlite:///{_DATA_DIR / 'selection.db'}"


def _get_default_redis_url() -> str:
    """根据环境自动选择Redis URL"""
    if os.getenv("DOCKER_ENV") == "true" or os.path.exists("/.dockerenv"):
        return "redis://redis:6379/0"
    return "redis://localhost:6379/0"


class Settings(BaseSettings):
    env: str = Field(default="dev")

    # Remote content API
    api_base_url: str = Field(default="https://gateway.marvel.com/v1/public")
    api_public_key: Optional[str] = Field(default=None)
    api_private_key: Optional[str] = Field(default=None)
    http_timeout: float = Field(default=20.0)

    # Listing
    page_size: int = Field(default=20)
    default_channel: str = Field(default="comics")

    # Selection persistence
    selection_namespace: str = Field(default="@channel-selection")
    selection_backend: str = Field(default="sql")  # sql | redis | memory
    database_url: str = Field(default_factory=_get_default_database_url)
    redis_url: str = Field(default_factory=_get_default_redis_url)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()


def reload_settings() -> Settings:
    global settings
    settings = Settings()
    return settings
