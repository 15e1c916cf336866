"""Runtime settings, read from the environment (and a .env file when present)."""
import os
from functools import lru_cache
from typing import Annotated, List

from pydantic import BeforeValidator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _parse_origins(value):
    if value in (None, "", []):
        return ["*"]
    if isinstance(value, str):
        return [origin.strip() for origin in value.split(",") if origin.strip()] or ["*"]
    return [str(origin).strip() for origin in value if str(origin).strip()] or ["*"]


class Settings(BaseSettings):
    """
    Application settings.
    HOST, PORT, LOG_LEVEL, CORS_ORIGINS (comma separated) and SEED_DATA.
    """
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: Annotated[List[str], NoDecode, BeforeValidator(_parse_origins)] = ["*"]
    SEED_DATA: bool = True

    model_config = SettingsConfigDict(
        env_file=os.environ.get("ENV_FILE", ".env"),
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
