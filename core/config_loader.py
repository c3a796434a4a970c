from __future__ import annotations
import json
from functools import lru_cache
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings, read from the environment or a local .env file.
    """

    DATABASE_URL: str = "sqlite:///./publications.db"
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    # how many days ahead a publication may be booked
    PUBLICATION_HORIZON_DAYS: int = 7

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def split_origins(cls, v):
        # accepts a JSON list or a comma separated string
        if isinstance(v, str):
            if v.strip().startswith("["):
                return json.loads(v)
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("PUBLICATION_HORIZON_DAYS")
    @classmethod
    def positive_horizon(cls, v: int) -> int:
        if v < 1:
            raise ValueError("PUBLICATION_HORIZON_DAYS must be at least 1")
        return v


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
