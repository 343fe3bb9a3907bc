"""Application configuration using Pydantic Settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defaults for the command line, overridable with GEDRELATE_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="GEDRELATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # the ancestor walk recurses once per generation; stay under the recursion limit
    max_generations: int = Field(default=100, ge=1, le=500)
    log_level: str = "WARNING"
    output_format: Literal["text", "json"] = "text"
    ego_radius: int = Field(default=2, ge=0)


def load_settings() -> Settings:
    return Settings()
