"""Application configuration using Pydantic BaseSettings."""
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chirpy_backend.api.moderation import MatchMode


# PUBLIC_INTERFACE
class Settings(BaseSettings):
    """Runtime configuration read from the environment (and .env if present)."""

    platform: str = ""
    filepath_root: str = "."
    host: str = "0.0.0.0"
    port: int = 8080
    moderation_mode: MatchMode = Field(
        default=MatchMode.WHOLE_WORD, validation_alias="CHIRPY_MODERATION_MODE"
    )
    metrics_format: Literal["html", "text"] = Field(
        default="html", validation_alias="CHIRPY_METRICS_FORMAT"
    )
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def is_dev(self) -> bool:
        return self.platform == "dev"
