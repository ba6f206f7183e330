"""Normalizer configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MlConversion = Literal["liquids", "always"]
CompositePolicy = Literal["inherit", "infer"]
UnparsedPolicy = Literal["skip", "bare_name"]


class Settings(BaseSettings):
    """Normalizer settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NUTRINORM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Unit conversion
    pinch_in_grams: float = Field(default=0.3, ge=0)  # nutritional approximation
    ml_conversion: MlConversion = "liquids"

    # Line handling
    composite_policy: CompositePolicy = "inherit"
    unparsed_policy: UnparsedPolicy = "skip"

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = ""  # "json" forces structured output

    @property
    def json_logs(self) -> bool:
        """Use structured JSON logs when asked to, or when running in production."""
        return self.log_format.lower() == "json" or self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
