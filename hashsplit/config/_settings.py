from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SplitSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HASHSPLIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Changing the modulus reassigns every identifier
    modulus: int = Field(100, ge=1)
    sample_column: str = Field("sample", min_length=1)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


@lru_cache
def get_settings() -> SplitSettings:
    return SplitSettings()
