"""Settings for textfield-sim, loaded from ``TEXTFIELD_SIM_*`` environment variables."""
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from textfield_sim.controls.text_field import ClearButtonMode


class Settings(BaseSettings):
    """Defaults used when the scripting server creates fields."""

    model_config = SettingsConfigDict(
        env_prefix="TEXTFIELD_SIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    # Field defaults
    default_clear_button_mode: ClearButtonMode = ClearButtonMode.NEVER
    default_clears_on_focus: bool = False
    embed_new_fields: bool = True  # attach created fields to the session window


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
