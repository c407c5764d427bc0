"""Configuration management for the ruleset core using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Rule-variant and logging settings loaded from environment variables.

    Nothing in the resolution core reads these implicitly. Callers convert them
    into explicit option values (see ``ProficiencyOptions.from_settings``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="RULESET_",
        extra="ignore",
    )

    # Proficiency variant
    proficiency_variant: Literal["with_level", "without_level"] = Field(
        default="with_level", description="Whether proficiency bonuses add the character level"
    )
    proficiency_untrained_modifier: int = Field(
        default=0, description="Base proficiency bonus when untrained"
    )
    proficiency_trained_modifier: int = Field(
        default=2, description="Base proficiency bonus when trained"
    )
    proficiency_expert_modifier: int = Field(
        default=4, description="Base proficiency bonus when expert"
    )
    proficiency_master_modifier: int = Field(
        default=6, description="Base proficiency bonus when master"
    )
    proficiency_legendary_modifier: int = Field(
        default=8, description="Base proficiency bonus when legendary"
    )

    # Automatic bonus progression
    automatic_bonus_variant: Literal["none", "rules_as_written", "fundamental_potency"] = Field(
        default="none", description="Automatic bonus progression variant"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["console", "json"] = Field(
        default="console", description="Log format (console or json)"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
