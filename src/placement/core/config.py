# placement/core/config.py
"""
Central configuration for the placement board.

Environment variables (prefixed ``PLACEMENT_``) override defaults.
"""
from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CapacityPolicy(str, Enum):
    # capacities are descriptive, left to the solver's cost function
    IGNORE = "ignore"
    # add_entity rejects placements that overflow a capacity dimension
    ENFORCE = "enforce"


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults."""

    model_config = SettingsConfigDict(
        env_prefix="PLACEMENT_",
        env_file=".env",
        extra="ignore",
    )

    log_level: str = "INFO"

    capacity_policy: CapacityPolicy = Field(
        default=CapacityPolicy.IGNORE,
        description="Whether resource capacities gate entity insertion",
    )

    # Board spec file paths (glob patterns)
    board_config_paths: list[str] = Field(
        default_factory=lambda: ["config/board.yaml"]
    )

