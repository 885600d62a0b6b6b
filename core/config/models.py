"""Engine settings model."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class EngineSettings(BaseModel):
    """Settings loaded from YAML, optionally overridden by environment."""

    model_config = ConfigDict(extra="forbid")

    store_path: Path
    legacy_store_path: Path | None = None
    max_facts: int = Field(default=5, gt=0)
    max_wins: int = Field(default=12, gt=0)
    default_stat: int = Field(default=50, ge=0, le=100)
    max_upload_bytes: int = Field(default=25 * 1024 * 1024, gt=0)
