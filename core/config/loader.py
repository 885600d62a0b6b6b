"""Settings loading utilities."""

from __future__ import annotations

import os
from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from core.config.models import EngineSettings
from core.utils.errors import SettingsError

SETTINGS_ENV = "VERSUS_SETTINGS"
STORE_PATH_ENV = "VERSUS_STORE_PATH"
LEGACY_STORE_PATH_ENV = "VERSUS_LEGACY_STORE_PATH"
MAX_UPLOAD_BYTES_ENV = "VERSUS_MAX_UPLOAD_BYTES"


def load_settings(path: Path | None = None) -> EngineSettings:
    """Load and validate engine settings from YAML."""

    settings_path = path or Path(__file__).with_name("settings.yaml")

    try:
        raw = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SettingsError(f"Settings file not found: {settings_path}") from exc
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid YAML in settings file: {settings_path}") from exc

    if not isinstance(raw, dict):
        raise SettingsError(f"Settings file must contain a mapping: {settings_path}")

    try:
        return EngineSettings.model_validate(raw)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings schema: {settings_path}") from exc


def resolve_settings() -> EngineSettings:
    """Load settings and apply ``VERSUS_*`` environment overrides.

    Invalid numeric overrides are ignored.
    """

    raw_path = os.getenv(SETTINGS_ENV)
    settings = load_settings(Path(raw_path) if raw_path else None)

    updates: dict[str, object] = {}
    store_path = os.getenv(STORE_PATH_ENV)
    if store_path:
        updates["store_path"] = Path(store_path)
    legacy_path = os.getenv(LEGACY_STORE_PATH_ENV)
    if legacy_path:
        updates["legacy_store_path"] = Path(legacy_path)
    max_upload_bytes = _positive_int_env(MAX_UPLOAD_BYTES_ENV)
    if max_upload_bytes is not None:
        updates["max_upload_bytes"] = max_upload_bytes

    return settings.model_copy(update=updates) if updates else settings


def _positive_int_env(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    try:
        parsed = int(raw)
    except ValueError:
        return None
    return parsed if parsed > 0 else None
