"""Custom exceptions for core logic.

Import problems inside the engine are returned as values (see
``core.importer.models.ImportResult``); these exceptions are for callers that
need exception flow and for infrastructure failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.importer.models import ImportIssue


class ImportFailedError(Exception):
    """Raised by outer surfaces when an import document is rejected."""

    def __init__(self, message: str, *, issue: ImportIssue, file_name: str | None = None) -> None:
        super().__init__(message)
        self.issue = issue
        self.file_name = file_name


class StoreError(Exception):
    """Raised when a fight store file cannot be read."""


class FightNotFoundError(LookupError):
    """Raised when a fight id or query does not match any stored record."""

    def __init__(self, message: str, *, query: str) -> None:
        super().__init__(message)
        self.query = query


class SettingsError(ValueError):
    """Raised when the settings file is missing, malformed or invalid."""
