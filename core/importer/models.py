"""Domain models for versus imports, category schemas and fight records.

Persisted field names keep the camelCase keys used by stored collections;
Python attributes are snake_case and map onto them through aliases.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from core.templates.catalog import TemplateId

_PERSISTED_CONFIG = ConfigDict(extra="forbid", populate_by_name=True)


class ParsedStat(BaseModel):
    """One authored stat line, already clamped to the stat range."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str
    value: int = Field(ge=0, le=100)


class FighterFact(BaseModel):
    """Short labeled trait shown on character cards."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str
    text: str


class Category(BaseModel):
    """Reconciled stat axis shared by both combatants."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    label: str


class CategoryPayload(BaseModel):
    """Category schema plus per-combatant values keyed by category id."""

    model_config = ConfigDict(extra="forbid")

    categories: list[Category]
    stats_a: dict[str, int]
    stats_b: dict[str, int]


class ParsedImport(BaseModel):
    """Canonical result of parsing one versus document."""

    model_config = _PERSISTED_CONFIG

    fighter_a_name: str = Field(alias="fighterAName")
    fighter_b_name: str = Field(alias="fighterBName")
    stats_a: list[ParsedStat] = Field(default_factory=list, alias="statsA")
    stats_b: list[ParsedStat] = Field(default_factory=list, alias="statsB")
    facts_a: list[FighterFact] = Field(default_factory=list, alias="factsA")
    facts_b: list[FighterFact] = Field(default_factory=list, alias="factsB")
    wins_a: list[str] = Field(default_factory=list, alias="winsA")
    wins_b: list[str] = Field(default_factory=list, alias="winsB")
    template_order: list[TemplateId] = Field(default_factory=list, alias="templateOrder")
    template_blocks: dict[str, list[str]] = Field(default_factory=dict, alias="templateBlocks")

    def to_persisted(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


class FightRecord(BaseModel):
    """A user-confirmed matchup with both portraits attached."""

    model_config = _PERSISTED_CONFIG

    id: str
    name: str
    file_name: str = Field(alias="fileName")
    created_at: int = Field(alias="createdAt")
    payload: ParsedImport
    portrait_a: str = Field(alias="portraitADataUrl")
    portrait_b: str = Field(alias="portraitBDataUrl")

    def to_persisted(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


class MissingSection(BaseModel):
    """A required numbered section is absent from the document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["missing_section"] = "missing_section"
    section: int

    @property
    def message(self) -> str:
        return f"Import error: missing section {self.section}."


class InsufficientStats(BaseModel):
    """Section 2 or 6 produced no parseable stat lines."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["insufficient_stats"] = "insufficient_stats"

    @property
    def message(self) -> str:
        return 'Import error: sections 2 and 6 need stat lines like "- Strength: 96".'


ImportIssue = MissingSection | InsufficientStats


@dataclass(frozen=True)
class ImportSuccess:
    data: ParsedImport
    ok: Literal[True] = True


@dataclass(frozen=True)
class ImportFailure:
    error: ImportIssue
    ok: Literal[False] = False


ImportResult = ImportSuccess | ImportFailure
