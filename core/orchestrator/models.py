"""Render-ready view models derived from fight records."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from core.importer.models import Category, FighterFact, ParsedImport
from core.templates.catalog import TemplateId
from core.templates.scenarios import FightScenarioId, FightScenarioLead


class FighterView(BaseModel):
    """One combatant as handed to template renderers."""

    model_config = ConfigDict(extra="forbid")

    name: str
    subtitle: str
    color: str
    portrait: str = ""
    stats: dict[str, int] = Field(default_factory=dict)


class ScoreRow(BaseModel):
    """Per-category comparison between both combatants."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    label: str
    a: int
    b: int
    delta: int
    winner: Literal["a", "b", "draw"]


class ActiveFight(BaseModel):
    """Independent copy of everything the renderer needs for one matchup."""

    model_config = ConfigDict(extra="forbid")

    fight_id: str | None = None
    file_name: str | None = None
    categories: list[Category]
    fighter_a: FighterView
    fighter_b: FighterView
    facts_a: list[FighterFact]
    facts_b: list[FighterFact]
    wins_a: list[str]
    wins_b: list[str]
    template_order: list[TemplateId]
    active_template_id: TemplateId
    template_blocks: dict[str, list[str]] = Field(default_factory=dict)


class ImportPreview(BaseModel):
    """Parsed document plus the category schema synthesized from it."""

    model_config = ConfigDict(extra="forbid")

    parsed: ParsedImport
    categories: list[Category]
    stats_a: dict[str, int]
    stats_b: dict[str, int]
    score_rows: list[ScoreRow]
    average_a: float
    average_b: float

    def to_json(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


class CardView(BaseModel):
    """Character-card content after block fields override imported facts."""

    model_config = ConfigDict(extra="forbid")

    title: str
    subtitle: str
    facts: list[FighterFact]
    quote: str


class SimulationPhase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    index: int
    mode: Literal["bars", "split", "animation"]
    animation: FightScenarioId
    lead: FightScenarioLead
    title: str
    a_label: str
    b_label: str
    a_value: float
    b_value: float


class TemplateView(BaseModel):
    """One template's block fields resolved against the active fight."""

    model_config = ConfigDict(extra="forbid")

    template_id: TemplateId
    headline: str
    subtitle: str
    fields: dict[str, str] = Field(default_factory=dict)
    plain_lines: list[str] = Field(default_factory=list)
    card: CardView | None = None
    curves: dict[str, list[float]] = Field(default_factory=dict)
    phases: list[SimulationPhase] = Field(default_factory=list)
