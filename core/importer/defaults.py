"""Built-in default matchup used before any fight is imported."""

from __future__ import annotations

from core.importer.models import Category, FighterFact

FIGHTER_A_COLOR = "#3FC3CF"
FIGHTER_B_COLOR = "#EF5D5D"

DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="strength", label="Strength"),
    Category(id="speed", label="Speed"),
    Category(id="durability", label="Durability"),
    Category(id="battleIq", label="Combat IQ"),
    Category(id="hax", label="Hax"),
    Category(id="stamina", label="Stamina"),
    Category(id="style", label="Fighting Style"),
    Category(id="experience", label="Experience"),
    Category(id="skills", label="Combat Skills"),
)

DEFAULT_FIGHTER_A_NAME = "Superman"
DEFAULT_FIGHTER_A_SUBTITLE = "New 52"
DEFAULT_FIGHTER_A_STATS: dict[str, int] = {
    "strength": 96,
    "speed": 96,
    "durability": 95,
    "battleIq": 92,
    "hax": 80,
    "stamina": 94,
    "style": 89,
    "experience": 90,
    "skills": 91,
}

DEFAULT_FIGHTER_B_NAME = "King Hyperion"
DEFAULT_FIGHTER_B_SUBTITLE = "Earth-4023"
DEFAULT_FIGHTER_B_STATS: dict[str, int] = {
    "strength": 92,
    "speed": 84,
    "durability": 95,
    "battleIq": 84,
    "hax": 83,
    "stamina": 94,
    "style": 83,
    "experience": 92,
    "skills": 83,
}

DEFAULT_FACTS_A: tuple[FighterFact, ...] = (
    FighterFact(title="Style", text="Range control and pace control"),
    FighterFact(title="Advantage", text="Tactical discipline"),
    FighterFact(title="Mentality", text="Win by decision, avoid collateral damage"),
)

DEFAULT_FACTS_B: tuple[FighterFact, ...] = (
    FighterFact(title="Style", text="Aggressive distance closing"),
    FighterFact(title="Advantage", text="Extreme regeneration"),
    FighterFact(title="Mentality", text="Break the opponent at any cost"),
)

DEFAULT_WINS_A: tuple[str, ...] = (
    "Doomsday",
    "Brainiac",
    "Mongul",
    "Pariah",
    "H'el",
    "Rogol Zaar",
    "Ulysses",
    "Wraith",
)

DEFAULT_WINS_B: tuple[str, ...] = (
    "Thor",
    "Hulk",
    "Blue Marvel",
    "Juggernaut",
    "Namora",
    "Winter Guard",
    "Rogue",
    "Gambit",
)
