"""Character-derived modifiers: ability scores and proficiency."""

from .attributes import ABILITY_NAMES, AbilityName, ability_modifier, get_modifier
from .proficiency import (
    ProficiencyOptions,
    ProficiencyRank,
    ProficiencyRankError,
    get_proficiency_bonus,
    proficiency_modifier,
)

__all__ = [
    "ABILITY_NAMES",
    "AbilityName",
    "ProficiencyOptions",
    "ProficiencyRank",
    "ProficiencyRankError",
    "ability_modifier",
    "get_modifier",
    "get_proficiency_bonus",
    "proficiency_modifier",
]
