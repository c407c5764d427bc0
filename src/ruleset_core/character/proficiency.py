"""Proficiency ranks and proficiency modifiers.

If you're untrained, your proficiency bonus is +0 and level contributes
nothing. Otherwise the bonus is your level plus an amount that grows with rank:
+2 trained, +4 expert, +6 master, +8 legendary.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Literal

from ruleset_core.systems.modifiers import Modifier, ModifierType, ModifierValidationError

if TYPE_CHECKING:
    from ruleset_core.config import Settings


class ProficiencyRankError(ModifierValidationError):
    """Raised when a proficiency rank is outside Untrained..Legendary."""

    pass


class ProficiencyRank(IntEnum):
    """Proficiency ranks, from untrained (0) to legendary (4)."""

    UNTRAINED = 0
    TRAINED = 1
    EXPERT = 2
    MASTER = 3
    LEGENDARY = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


MIN_RANK = ProficiencyRank.UNTRAINED
MAX_RANK = ProficiencyRank.LEGENDARY

ProficiencyVariant = Literal["with_level", "without_level"]


@dataclass(frozen=True)
class ProficiencyOptions:
    """Proficiency variant rules, passed explicitly to the factory.

    Attributes:
        variant: "with_level" adds the level to trained-or-better ranks;
            "without_level" never does
        rank_bonuses: Base bonus per rank, indexed Untrained..Legendary
    """

    variant: ProficiencyVariant = "with_level"
    rank_bonuses: tuple[int, int, int, int, int] = (0, 2, 4, 6, 8)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ProficiencyOptions":
        return cls(
            variant=settings.proficiency_variant,
            rank_bonuses=(
                settings.proficiency_untrained_modifier,
                settings.proficiency_trained_modifier,
                settings.proficiency_expert_modifier,
                settings.proficiency_master_modifier,
                settings.proficiency_legendary_modifier,
            ),
        )


DEFAULT_OPTIONS = ProficiencyOptions()


def validate_rank(rank: int) -> ProficiencyRank:
    """Check that a rank is within Untrained..Legendary.

    Raises:
        ProficiencyRankError: If the rank is out of range
    """
    if isinstance(rank, bool) or not isinstance(rank, int) or not MIN_RANK <= rank <= MAX_RANK:
        raise ProficiencyRankError(
            f"Invalid proficiency rank {rank!r} (must be {int(MIN_RANK)}-{int(MAX_RANK)})"
        )
    return ProficiencyRank(rank)


def get_proficiency_bonus(
    level: int, rank: int, options: ProficiencyOptions = DEFAULT_OPTIONS
) -> int:
    """Calculate the proficiency bonus for a level and rank.

    Args:
        level: Character level (non-negative)
        rank: Proficiency rank (0-4)
        options: Variant rules

    Returns:
        0 when untrained (with default options), otherwise level + 2 * rank

    Raises:
        ProficiencyRankError: If the rank is out of range
        ModifierValidationError: If the level is negative
    """
    proficiency = validate_rank(rank)
    if level < 0:
        raise ModifierValidationError(f"Level must be non-negative, got {level}")

    bonus = options.rank_bonuses[proficiency]
    if proficiency is ProficiencyRank.UNTRAINED:
        return bonus
    if options.variant == "with_level":
        bonus += level
    return bonus


def proficiency_modifier(
    level: int, rank: int, options: ProficiencyOptions | None = None
) -> Modifier:
    """Build the proficiency modifier for a statistic.

    Each call returns a new instance; equal arguments give equal values.

    Args:
        level: Character level (non-negative)
        rank: Proficiency rank (0-4)
        options: Variant rules; defaults to proficiency with level

    Returns:
        Modifier of type proficiency, named "proficiency-<rank>"
    """
    proficiency = validate_rank(rank)
    value = get_proficiency_bonus(level, proficiency, options or DEFAULT_OPTIONS)
    return Modifier(
        name=f"proficiency-{proficiency.name.lower()}",
        value=value,
        type=ModifierType.PROFICIENCY,
        label=proficiency.label,
    )
