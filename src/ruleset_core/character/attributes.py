"""Ability scores and the modifiers derived from them."""

from enum import StrEnum

from ruleset_core.systems.modifiers import Modifier, ModifierType, ModifierValidationError


class AbilityName(StrEnum):
    """The six abilities, by abbreviation."""

    STRENGTH = "str"
    DEXTERITY = "dex"
    CONSTITUTION = "con"
    INTELLIGENCE = "int"
    WISDOM = "wis"
    CHARISMA = "cha"

    @property
    def label(self) -> str:
        return self.name.capitalize()


# Constant ability abbreviations for easy import
ABILITY_NAMES = [ability.value for ability in AbilityName]


def get_modifier(score: int) -> int:
    """Calculate the modifier for an ability score.

    Args:
        score: The ability score (typically 1-20+)

    Returns:
        The modifier: (score - 10) // 2, rounded toward negative infinity

    Examples:
        >>> get_modifier(10)
        0
        >>> get_modifier(14)
        2
        >>> get_modifier(9)
        -1
    """
    return (score - 10) // 2


def ability_modifier(ability: AbilityName | str, score: int) -> Modifier:
    """Build the ability modifier for a statistic.

    Args:
        ability: Ability member or abbreviation ("str", "dex", ...)
        score: The ability score

    Returns:
        Modifier of type ability, named "ability-<abbreviation>"

    Raises:
        ModifierValidationError: If the abbreviation is not a known ability
    """
    try:
        ability = AbilityName(ability)
    except ValueError:
        raise ModifierValidationError(
            f"Invalid ability abbreviation {ability!r} "
            f"(must be one of: {', '.join(ABILITY_NAMES)})"
        ) from None

    return Modifier(
        name=f"ability-{ability.value}",
        value=get_modifier(score),
        type=ModifierType.ABILITY,
        label=ability.label,
    )
