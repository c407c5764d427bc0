"""Modifier value objects for statistics and checks.

A modifier is a single named, typed, valued adjustment. Modifiers of the same
type do not stack with each other (except ``untyped`` ones); the stacking
itself lives in :mod:`ruleset_core.systems.statistic`.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ModifierValidationError(ValueError):
    """Raised when a modifier cannot be constructed from the given values."""

    pass


class ModifierType(StrEnum):
    """Bonus and penalty types used by the stacking rules."""

    ABILITY = "ability"
    PROFICIENCY = "proficiency"
    CIRCUMSTANCE = "circumstance"
    ITEM = "item"
    POTENCY = "potency"
    STATUS = "status"
    UNTYPED = "untyped"


def _coerce_type(value: Any) -> ModifierType:
    if isinstance(value, ModifierType):
        return value
    try:
        return ModifierType(str(value).lower())
    except ValueError:
        raise ModifierValidationError(
            f"Invalid modifier type {value!r} "
            f"(must be one of: {', '.join(t.value for t in ModifierType)})"
        ) from None


@dataclass(frozen=True)
class Modifier:
    """A discrete bonus or penalty to a statistic or check.

    Instances are immutable. Whether a modifier currently counts toward a total
    is decided per aggregator and reported as an :class:`AppliedModifier`, so the
    same instance can be shared between statistics.

    Attributes:
        name: Unique key within a statistic (e.g. "ability-dex", "status-heroism")
        value: Signed integer bonus (positive) or penalty (negative)
        type: Stacking type
        source: Optional origin of the modifier (item id, effect id, ...)
        label: Optional display name; falls back to ``name``
        notes: Optional free-form notes
    """

    name: str
    value: int
    type: ModifierType = ModifierType.UNTYPED
    source: str | None = None
    label: str | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ModifierValidationError("Modifier name must be a non-empty string")

        # bool is an int subclass but never a meaningful modifier value
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ModifierValidationError(
                f"Modifier '{self.name}' value must be an integer, got {self.value!r}"
            )

        object.__setattr__(self, "type", _coerce_type(self.type))

    @property
    def display_name(self) -> str:
        return self.label or self.name

    @property
    def is_bonus(self) -> bool:
        return self.value >= 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Modifier":
        """Build a modifier from a loosely-shaped record.

        Accepts ``value`` or the older ``modifier`` key for the numeric value and
        defaults a missing type to ``untyped``.

        Raises:
            ModifierValidationError: If required fields are missing or invalid
        """
        if "name" not in data:
            raise ModifierValidationError("Modifier record missing required field: name")

        if "value" in data:
            value = data["value"]
        elif "modifier" in data:
            value = data["modifier"]
        else:
            raise ModifierValidationError(
                f"Modifier record '{data['name']}' missing required field: value"
            )

        return cls(
            name=data["name"],
            value=value,
            type=data.get("type", ModifierType.UNTYPED),
            source=data.get("source"),
            label=data.get("label"),
            notes=data.get("notes"),
        )

    def format(self) -> str:
        """Format as "<label> +N" / "<label> -N"."""
        return f"{self.display_name} {self.value:+d}"


@dataclass(frozen=True)
class AppliedModifier:
    """A modifier paired with its enabled state after stacking."""

    modifier: Modifier
    enabled: bool

    @property
    def name(self) -> str:
        return self.modifier.name

    @property
    def value(self) -> int:
        return self.modifier.value

    @property
    def contribution(self) -> int:
        """Amount this entry adds to the statistic total."""
        return self.modifier.value if self.enabled else 0
