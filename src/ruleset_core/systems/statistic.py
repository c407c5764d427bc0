"""Statistic modifier aggregation and stacking rules.

A statistic (a skill, a save, armor class, ...) collects modifiers from many
sources. Stacking reduces them to a single total:

- Untyped modifiers always stack, with each other and with everything else.
- For every other type, only the best bonus and the worst penalty count.
  Bonuses and penalties of the same type never suppress each other.
- Among equal best values, the most recently added modifier is the one kept.
- Names are unique within a statistic; the first modifier seen for a name wins.
- A modifier the caller ignores is always disabled and never competes.
"""

from collections.abc import Collection, Iterable, Sequence
from enum import Enum

import structlog

from ruleset_core.systems.modifiers import AppliedModifier, Modifier, ModifierType

logger = structlog.get_logger(__name__)


class StackingRule(Enum):
    """How modifiers of a given type combine."""

    STACKS = "stacks"  # every modifier counts
    BEST_PER_SIGN = "best_per_sign"  # one bonus and one penalty at most


STACKING_RULES: dict[ModifierType, StackingRule] = {
    ModifierType.ABILITY: StackingRule.BEST_PER_SIGN,
    ModifierType.PROFICIENCY: StackingRule.BEST_PER_SIGN,
    ModifierType.CIRCUMSTANCE: StackingRule.BEST_PER_SIGN,
    ModifierType.ITEM: StackingRule.BEST_PER_SIGN,
    ModifierType.POTENCY: StackingRule.BEST_PER_SIGN,
    ModifierType.STATUS: StackingRule.BEST_PER_SIGN,
    ModifierType.UNTYPED: StackingRule.STACKS,
}

_missing_rules = set(ModifierType) - STACKING_RULES.keys()
if _missing_rules:
    raise RuntimeError(f"No stacking rule for modifier types: {sorted(_missing_rules)}")


def deduplicate(modifiers: Iterable[Modifier]) -> list[Modifier]:
    """Drop modifiers whose name was already seen, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[Modifier] = []
    for modifier in modifiers:
        if modifier.name in seen:
            logger.debug(
                "modifier_duplicate_ignored",
                modifier=modifier.name,
                type=modifier.type.value,
                value=modifier.value,
            )
            continue
        seen.add(modifier.name)
        unique.append(modifier)
    return unique


def apply_stacking_rules(
    modifiers: Sequence[Modifier], ignored: Collection[str] = frozenset()
) -> tuple[AppliedModifier, ...]:
    """Decide which modifiers are enabled.

    Expects an already de-duplicated sequence. Pure: the same input always gives
    the same output and nothing is mutated.

    Args:
        modifiers: Modifiers in insertion order
        ignored: Names of modifiers switched off by the caller; they are always
            disabled and take no part in choosing the best bonus or penalty

    Returns:
        One AppliedModifier per input modifier, in the same order
    """
    # type -> index of the current best bonus / penalty
    best_bonus: dict[ModifierType, int] = {}
    worst_penalty: dict[ModifierType, int] = {}
    always: set[int] = set()

    for index, modifier in enumerate(modifiers):
        if modifier.name in ignored:
            continue
        rule = STACKING_RULES[modifier.type]
        if rule is StackingRule.STACKS:
            always.add(index)
        elif modifier.is_bonus:
            current = best_bonus.get(modifier.type)
            # >= so that a later equal bonus takes over
            if current is None or modifier.value >= modifiers[current].value:
                best_bonus[modifier.type] = index
        else:
            current = worst_penalty.get(modifier.type)
            if current is None or modifier.value <= modifiers[current].value:
                worst_penalty[modifier.type] = index

    enabled = always | set(best_bonus.values()) | set(worst_penalty.values())
    return tuple(
        AppliedModifier(modifier=modifier, enabled=index in enabled)
        for index, modifier in enumerate(modifiers)
    )


class StatisticModifier:
    """
    The list of modifiers applied to one statistic, with stacking applied.

    Build a fresh instance per resolution. Every mutation re-runs the stacking
    rules, so ``total`` always reflects the current modifiers.
    """

    def __init__(
        self,
        name: str,
        modifiers: Iterable[Modifier] | None = None,
        ignored: Iterable[str] = (),
    ) -> None:
        """
        Initialize a statistic.

        Args:
            name: Name of the statistic (e.g. "perception", "ac")
            modifiers: Initial modifiers; duplicate names keep the first one
            ignored: Names of modifiers to keep in the list but switch off
        """
        self.name = name
        self._modifiers: list[Modifier] = deduplicate(modifiers or [])
        self._ignored: set[str] = set(ignored)
        self._applied: tuple[AppliedModifier, ...] = ()
        self._total = 0
        self.recompute()

    def __repr__(self) -> str:
        return f"StatisticModifier(name={self.name!r}, total={self._total}, modifiers={len(self._modifiers)})"

    def __len__(self) -> int:
        return len(self._modifiers)

    def __contains__(self, name: object) -> bool:
        return any(m.name == name for m in self._modifiers)

    @property
    def modifiers(self) -> tuple[Modifier, ...]:
        """All modifiers in insertion order, enabled or not."""
        return tuple(self._modifiers)

    @property
    def applied(self) -> tuple[AppliedModifier, ...]:
        """Modifiers paired with their enabled state from the last recompute."""
        return self._applied

    @property
    def ignored(self) -> frozenset[str]:
        """Names of modifiers switched off by the caller."""
        return frozenset(self._ignored)

    @property
    def enabled_modifiers(self) -> tuple[Modifier, ...]:
        return tuple(a.modifier for a in self._applied if a.enabled)

    @property
    def total(self) -> int:
        """Sum of all enabled modifier values."""
        return self._total

    @property
    def breakdown(self) -> str:
        """Human-readable list of the enabled modifiers, e.g. "Dexterity +2, Trained +5"."""
        return ", ".join(m.format() for m in self.enabled_modifiers)

    def get(self, name: str) -> Modifier | None:
        return next((m for m in self._modifiers if m.name == name), None)

    def is_enabled(self, name: str) -> bool:
        """Whether the modifier with this name currently counts toward the total."""
        return any(a.enabled for a in self._applied if a.name == name)

    def add(self, modifier: Modifier) -> bool:
        """
        Append a modifier.

        Args:
            modifier: Modifier to add

        Returns:
            True if added, False if a modifier with the same name already exists
        """
        if modifier.name in self:
            logger.debug(
                "modifier_duplicate_ignored",
                statistic=self.name,
                modifier=modifier.name,
            )
            return False

        self._modifiers.append(modifier)
        self.recompute()
        return True

    def prepend(self, modifier: Modifier) -> bool:
        """Insert a modifier at the front. Same duplicate handling as :meth:`add`."""
        if modifier.name in self:
            logger.debug(
                "modifier_duplicate_ignored",
                statistic=self.name,
                modifier=modifier.name,
            )
            return False

        self._modifiers.insert(0, modifier)
        self.recompute()
        return True

    def replace(self, modifier: Modifier) -> None:
        """
        Substitute the same-named modifier in place, or append if absent.

        Unlike :meth:`add`, the new modifier wins over the existing one. Its
        position (and therefore its tie-break order) is the one it replaces.
        """
        for index, existing in enumerate(self._modifiers):
            if existing.name == modifier.name:
                self._modifiers[index] = modifier
                logger.debug(
                    "modifier_replaced",
                    statistic=self.name,
                    modifier=modifier.name,
                    old_value=existing.value,
                    new_value=modifier.value,
                )
                break
        else:
            self._modifiers.append(modifier)
        self.recompute()

    def ignore(self, name: str) -> bool:
        """
        Switch a modifier off while keeping it in the list.

        An ignored modifier is always disabled and takes no part in picking the
        best bonus or penalty of its type, so the runner-up can count instead.

        Returns:
            True if a modifier with this name exists
        """
        if name not in self:
            return False
        self._ignored.add(name)
        self.recompute()
        return True

    def unignore(self, name: str) -> bool:
        """Let a previously ignored modifier compete again."""
        if name not in self._ignored:
            return False
        self._ignored.discard(name)
        self.recompute()
        return True

    def is_ignored(self, name: str) -> bool:
        return name in self._ignored

    def remove(self, modifier: str | Modifier) -> bool:
        """
        Remove a modifier by name or by instance.

        Returns:
            True if a modifier was removed
        """
        name = modifier.name if isinstance(modifier, Modifier) else modifier
        for index, existing in enumerate(self._modifiers):
            if existing.name != name:
                continue
            if isinstance(modifier, Modifier) and existing is not modifier:
                return False
            del self._modifiers[index]
            self._ignored.discard(name)
            self.recompute()
            return True
        return False

    def recompute(self) -> tuple[AppliedModifier, ...]:
        """Re-apply the stacking rules and refresh the total."""
        self._applied = apply_stacking_rules(self._modifiers, self._ignored)
        self._total = sum(a.contribution for a in self._applied)
        logger.debug(
            "statistic_recomputed",
            statistic=self.name,
            total=self._total,
            enabled=[a.name for a in self._applied if a.enabled],
            ignored=sorted(self._ignored),
        )
        return self._applied


class CheckModifier(StatisticModifier):
    """Modifiers for a single check: a statistic's modifiers plus check-specific ones.

    Modifiers ignored on the statistic stay ignored on the check.
    """

    def __init__(
        self, name: str, statistic: StatisticModifier, modifiers: Iterable[Modifier] = ()
    ) -> None:
        super().__init__(name, [*statistic.modifiers, *modifiers], ignored=statistic.ignored)
