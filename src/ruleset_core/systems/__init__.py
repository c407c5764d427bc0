"""Modifier stacking, degree of success and check resolution."""

from .automatic_bonus import (
    AutomaticBonusLoadError,
    AutomaticBonusValues,
    AutomaticBonusVariant,
    apply_automatic_bonuses,
    bonus_values,
    load_bonus_table,
    potency_modifiers,
)
from .check import CheckResult, resolve_check
from .degree_of_success import (
    DegreeAdjustment,
    DegreeAdjustmentAmount,
    DegreeOfSuccess,
    DegreeResult,
    adjust_degree,
    apply_adjustment,
    classify,
    classify_detailed,
)
from .modifiers import AppliedModifier, Modifier, ModifierType, ModifierValidationError
from .statistic import CheckModifier, StatisticModifier, apply_stacking_rules

__all__ = [
    "AppliedModifier",
    "AutomaticBonusLoadError",
    "AutomaticBonusValues",
    "AutomaticBonusVariant",
    "CheckModifier",
    "CheckResult",
    "DegreeAdjustment",
    "DegreeAdjustmentAmount",
    "DegreeOfSuccess",
    "DegreeResult",
    "Modifier",
    "ModifierType",
    "ModifierValidationError",
    "StatisticModifier",
    "adjust_degree",
    "apply_adjustment",
    "apply_automatic_bonuses",
    "apply_stacking_rules",
    "bonus_values",
    "classify",
    "classify_detailed",
    "load_bonus_table",
    "potency_modifiers",
    "resolve_check",
]
