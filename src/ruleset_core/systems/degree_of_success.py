"""Degree of success for checks.

Comparing a check total to its DC gives one of four results:

- Critical success: total meets or beats the DC by 10 or more
- Success: total meets or beats the DC
- Failure: total is below the DC
- Critical failure: total misses the DC by 10 or more

A natural 20 on the die improves the result one step and a natural 1 worsens
it one step. Rule-specific adjustments (feats, conditions, ...) are then applied
in order, each one checking the result produced by the ones before it. Every
shift is clamped to the critical failure..critical success range.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from functools import reduce

import structlog

logger = structlog.get_logger(__name__)

# Margin by which a total must beat or miss the DC to become critical
CRITICAL_MARGIN = 10


class DegreeOfSuccess(IntEnum):
    """The four check outcomes, ordered worst to best."""

    CRITICAL_FAILURE = 0
    FAILURE = 1
    SUCCESS = 2
    CRITICAL_SUCCESS = 3

    @property
    def slug(self) -> str:
        """camelCase identifier used by renderers, e.g. "criticalSuccess"."""
        head, *rest = self.name.lower().split("_")
        return head + "".join(part.capitalize() for part in rest)

    @classmethod
    def from_slug(cls, slug: str) -> "DegreeOfSuccess":
        for degree in cls:
            if degree.slug == slug:
                return degree
        raise ValueError(f"Unknown degree of success: {slug!r}")


class DegreeAdjustmentAmount(IntEnum):
    """Common step counts for degree adjustments."""

    LOWER_BY_TWO = -2
    LOWER = -1
    INCREASE = 1
    INCREASE_BY_TWO = 2


@dataclass(frozen=True)
class DegreeAdjustment:
    """A rule that shifts the degree of success when it applies.

    Attributes:
        outcome: Degree this adjustment applies to; None applies to any degree
        amount: Signed number of steps to shift
        label: Optional description of the rule (e.g. "Risky Surgery")
    """

    outcome: DegreeOfSuccess | None
    amount: int
    label: str | None = None

    def applies_to(self, degree: DegreeOfSuccess) -> bool:
        return self.outcome is None or self.outcome == degree


def adjust_degree(degree: DegreeOfSuccess, amount: int) -> DegreeOfSuccess:
    """Shift a degree by ``amount`` steps, clamped to the valid range."""
    shifted = int(degree) + amount
    return DegreeOfSuccess(
        max(DegreeOfSuccess.CRITICAL_FAILURE, min(DegreeOfSuccess.CRITICAL_SUCCESS, shifted))
    )


def apply_adjustment(degree: DegreeOfSuccess, adjustment: DegreeAdjustment) -> DegreeOfSuccess:
    """Apply one adjustment if its precondition matches ``degree``."""
    if not adjustment.applies_to(degree):
        return degree

    adjusted = adjust_degree(degree, adjustment.amount)
    logger.debug(
        "degree_adjustment_applied",
        label=adjustment.label,
        amount=adjustment.amount,
        before=degree.slug,
        after=adjusted.slug,
    )
    return adjusted


def base_degree(total: int, dc: int) -> DegreeOfSuccess:
    """Degree from comparing the total to the DC, before die or rule adjustments."""
    degree = DegreeOfSuccess.SUCCESS if total >= dc else DegreeOfSuccess.FAILURE
    if total >= dc + CRITICAL_MARGIN:
        degree = adjust_degree(degree, 1)
    elif total <= dc - CRITICAL_MARGIN:
        degree = adjust_degree(degree, -1)
    return degree


@dataclass(frozen=True)
class DegreeResult:
    """A classified degree along with what the adjustments did to it.

    Attributes:
        value: Final degree of success
        unadjusted: Degree before any rule adjustment was applied
        adjustment: Label of the last adjustment that applied, if any
    """

    value: DegreeOfSuccess
    unadjusted: DegreeOfSuccess
    adjustment: str | None = None

    @property
    def adjusted(self) -> bool:
        return self.value != self.unadjusted


def _fold_adjustment(result: DegreeResult, adjustment: DegreeAdjustment) -> DegreeResult:
    if not adjustment.applies_to(result.value):
        return result
    return DegreeResult(
        value=apply_adjustment(result.value, adjustment),
        unadjusted=result.unadjusted,
        adjustment=adjustment.label,
    )


def classify_detailed(
    total: int,
    dc: int,
    adjustments: Iterable[DegreeAdjustment] = (),
    *,
    die_result: int | None = None,
) -> DegreeResult:
    """
    Determine the degree of success of a check, keeping the unadjusted degree.

    Args:
        total: Rolled total including all modifiers
        dc: Difficulty class to compare against
        adjustments: Rule adjustments, applied in order
        die_result: Natural d20 face, if the natural 20/1 rule should apply

    Returns:
        DegreeResult with the final and unadjusted degrees
    """
    degree = base_degree(total, dc)

    if die_result == 20:
        degree = adjust_degree(degree, 1)
    elif die_result == 1:
        degree = adjust_degree(degree, -1)

    return reduce(_fold_adjustment, adjustments, DegreeResult(value=degree, unadjusted=degree))


def classify(
    total: int,
    dc: int,
    adjustments: Iterable[DegreeAdjustment] = (),
    *,
    die_result: int | None = None,
) -> DegreeOfSuccess:
    """Determine the degree of success of a check. See :func:`classify_detailed`."""
    return classify_detailed(total, dc, adjustments, die_result=die_result).value
