"""Resolve a rolled check against a DC."""

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from ruleset_core.systems.degree_of_success import (
    DegreeAdjustment,
    DegreeOfSuccess,
    classify_detailed,
)
from ruleset_core.systems.statistic import StatisticModifier

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single check."""

    die: int  # natural die face
    modifier: int  # statistic total added to the die
    total: int
    dc: int
    degree: DegreeOfSuccess
    unadjusted: DegreeOfSuccess  # before rule adjustments
    adjustment: str | None = None  # label of the last adjustment that applied

    @property
    def succeeded(self) -> bool:
        return self.degree >= DegreeOfSuccess.SUCCESS


def resolve_check(
    statistic: StatisticModifier,
    die_result: int,
    dc: int,
    adjustments: Iterable[DegreeAdjustment] = (),
) -> CheckResult:
    """
    Combine an already-rolled d20 with a statistic and classify the result.

    Args:
        statistic: Statistic whose stacked total is added to the die
        die_result: Natural d20 face rolled by the host
        dc: Difficulty class
        adjustments: Degree adjustments, applied in order

    Returns:
        CheckResult with the total and degree of success
    """
    modifier = statistic.total
    total = die_result + modifier
    result = classify_detailed(total, dc, adjustments, die_result=die_result)

    logger.info(
        "check_resolved",
        statistic=statistic.name,
        die=die_result,
        modifier=modifier,
        total=total,
        dc=dc,
        degree=result.value.slug,
        unadjusted=result.unadjusted.slug,
        adjustment=result.adjustment,
    )

    return CheckResult(
        die=die_result,
        modifier=modifier,
        total=total,
        dc=dc,
        degree=result.value,
        unadjusted=result.unadjusted,
        adjustment=result.adjustment,
    )
