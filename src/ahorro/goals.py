"""
Goal evaluation for monthly and cumulative savings goals.

Monthly goals compare one month's total against a target. Cumulative goals
compare the running total from January through a target month against a
target amount and also report a fill percentage (0-100) for progress bars.
"""

import math
from dataclasses import dataclass
from typing import List

from .aggregator import cumulative_total
from .records import AnnualState, MonthRecord

MONTHLY_GOAL_NOT_SET = "Monthly goal not set"
MONTHLY_GOAL_REACHED = "Monthly goal reached ({total} >= {goal})"
MONTHLY_GOAL_SHORT = "Short by {missing} to reach monthly goal"

NO_GOAL = "No goal"
GOAL_REACHED = "Goal reached"
GOAL_SHORT = "Short by {missing}"
TARGET_MONTH_NOT_RECOGNIZED = "Target month not recognized"


@dataclass
class MonthlyGoalResult:
    status: str
    met_goal: bool = False


@dataclass
class CumulativeGoalResult:
    status: str
    percent: float = 0.0
    met_goal: bool = False


def _finite(amount) -> float:
    if amount is None:
        return 0.0
    try:
        amount = float(amount)
    except (TypeError, ValueError):
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def format_money(amount, currency_format: str = "${amount}") -> str:
    """Format amount with currency symbol/format (with 2 decimal places).

    Args:
        amount: The amount to format; None and NaN are shown as 0
        currency_format: Format string with {amount} placeholder

    Returns:
        Formatted currency string, e.g. "$1,234.56"
    """
    formatted_num = f"{_finite(amount):,.2f}"
    return currency_format.format(amount=formatted_num)


def evaluate_monthly_goal(total, goal, currency_format="${amount}") -> MonthlyGoalResult:
    """Compare a month's total against its monthly goal."""
    total = _finite(total)
    goal = _finite(goal)

    if goal <= 0:
        return MonthlyGoalResult(MONTHLY_GOAL_NOT_SET)
    if total >= goal:
        return MonthlyGoalResult(
            MONTHLY_GOAL_REACHED.format(
                total=format_money(total, currency_format),
                goal=format_money(goal, currency_format),
            ),
            met_goal=True,
        )
    return MonthlyGoalResult(
        MONTHLY_GOAL_SHORT.format(missing=format_money(goal - total, currency_format))
    )


def evaluate_cumulative_goal(cumulative, goal, currency_format="${amount}") -> CumulativeGoalResult:
    """Compare a January-to-target-month total against a cumulative goal.

    The percentage is capped at 100 once the goal is met.
    """
    cumulative = _finite(cumulative)
    goal = _finite(goal)

    if goal <= 0:
        return CumulativeGoalResult(NO_GOAL)

    percent = min(100.0, cumulative * 100 / goal)
    if cumulative >= goal:
        return CumulativeGoalResult(GOAL_REACHED, percent=percent, met_goal=True)
    return CumulativeGoalResult(
        GOAL_SHORT.format(missing=format_money(goal - cumulative, currency_format)),
        percent=percent,
    )


def evaluate_goal_for_month(record: MonthRecord, state: AnnualState,
                            currency_format="${amount}",
                            decimal_separator='.') -> CumulativeGoalResult:
    """Evaluate the cumulative goal stored on one month.

    A goal without a target month is inactive and reported as having no goal.
    A target month that cannot be resolved is reported as such, whatever the
    current totals are.
    """
    goal = record.goal
    if not goal.is_active:
        if goal.has_target_month:
            return CumulativeGoalResult(TARGET_MONTH_NOT_RECOGNIZED)
        return evaluate_cumulative_goal(0, 0, currency_format)

    return evaluate_cumulative_goal(
        cumulative_total(state, goal.target_month_index, decimal_separator),
        goal.target_amount(decimal_separator),
        currency_format,
    )


def evaluate_all_goals(state: AnnualState, currency_format="${amount}",
                       decimal_separator='.') -> List[CumulativeGoalResult]:
    """Evaluate the cumulative goal of every month, January first."""
    return [
        evaluate_goal_for_month(record, state, currency_format, decimal_separator)
        for record in state
    ]
