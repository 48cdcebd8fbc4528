"""
Savings totals: per month, running from January, and for the whole year.

All functions are pure and read only the raw weekly amounts of each record.
"""

from typing import List, Optional

from .records import AnnualState, MonthRecord, MONTHS_PER_YEAR


def monthly_total(record: MonthRecord, decimal_separator='.') -> float:
    """Sum the four weekly amounts; invalid entries count as 0."""
    return sum(record.weekly_amounts(decimal_separator))


def running_totals(state: AnnualState, decimal_separator='.') -> List[float]:
    """Cumulative sums: element i is the total from January through month i+1."""
    totals = []
    running = 0.0
    for record in state:
        running += monthly_total(record, decimal_separator)
        totals.append(running)
    return totals


def cumulative_total(state: AnnualState, upto_month: Optional[int],
                     decimal_separator='.') -> float:
    """Total saved from January through upto_month (1-12, inclusive).

    Returns 0.0 when upto_month is None or out of range.
    """
    if upto_month is None or not 1 <= upto_month <= MONTHS_PER_YEAR:
        return 0.0
    return sum(
        monthly_total(record, decimal_separator)
        for record in state.months[:upto_month]
    )


def annual_total(state: AnnualState, decimal_separator='.') -> float:
    return sum(monthly_total(record, decimal_separator) for record in state)
