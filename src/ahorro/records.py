"""
Month records for the savings calendar.

Each month keeps the raw text the user typed (four weekly amounts, a monthly
goal and a cumulative goal). Numbers are parsed on demand so that blank or
invalid entries survive a save/restore cycle exactly as entered.
"""

import math
import re
from dataclasses import dataclass, field
from typing import List, Optional

from .months import resolve_month

WEEKS_PER_MONTH = 4
MONTHS_PER_YEAR = 12

WEEK_FIELDS = tuple(f'week{i}' for i in range(1, WEEKS_PER_MONTH + 1))
GOAL_FIELDS = ('goal_label', 'goal_target', 'goal_target_month')
FIELDS = WEEK_FIELDS + ('monthly_goal',) + GOAL_FIELDS


class UnknownFieldError(ValueError):
    """Raised when an editable field name is not recognized."""

    def __init__(self, name):
        self.name = name
        super().__init__(
            f"Unknown field '{name}'. Valid fields: {', '.join(FIELDS)}"
        )


def parse_amount(amount_str, decimal_separator='.'):
    """Parse an amount string to float, handling various formats.

    Args:
        amount_str: String like "1,234.56" or "1.234,56" or "(100.00)"
        decimal_separator: Character used as decimal separator ('.' or ',')

    Returns:
        Float value of the amount

    Raises:
        ValueError: if the text is not a number
    """
    amount_str = str(amount_str).strip()

    # Parentheses notation for negative: (100.00) -> -100.00
    negative = False
    if amount_str.startswith('(') and amount_str.endswith(')'):
        negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r'[$€£¥]', '', amount_str).strip()

    if decimal_separator == ',':
        # 1.234,56 or 1 234,56
        amount_str = amount_str.replace('.', '').replace(' ', '')
        amount_str = amount_str.replace(',', '.')
    else:
        amount_str = amount_str.replace(',', '')

    # float() would accept digit grouping like 1_000
    if '_' in amount_str:
        raise ValueError(f"Invalid amount: '{amount_str}'")

    result = float(amount_str)
    return -result if negative else result


def coerce_amount(value, decimal_separator='.') -> float:
    """Parse a user-entered amount, falling back to 0.0.

    Blank, non-numeric, NaN and infinite values all become 0.0. Negative
    amounts are returned as typed.
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        result = float(value)
    else:
        try:
            result = parse_amount(value, decimal_separator)
        except ValueError:
            return 0.0
    if not math.isfinite(result):
        return 0.0
    return result


def _text(value) -> str:
    if value is None:
        return ''
    return str(value)


@dataclass
class CumulativeGoal:
    """A target to reach by summing monthly totals from January to a month."""

    label: str = ''
    target: str = ''  # Raw amount text
    target_month: str = ''  # Free-text month name, e.g. "marzo"

    def target_amount(self, decimal_separator='.') -> float:
        return coerce_amount(self.target, decimal_separator)

    @property
    def target_month_index(self) -> Optional[int]:
        return resolve_month(self.target_month)

    @property
    def has_target_month(self) -> bool:
        return bool(self.target_month.strip())

    @property
    def is_active(self) -> bool:
        """True when a target month is set and recognized."""
        return self.has_target_month and self.target_month_index is not None


@dataclass
class MonthRecord:
    """Raw user input for one calendar month."""

    weeks: List[str] = field(default_factory=lambda: [''] * WEEKS_PER_MONTH)
    monthly_goal: str = ''
    goal: CumulativeGoal = field(default_factory=CumulativeGoal)

    def __post_init__(self):
        # Always exactly four weeks
        weeks = [_text(w) for w in self.weeks[:WEEKS_PER_MONTH]]
        weeks.extend([''] * (WEEKS_PER_MONTH - len(weeks)))
        self.weeks = weeks

    def weekly_amounts(self, decimal_separator='.') -> List[float]:
        return [coerce_amount(w, decimal_separator) for w in self.weeks]

    def monthly_goal_amount(self, decimal_separator='.') -> float:
        return coerce_amount(self.monthly_goal, decimal_separator)


@dataclass
class AnnualState:
    """The twelve month records of the year, January first."""

    months: List[MonthRecord] = field(
        default_factory=lambda: [MonthRecord() for _ in range(MONTHS_PER_YEAR)]
    )

    def __post_init__(self):
        if len(self.months) != MONTHS_PER_YEAR:
            raise ValueError(
                f"AnnualState needs {MONTHS_PER_YEAR} months, got {len(self.months)}"
            )

    def month(self, index: int) -> MonthRecord:
        """Return the record for a 1-based month index."""
        if not 1 <= index <= MONTHS_PER_YEAR:
            raise IndexError(f"Month index out of range: {index}")
        return self.months[index - 1]

    def __iter__(self):
        return iter(self.months)

    def __len__(self):
        return len(self.months)


def get_field(record: MonthRecord, name: str) -> str:
    """Read one editable field of a month record as raw text."""
    if name in WEEK_FIELDS:
        return record.weeks[WEEK_FIELDS.index(name)]
    if name == 'monthly_goal':
        return record.monthly_goal
    if name == 'goal_label':
        return record.goal.label
    if name == 'goal_target':
        return record.goal.target
    if name == 'goal_target_month':
        return record.goal.target_month
    raise UnknownFieldError(name)


def set_field(record: MonthRecord, name: str, value) -> None:
    """Write one editable field of a month record. None is stored as ''."""
    value = _text(value)
    if name in WEEK_FIELDS:
        record.weeks[WEEK_FIELDS.index(name)] = value
    elif name == 'monthly_goal':
        record.monthly_goal = value
    elif name == 'goal_label':
        record.goal.label = value
    elif name == 'goal_target':
        record.goal.target = value
    elif name == 'goal_target_month':
        record.goal.target_month = value
    else:
        raise UnknownFieldError(name)
