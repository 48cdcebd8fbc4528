"""
Presentation surface for the savings calendar.

The tracker writes display values (totals, goal statuses, progress) into a
Display object; the render_* helpers turn that into terminal text.
"""

import os
import sys
from dataclasses import dataclass, field
from typing import List

from .aggregator import monthly_total
from .goals import format_money
from .months import month_name
from .records import AnnualState, MonthRecord, MONTHS_PER_YEAR


def _supports_color():
    """Check if the terminal supports color output."""
    if not sys.stdout.isatty():
        return False
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    term = os.environ.get('TERM', '')
    return term != 'dumb'


class _Colors:
    """ANSI color codes with automatic detection."""
    def __init__(self):
        if _supports_color():
            self.RESET = '\033[0m'
            self.BOLD = '\033[1m'
            self.DIM = '\033[2m'
            self.GREEN = '\033[32m'
            self.YELLOW = '\033[33m'
        else:
            self.RESET = ''
            self.BOLD = ''
            self.DIM = ''
            self.GREEN = ''
            self.YELLOW = ''

C = _Colors()


@dataclass
class MonthDisplay:
    """Display regions of one month."""

    total_text: str = ''
    monthly_status: str = ''
    goal_status: str = ''
    progress_percent: float = 0.0
    goal_met: bool = False


@dataclass
class Display:
    months: List[MonthDisplay] = field(
        default_factory=lambda: [MonthDisplay() for _ in range(MONTHS_PER_YEAR)]
    )
    annual_text: str = ''

    def month(self, index: int) -> MonthDisplay:
        if not 1 <= index <= MONTHS_PER_YEAR:
            raise IndexError(f"Month index out of range: {index}")
        return self.months[index - 1]


def progress_bar(percent: float, width: int = 20) -> str:
    """Text progress bar, e.g. [#####---------------]."""
    percent = max(0.0, min(100.0, percent))
    filled = int(round(width * percent / 100))
    return '[' + '#' * filled + '-' * (width - filled) + ']'


def render_month(index: int, record: MonthRecord, view: MonthDisplay,
                 currency_format: str = "${amount}", decimal_separator: str = '.') -> str:
    """Render one month's inputs and display regions."""
    def fmt(amount):
        return format_money(amount, currency_format)

    lines = [
        f"{C.BOLD}{month_name(index).upper()}{C.RESET}",
        "-" * 50,
    ]
    amounts = record.weekly_amounts(decimal_separator)
    weeks = '  '.join(f"{fmt(a):>12}" for a in amounts)
    lines.append(f"Weeks:        {weeks}")
    if view.total_text:
        lines.append(view.total_text)
    if view.monthly_status:
        lines.append(f"{C.DIM}{view.monthly_status}{C.RESET}")

    goal = record.goal
    if goal.label or goal.target or goal.target_month:
        target = fmt(goal.target_amount(decimal_separator))
        header = f"Cumulative goal: {goal.label or '(unnamed)'} - {target}"
        if goal.target_month:
            header += f" by {goal.target_month}"
        lines.append(header)

    color = C.GREEN if view.goal_met else C.YELLOW
    lines.append(
        f"{progress_bar(view.progress_percent)} {view.progress_percent:5.1f}%  "
        f"{color}{view.goal_status}{C.RESET}"
    )
    return '\n'.join(lines)


def render_year(state: AnnualState, display: Display,
                currency_format: str = "${amount}", decimal_separator: str = '.',
                year=None) -> str:
    """Render a one-line-per-month summary and the annual total."""
    def fmt(amount):
        return format_money(amount, currency_format)

    title = f"{year} SAVINGS CALENDAR" if year else "SAVINGS CALENDAR"
    lines = [
        "=" * 80,
        title,
        "=" * 80,
        f"{'Month':<12} {'Total':>14} {'Monthly goal':>14}  {'Cumulative goal':<30}",
        "-" * 80,
    ]
    for index, (record, view) in enumerate(zip(state, display.months), 1):
        total = monthly_total(record, decimal_separator)
        goal = record.monthly_goal_amount(decimal_separator)
        goal_text = fmt(goal) if goal > 0 else '-'
        progress = ''
        if view.goal_status:
            color = C.GREEN if view.goal_met else C.DIM
            progress = f"{color}{view.progress_percent:5.1f}% {view.goal_status}{C.RESET}"
        lines.append(
            f"{month_name(index):<12} {fmt(total):>14} {goal_text:>14}  {progress}"
        )
    lines.append("-" * 80)
    if display.annual_text:
        lines.append(f"{C.BOLD}{display.annual_text}{C.RESET}")
    return '\n'.join(lines)
