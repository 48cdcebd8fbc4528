"""
Savings tracker: ties user actions to totals, goal checks, display and storage.

Every action runs to completion synchronously: read the records, aggregate,
evaluate goals, update the display, then save the whole year.
"""

import logging

from .aggregator import annual_total, monthly_total
from .display import Display
from .goals import evaluate_all_goals, evaluate_monthly_goal, format_money
from .records import AnnualState, set_field
from .storage import STORAGE_KEY, load_state, save_state

logger = logging.getLogger(__name__)


class SavingsTracker:
    """
    Owns the year's state and keeps the display and the store in sync with it.

    Saves are write-through: every recalculation and every field edit stores
    the full state immediately.
    """

    def __init__(self, state=None, store=None, display=None,
                 currency_format="${amount}", decimal_separator='.',
                 storage_key=STORAGE_KEY):
        self.state = state if state is not None else AnnualState()
        self.store = store
        self.display = display if display is not None else Display()
        self.currency_format = currency_format
        self.decimal_separator = decimal_separator
        self.storage_key = storage_key

    def _fmt(self, amount):
        return format_money(amount, self.currency_format)

    def persist(self) -> bool:
        if self.store is None:
            return False
        return save_state(self.store, self.state, self.storage_key)

    def show_month_total(self, month_index: int) -> float:
        record = self.state.month(month_index)
        total = monthly_total(record, self.decimal_separator)
        self.display.month(month_index).total_text = f"Total this month: {self._fmt(total)}"
        return total

    def update_all_goals(self) -> None:
        """Recompute the cumulative goal display of all twelve months."""
        results = evaluate_all_goals(
            self.state, self.currency_format, self.decimal_separator
        )
        for view, result in zip(self.display.months, results):
            view.goal_status = result.status
            view.progress_percent = result.percent
            view.goal_met = result.met_goal

    def recalculate_month(self, month_index: int) -> None:
        total = self.show_month_total(month_index)
        goal = self.state.month(month_index).monthly_goal_amount(self.decimal_separator)
        result = evaluate_monthly_goal(total, goal, self.currency_format)
        self.display.month(month_index).monthly_status = result.status
        # Any month's weeks can feed any month's cumulative goal
        self.update_all_goals()
        self.persist()

    def recalculate_year(self) -> float:
        total = annual_total(self.state, self.decimal_separator)
        self.display.annual_text = f"Annual total: {self._fmt(total)}"
        self.update_all_goals()
        self.persist()
        return total

    def on_field_edit(self, month_index: int, field: str, value) -> None:
        set_field(self.state.month(month_index), field, value)
        logger.debug(f"Month {month_index}: {field} = {value!r}")
        self.persist()

    def init(self) -> None:
        """Restore saved state, then refresh every display region."""
        if self.store is not None:
            load_state(self.store, self.state, self.storage_key)
        for index in range(1, len(self.state) + 1):
            self.show_month_total(index)
        self.update_all_goals()
        self.recalculate_year()
