"""Ahorro - weekly savings calendar with monthly and cumulative goals."""

from ._version import VERSION as __version__
from .aggregator import annual_total, cumulative_total, monthly_total, running_totals
from .goals import evaluate_cumulative_goal, evaluate_goal_for_month, evaluate_monthly_goal, format_money
from .months import resolve_month
from .records import AnnualState, CumulativeGoal, MonthRecord
from .storage import JsonFileStore, MemoryStore, deserialize, restore, serialize
from .tracker import SavingsTracker
