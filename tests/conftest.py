import pytest

from ahorro.records import AnnualState, CumulativeGoal, MonthRecord


def make_state(weeks_by_month=None):
    """Build an AnnualState from {month_index: [week amounts]}."""
    state = AnnualState()
    for index, weeks in (weeks_by_month or {}).items():
        state.months[index - 1] = MonthRecord(weeks=[str(w) for w in weeks])
    return state


@pytest.fixture
def scenario_state():
    """January saves 100 toward 300 by March; February 200, March 40."""
    state = make_state({
        1: [10, 20, 30, 40],
        2: [50, 50, 50, 50],
        3: [10, 10, 10, 10],
    })
    state.month(1).monthly_goal = '80'
    state.month(1).goal = CumulativeGoal(label='Viaje', target='300', target_month='marzo')
    return state
