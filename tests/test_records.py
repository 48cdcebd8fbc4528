"""Tests for month records, amount coercion and field access."""

import pytest

from ahorro.records import (
    AnnualState,
    CumulativeGoal,
    FIELDS,
    MonthRecord,
    UnknownFieldError,
    coerce_amount,
    get_field,
    parse_amount,
    set_field,
)


class TestParseAmount:
    """Tests for parse_amount."""

    def test_simple(self):
        assert parse_amount('123.45') == 123.45
        assert parse_amount('100') == 100.0

    def test_currency_and_thousands(self):
        assert parse_amount('$1,234.56') == 1234.56
        assert parse_amount('€100.00') == 100.0

    def test_parenthetical_negative(self):
        assert parse_amount('(50.00)') == -50.0

    def test_comma_decimal_separator(self):
        assert parse_amount('1.234,56', decimal_separator=',') == 1234.56
        assert parse_amount('12,5', decimal_separator=',') == 12.5

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            parse_amount('abc')

    def test_underscore_grouping_rejected(self):
        with pytest.raises(ValueError):
            parse_amount('1_000')


class TestCoerceAmount:
    """Tests for coerce_amount."""

    def test_valid_text(self):
        assert coerce_amount('25.5') == 25.5

    def test_invalid_becomes_zero(self):
        """Blank, missing and non-numeric input all become 0."""
        assert coerce_amount('') == 0.0
        assert coerce_amount('   ') == 0.0
        assert coerce_amount(None) == 0.0
        assert coerce_amount('diez') == 0.0
        assert coerce_amount('12abc') == 0.0
        assert coerce_amount('1_000') == 0.0

    def test_nan_and_infinity_become_zero(self):
        assert coerce_amount('nan') == 0.0
        assert coerce_amount('inf') == 0.0
        assert coerce_amount(float('nan')) == 0.0

    def test_numbers_pass_through(self):
        assert coerce_amount(7) == 7.0
        assert coerce_amount(2.5) == 2.5

    def test_negative_kept(self):
        """Negative amounts are not clamped."""
        assert coerce_amount('-20') == -20.0


class TestMonthRecord:
    """Tests for MonthRecord."""

    def test_defaults(self):
        record = MonthRecord()
        assert record.weeks == ['', '', '', '']
        assert record.monthly_goal == ''
        assert record.goal == CumulativeGoal()

    def test_weeks_normalized_to_four(self):
        """Short lists are padded and long lists truncated."""
        assert MonthRecord(weeks=['1']).weeks == ['1', '', '', '']
        assert MonthRecord(weeks=['1', '2', '3', '4', '5']).weeks == ['1', '2', '3', '4']

    def test_weekly_amounts_coerce(self):
        record = MonthRecord(weeks=['10', 'x', '', '2.5'])
        assert record.weekly_amounts() == [10.0, 0.0, 0.0, 2.5]

    def test_monthly_goal_amount(self):
        assert MonthRecord(monthly_goal='300').monthly_goal_amount() == 300.0
        assert MonthRecord(monthly_goal='n/a').monthly_goal_amount() == 0.0


class TestCumulativeGoal:
    """Tests for CumulativeGoal activity rules."""

    def test_active_with_known_month(self):
        goal = CumulativeGoal(label='Viaje', target='500', target_month='Marzo')
        assert goal.is_active
        assert goal.target_month_index == 3
        assert goal.target_amount() == 500.0

    def test_inactive_without_month(self):
        goal = CumulativeGoal(label='Viaje', target='500')
        assert not goal.has_target_month
        assert not goal.is_active

    def test_inactive_with_unknown_month(self):
        goal = CumulativeGoal(target='500', target_month='someday')
        assert goal.has_target_month
        assert not goal.is_active


class TestAnnualState:
    """Tests for AnnualState."""

    def test_twelve_months(self):
        state = AnnualState()
        assert len(state) == 12
        assert len(list(state)) == 12

    def test_month_is_one_based(self):
        state = AnnualState()
        assert state.month(1) is state.months[0]
        assert state.month(12) is state.months[11]

    def test_month_out_of_range(self):
        state = AnnualState()
        with pytest.raises(IndexError):
            state.month(0)
        with pytest.raises(IndexError):
            state.month(13)

    def test_wrong_number_of_months(self):
        with pytest.raises(ValueError):
            AnnualState(months=[MonthRecord()])


class TestFieldAccess:
    """Tests for get_field / set_field."""

    def test_set_and_get_every_field(self):
        record = MonthRecord()
        for i, name in enumerate(FIELDS):
            set_field(record, name, f'value{i}')
        for i, name in enumerate(FIELDS):
            assert get_field(record, name) == f'value{i}'

    def test_fields_map_to_record(self):
        record = MonthRecord()
        set_field(record, 'week3', '40')
        set_field(record, 'goal_target_month', 'mayo')
        assert record.weeks[2] == '40'
        assert record.goal.target_month == 'mayo'

    def test_none_and_numbers_stored_as_text(self):
        record = MonthRecord(monthly_goal='100')
        set_field(record, 'monthly_goal', None)
        set_field(record, 'week1', 25)
        assert record.monthly_goal == ''
        assert record.weeks[0] == '25'

    def test_unknown_field(self):
        record = MonthRecord()
        with pytest.raises(UnknownFieldError, match='week5'):
            set_field(record, 'week5', '1')
        with pytest.raises(UnknownFieldError):
            get_field(record, 'total')
