"""Tests for month name resolution."""

import pytest

from ahorro.months import MONTHS_MAP, month_name, parse_month_arg, resolve_month


class TestResolveMonth:
    """Tests for resolve_month."""

    def test_full_names(self):
        """Full Spanish month names resolve to their index."""
        assert resolve_month('enero') == 1
        assert resolve_month('junio') == 6
        assert resolve_month('diciembre') == 12

    def test_case_insensitive(self):
        """Case does not matter."""
        assert resolve_month('ENERO') == 1
        assert resolve_month('Marzo') == 3

    def test_abbreviations(self):
        """Common abbreviations resolve, including both forms for September."""
        assert resolve_month('Sept') == 9
        assert resolve_month('sep') == 9
        assert resolve_month('ene') == 1
        assert resolve_month('dic') == 12

    def test_surrounding_whitespace(self):
        """Leading and trailing whitespace is ignored."""
        assert resolve_month('  abril \n') == 4

    def test_unknown_returns_none(self):
        """Empty or unknown text resolves to None."""
        assert resolve_month('') is None
        assert resolve_month(None) is None
        assert resolve_month('foo') is None
        assert resolve_month('january') is None

    def test_every_month_reachable(self):
        """Each of the twelve months has at least one name."""
        assert set(MONTHS_MAP.values()) == set(range(1, 13))


class TestMonthName:
    """Tests for month_name."""

    def test_display_names(self):
        assert month_name(1) == 'Enero'
        assert month_name(9) == 'Septiembre'

    def test_out_of_range(self):
        with pytest.raises(IndexError):
            month_name(13)


class TestParseMonthArg:
    """Tests for parse_month_arg (CLI month argument)."""

    def test_number(self):
        assert parse_month_arg('3') == 3
        assert parse_month_arg(' 12 ') == 12

    def test_name(self):
        assert parse_month_arg('Octubre') == 10

    def test_number_out_of_range(self):
        with pytest.raises(ValueError, match='between 1 and 12'):
            parse_month_arg('0')

    def test_unknown_name(self):
        with pytest.raises(ValueError, match='Unrecognized month'):
            parse_month_arg('smarch')
