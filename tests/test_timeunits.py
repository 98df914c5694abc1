"""Tests for time unit evaluators."""

import pytest
from datetime import datetime, timedelta, timezone

from cronhound.fieldsets import (
    LastWeekdayOfMonth,
    NotSpecified,
    NthWeekdayOfMonth,
    Range,
    Unit,
)
from cronhound.timeunits import (
    DayUnit,
    HourUnit,
    MinuteUnit,
    MonthUnit,
    SecondUnit,
    WeekdayUnit,
    YearUnit,
)


# Wednesday
INSTANT = datetime(2000, 3, 15, 12, 5, 1)


class TestClockUnits:
    """Tests for second, minute and hour units."""

    def test_any_matches(self):
        """Test unconstrained field always matches."""
        assert SecondUnit().advance(INSTANT, True) == (INSTANT, True)
        assert SecondUnit().is_any

    def test_hit_leaves_instant(self):
        """Test accepted value is confirmed unchanged."""
        assert SecondUnit([Unit(1)]).advance(INSTANT, True) == (INSTANT, True)

    def test_second_forwards(self):
        """Test jump to the nearest second."""
        assert SecondUnit([Unit(30)]).advance(INSTANT, True) == (
            datetime(2000, 3, 15, 12, 5, 30),
            False,
        )

    def test_second_roll_forwards(self):
        """Test roll to the next minute when no second is left."""
        assert SecondUnit([Unit(0)]).advance(INSTANT, True) == (
            datetime(2000, 3, 15, 12, 6, 0),
            False,
        )

    def test_second_roll_backwards(self):
        """Test roll to the last second of the previous minute."""
        assert SecondUnit([Unit(30)]).advance(INSTANT, False) == (
            datetime(2000, 3, 15, 12, 4, 59),
            False,
        )

    def test_minute_resets_seconds(self):
        """Test finer field reset in both directions."""
        unit = MinuteUnit([Unit(10), Unit(50)])
        assert unit.advance(datetime(2000, 3, 15, 12, 30, 59), True) == (
            datetime(2000, 3, 15, 12, 50, 0),
            False,
        )
        assert unit.advance(datetime(2000, 3, 15, 12, 30, 0), False) == (
            datetime(2000, 3, 15, 12, 10, 59),
            False,
        )

    def test_hour_roll_crosses_day(self):
        """Test hour roll moves to the next day."""
        assert HourUnit([Unit(2)]).advance(INSTANT, True) == (
            datetime(2000, 3, 16, 0, 0, 0),
            False,
        )
        assert HourUnit([Unit(20)]).advance(INSTANT, False) == (
            datetime(2000, 3, 14, 23, 59, 59),
            False,
        )

    def test_contains(self):
        """Test membership check."""
        unit = HourUnit([Range(Unit(9), Unit(17))])
        assert unit.contains(datetime(2000, 3, 15, 12))
        assert not unit.contains(datetime(2000, 3, 15, 18))

    def test_keeps_tzinfo(self):
        """Test adjustments preserve the zone of the instant."""
        tz = timezone(timedelta(hours=9))
        moved, _ = HourUnit([Unit(20)]).advance(INSTANT.replace(tzinfo=tz), True)
        assert moved == datetime(2000, 3, 15, 20, 0, 0, tzinfo=tz)
        assert moved.tzinfo is tz


class TestDayUnit:
    """Tests for the day-of-month unit."""

    def test_day_forwards(self):
        """Test jump to the start of the candidate day."""
        assert DayUnit([Unit(20)]).advance(INSTANT, True) == (
            datetime(2000, 3, 20, 0, 0, 0),
            False,
        )

    def test_day_backwards(self):
        """Test jump to the end of the candidate day."""
        assert DayUnit([Unit(10)]).advance(INSTANT, False) == (
            datetime(2000, 3, 10, 23, 59, 59),
            False,
        )

    def test_missing_day_rolls_month(self):
        """Test day 31 in a 30-day month rolls to the next month."""
        assert DayUnit([Unit(31)]).advance(datetime(2000, 4, 10, 8), True) == (
            datetime(2000, 5, 1, 0, 0, 0),
            False,
        )

    def test_roll_backwards(self):
        """Test roll to the last second of the previous month."""
        assert DayUnit([Unit(5)]).advance(datetime(2000, 3, 3), False) == (
            datetime(2000, 2, 29, 23, 59, 59),
            False,
        )

    def test_roll_crosses_year(self):
        """Test roll from December to January."""
        assert DayUnit([Unit(1)]).advance(datetime(2000, 12, 2), True) == (
            datetime(2001, 1, 1),
            False,
        )

    def test_not_specified(self):
        """Test `?` accepts any day."""
        assert DayUnit([NotSpecified()]).advance(INSTANT, True) == (INSTANT, True)


class TestWeekdayUnit:
    """Tests for the weekday unit."""

    def test_weekday_offset(self):
        """Test plain weekday moves by the weekday difference."""
        assert WeekdayUnit([Unit(5)]).advance(INSTANT, True) == (
            datetime(2000, 3, 17, 0, 0, 0),
            False,
        )
        assert WeekdayUnit([Unit(1)]).advance(INSTANT, False) == (
            datetime(2000, 3, 13, 23, 59, 59),
            False,
        )

    def test_weekday_wraps_to_next_week(self):
        """Test weekday already passed this week moves to the next week."""
        assert WeekdayUnit([Unit(1)]).advance(INSTANT, True) == (
            datetime(2000, 3, 20, 0, 0, 0),
            False,
        )
        assert WeekdayUnit([Unit(5)]).advance(INSTANT, False) == (
            datetime(2000, 3, 10, 23, 59, 59),
            False,
        )

    def test_weekday_roll(self):
        """Test miss rolls by one day when no set offers a candidate."""
        # Last Saturday of March 2000 is the 25th
        unit = WeekdayUnit([LastWeekdayOfMonth(6)])
        assert unit.advance(datetime(2000, 3, 26, 9), True) == (
            datetime(2000, 3, 27, 0, 0, 0),
            False,
        )

    def test_calendar_set_moves_to_day(self):
        """Test calendar set moves to its resolved day."""
        assert WeekdayUnit([LastWeekdayOfMonth(6)]).advance(INSTANT, True) == (
            datetime(2000, 3, 25, 0, 0, 0),
            False,
        )

    def test_next_week_beats_last_weekday_of_month(self):
        """Test Monday next week wins over the last Friday of the month."""
        unit = WeekdayUnit([Unit(1), LastWeekdayOfMonth(5)])
        moved, matched = unit.advance(datetime(2023, 6, 6), True)
        assert moved == datetime(2023, 6, 12, 0, 0, 0)
        assert not matched

    def test_previous_week_beats_nth_weekday(self):
        """Test Friday last week wins over the first Monday of the month."""
        unit = WeekdayUnit([Unit(5), NthWeekdayOfMonth(1, 1)])
        moved, matched = unit.advance(datetime(2023, 6, 27, 23, 59, 59), False)
        assert moved == datetime(2023, 6, 23, 23, 59, 59)
        assert not matched

    def test_jump_stops_at_month_edge(self):
        """Test jump across the month end stops on the first of the month."""
        # First Saturday of July 2023 is the 1st, before next Monday
        unit = WeekdayUnit([Unit(1), NthWeekdayOfMonth(6, 1)])
        assert unit.advance(datetime(2023, 6, 29, 10), True) == (
            datetime(2023, 7, 1, 0, 0, 0),
            False,
        )
        assert unit.advance(datetime(2023, 7, 1), True) == (
            datetime(2023, 7, 1),
            True,
        )


class TestMonthAndYearUnits:
    """Tests for month and year units."""

    def test_month_forwards(self):
        """Test jump to the first instant of the month."""
        assert MonthUnit([Unit(5)]).advance(INSTANT, True) == (
            datetime(2000, 5, 1),
            False,
        )

    def test_month_backwards(self):
        """Test jump to the last instant of the month."""
        assert MonthUnit([Unit(2)]).advance(INSTANT, False) == (
            datetime(2000, 2, 29, 23, 59, 59),
            False,
        )

    def test_month_roll(self):
        """Test roll to the next or previous year."""
        assert MonthUnit([Unit(2)]).advance(INSTANT, True) == (
            datetime(2001, 1, 1),
            False,
        )
        assert MonthUnit([Unit(6)]).advance(INSTANT, False) == (
            datetime(1999, 12, 31, 23, 59, 59),
            False,
        )

    def test_year_jump(self):
        """Test jump to the candidate year."""
        assert YearUnit([Unit(2005)]).advance(INSTANT, True) == (
            datetime(2005, 1, 1),
            False,
        )
        assert YearUnit([Unit(1990)]).advance(INSTANT, False) == (
            datetime(1990, 12, 31, 23, 59, 59),
            False,
        )

    def test_year_miss_exhausts(self):
        """Test no candidate year ends the search."""
        assert YearUnit([Unit(1999)]).advance(INSTANT, True) == (None, False)

    def test_month_roll_past_calendar(self):
        """Test rolling past year 9999 overflows."""
        with pytest.raises(OverflowError):
            MonthUnit([Unit(1)]).advance(datetime(9999, 3, 1), True)


class TestEquality:
    """Tests for time unit equality."""

    def test_equal_units(self):
        """Test units compare by type and field sets."""
        assert SecondUnit([Unit(1)]) == SecondUnit([Unit(1)])
        assert hash(SecondUnit([Unit(1)])) == hash(SecondUnit([Unit(1)]))
        assert SecondUnit([Unit(1)]) != MinuteUnit([Unit(1)])
        assert SecondUnit([Unit(1)]) != SecondUnit([Unit(2)])
