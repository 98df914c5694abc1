"""Field sets: the values accepted by one cron token.

Every comma-separated token of a cron field is parsed into one field set.
A field set answers a single question for the search engine: given the
current value of its field, is that value accepted, and if not, which is
the nearest accepted value on the requested side of it?

Variants:
    Unit                 5
    Range                1-5, MON-FRI, 20-L
    Interval             */15, 10-30/5, 5/10
    NotSpecified         ?
    NthLastDayOfMonth    L, L-3 (day-of-month)
    LastWeekdayOfMonth   5L (weekday)
    NthWeekdayOfMonth    0#3 (weekday)

The calendar variants resolve to a day of the month, so they are compared
against the day of the instant even when they sit in the weekday field.
"""

from __future__ import annotations

import calendar
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from cronhound.types import Candidate, Outcome


# =============================================================================
# Calendar Helpers
# =============================================================================


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def cron_weekday(year: int, month: int, day: int) -> int:
    """Weekday of a date in cron numbering (Sunday=0, Saturday=6)."""
    # Python weekday: Monday=0, Sunday=6
    return (calendar.weekday(year, month, day) + 1) % 7


def _compare(value: int, current: int, forwards: bool) -> Candidate:
    if value == current:
        return Candidate(value, Outcome.HIT)
    if (value > current) == forwards:
        return Candidate(value, Outcome.IN_RANGE)
    return Candidate(value, Outcome.MISS)


# =============================================================================
# Base Classes
# =============================================================================


class FieldSet(ABC):
    """Set of values accepted by one cron token."""

    resolves_day: ClassVar[bool] = False

    @abstractmethod
    def nearest(self, instant: datetime, current: int, forwards: bool) -> Candidate:
        """Find the nearest accepted value.

        Args:
            instant: Instant being evaluated, used by calendar variants.
            current: Current value of the field.
            forwards: Search for greater values when True, lesser otherwise.

        Returns:
            HIT when ``current`` is accepted, IN_RANGE with the nearest value
            strictly on the requested side, or MISS when there is none.
        """

    @abstractmethod
    def subset_of(self, min_value: int, max_value: int) -> bool:
        """Check that every value lies inside ``[min_value, max_value]``."""

    def sort_key(self) -> tuple[int, int]:
        """Ordering key: plain values by lower bound, calendar sets last."""
        return (1, 0)


class PointSet(FieldSet):
    """Field set that resolves to a single value for a given instant."""

    @abstractmethod
    def resolve(self, instant: datetime) -> int:
        """Value accepted by this set for the month of ``instant``."""

    def nearest(self, instant: datetime, current: int, forwards: bool) -> Candidate:
        return _compare(self.resolve(instant), current, forwards)


class CalendarDaySet(PointSet):
    """Point set resolving to a day of the month through calendar arithmetic."""

    resolves_day: ClassVar[bool] = True

    def nearest(self, instant: datetime, current: int, forwards: bool) -> Candidate:
        value = self.resolve(instant)
        if not 1 <= value <= days_in_month(instant.year, instant.month):
            return Candidate(value, Outcome.MISS)
        return _compare(value, instant.day, forwards)


# =============================================================================
# Plain Variants
# =============================================================================


@dataclass(frozen=True)
class Unit(PointSet):
    """A single value."""

    value: int

    def resolve(self, instant: datetime) -> int:
        return self.value

    def subset_of(self, min_value: int, max_value: int) -> bool:
        return min_value <= self.value <= max_value

    def sort_key(self) -> tuple[int, int]:
        return (0, self.value)


@dataclass(frozen=True)
class Range(FieldSet):
    """An inclusive range between two point sets."""

    start: PointSet
    end: PointSet

    def bounds(self, instant: datetime) -> tuple[int, int]:
        return self.start.resolve(instant), self.end.resolve(instant)

    def nearest(self, instant: datetime, current: int, forwards: bool) -> Candidate:
        low, high = self.bounds(instant)
        if low > high:
            return Candidate(current, Outcome.MISS)
        if low <= current <= high:
            return Candidate(current, Outcome.HIT)
        if forwards:
            if current < low:
                return Candidate(low, Outcome.IN_RANGE)
            return Candidate(high, Outcome.MISS)
        if current > high:
            return Candidate(high, Outcome.IN_RANGE)
        return Candidate(low, Outcome.MISS)

    def subset_of(self, min_value: int, max_value: int) -> bool:
        return self.start.subset_of(min_value, max_value) and self.end.subset_of(
            min_value, max_value
        )

    def sort_key(self) -> tuple[int, int]:
        return self.start.sort_key()


@dataclass(frozen=True)
class Interval(FieldSet):
    """Values ``start, start + step, ...`` inside a range."""

    span: Range
    step: int

    def nearest(self, instant: datetime, current: int, forwards: bool) -> Candidate:
        low, high = self.span.bounds(instant)
        if low > high:
            return Candidate(current, Outcome.MISS)

        if forwards:
            if current <= low:
                value = low
            else:
                # Round up to the next multiple of step from low
                value = low + -(-(current - low) // self.step) * self.step
            if value > high:
                return Candidate(value, Outcome.MISS)
        else:
            top = min(current, high)
            if top < low:
                return Candidate(low, Outcome.MISS)
            value = low + (top - low) // self.step * self.step

        if value == current:
            return Candidate(value, Outcome.HIT)
        return Candidate(value, Outcome.IN_RANGE)

    def subset_of(self, min_value: int, max_value: int) -> bool:
        return self.step > 0 and self.span.subset_of(min_value, max_value)

    def sort_key(self) -> tuple[int, int]:
        return self.span.sort_key()


@dataclass(frozen=True)
class NotSpecified(FieldSet):
    """The `?` marker: accepts whatever value is presented."""

    def nearest(self, instant: datetime, current: int, forwards: bool) -> Candidate:
        return Candidate(current, Outcome.HIT)

    def subset_of(self, min_value: int, max_value: int) -> bool:
        # Always contained by any range of values.
        return True


# =============================================================================
# Calendar Variants
# =============================================================================


@dataclass(frozen=True)
class NthLastDayOfMonth(CalendarDaySet):
    """Day ``offset`` days before the last day of the month (`L`, `L-n`)."""

    offset: int = 0

    def resolve(self, instant: datetime) -> int:
        return days_in_month(instant.year, instant.month) - self.offset

    def subset_of(self, min_value: int, max_value: int) -> bool:
        return self.offset >= 0 and max_value - self.offset >= min_value


@dataclass(frozen=True)
class LastWeekdayOfMonth(CalendarDaySet):
    """Day of the last occurrence of a weekday in the month (`5L`)."""

    weekday: int

    def resolve(self, instant: datetime) -> int:
        last_day = days_in_month(instant.year, instant.month)
        diff = (cron_weekday(instant.year, instant.month, last_day) - self.weekday) % 7
        return last_day - diff

    def subset_of(self, min_value: int, max_value: int) -> bool:
        return min_value <= self.weekday <= max_value


@dataclass(frozen=True)
class NthWeekdayOfMonth(CalendarDaySet):
    """Day of the nth occurrence of a weekday in the month (`1#2`)."""

    weekday: int
    nth: int

    def resolve(self, instant: datetime) -> int:
        first = 1 + (self.weekday - cron_weekday(instant.year, instant.month, 1)) % 7
        return first + 7 * (self.nth - 1)

    def subset_of(self, min_value: int, max_value: int) -> bool:
        return min_value <= self.weekday <= max_value and 1 <= self.nth <= 5
