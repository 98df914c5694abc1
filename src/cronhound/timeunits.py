"""Time units: one evaluator per calendar field.

A time unit holds the sorted field sets of one cron field and moves an
instant towards the nearest value they accept. Each call either confirms
the current value, jumps to the best candidate inside the containing unit,
or rolls the parent field when no candidate is left. Jumps and rolls reset
every finer field to its minimum when searching forwards and to its maximum
when searching backwards, so the schedule driver restarts the evaluation
from the coarsest unit after any change.

Calendar edges (before year 1 or after year 9999) surface as
``OverflowError`` from the datetime arithmetic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import MAXYEAR, MINYEAR, datetime, timedelta
from typing import ClassVar, Sequence

from cronhound.fieldsets import FieldSet, cron_weekday, days_in_month
from cronhound.types import Outcome, TimeUnitKind

ONE_SECOND = timedelta(seconds=1)


# =============================================================================
# Instant Helpers
# =============================================================================


def start_of_day(instant: datetime) -> datetime:
    return instant.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(instant: datetime) -> datetime:
    return instant.replace(hour=23, minute=59, second=59, microsecond=0)


def start_of_month(instant: datetime, year: int, month: int) -> datetime:
    if not MINYEAR <= year <= MAXYEAR:
        raise OverflowError(f"year {year} is out of range")
    return start_of_day(instant.replace(year=year, month=month, day=1))


def end_of_month(instant: datetime, year: int, month: int) -> datetime:
    if not MINYEAR <= year <= MAXYEAR:
        raise OverflowError(f"year {year} is out of range")
    return end_of_day(
        instant.replace(year=year, month=month, day=days_in_month(year, month))
    )


# =============================================================================
# Base Class
# =============================================================================


class TimeUnit(ABC):
    """Evaluator for one calendar field."""

    __slots__ = ("_field_sets",)

    kind: ClassVar[TimeUnitKind]

    def __init__(self, field_sets: Sequence[FieldSet] = ()) -> None:
        self._field_sets = tuple(field_sets)

    @property
    def field_sets(self) -> tuple[FieldSet, ...]:
        return self._field_sets

    @property
    def is_any(self) -> bool:
        """True when the field imposes no constraint (`*`)."""
        return not self._field_sets

    @abstractmethod
    def value_of(self, instant: datetime) -> int:
        """Current value of this field in ``instant``."""

    @abstractmethod
    def assign(self, instant: datetime, value: int, forwards: bool) -> datetime | None:
        """Set this field to ``value`` and reset the finer fields."""

    @abstractmethod
    def roll(self, instant: datetime, forwards: bool) -> datetime | None:
        """Move the parent field by one unit and reset the finer fields.

        Returns None when there is no parent field left to roll.
        """

    def contains(self, instant: datetime) -> bool:
        """Check whether the field value of ``instant`` is accepted."""
        if self.is_any:
            return True
        current = self.value_of(instant)
        return any(
            fs.nearest(instant, current, True).outcome is Outcome.HIT
            for fs in self._field_sets
        )

    def advance(
        self, instant: datetime, forwards: bool
    ) -> tuple[datetime | None, bool]:
        """Move ``instant`` towards the nearest accepted value.

        Args:
            instant: Instant to evaluate.
            forwards: Search direction.

        Returns:
            The possibly adjusted instant (None once the search is exhausted)
            and True when the field already matched.
        """
        if self.is_any:
            return instant, True

        current = self.value_of(instant)
        best: int | None = None
        for fs in self._field_sets:
            candidate = fs.nearest(instant, current, forwards)
            if candidate.outcome is Outcome.HIT:
                return instant, True
            if candidate.outcome is Outcome.IN_RANGE:
                if best is None:
                    best = candidate.value
                elif forwards:
                    best = min(best, candidate.value)
                else:
                    best = max(best, candidate.value)

        if best is None:
            return self.roll(instant, forwards), False
        return self.assign(instant, best, forwards), False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._field_sets)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TimeUnit):
            return type(self) is type(other) and self._field_sets == other._field_sets
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self), self._field_sets))


# =============================================================================
# Clock Units
# =============================================================================


class SecondUnit(TimeUnit):
    __slots__ = ()
    kind = TimeUnitKind.SECONDS

    def value_of(self, instant: datetime) -> int:
        return instant.second

    def assign(self, instant: datetime, value: int, forwards: bool) -> datetime:
        return instant.replace(second=value)

    def roll(self, instant: datetime, forwards: bool) -> datetime:
        base = instant.replace(second=0)
        if forwards:
            return base + timedelta(minutes=1)
        return base - ONE_SECOND


class MinuteUnit(TimeUnit):
    __slots__ = ()
    kind = TimeUnitKind.MINUTES

    def value_of(self, instant: datetime) -> int:
        return instant.minute

    def assign(self, instant: datetime, value: int, forwards: bool) -> datetime:
        return instant.replace(minute=value, second=0 if forwards else 59)

    def roll(self, instant: datetime, forwards: bool) -> datetime:
        base = instant.replace(minute=0, second=0)
        if forwards:
            return base + timedelta(hours=1)
        return base - ONE_SECOND


class HourUnit(TimeUnit):
    __slots__ = ()
    kind = TimeUnitKind.HOURS

    def value_of(self, instant: datetime) -> int:
        return instant.hour

    def assign(self, instant: datetime, value: int, forwards: bool) -> datetime:
        if forwards:
            return instant.replace(hour=value, minute=0, second=0)
        return instant.replace(hour=value, minute=59, second=59)

    def roll(self, instant: datetime, forwards: bool) -> datetime:
        if forwards:
            return start_of_day(instant) + timedelta(days=1)
        return start_of_day(instant) - ONE_SECOND


# =============================================================================
# Calendar Units
# =============================================================================


class DayUnit(TimeUnit):
    """Day-of-month evaluator.

    A candidate day the month does not have (day 30 in February) is never
    assigned: the month rolls instead, so the search continues in the next
    month rather than wrapping onto an unrelated date.
    """

    __slots__ = ()
    kind = TimeUnitKind.DAYS

    def value_of(self, instant: datetime) -> int:
        return instant.day

    def assign(self, instant: datetime, value: int, forwards: bool) -> datetime:
        if not 1 <= value <= days_in_month(instant.year, instant.month):
            return self.roll(instant, forwards)
        moved = instant.replace(day=value)
        return start_of_day(moved) if forwards else end_of_day(moved)

    def roll(self, instant: datetime, forwards: bool) -> datetime:
        if forwards:
            if instant.month == 12:
                return start_of_month(instant, instant.year + 1, 1)
            return start_of_month(instant, instant.year, instant.month + 1)
        return start_of_month(instant, instant.year, instant.month) - ONE_SECOND


class WeekdayUnit(TimeUnit):
    """Weekday evaluator.

    Plain values are weekdays (Sunday=0). Calendar sets such as ``5L`` or
    ``0#3`` resolve to a day of the month instead, so their candidates are
    turned into a day offset from the current date. A plain weekday already
    passed this week still offers its occurrence in the next week, so the
    nearest firing wins whatever the mix of sets.
    """

    __slots__ = ()
    kind = TimeUnitKind.WEEKDAYS

    def value_of(self, instant: datetime) -> int:
        return cron_weekday(instant.year, instant.month, instant.day)

    def advance(
        self, instant: datetime, forwards: bool
    ) -> tuple[datetime | None, bool]:
        if self.is_any:
            return instant, True

        current = self.value_of(instant)
        last_day = days_in_month(instant.year, instant.month)
        best: int | None = None
        for fs in self._field_sets:
            candidate = fs.nearest(instant, current, forwards)
            if candidate.outcome is Outcome.HIT:
                return instant, True
            if fs.resolves_day:
                if candidate.outcome is not Outcome.IN_RANGE:
                    continue
                if not 1 <= candidate.value <= last_day:
                    continue
                offset = candidate.value - instant.day
            elif candidate.outcome is Outcome.IN_RANGE:
                offset = candidate.value - current
            else:
                # Nothing left this week: take the first weekday of the
                # following week (or the last of the preceding one)
                shifted = current - 7 if forwards else current + 7
                candidate = fs.nearest(instant, shifted, forwards)
                if candidate.outcome is not Outcome.IN_RANGE:
                    continue
                offset = candidate.value - shifted
            if best is None:
                best = offset
            elif forwards:
                best = min(best, offset)
            else:
                best = max(best, offset)

        if best is None:
            return self.roll(instant, forwards), False

        # Calendar sets resolve per month, so never jump past the month edge
        if forwards:
            best = min(best, last_day - instant.day + 1)
        else:
            best = max(best, -instant.day)
        return self.assign(instant, best, forwards), False

    def assign(self, instant: datetime, value: int, forwards: bool) -> datetime:
        # value is a day offset from the current date
        if forwards:
            return start_of_day(instant) + timedelta(days=value)
        return end_of_day(instant) + timedelta(days=value)

    def roll(self, instant: datetime, forwards: bool) -> datetime:
        if forwards:
            return start_of_day(instant) + timedelta(days=1)
        return start_of_day(instant) - ONE_SECOND


class MonthUnit(TimeUnit):
    __slots__ = ()
    kind = TimeUnitKind.MONTHS

    def value_of(self, instant: datetime) -> int:
        return instant.month

    def assign(self, instant: datetime, value: int, forwards: bool) -> datetime:
        if forwards:
            return start_of_month(instant, instant.year, value)
        return end_of_month(instant, instant.year, value)

    def roll(self, instant: datetime, forwards: bool) -> datetime:
        if forwards:
            return start_of_month(instant, instant.year + 1, 1)
        return end_of_month(instant, instant.year - 1, 12)


class YearUnit(TimeUnit):
    """Year evaluator. The coarsest field: a miss exhausts the search."""

    __slots__ = ()
    kind = TimeUnitKind.YEARS

    def value_of(self, instant: datetime) -> int:
        return instant.year

    def assign(self, instant: datetime, value: int, forwards: bool) -> datetime:
        if forwards:
            return start_of_month(instant, value, 1)
        return end_of_month(instant, value, 12)

    def roll(self, instant: datetime, forwards: bool) -> None:
        return None


TIME_UNIT_TYPES: dict[TimeUnitKind, type[TimeUnit]] = {
    TimeUnitKind.SECONDS: SecondUnit,
    TimeUnitKind.MINUTES: MinuteUnit,
    TimeUnitKind.HOURS: HourUnit,
    TimeUnitKind.DAYS: DayUnit,
    TimeUnitKind.MONTHS: MonthUnit,
    TimeUnitKind.WEEKDAYS: WeekdayUnit,
    TimeUnitKind.YEARS: YearUnit,
}
