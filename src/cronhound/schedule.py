"""Schedules: next/previous firing instants of a parsed cron expression.

A Schedule is an ordered list of time units, coarsest first. A search runs
every unit in turn; as soon as one of them adjusts the instant, the finer
fields have been reset and the evaluation restarts from the top. The search
ends when one full pass matches every unit, or when it leaves the search
window configured by SearchLimits.

Design Principles:
    1. Immutable schedules: safe to share between threads
    2. Parse once, evaluate many times
    3. Lazy iteration: one instant computed at a time
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterator, Sequence

from cronhound.config import DEFAULT_LIMITS, SearchLimits
from cronhound.timeunits import ONE_SECOND, TimeUnit
from cronhound.types import TimeUnitKind

logger = logging.getLogger(__name__)


# =============================================================================
# Schedule
# =============================================================================


class Schedule:
    """Parsed cron expression with next/previous instant calculation.

    Example:
        >>> schedule = parse("*/15 * * * ? *")
        >>> schedule.next(datetime(2023, 6, 4, tzinfo=timezone.utc))
        datetime.datetime(2023, 6, 4, 0, 0, 15, tzinfo=datetime.timezone.utc)
        >>> list(schedule.upcoming(datetime(2023, 6, 4), limit=3))
        [datetime.datetime(2023, 6, 4, 0, 0, 15), datetime.datetime(2023, 6, 4, 0, 0, 30), datetime.datetime(2023, 6, 4, 0, 0, 45)]
    """

    __slots__ = ("_expression", "_units", "_limits")

    def __init__(
        self,
        units: Sequence[TimeUnit],
        expression: str = "",
        limits: SearchLimits | None = None,
    ) -> None:
        """Initialize schedule.

        Args:
            units: Time units ordered from the coarsest to the finest field.
            expression: Original expression string.
            limits: Search bounds (defaults to 100 years up to year 9999).
        """
        self._units = tuple(units)
        self._expression = expression
        self._limits = limits or DEFAULT_LIMITS

    @property
    def expression(self) -> str:
        """Get original expression string."""
        return self._expression

    @property
    def units(self) -> tuple[TimeUnit, ...]:
        return self._units

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @property
    def has_years(self) -> bool:
        """Check if expression includes the year field."""
        return self.get_unit(TimeUnitKind.YEARS) is not None

    def get_unit(self, kind: TimeUnitKind) -> TimeUnit | None:
        """Get the time unit of a field kind."""
        for unit in self._units:
            if unit.kind is kind:
                return unit
        return None

    def matches(self, instant: datetime) -> bool:
        """Check if an instant fires, ignoring sub-second precision."""
        return all(unit.contains(instant) for unit in self._units)

    def next(self, after: datetime) -> datetime | None:
        """Get the first firing instant strictly after ``after``.

        Args:
            after: Reference instant. Its tzinfo is kept unchanged.

        Returns:
            The next firing instant, or None if none exists inside the
            search window.
        """
        try:
            start = after.replace(microsecond=0) + ONE_SECOND
        except OverflowError:
            return None
        return self._search(start, forwards=True, origin=after.year)

    def previous(self, before: datetime) -> datetime | None:
        """Get the last firing instant strictly before ``before``.

        Args:
            before: Reference instant. Its tzinfo is kept unchanged.

        Returns:
            The previous firing instant, or None if none exists inside the
            search window.
        """
        try:
            start = before.replace(microsecond=0) - ONE_SECOND
        except OverflowError:
            return None
        return self._search(start, forwards=False, origin=before.year)

    def upcoming(
        self, reference: datetime, limit: int | None = None
    ) -> "ScheduleIterator":
        """Iterate over the firing instants after ``reference``."""
        return ScheduleIterator(self, reference, forwards=True, limit=limit)

    def preceding(
        self, reference: datetime, limit: int | None = None
    ) -> "ScheduleIterator":
        """Iterate backwards over the firing instants before ``reference``."""
        return ScheduleIterator(self, reference, forwards=False, limit=limit)

    def next_n(self, n: int, after: datetime) -> list[datetime]:
        """Get the next n firing instants (fewer if the search ends)."""
        return list(self.upcoming(after, limit=n))

    def previous_n(self, n: int, before: datetime) -> list[datetime]:
        """Get the previous n firing instants, most recent first."""
        return list(self.preceding(before, limit=n))

    def _search(self, instant: datetime, forwards: bool, origin: int) -> datetime | None:
        passes = 0
        while self._limits.allows(instant.year, origin):
            passes += 1
            candidate: datetime | None = instant
            matched = True
            for unit in self._units:
                try:
                    candidate, matched = unit.advance(instant, forwards)
                except OverflowError:
                    logger.debug(
                        "Search for %r reached the calendar bounds after %d passes",
                        self._expression, passes,
                    )
                    return None
                if candidate is None:
                    logger.debug(
                        "Search for %r exhausted the %s field",
                        self._expression, unit.kind,
                    )
                    return None
                instant = candidate
                if not matched:
                    break
            if matched:
                return instant

        logger.debug(
            "Search for %r stopped at year %d after %d passes (origin %d)",
            self._expression, instant.year, passes, origin,
        )
        return None

    def __repr__(self) -> str:
        return f"Schedule({self._expression!r})"

    def __str__(self) -> str:
        return self._expression

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Schedule):
            return self._units == other._units and self._limits == other._limits
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._units, self._limits))


# =============================================================================
# Schedule Iterator
# =============================================================================


class ScheduleIterator(Iterator[datetime]):
    """Lazy sequence of firing instants.

    The iterator is primed on construction: the first firing instant is
    computed immediately, so ``has_next()`` is meaningful before the first
    call to ``next()``. Not safe for concurrent use.
    """

    def __init__(
        self,
        schedule: Schedule,
        reference: datetime,
        *,
        forwards: bool = True,
        limit: int | None = None,
    ) -> None:
        """Initialize iterator.

        Args:
            schedule: Schedule to iterate.
            reference: Instant the sequence starts from (excluded).
            forwards: Iterate forwards in time when True, backwards otherwise.
            limit: Maximum number of instants to produce.
        """
        self._schedule = schedule
        self._forwards = forwards
        self._limit = limit
        self._count = 0
        self._cursor: datetime | None = None
        if limit is None or limit > 0:
            self._cursor = self._step(reference)

    @property
    def forwards(self) -> bool:
        return self._forwards

    def _step(self, reference: datetime) -> datetime | None:
        if self._forwards:
            return self._schedule.next(reference)
        return self._schedule.previous(reference)

    def has_next(self) -> bool:
        """Check if another instant is available."""
        return self._cursor is not None

    def __iter__(self) -> "ScheduleIterator":
        return self

    def __next__(self) -> datetime:
        if self._cursor is None:
            raise StopIteration

        current = self._cursor
        self._count += 1
        if self._limit is not None and self._count >= self._limit:
            self._cursor = None
        else:
            self._cursor = self._step(current)

        return current
