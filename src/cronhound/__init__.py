"""cronhound: next and previous firing instants of cron expressions.

This package parses 6 or 7 field cron expressions and computes, for any
reference instant, the next or previous instant at which the expression
fires. It never runs jobs: schedulers consume the instants it returns.

Features:
    - 6-field cron with seconds, optional leading year field
    - Special characters: *, /, -, ,, L, L-n, nL, #, ?
    - Named months and weekdays
    - Predefined expressions (@yearly, @monthly, @weekly, etc.)
    - Forward and backward search, lazy iteration
    - Timezone-agnostic: the tzinfo of the reference instant is kept

Syntax Reference:
    Field         Values          Special Characters
    ─────────────────────────────────────────────────
    Year          1-9999          * / , -   (7-field only, first)
    Second        0-59            * / , -
    Minute        0-59            * / , -
    Hour          0-23            * / , -
    Day of Month  1-31            * / , - ? L L-n
    Month         1-12 or JAN-DEC * / , -
    Day of Week   0-6 or SUN-SAT  * / , - ? L nL #

Special Characters:
    *   Any value
    ,   List separator (1,3,5)
    -   Range (1-5, FRI-MON wraps around)
    /   Step (*/15 = every 15)
    L   Last day of month; Saturday in day-of-week
    L-n n-th last day of month (L-1 = last day)
    nL  Last weekday n of the month (5L = last Friday)
    #   Nth weekday (1#2 = second Monday)
    ?   No specific value (day-of-month or day-of-week)

Usage:
    >>> from datetime import datetime, timezone
    >>> import cronhound
    >>>
    >>> schedule = cronhound.parse("0 0 0 ? * 5L")
    >>> schedule.next(datetime(2023, 6, 4, tzinfo=timezone.utc))
    datetime.datetime(2023, 6, 30, 0, 0, tzinfo=datetime.timezone.utc)
    >>>
    >>> for instant in schedule.upcoming(datetime(2023, 6, 4), limit=3):
    ...     print(instant)
"""

from cronhound.config import SearchLimits
from cronhound.errors import (
    CronParseError,
    MalformedExpressionError,
    MalformedFieldError,
    MultipleNotSpecifiedError,
    ValueOutsideRangeError,
)
from cronhound.fieldsets import (
    FieldSet,
    Interval,
    LastWeekdayOfMonth,
    NotSpecified,
    NthLastDayOfMonth,
    NthWeekdayOfMonth,
    Range,
    Unit,
)
from cronhound.parser import (
    CronParser,
    is_valid_expression,
    parse,
    validate_expression,
)
from cronhound.schedule import Schedule, ScheduleIterator
from cronhound.types import Outcome, TimeUnitKind

# Version: Single source of truth from pyproject.toml
try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("cronhound")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0.dev"

__all__ = [
    # Core
    "parse",
    "Schedule",
    "ScheduleIterator",
    "TimeUnitKind",
    "SearchLimits",
    # Parser
    "CronParser",
    "CronParseError",
    "MalformedExpressionError",
    "MalformedFieldError",
    "ValueOutsideRangeError",
    "MultipleNotSpecifiedError",
    # Field sets
    "FieldSet",
    "Unit",
    "Range",
    "Interval",
    "NotSpecified",
    "NthLastDayOfMonth",
    "LastWeekdayOfMonth",
    "NthWeekdayOfMonth",
    "Outcome",
    # Validation
    "validate_expression",
    "is_valid_expression",
]
