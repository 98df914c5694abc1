"""Parser for cron expressions.

Supports:
    - 6-field cron (second minute hour day month weekday)
    - 7-field cron (year second minute hour day month weekday)
    - Predefined aliases (@yearly, @monthly, ...)

Syntax Reference:
    Field         Values            Special Characters
    ───────────────────────────────────────────────────
    Year          1-9999            * / , -   (7-field only, first)
    Second        0-59              * / , -
    Minute        0-59              * / , -
    Hour          0-23              * / , -
    Day of Month  1-31              * / , - ? L L-n
    Month         1-12 or JAN-DEC   * / , -
    Day of Week   0-6 or SUN-SAT    * / , - ? L nL n#m
"""

from __future__ import annotations

import logging
from typing import Callable

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
    PointSet,
    Range,
    Unit,
)
from cronhound.schedule import Schedule
from cronhound.timeunits import TIME_UNIT_TYPES
from cronhound.types import FIELD_CONSTRAINTS, FieldConstraints, TimeUnitKind

logger = logging.getLogger(__name__)

Converter = Callable[[str, FieldConstraints], PointSet]

# Fields in expression order
FIELD_ORDER: tuple[TimeUnitKind, ...] = (
    TimeUnitKind.SECONDS,
    TimeUnitKind.MINUTES,
    TimeUnitKind.HOURS,
    TimeUnitKind.DAYS,
    TimeUnitKind.MONTHS,
    TimeUnitKind.WEEKDAYS,
)

# The year field, when present, comes first
YEAR_FIELD_ORDER: tuple[TimeUnitKind, ...] = (TimeUnitKind.YEARS, *FIELD_ORDER)

# Fields in carry order, coarsest first
SCHEDULE_ORDER: tuple[TimeUnitKind, ...] = (
    TimeUnitKind.YEARS,
    TimeUnitKind.MONTHS,
    TimeUnitKind.DAYS,
    TimeUnitKind.WEEKDAYS,
    TimeUnitKind.HOURS,
    TimeUnitKind.MINUTES,
    TimeUnitKind.SECONDS,
)


# =============================================================================
# Converters
# =============================================================================


def _to_int(value: str) -> int:
    if not (value.isascii() and value.isdigit()):
        raise ValueError(f"Invalid value: {value!r}")
    return int(value)


def convert_unit(value: str, constraints: FieldConstraints) -> Unit:
    """Convert a number or a name into a Unit."""
    name = value.upper()
    if name in constraints.names:
        return Unit(constraints.names[name])
    return Unit(_to_int(value))


def convert_day(value: str, constraints: FieldConstraints) -> PointSet:
    """Day-of-month converter accepting `L` and `L-n`."""
    upper = value.upper()
    if upper == "L":
        return NthLastDayOfMonth(0)
    if upper.startswith("L-"):
        # L-1 is the last day of the month
        return NthLastDayOfMonth(_to_int(upper[2:]) - 1)
    return convert_unit(value, constraints)


def convert_weekday(value: str, constraints: FieldConstraints) -> PointSet:
    """Weekday converter accepting names, `L`, `nL` and `n#m`."""
    upper = value.upper()
    if upper == "L":
        return Unit(constraints.max_value)
    if upper.endswith("L"):
        return LastWeekdayOfMonth(convert_unit(value[:-1], constraints).value)
    if "#" in upper:
        parts = value.split("#")
        if len(parts) != 2:
            raise ValueError(f"Invalid # expression: {value!r}")
        weekday = convert_unit(parts[0], constraints)
        return NthWeekdayOfMonth(weekday.value, _to_int(parts[1]))
    return convert_unit(value, constraints)


CONVERTERS: dict[TimeUnitKind, Converter] = {
    TimeUnitKind.SECONDS: convert_unit,
    TimeUnitKind.MINUTES: convert_unit,
    TimeUnitKind.HOURS: convert_unit,
    TimeUnitKind.DAYS: convert_day,
    TimeUnitKind.MONTHS: convert_unit,
    TimeUnitKind.WEEKDAYS: convert_weekday,
    TimeUnitKind.YEARS: convert_unit,
}


# =============================================================================
# Cron Parser
# =============================================================================


class CronParser:
    """Stateless parser turning cron expressions into schedules.

    Example:
        >>> parser = CronParser()
        >>> schedule = parser.parse("0 0 9 ? * MON-FRI")
    """

    # Predefined expression aliases
    ALIASES: dict[str, str] = {
        "@yearly": "0 0 0 1 1 ?",
        "@annually": "0 0 0 1 1 ?",
        "@monthly": "0 0 0 1 * ?",
        "@weekly": "0 0 0 ? * 0",
        "@daily": "0 0 0 * * ?",
        "@midnight": "0 0 0 * * ?",
        "@hourly": "0 0 * * * ?",
        "@every_minute": "0 * * * * ?",
        "@every_second": "* * * * * ?",
    }

    def __init__(self, limits: SearchLimits | None = None) -> None:
        """Initialize parser.

        Args:
            limits: Search bounds given to every parsed schedule.
        """
        self._limits = limits

    def parse(self, expression: str) -> Schedule:
        """Parse a cron expression.

        Args:
            expression: Cron expression string.

        Returns:
            Parsed Schedule.

        Raises:
            CronParseError: If expression is invalid.
        """
        original = expression.strip()
        resolved = self.ALIASES.get(original.lower(), original)
        parts = resolved.split()

        if len(parts) not in (6, 7):
            raise MalformedExpressionError(
                f"Invalid number of fields: {len(parts)}. Expected 6 or 7 fields.",
                original,
            )

        order = YEAR_FIELD_ORDER if len(parts) == 7 else FIELD_ORDER
        fields: dict[TimeUnitKind, list[FieldSet]] = {}
        for part, kind in zip(parts, order):
            fields[kind] = self._parse_field(part, kind, original)

        if _has_not_specified(fields[TimeUnitKind.DAYS]) and _has_not_specified(
            fields[TimeUnitKind.WEEKDAYS]
        ):
            raise MultipleNotSpecifiedError(
                "only one `?` is supported", original
            )

        units = [
            TIME_UNIT_TYPES[kind](sorted(fields[kind], key=lambda fs: fs.sort_key()))
            for kind in SCHEDULE_ORDER
            if kind in fields
        ]
        logger.debug("Parsed cron expression %r into %s", original, units)
        return Schedule(units, original, self._limits)

    def _parse_field(
        self, part: str, kind: TimeUnitKind, expression: str
    ) -> list[FieldSet]:
        """Parse a single cron field into its field sets."""
        constraints = FIELD_CONSTRAINTS[kind]

        if part == "*":
            return []

        if part == "?":
            if not constraints.supports_question:
                raise MalformedFieldError(
                    f"? not supported for {kind}", expression, kind
                )
            return [NotSpecified()]

        field_sets: list[FieldSet] = []
        for token in part.split(","):
            try:
                converted = self._parse_token(token, kind, constraints)
            except ValueError as e:
                raise MalformedFieldError(str(e), expression, kind) from e

            for fs in converted:
                if not fs.subset_of(constraints.min_value, constraints.max_value):
                    raise ValueOutsideRangeError(
                        f"values are outside the supported range "
                        f"[{constraints.min_value}-{constraints.max_value}]: {token!r}",
                        expression,
                        kind,
                    )
            field_sets.extend(converted)

        return field_sets

    def _parse_token(
        self, token: str, kind: TimeUnitKind, constraints: FieldConstraints
    ) -> list[FieldSet]:
        """Convert one comma-separated token.

        Raises:
            ValueError: If the token cannot be converted.
        """
        if token == "*":
            return [_full_range(constraints)]
        if token == "?":
            raise ValueError("? must be used alone")
        if "/" in token:
            return [self._parse_interval(token, kind, constraints)]
        if _is_range(token):
            return self._parse_range(token, kind, constraints)
        return [CONVERTERS[kind](token, constraints)]

    def _parse_bound(
        self, value: str, kind: TimeUnitKind, constraints: FieldConstraints
    ) -> PointSet:
        bound = CONVERTERS[kind](value, constraints)
        # Weekday ranges compare weekdays, not days of the month
        if kind is TimeUnitKind.WEEKDAYS and not isinstance(bound, Unit):
            raise ValueError(f"Invalid range bound: {value!r}")
        return bound

    def _parse_range(
        self, token: str, kind: TimeUnitKind, constraints: FieldConstraints
    ) -> list[Range]:
        """Parse range expression (n-m)."""
        parts = token.split("-")
        if len(parts) != 2:
            raise ValueError(f"Invalid range: {token!r}")

        start = self._parse_bound(parts[0], kind, constraints)
        end = self._parse_bound(parts[1], kind, constraints)

        if isinstance(start, Unit) and isinstance(end, Unit) and start.value > end.value:
            if kind is TimeUnitKind.YEARS:
                raise ValueError(f"Range must be ascending: {token!r}")
            # Wraparound (e.g., FRI-MON)
            return [
                Range(start, Unit(constraints.max_value)),
                Range(Unit(constraints.min_value), end),
            ]
        return [Range(start, end)]

    def _parse_interval(
        self, token: str, kind: TimeUnitKind, constraints: FieldConstraints
    ) -> Interval:
        """Parse step expression (*/n, n-m/s or n/s)."""
        parts = token.split("/")
        if len(parts) != 2:
            raise ValueError(f"Invalid step: {token!r}")

        step = _to_int(parts[1])
        if step <= 0:
            raise ValueError(f"Step must be positive: {step}")

        base = parts[0]
        if base == "*":
            span = _full_range(constraints)
        elif _is_range(base):
            ranges = self._parse_range(base, kind, constraints)
            if len(ranges) != 1:
                raise ValueError(f"Step range must be ascending: {token!r}")
            span = ranges[0]
        else:
            start = self._parse_bound(base, kind, constraints)
            span = Range(start, Unit(constraints.max_value))

        return Interval(span, step)


def _is_range(token: str) -> bool:
    return "-" in token and "L-" not in token.upper()


def _full_range(constraints: FieldConstraints) -> Range:
    return Range(Unit(constraints.min_value), Unit(constraints.max_value))


def _has_not_specified(field_sets: list[FieldSet]) -> bool:
    return any(isinstance(fs, NotSpecified) for fs in field_sets)


# =============================================================================
# Module Functions
# =============================================================================


def parse(expression: str, limits: SearchLimits | None = None) -> Schedule:
    """Parse a cron expression into a Schedule.

    Args:
        expression: Cron expression string.
        limits: Optional search bounds.

    Returns:
        Parsed Schedule.

    Raises:
        CronParseError: If expression is invalid.
    """
    return CronParser(limits).parse(expression)


def validate_expression(expression: str) -> list[str]:
    """Validate a cron expression.

    Args:
        expression: Cron expression to validate.

    Returns:
        List of validation errors (empty if valid).
    """
    errors = []

    try:
        parse(expression)
    except CronParseError as e:
        errors.append(str(e))

    return errors


def is_valid_expression(expression: str) -> bool:
    """Check if a cron expression is valid."""
    try:
        parse(expression)
        return True
    except CronParseError:
        return False
