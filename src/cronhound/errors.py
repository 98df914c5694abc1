"""Exceptions raised while parsing cron expressions."""

from __future__ import annotations

from cronhound.types import TimeUnitKind


class CronParseError(ValueError):
    """Raised when cron expression parsing fails.

    Attributes:
        expression: The expression being parsed.
        kind: The field that failed, when the error is tied to one field.
    """

    def __init__(
        self,
        message: str,
        expression: str = "",
        kind: TimeUnitKind | None = None,
    ) -> None:
        self.expression = expression
        self.kind = kind
        if kind is not None:
            message = f"time unit `{kind}` malformed: {message}"
        super().__init__(message)


class MalformedExpressionError(CronParseError):
    """The expression does not have the expected structure."""


class MalformedFieldError(CronParseError):
    """A token of a field cannot be converted."""


class ValueOutsideRangeError(CronParseError):
    """A converted value lies outside the domain of its field."""


class MultipleNotSpecifiedError(CronParseError):
    """Both day-of-month and weekday use `?`."""
