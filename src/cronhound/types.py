"""Shared types for cronhound.

Field kinds, their value domains and the outcome model used by the
search engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


# =============================================================================
# Field Kinds
# =============================================================================


class TimeUnitKind(Enum):
    """Calendar field kinds of a cron expression."""

    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    MONTHS = "months"
    WEEKDAYS = "week days"
    YEARS = "years"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FieldConstraints:
    """Value domain and accepted names for a cron field."""

    min_value: int
    max_value: int
    names: dict[str, int] = field(default_factory=dict)
    supports_question: bool = False


FIELD_CONSTRAINTS: dict[TimeUnitKind, FieldConstraints] = {
    TimeUnitKind.SECONDS: FieldConstraints(0, 59),
    TimeUnitKind.MINUTES: FieldConstraints(0, 59),
    TimeUnitKind.HOURS: FieldConstraints(0, 23),
    TimeUnitKind.DAYS: FieldConstraints(1, 31, supports_question=True),
    TimeUnitKind.MONTHS: FieldConstraints(
        1, 12,
        names={
            "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4,
            "MAY": 5, "JUN": 6, "JUL": 7, "AUG": 8,
            "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
        },
    ),
    TimeUnitKind.WEEKDAYS: FieldConstraints(
        0, 6,
        names={
            "SUN": 0, "MON": 1, "TUE": 2, "WED": 3,
            "THU": 4, "FRI": 5, "SAT": 6,
        },
        supports_question=True,
    ),
    TimeUnitKind.YEARS: FieldConstraints(1, 9999),
}


# =============================================================================
# Search Outcomes
# =============================================================================


class Outcome(Enum):
    """Result of looking for a candidate value inside the containing unit."""

    HIT = "hit"
    IN_RANGE = "in_range"
    MISS = "miss"


class Candidate(NamedTuple):
    """Candidate value returned by a field set, with its outcome."""

    value: int
    outcome: Outcome
