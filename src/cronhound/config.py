"""Search configuration for cronhound.

The search for a firing instant is bounded so that expressions which can
never match (day 31 in February) terminate. The bounds can be tuned per
schedule or through environment variables:

    CRONHOUND_MAX_YEAR=2100
    CRONHOUND_MAX_SEARCH_YEARS=20

Usage:
    >>> from cronhound import parse
    >>> from cronhound.config import SearchLimits
    >>>
    >>> schedule = parse("0 0 0 29 2 ?", limits=SearchLimits(max_search_years=8))
    >>> schedule = parse("0 0 0 29 2 ?", limits=SearchLimits.from_env())
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import MAXYEAR
from typing import Mapping

ENV_PREFIX = "CRONHOUND"

DEFAULT_MAX_YEAR = MAXYEAR
DEFAULT_MAX_SEARCH_YEARS = 100


@dataclass(frozen=True)
class SearchLimits:
    """Bounds of a next/previous search.

    Attributes:
        max_year: Candidates after this year end the search.
        max_search_years: Maximum distance, in years, between the reference
            instant and a candidate.
    """

    max_year: int = DEFAULT_MAX_YEAR
    max_search_years: int = DEFAULT_MAX_SEARCH_YEARS

    def __post_init__(self) -> None:
        if not 1 <= self.max_year <= MAXYEAR:
            raise ValueError(f"max_year must be within [1, {MAXYEAR}]: {self.max_year}")
        if self.max_search_years < 0:
            raise ValueError(
                f"max_search_years must not be negative: {self.max_search_years}"
            )

    def allows(self, year: int, origin: int) -> bool:
        """Check whether a candidate year is still inside the search window."""
        return 1 <= year <= self.max_year and abs(year - origin) <= self.max_search_years

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        prefix: str = ENV_PREFIX,
    ) -> "SearchLimits":
        """Load limits from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.
            prefix: Variable prefix.

        Returns:
            SearchLimits with defaults for unset variables.

        Raises:
            ValueError: If a variable is not an integer or out of bounds.
        """
        env = os.environ if environ is None else environ
        values: dict[str, int] = {}

        for name, key in (
            ("max_year", f"{prefix}_MAX_YEAR"),
            ("max_search_years", f"{prefix}_MAX_SEARCH_YEARS"),
        ):
            raw = env.get(key)
            if raw is None or raw.strip() == "":
                continue
            try:
                values[name] = int(raw)
            except ValueError as e:
                raise ValueError(f"{key} must be an integer: {raw!r}") from e

        return cls(**values)


DEFAULT_LIMITS = SearchLimits()
