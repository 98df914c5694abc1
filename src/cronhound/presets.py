"""Predefined schedules.

Commonly used cron expressions as ready-made schedules.

Usage:
    >>> from cronhound.presets import DAILY, WEEKDAYS_9AM
    >>>
    >>> next_run = DAILY.next(datetime.now(timezone.utc))
    >>> get_preset("last-friday").previous(datetime.now(timezone.utc))
"""

from __future__ import annotations

from cronhound.parser import parse
from cronhound.schedule import Schedule


# =============================================================================
# Standard Intervals
# =============================================================================

# Every year on January 1st at midnight
YEARLY = parse("@yearly")
ANNUALLY = YEARLY

# First day of every month at midnight
MONTHLY = parse("@monthly")

# Every Sunday at midnight
WEEKLY = parse("@weekly")

# Every day at midnight
DAILY = parse("@daily")
MIDNIGHT = DAILY

# Every hour at minute 0
HOURLY = parse("@hourly")

# Every minute
EVERY_MINUTE = parse("@every_minute")

# Every second
EVERY_SECOND = parse("@every_second")


# =============================================================================
# Business Schedule Presets
# =============================================================================

# Weekdays (Monday-Friday) at 9 AM
WEEKDAYS_9AM = parse("0 0 9 ? * MON-FRI")

# Weekdays (Monday-Friday) at 6 PM
WEEKDAYS_6PM = parse("0 0 18 ? * MON-FRI")

# Every 15 minutes during business hours (9 AM - 5 PM, weekdays)
BUSINESS_HOURS_15MIN = parse("0 */15 9-17 ? * MON-FRI")


# =============================================================================
# Month Boundary Presets
# =============================================================================

# First day of month at 6 AM
FIRST_OF_MONTH = parse("0 0 6 1 * ?")

# Last day of month at 6 AM
LAST_OF_MONTH = parse("0 0 6 L * ?")

# First Monday of month at 9 AM
FIRST_MONDAY = parse("0 0 9 ? * 1#1")

# Last Friday of month at 5 PM
LAST_FRIDAY = parse("0 0 17 ? * 5L")


# =============================================================================
# Data Pipeline Presets
# =============================================================================

EVERY_5_MIN = parse("0 */5 * * * ?")
EVERY_15_MIN = parse("0 */15 * * * ?")
EVERY_30_MIN = parse("0 */30 * * * ?")
EVERY_6_HOURS = parse("0 0 */6 * * ?")

# Every night at 2 AM (common for batch jobs)
NIGHTLY_2AM = parse("0 0 2 * * ?")


# =============================================================================
# Quarter Presets
# =============================================================================

# First day of each quarter
QUARTERLY = parse("0 0 0 1 1,4,7,10 ?")

# Last day of each quarter
END_OF_QUARTER = parse("0 0 0 L 3,6,9,12 ?")


# =============================================================================
# Preset Registry
# =============================================================================

PRESETS: dict[str, Schedule] = {
    # Standard
    "yearly": YEARLY,
    "annually": ANNUALLY,
    "monthly": MONTHLY,
    "weekly": WEEKLY,
    "daily": DAILY,
    "midnight": MIDNIGHT,
    "hourly": HOURLY,
    "every_minute": EVERY_MINUTE,
    "every_second": EVERY_SECOND,
    # Business
    "weekdays_9am": WEEKDAYS_9AM,
    "weekdays_6pm": WEEKDAYS_6PM,
    "business_hours_15min": BUSINESS_HOURS_15MIN,
    # Month boundaries
    "first_of_month": FIRST_OF_MONTH,
    "last_of_month": LAST_OF_MONTH,
    "first_monday": FIRST_MONDAY,
    "last_friday": LAST_FRIDAY,
    # Data pipeline
    "every_5_min": EVERY_5_MIN,
    "every_15_min": EVERY_15_MIN,
    "every_30_min": EVERY_30_MIN,
    "every_6_hours": EVERY_6_HOURS,
    "nightly_2am": NIGHTLY_2AM,
    # Quarter
    "quarterly": QUARTERLY,
    "end_of_quarter": END_OF_QUARTER,
}


def get_preset(name: str) -> Schedule | None:
    """Get a preset schedule by name.

    Args:
        name: Preset name (case-insensitive, dashes allowed).

    Returns:
        Schedule or None if not found.
    """
    return PRESETS.get(name.lower().replace("-", "_"))


def list_presets() -> list[str]:
    """List all available preset names."""
    return list(PRESETS.keys())
