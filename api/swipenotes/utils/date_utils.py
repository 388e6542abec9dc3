"""
Local calendar helpers.

All timestamps in the database are naive local times; day boundaries are
local midnight to the next midnight.
"""
from datetime import date, datetime, time, timedelta
from typing import Tuple

DAY_ABBREVIATIONS = ['M', 'T', 'W', 'T', 'F', 'S', 'S']  # Indexed by date.weekday()


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Half-open [midnight, next midnight) interval for a calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def day_abbreviation(day: date) -> str:
    """Single-letter weekday label (M T W T F S S)."""
    return DAY_ABBREVIATIONS[day.weekday()]
