"""
SRS (Spaced Repetition System) service implementing a fixed interval ladder.

A left swipe means the card was learned: it climbs one step of the ladder.
A right swipe keeps the card for manual review: its interval is left alone
and the caller moves it to the review queue instead.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Union

from swipenotes.core.exceptions import ValidationError
from swipenotes.models.enums import SwipeDirection

logger = logging.getLogger(__name__)


# Review intervals in days
INTERVAL_LADDER = [1, 3, 7, 14, 30, 60, 90]
INITIAL_INTERVAL_DAYS = INTERVAL_LADDER[0]
MAX_INTERVAL_DAYS = INTERVAL_LADDER[-1]


@dataclass(frozen=True)
class IntervalResult:
    """New spacing for a card after a left swipe."""
    interval_days: int


def parse_direction(direction: Union[str, SwipeDirection]) -> SwipeDirection:
    """
    Coerce a swipe direction value.

    Raises:
        ValidationError: If direction is not 'left' or 'right'
    """
    try:
        return SwipeDirection(direction)
    except ValueError:
        raise ValidationError(f"Invalid swipe direction: {direction!r} (expected 'left' or 'right')")


def next_interval(
    current_interval_days: int,
    direction: Union[str, SwipeDirection]
) -> Optional[IntervalResult]:
    """
    Compute a card's next review interval from a swipe decision.

    Args:
        current_interval_days: The card's current interval in days
        direction: 'left' (learned) or 'right' (keep for manual review)

    Returns:
        IntervalResult with the next ladder step for a left swipe,
        None for a right swipe (no interval change)
    """
    direction = parse_direction(direction)

    if direction == SwipeDirection.RIGHT:
        return None

    if current_interval_days not in INTERVAL_LADDER:
        # Off-ladder values restart the progression
        return IntervalResult(interval_days=INITIAL_INTERVAL_DAYS)

    step = INTERVAL_LADDER.index(current_interval_days)
    next_step = min(step + 1, len(INTERVAL_LADDER) - 1)
    return IntervalResult(interval_days=INTERVAL_LADDER[next_step])


def get_next_review_date(last_seen_at: Optional[datetime], interval_days: int) -> Optional[datetime]:
    """
    Calculate when a card becomes due again.

    Args:
        last_seen_at: When the card was last swiped (None if never seen)
        interval_days: Current interval in days

    Returns:
        Datetime of the next review, or None for never-seen cards (due now)
    """
    if last_seen_at is None:
        return None
    return last_seen_at + timedelta(days=interval_days)


def is_due(last_seen_at: Optional[datetime], interval_days: int, now: datetime) -> bool:
    """Whether a card outside the review queue may be shown at `now`."""
    next_review = get_next_review_date(last_seen_at, interval_days)
    return next_review is None or next_review <= now
