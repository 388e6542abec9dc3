"""
Streak service: study activity per calendar day and the current streak.

A day counts as studied when at least one completed (inactive) session
started on it, in local time.
"""
import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Set

from sqlmodel import Session, select

from swipenotes.core.exceptions import ValidationError
from swipenotes.models.models import DayStatus, StudySession
from swipenotes.services.user_service import get_user
from swipenotes.utils.date_utils import day_abbreviation, day_bounds

logger = logging.getLogger(__name__)

STREAK_LOOKBACK_DAYS = 365


@dataclass
class DayActivity:
    """One day of a streak calendar."""
    date: date
    day_abbreviation: str
    day_number: int
    status: DayStatus
    is_today: bool

    @property
    def has_studied(self) -> bool:
        return self.status == DayStatus.STUDIED


def get_studied_days(session: Session, user_id: int, start_day: date, end_day: date) -> Set[date]:
    """
    Local dates in [start_day, end_day] on which a completed session started.
    """
    start, _ = day_bounds(start_day)
    _, end = day_bounds(end_day)
    started_at_values = session.exec(
        select(StudySession.started_at).where(
            StudySession.user_id == user_id,
            StudySession.is_active == False,  # noqa: E712
            StudySession.started_at >= start,
            StudySession.started_at < end
        )
    ).all()
    return {started_at.date() for started_at in started_at_values}


def calculate_current_streak(session: Session, user_id: int, today: Optional[date] = None) -> int:
    """
    Count consecutive studied days ending today, or yesterday if today has
    no completed session yet.

    Args:
        session: Database session
        user_id: User ID
        today: Reference day (defaults to the local date)

    Returns:
        Streak length in days, at most STREAK_LOOKBACK_DAYS
        (0 if neither today nor yesterday was studied)

    Raises:
        NotFoundError: If user not found
    """
    get_user(session, user_id)
    today = today or datetime.now().date()
    studied = get_studied_days(session, user_id, today - timedelta(days=STREAK_LOOKBACK_DAYS), today)

    check_day = today
    if check_day not in studied:
        check_day -= timedelta(days=1)
        if check_day not in studied:
            return 0

    streak = 0
    while check_day in studied and streak < STREAK_LOOKBACK_DAYS:
        streak += 1
        check_day -= timedelta(days=1)
    return streak


def _build_days(days: List[date], studied: Set[date], today: date) -> List[DayActivity]:
    result = []
    for day in days:
        if day > today:
            status = DayStatus.FUTURE
        elif day in studied:
            status = DayStatus.STUDIED
        else:
            status = DayStatus.MISSED
        result.append(DayActivity(
            date=day,
            day_abbreviation=day_abbreviation(day),
            day_number=day.day,
            status=status,
            is_today=day == today,
        ))
    return result


def get_week_activity(session: Session, user_id: int, today: Optional[date] = None) -> List[DayActivity]:
    """
    Activity for the last 7 days, oldest first, ending today.

    Raises:
        NotFoundError: If user not found
    """
    get_user(session, user_id)
    today = today or datetime.now().date()
    days = [today - timedelta(days=offset) for offset in range(6, -1, -1)]
    studied = get_studied_days(session, user_id, days[0], today)
    return _build_days(days, studied, today)


def get_month_activity(
    session: Session,
    user_id: int,
    year: int,
    month: int,
    today: Optional[date] = None
) -> List[DayActivity]:
    """
    Activity for every day of a calendar month.

    Args:
        session: Database session
        user_id: User ID
        year: Calendar year
        month: Month number, 1-12
        today: Reference day for the future/missed distinction

    Raises:
        NotFoundError: If user not found
        ValidationError: If month is outside 1-12
    """
    if not 1 <= month <= 12:
        raise ValidationError(f"month must be between 1 and 12, got {month}")
    get_user(session, user_id)
    today = today or datetime.now().date()

    days_in_month = calendar.monthrange(year, month)[1]
    days = [date(year, month, day) for day in range(1, days_in_month + 1)]
    studied = get_studied_days(session, user_id, days[0], days[-1])
    return _build_days(days, studied, today)
