"""
Eligibility service: which cards a user may study right now.
"""
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from sqlmodel import Session, select
from sqlalchemy import func

from swipenotes.models.models import Card
from swipenotes.services.srs_service import is_due
from swipenotes.services.user_service import get_user
from swipenotes.utils.date_utils import day_bounds

logger = logging.getLogger(__name__)


@dataclass
class EligibleCards:
    """Cards selected for a session and whether the daily quota is exhausted."""
    cards: List[Card] = field(default_factory=list)
    limit_reached: bool = False


def get_daily_swipes_count(session: Session, user_id: int, now: Optional[datetime] = None) -> int:
    """
    Count the user's cards last seen during the current local day.

    Args:
        session: Database session
        user_id: User ID
        now: Reference time (defaults to local now)

    Returns:
        Number of cards with last_seen_at in [today 00:00, tomorrow 00:00)
    """
    now = now or datetime.now()
    start, end = day_bounds(now.date())
    return session.exec(
        select(func.count(Card.id)).where(
            Card.user_id == user_id,
            Card.last_seen_at >= start,  # type: ignore[operator]
            Card.last_seen_at < end  # type: ignore[operator]
        )
    ).one()


def get_due_cards(session: Session, user_id: int, now: Optional[datetime] = None) -> List[Card]:
    """All of the user's cards that are due and not in the review queue, in ID order."""
    now = now or datetime.now()
    candidates = session.exec(
        select(Card)
        .where(Card.user_id == user_id, Card.in_review_queue == False)  # noqa: E712
        .order_by(Card.id)
    ).all()
    return [card for card in candidates if is_due(card.last_seen_at, card.interval_days, now)]


def select_eligible_cards(
    session: Session,
    user_id: int,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None
) -> EligibleCards:
    """
    Select the cards a user may be shown today.

    The daily quota counts cards already seen today; the remainder is filled
    with due cards in a fresh random order on every call.

    Args:
        session: Database session
        user_id: User ID
        now: Reference time (defaults to local now)
        rng: Random source for the shuffle (defaults to the module RNG)

    Returns:
        EligibleCards with at most the remaining quota of cards

    Raises:
        NotFoundError: If user not found
    """
    now = now or datetime.now()
    user = get_user(session, user_id)

    today_usage = get_daily_swipes_count(session, user_id, now)
    if today_usage >= user.daily_card_limit:
        logger.info(f"User {user_id} reached daily limit ({today_usage}/{user.daily_card_limit})")
        return EligibleCards(cards=[], limit_reached=True)

    remaining = user.daily_card_limit - today_usage
    due_cards = get_due_cards(session, user_id, now)
    (rng or random).shuffle(due_cards)

    selected = due_cards[:remaining]
    logger.info(
        f"User {user_id}: {len(due_cards)} due card(s), {remaining} remaining today, "
        f"selected {len(selected)}"
    )
    return EligibleCards(cards=selected, limit_reached=False)
