"""
Study session service: session lifecycle and swipe tracking.

A session moves one way, from active to inactive. Swipes are appended to the
session history in order and mirrored onto the live cards right away so the
daily quota sees them. Ending the session applies the interval ladder to
left-swiped cards and moves right-swiped cards to the review queue.

Card counters have a single update path, `_reconcile_card`: the counters are
always recomputed as baseline + this session's history, where the baseline is
the live card minus this session's own contributions. Eager per-swipe
updates, undo and the end-of-session pass never double-count, and swipes
committed by other sessions in the meantime are kept.

Each history entry remembers the card's last_seen_at from before the swipe,
so undo can put it back.
"""
import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from sqlmodel import Session, select

from swipenotes.core.exceptions import ConflictError, NotFoundError, ValidationError
from swipenotes.models.models import Card, StudySession, SwipeDirection
from swipenotes.services.eligibility_service import select_eligible_cards
from swipenotes.services.srs_service import next_interval, parse_direction
from swipenotes.services.user_service import get_user

logger = logging.getLogger(__name__)


@dataclass
class _CardBaseline:
    """Card counters without this session's contributions."""
    times_seen: int
    times_left_swiped: int
    times_right_swiped: int


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def _swipes_for(history: List[Dict[str, Any]], card_id: int) -> List[Dict[str, Any]]:
    return [entry for entry in history if entry["card_id"] == card_id]


def _baseline_for(card: Card, history: List[Dict[str, Any]]) -> _CardBaseline:
    """
    Baseline counters for a card: its live counters minus what `history`
    already contributed. The live card includes swipes from other sessions,
    so those survive every reconcile.
    """
    swipes = _swipes_for(history, card.id)
    lefts = sum(1 for entry in swipes if entry["direction"] == SwipeDirection.LEFT.value)
    return _CardBaseline(
        times_seen=max(0, card.times_seen - len(swipes)),
        times_left_swiped=max(0, card.times_left_swiped - lefts),
        times_right_swiped=max(0, card.times_right_swiped - (len(swipes) - lefts)),
    )


def _reconcile_card(card: Card, baseline: _CardBaseline, history: List[Dict[str, Any]]) -> None:
    """Set the card's counters from baseline + history."""
    swipes = _swipes_for(history, card.id)
    lefts = sum(1 for entry in swipes if entry["direction"] == SwipeDirection.LEFT.value)

    card.times_seen = baseline.times_seen + len(swipes)
    card.times_left_swiped = baseline.times_left_swiped + lefts
    card.times_right_swiped = baseline.times_right_swiped + (len(swipes) - lefts)


def _get_session_for_update(session: Session, session_id: int) -> StudySession:
    """Load a study session with a row lock so history appends serialize."""
    study_session = session.exec(
        select(StudySession).where(StudySession.id == session_id).with_for_update()
    ).first()
    if not study_session:
        raise NotFoundError(f"Study session with id {session_id} not found")
    return study_session


def _get_owned_card(session: Session, card_id: int, user_id: int) -> Card:
    card = session.get(Card, card_id)
    if not card or card.user_id != user_id:
        raise NotFoundError(f"Card with id {card_id} not found")
    return card


def _commit(session: Session, action: str, session_id: Optional[int]) -> None:
    try:
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Error during {action} for study session {session_id}: {str(e)}")
        raise


def get_session_by_id(session: Session, session_id: int) -> StudySession:
    """
    Fetch a study session by ID.

    Raises:
        NotFoundError: If session not found
    """
    study_session = session.get(StudySession, session_id)
    if not study_session:
        raise NotFoundError(f"Study session with id {session_id} not found")
    return study_session


def get_active_session(session: Session, user_id: int) -> Optional[StudySession]:
    """The user's most recently started active session, if any."""
    get_user(session, user_id)
    return session.exec(
        select(StudySession)
        .where(StudySession.user_id == user_id, StudySession.is_active == True)  # noqa: E712
        .order_by(StudySession.started_at.desc())  # type: ignore[attr-defined]
    ).first()


def get_sessions(session: Session, user_id: int, limit: int = 20) -> List[StudySession]:
    """The user's sessions, newest first."""
    get_user(session, user_id)
    return list(session.exec(
        select(StudySession)
        .where(StudySession.user_id == user_id)
        .order_by(StudySession.started_at.desc())  # type: ignore[attr-defined]
        .limit(limit)
    ).all())


def start_session(
    session: Session,
    user_id: int,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None
) -> Tuple[StudySession, bool]:
    """
    Start a study session over the user's currently eligible cards.

    The eligible cards are captured once, as a snapshot stored on the session.

    Returns:
        (the new session, whether the daily limit was already reached)

    Raises:
        NotFoundError: If user not found
    """
    now = now or datetime.now()
    eligible = select_eligible_cards(session, user_id, now=now, rng=rng)

    study_session = StudySession(
        user_id=user_id,
        started_at=now,
        is_active=True,
        cards_swiped=0,
        swipe_history=[],
        cards=[card.model_dump(mode="json") for card in eligible.cards],
    )
    session.add(study_session)
    _commit(session, "start", None)
    session.refresh(study_session)

    logger.info(
        f"Started study session {study_session.id} for user {user_id} "
        f"with {len(eligible.cards)} card(s)"
    )
    return study_session, eligible.limit_reached


def record_swipe(
    session: Session,
    session_id: int,
    card_id: int,
    direction: Union[str, SwipeDirection],
    now: Optional[datetime] = None
) -> StudySession:
    """
    Append a swipe to an active session and mirror it onto the live card.

    Raises:
        NotFoundError: If session or card not found (or card belongs to another user)
        ConflictError: If the session has already ended
        ValidationError: If direction is invalid
    """
    direction = parse_direction(direction)
    now = now or datetime.now()

    study_session = _get_session_for_update(session, session_id)
    if not study_session.is_active:
        raise ConflictError(f"Study session {session_id} has already ended")
    card = _get_owned_card(session, card_id, study_session.user_id)

    history = list(study_session.swipe_history)
    baseline = _baseline_for(card, history)
    previous_last_seen_at = card.last_seen_at
    history.append({
        "card_id": card_id,
        "direction": direction.value,
        "timestamp": now.isoformat(),
        "previous_last_seen_at": previous_last_seen_at.isoformat() if previous_last_seen_at else None,
    })

    study_session.swipe_history = history
    study_session.cards_swiped = len(history)
    _reconcile_card(card, baseline, history)
    card.last_seen_at = now

    session.add(study_session)
    session.add(card)
    _commit(session, "swipe", session_id)
    session.refresh(study_session)
    return study_session


def undo_last_swipe(session: Session, session_id: int) -> StudySession:
    """
    Remove the most recent swipe of an active session and restore its card.

    Raises:
        NotFoundError: If session not found
        ConflictError: If the session has already ended
        ValidationError: If there is nothing to undo
    """
    study_session = _get_session_for_update(session, session_id)
    if not study_session.is_active:
        raise ConflictError(f"Study session {session_id} has already ended")
    if not study_session.swipe_history:
        raise ValidationError(f"Study session {session_id} has no swipe to undo")

    history = list(study_session.swipe_history)
    last_swipe = history[-1]
    card = session.get(Card, last_swipe["card_id"])

    baseline = _baseline_for(card, history) if card else None
    history.pop()
    study_session.swipe_history = history
    study_session.cards_swiped = len(history)
    if card is not None:
        _reconcile_card(card, baseline, history)
        # Leave last_seen_at alone if a later swipe elsewhere already moved it
        if card.last_seen_at == _parse_timestamp(last_swipe["timestamp"]):
            card.last_seen_at = _parse_timestamp(last_swipe.get("previous_last_seen_at"))
        session.add(card)

    session.add(study_session)
    _commit(session, "undo", session_id)
    session.refresh(study_session)
    return study_session


def end_session(session: Session, session_id: int, now: Optional[datetime] = None) -> StudySession:
    """
    End a study session and commit the swipe effects to its cards.

    For every card in the swipe history (whether or not it was in the
    start-of-session snapshot) the counters are reconciled with the full
    history. last_seen_at already holds the latest swipe and is left as is. The card's last swipe decides the outcome: left advances the
    interval ladder, right puts the card in the review queue.

    Ending an already ended session returns it unchanged.

    Raises:
        NotFoundError: If session not found
    """
    study_session = _get_session_for_update(session, session_id)
    if not study_session.is_active:
        logger.info(f"Study session {session_id} already ended, nothing to apply")
        return study_session

    history = list(study_session.swipe_history)
    final_directions: Dict[int, str] = {}
    for entry in history:
        final_directions[entry["card_id"]] = entry["direction"]

    learned = 0
    queued = 0
    for card_id, direction in final_directions.items():
        card = session.get(Card, card_id)
        if card is None:
            logger.warning(f"Card {card_id} from study session {session_id} no longer exists, skipping")
            continue

        _reconcile_card(card, _baseline_for(card, history), history)

        result = next_interval(card.interval_days, direction)
        if result is None:
            card.in_review_queue = True
            queued += 1
        else:
            card.interval_days = result.interval_days
            learned += 1
        session.add(card)

    study_session.is_active = False
    study_session.ended_at = now or datetime.now()
    study_session.cards_swiped = len(history)
    session.add(study_session)
    _commit(session, "end", session_id)
    session.refresh(study_session)

    logger.info(
        f"Ended study session {session_id}: {len(history)} swipe(s), "
        f"{learned} card(s) advanced, {queued} card(s) queued for review"
    )
    return study_session
