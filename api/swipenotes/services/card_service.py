"""
Card service for editing, organising and querying a user's cards.
"""
import logging
from typing import List, Optional

from sqlmodel import Session, select
from sqlalchemy import func, or_

from swipenotes.core.exceptions import NotFoundError, ValidationError
from swipenotes.models.models import Card, CardTag, Project, SourceDocument, Tag
from swipenotes.services.tag_service import set_card_tags
from swipenotes.utils.text_utils import count_words

logger = logging.getLogger(__name__)

MAX_SEARCH_RESULTS = 20


def get_card(session: Session, card_id: int, user_id: Optional[int] = None) -> Card:
    """
    Fetch a card, optionally checking its owner.

    Raises:
        NotFoundError: If card not found (or not owned by user_id)
    """
    card = session.get(Card, card_id)
    if not card or (user_id is not None and card.user_id != user_id):
        raise NotFoundError(f"Card with id {card_id} not found")
    return card


def list_cards(
    session: Session,
    user_id: int,
    project_id: Optional[int] = None,
    source_document_id: Optional[int] = None,
    in_review_queue: Optional[bool] = None,
    tag: Optional[str] = None
) -> List[Card]:
    """List a user's cards, newest first, with optional filters."""
    query = select(Card).where(Card.user_id == user_id)
    if project_id is not None:
        query = query.where(Card.project_id == project_id)
    if source_document_id is not None:
        query = query.where(Card.source_document_id == source_document_id)
    if in_review_queue is not None:
        query = query.where(Card.in_review_queue == in_review_queue)
    if tag is not None:
        query = (
            query.join(CardTag, CardTag.card_id == Card.id)
            .join(Tag, Tag.id == CardTag.tag_id)
            .where(Tag.name == tag)
        )
    query = query.order_by(Card.created_at.desc(), Card.id.desc())  # type: ignore[attr-defined]
    return list(session.exec(query).all())


def update_card_content(session: Session, card_id: int, content: str) -> Card:
    """
    Replace a card's content and recount its words.

    Raises:
        NotFoundError: If card not found
        ValidationError: If content is empty after trimming
    """
    card = get_card(session, card_id)
    content = content.strip()
    if not content:
        raise ValidationError("Card content cannot be empty")

    card.content = content
    card.word_count = count_words(content)
    session.add(card)
    session.commit()
    session.refresh(card)
    return card


def update_card_tags(session: Session, card_id: int, tag_names: List[str]) -> Card:
    """
    Replace a card's tags, creating tags that don't exist yet.

    Raises:
        NotFoundError: If card not found
        ValidationError: If more than the allowed number of tags is given
    """
    card = get_card(session, card_id)
    try:
        set_card_tags(session, card, tag_names)
        session.commit()
    except Exception:
        session.rollback()
        raise
    session.refresh(card)
    return card


def set_card_in_review_queue(session: Session, card_id: int, in_review_queue: bool) -> Card:
    """Put a card in, or take it out of, the review queue."""
    card = get_card(session, card_id)
    card.in_review_queue = in_review_queue
    session.add(card)
    session.commit()
    session.refresh(card)
    return card


def toggle_cards_review_queue(session: Session, card_ids: List[int], user_id: int) -> List[Card]:
    """
    Flip the review-queue flag of several cards of one user.

    Raises:
        NotFoundError: If any card is missing or owned by someone else
    """
    cards = [get_card(session, card_id, user_id) for card_id in card_ids]
    for card in cards:
        card.in_review_queue = not card.in_review_queue
        session.add(card)
    session.commit()
    for card in cards:
        session.refresh(card)
    return cards


def update_card_project(session: Session, card_id: int, project_id: Optional[int]) -> Card:
    """
    Assign a card to one of its owner's projects, or clear the assignment.

    Raises:
        NotFoundError: If card or project not found, or the project belongs to another user
    """
    card = get_card(session, card_id)
    if project_id is not None:
        project = session.get(Project, project_id)
        if not project or project.user_id != card.user_id:
            raise NotFoundError(f"Project with id {project_id} not found")

    card.project_id = project_id
    session.add(card)
    session.commit()
    session.refresh(card)
    return card


def delete_cards_in_transaction(session: Session, cards: List[Card]) -> None:
    """Delete cards. Their card_tag rows go with them. Does not commit."""
    for card in cards:
        session.delete(card)
    session.flush()


def delete_cards(session: Session, card_ids: List[int], user_id: int) -> int:
    """
    Delete several cards of one user.

    Returns:
        Number of cards deleted

    Raises:
        NotFoundError: If any card is missing or owned by someone else
    """
    cards = [get_card(session, card_id, user_id) for card_id in card_ids]
    try:
        delete_cards_in_transaction(session, cards)
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"Deleted {len(cards)} card(s) for user {user_id}")
    return len(cards)


def get_total_card_count(session: Session, user_id: int) -> int:
    return session.exec(select(func.count(Card.id)).where(Card.user_id == user_id)).one()


def get_review_queue_count(session: Session, user_id: int) -> int:
    return session.exec(
        select(func.count(Card.id)).where(
            Card.user_id == user_id,
            Card.in_review_queue == True  # noqa: E712
        )
    ).one()


def search_cards(session: Session, user_id: int, query: str) -> List[Card]:
    """
    Case-insensitive substring search over card content and source file names.

    Returns:
        At most MAX_SEARCH_RESULTS cards, newest first
    """
    query = query.strip()
    if not query:
        return []
    pattern = f"%{query}%"
    statement = (
        select(Card)
        .join(SourceDocument, SourceDocument.id == Card.source_document_id)
        .where(
            Card.user_id == user_id,
            or_(
                Card.content.ilike(pattern),  # type: ignore[attr-defined]
                SourceDocument.file_name.ilike(pattern)  # type: ignore[attr-defined]
            )
        )
        .order_by(Card.created_at.desc(), Card.id.desc())  # type: ignore[attr-defined]
        .limit(MAX_SEARCH_RESULTS)
    )
    return list(session.exec(statement).all())
