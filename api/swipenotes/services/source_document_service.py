"""
Source document service.
"""
import logging
from typing import List

from sqlmodel import Session, select

from swipenotes.core.exceptions import NotFoundError
from swipenotes.models.models import Card, SourceDocument
from swipenotes.services.card_service import delete_cards_in_transaction

logger = logging.getLogger(__name__)


def get_source_document(session: Session, document_id: int) -> SourceDocument:
    document = session.get(SourceDocument, document_id)
    if not document:
        raise NotFoundError(f"Source document with id {document_id} not found")
    return document


def list_source_documents(session: Session, user_id: int) -> List[SourceDocument]:
    """The user's imported documents, most recent first."""
    return list(session.exec(
        select(SourceDocument)
        .where(SourceDocument.user_id == user_id)
        .order_by(SourceDocument.imported_at.desc())  # type: ignore[attr-defined]
    ).all())


def delete_source_document(session: Session, document_id: int) -> int:
    """
    Delete a source document together with its cards and their tag links.

    Returns:
        Number of cards deleted
    """
    document = get_source_document(session, document_id)
    cards = list(session.exec(select(Card).where(Card.source_document_id == document_id)).all())
    try:
        delete_cards_in_transaction(session, cards)
        session.flush()
        session.delete(document)
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"Deleted source document {document_id} and {len(cards)} card(s)")
    return len(cards)
