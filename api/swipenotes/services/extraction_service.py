"""
Document import service: duplicate detection, card extraction and persistence.

An import writes the source document, its cards and their tag links in one
transaction. Nothing from a failed import is left behind.
"""
import logging
from typing import List, Optional, Union

from sqlmodel import Session, select
from sqlalchemy.exc import IntegrityError

from swipenotes.core.config import settings
from swipenotes.core.exceptions import DuplicateDocumentError, NoCardsExtractedError, ValidationError
from swipenotes.models.models import Card, ExtractionMethod, ImportMethod, SourceDocument
from swipenotes.services.ai_extraction_service import AIExtractor, ExtractedCard
from swipenotes.services.chunking_service import chunk_text
from swipenotes.services.srs_service import INITIAL_INTERVAL_DAYS
from swipenotes.services.tag_service import list_tag_names, normalize_tag_names, set_card_tags
from swipenotes.services.user_service import get_user
from swipenotes.utils.text_utils import byte_size, content_hash, count_words

logger = logging.getLogger(__name__)


def find_duplicate_document(session: Session, user_id: int, hash_value: str) -> Optional[SourceDocument]:
    """Return the user's document with this content hash, if any."""
    return session.exec(
        select(SourceDocument).where(
            SourceDocument.user_id == user_id,
            SourceDocument.content_hash == hash_value
        )
    ).first()


def _new_card(user_id: int, source_document_id: int, content: str, method: ExtractionMethod) -> Card:
    return Card(
        user_id=user_id,
        source_document_id=source_document_id,
        content=content,
        interval_days=INITIAL_INTERVAL_DAYS,
        times_seen=0,
        times_left_swiped=0,
        times_right_swiped=0,
        in_review_queue=False,
        word_count=count_words(content),
        extraction_method=method,
    )


def _request_ai_cards(session: Session, ai_extractor: Optional[AIExtractor], raw_text: str) -> List[ExtractedCard]:
    if ai_extractor is None:
        raise ValidationError("AI import requested but no AI extractor is configured")

    extracted = ai_extractor.extract(raw_text, list_tag_names(session))
    usable = [card for card in extracted if card.content.strip()]
    if not usable:
        raise NoCardsExtractedError("AI extraction returned no cards")

    # Fail before any write if a card carries too many tags
    for card in usable:
        normalize_tag_names(card.suggested_tags)
    return usable


def import_document(
    session: Session,
    user_id: int,
    file_name: str,
    raw_text: str,
    method: Union[str, ImportMethod] = ImportMethod.MANUAL,
    ai_extractor: Optional[AIExtractor] = None
) -> List[Card]:
    """
    Import a document and create its cards.

    Args:
        session: Database session
        user_id: Owner of the document
        file_name: Original file name, for display
        raw_text: Full document text
        method: 'manual' (chunk locally) or 'ai' (delegate to ai_extractor)
        ai_extractor: Extraction capability, required for 'ai'

    Returns:
        The created cards in document order

    Raises:
        NotFoundError: If user not found
        ValidationError: If the text is empty or too long, or the method is unknown
        DuplicateDocumentError: If the user already imported identical text
        NoCardsExtractedError: If AI extraction produced no usable card
        AIServiceError, MalformedAIResponseError: Propagated from the AI extractor
    """
    try:
        method = ImportMethod(method)
    except ValueError:
        raise ValidationError(f"Invalid import method: {method!r} (expected 'manual' or 'ai')")

    get_user(session, user_id)

    total_words = count_words(raw_text)
    if total_words == 0:
        raise ValidationError("Document is empty")
    if total_words > settings.max_document_words:
        raise ValidationError(
            f"Document exceeds the maximum limit of {settings.max_document_words} words. "
            f"Your document has {total_words} words."
        )

    hash_value = content_hash(raw_text)
    if find_duplicate_document(session, user_id, hash_value):
        logger.warning(f"Rejected duplicate import of '{file_name}' for user {user_id}")
        raise DuplicateDocumentError(f"Document '{file_name}' has already been imported")

    # The AI call happens before any write so the transaction stays short
    ai_cards = _request_ai_cards(session, ai_extractor, raw_text) if method == ImportMethod.AI else []

    try:
        document = SourceDocument(
            user_id=user_id,
            file_name=file_name,
            raw_text=raw_text,
            content_hash=hash_value,
            byte_size=byte_size(raw_text),
        )
        session.add(document)
        session.flush()  # Flush to get the document ID

        cards: List[Card] = []
        if method == ImportMethod.MANUAL:
            for chunk in chunk_text(raw_text):
                card = _new_card(user_id, document.id, chunk.content, chunk.method)
                session.add(card)
                cards.append(card)
            session.flush()
        else:
            for extracted in ai_cards:
                card = _new_card(user_id, document.id, extracted.content.strip(), ExtractionMethod.AI)
                session.add(card)
                session.flush()
                set_card_tags(session, card, extracted.suggested_tags)
                cards.append(card)

        session.commit()
    except IntegrityError as e:
        session.rollback()
        # A concurrent import of the same text won the unique constraint
        if find_duplicate_document(session, user_id, hash_value):
            logger.warning(f"Rejected concurrent duplicate import of '{file_name}' for user {user_id}")
            raise DuplicateDocumentError(f"Document '{file_name}' has already been imported") from e
        logger.error(f"Import of '{file_name}' for user {user_id} failed, rolled back")
        raise
    except Exception:
        session.rollback()
        logger.error(f"Import of '{file_name}' for user {user_id} failed, rolled back")
        raise

    for card in cards:
        session.refresh(card)

    logger.info(
        f"Imported '{file_name}' for user {user_id}: document {document.id}, "
        f"{len(cards)} card(s) via {method.value}"
    )
    return cards
