"""
Document import endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
import logging

from swipenotes.core.database import get_session
from swipenotes.schemas.card import CardResponse, DeletedCountResponse
from swipenotes.schemas.document import (
    ImportDocumentRequest,
    ImportDocumentResponse,
    SourceDocumentResponse,
    SourceDocumentsResponse
)
from swipenotes.services.ai_extraction_service import AIExtractor, GeminiExtractionService
from swipenotes.services.extraction_service import import_document
from swipenotes.services.source_document_service import (
    delete_source_document,
    get_source_document,
    list_source_documents
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


def get_ai_extractor() -> AIExtractor:
    """Dependency providing the AI extraction capability."""
    return GeminiExtractionService()


# Runs in the threadpool; the AI request blocks
@router.post("/import", response_model=ImportDocumentResponse, status_code=status.HTTP_201_CREATED)
def import_document_endpoint(
    request: ImportDocumentRequest,
    session: Session = Depends(get_session),
    ai_extractor: AIExtractor = Depends(get_ai_extractor)
):
    """
    Import a document and create its cards.

    'manual' splits the text locally into cards of at most 250 words;
    'ai' asks the AI service for cards and tags. Importing the same text
    twice for one user is rejected with 409.
    """
    cards = import_document(
        session,
        user_id=request.user_id,
        file_name=request.file_name,
        raw_text=request.raw_text,
        method=request.method,
        ai_extractor=ai_extractor,
    )
    return ImportDocumentResponse(
        source_document_id=cards[0].source_document_id,
        cards=[CardResponse.from_card(card) for card in cards],
    )


@router.get("", response_model=SourceDocumentsResponse)
async def get_documents(user_id: int, session: Session = Depends(get_session)):
    """List a user's imported documents, most recent first."""
    documents = list_source_documents(session, user_id)
    return SourceDocumentsResponse(
        documents=[SourceDocumentResponse.model_validate(doc) for doc in documents]
    )


@router.get("/{document_id}", response_model=SourceDocumentResponse)
async def get_document(document_id: int, session: Session = Depends(get_session)):
    return SourceDocumentResponse.model_validate(get_source_document(session, document_id))


@router.delete("/{document_id}", response_model=DeletedCountResponse)
async def delete_document(document_id: int, session: Session = Depends(get_session)):
    """Delete a document and every card extracted from it."""
    return DeletedCountResponse(deleted_count=delete_source_document(session, document_id))
