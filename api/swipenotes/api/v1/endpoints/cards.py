"""
Card endpoints.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import Optional

from swipenotes.core.database import get_session
from swipenotes.schemas.card import (
    CardCountsResponse,
    CardIdsRequest,
    CardResponse,
    CardsResponse,
    DeletedCountResponse,
    ReviewQueueRequest,
    UpdateCardContentRequest,
    UpdateCardProjectRequest,
    UpdateCardTagsRequest
)
from swipenotes.services.card_service import (
    delete_cards,
    get_card,
    get_review_queue_count,
    get_total_card_count,
    list_cards,
    search_cards,
    set_card_in_review_queue,
    toggle_cards_review_queue,
    update_card_content,
    update_card_project,
    update_card_tags
)
from swipenotes.services.eligibility_service import get_daily_swipes_count, get_due_cards

router = APIRouter(prefix="/cards", tags=["cards"])


def _cards_response(cards) -> CardsResponse:
    return CardsResponse(cards=[CardResponse.from_card(card) for card in cards])


@router.get("", response_model=CardsResponse)
async def get_cards(
    user_id: int,
    project_id: Optional[int] = None,
    source_document_id: Optional[int] = None,
    in_review_queue: Optional[bool] = None,
    tag: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """List a user's cards, newest first, with optional filters."""
    return _cards_response(list_cards(
        session,
        user_id,
        project_id=project_id,
        source_document_id=source_document_id,
        in_review_queue=in_review_queue,
        tag=tag,
    ))


@router.get("/search", response_model=CardsResponse)
async def search(user_id: int, q: str, session: Session = Depends(get_session)):
    """Search card content and source file names (at most 20 results)."""
    return _cards_response(search_cards(session, user_id, q))


@router.get("/due", response_model=CardsResponse)
async def get_due(user_id: int, session: Session = Depends(get_session)):
    """Every card currently due, ignoring the daily limit."""
    return _cards_response(get_due_cards(session, user_id))


@router.get("/counts", response_model=CardCountsResponse)
async def get_counts(user_id: int, session: Session = Depends(get_session)):
    return CardCountsResponse(
        total=get_total_card_count(session, user_id),
        in_review_queue=get_review_queue_count(session, user_id),
        seen_today=get_daily_swipes_count(session, user_id),
    )


@router.get("/{card_id}", response_model=CardResponse)
async def get_single_card(card_id: int, session: Session = Depends(get_session)):
    return CardResponse.from_card(get_card(session, card_id))


@router.put("/{card_id}/content", response_model=CardResponse)
async def put_content(
    card_id: int,
    request: UpdateCardContentRequest,
    session: Session = Depends(get_session)
):
    return CardResponse.from_card(update_card_content(session, card_id, request.content))


@router.put("/{card_id}/tags", response_model=CardResponse)
async def put_tags(
    card_id: int,
    request: UpdateCardTagsRequest,
    session: Session = Depends(get_session)
):
    return CardResponse.from_card(update_card_tags(session, card_id, request.tags))


@router.put("/{card_id}/project", response_model=CardResponse)
async def put_project(
    card_id: int,
    request: UpdateCardProjectRequest,
    session: Session = Depends(get_session)
):
    return CardResponse.from_card(update_card_project(session, card_id, request.project_id))


@router.put("/{card_id}/review-queue", response_model=CardResponse)
async def put_review_queue(
    card_id: int,
    request: ReviewQueueRequest,
    session: Session = Depends(get_session)
):
    """Move a card into, or clear it from, the review queue."""
    return CardResponse.from_card(set_card_in_review_queue(session, card_id, request.in_review_queue))


@router.post("/review-queue/toggle", response_model=CardsResponse)
async def toggle_review_queue(request: CardIdsRequest, session: Session = Depends(get_session)):
    return _cards_response(toggle_cards_review_queue(session, request.card_ids, request.user_id))


@router.post("/delete", response_model=DeletedCountResponse)
async def delete_many(request: CardIdsRequest, session: Session = Depends(get_session)):
    return DeletedCountResponse(deleted_count=delete_cards(session, request.card_ids, request.user_id))
