"""
Study session endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import Optional

from swipenotes.core.database import get_session
from swipenotes.schemas.session import (
    StartSessionRequest,
    StartSessionResponse,
    StudySessionResponse,
    StudySessionsResponse,
    SwipeRequest
)
from swipenotes.services.session_service import (
    end_session,
    get_active_session,
    get_session_by_id,
    get_sessions,
    record_swipe,
    start_session,
    undo_last_swipe
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=StartSessionResponse, status_code=status.HTTP_201_CREATED)
async def start(request: StartSessionRequest, session: Session = Depends(get_session)):
    """Start a session over the cards eligible right now."""
    study_session, limit_reached = start_session(session, request.user_id)
    return StartSessionResponse(
        session=StudySessionResponse.model_validate(study_session),
        limit_reached=limit_reached,
    )


@router.get("", response_model=StudySessionsResponse)
async def list_sessions(user_id: int, limit: int = 20, session: Session = Depends(get_session)):
    sessions = get_sessions(session, user_id, limit=limit)
    return StudySessionsResponse(
        sessions=[StudySessionResponse.model_validate(s) for s in sessions]
    )


@router.get("/active", response_model=Optional[StudySessionResponse])
async def active(user_id: int, session: Session = Depends(get_session)):
    study_session = get_active_session(session, user_id)
    return StudySessionResponse.model_validate(study_session) if study_session else None


@router.get("/{session_id}", response_model=StudySessionResponse)
async def read(session_id: int, session: Session = Depends(get_session)):
    return StudySessionResponse.model_validate(get_session_by_id(session, session_id))


@router.post("/{session_id}/swipes", response_model=StudySessionResponse)
async def swipe(session_id: int, request: SwipeRequest, session: Session = Depends(get_session)):
    """Record a left (learned) or right (review later) swipe."""
    study_session = record_swipe(session, session_id, request.card_id, request.direction)
    return StudySessionResponse.model_validate(study_session)


@router.post("/{session_id}/undo", response_model=StudySessionResponse)
async def undo(session_id: int, session: Session = Depends(get_session)):
    return StudySessionResponse.model_validate(undo_last_swipe(session, session_id))


@router.post("/{session_id}/end", response_model=StudySessionResponse)
async def end(session_id: int, session: Session = Depends(get_session)):
    """End the session and apply its swipes to the cards. Safe to retry."""
    return StudySessionResponse.model_validate(end_session(session, session_id))
