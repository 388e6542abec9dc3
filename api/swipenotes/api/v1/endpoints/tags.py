"""
Tag endpoints.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import Optional

from swipenotes.core.database import get_session
from swipenotes.schemas.card import DeletedCountResponse, TagsResponse
from swipenotes.services.tag_service import delete_unused_tags, get_tags_for_user, list_tag_names

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=TagsResponse)
async def get_tags(user_id: Optional[int] = None, session: Session = Depends(get_session)):
    """All tag names, or only those on a user's cards when user_id is given."""
    if user_id is None:
        return TagsResponse(tags=list_tag_names(session))
    return TagsResponse(tags=[tag.name for tag in get_tags_for_user(session, user_id)])


@router.post("/cleanup", response_model=DeletedCountResponse)
async def cleanup_tags(session: Session = Depends(get_session)):
    """Delete tags that no card uses anymore."""
    return DeletedCountResponse(deleted_count=delete_unused_tags(session))
