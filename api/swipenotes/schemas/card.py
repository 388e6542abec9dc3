"""
Card schemas.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from swipenotes.models.enums import ExtractionMethod
from swipenotes.services.srs_service import get_next_review_date


class CardResponse(BaseModel):
    """Card response schema."""
    id: int
    user_id: int
    source_document_id: int
    project_id: Optional[int] = None
    content: str
    created_at: datetime
    last_seen_at: Optional[datetime] = None
    next_review_at: Optional[datetime] = None
    interval_days: int
    times_seen: int
    times_left_swiped: int
    times_right_swiped: int
    in_review_queue: bool
    word_count: int
    extraction_method: ExtractionMethod
    tags: List[str] = []

    @field_validator("tags", mode="before")
    @classmethod
    def tag_names(cls, v):
        """Accept Tag rows as well as plain names."""
        return [getattr(tag, "name", tag) for tag in (v or [])]

    @classmethod
    def from_card(cls, card) -> "CardResponse":
        response = cls.model_validate(card)
        response.next_review_at = get_next_review_date(card.last_seen_at, card.interval_days)
        return response

    class Config:
        from_attributes = True


class CardsResponse(BaseModel):
    """Response schema for card lists."""
    cards: List[CardResponse]


class UpdateCardContentRequest(BaseModel):
    content: str


class UpdateCardTagsRequest(BaseModel):
    tags: List[str] = Field(..., description="Replaces all tags of the card")


class UpdateCardProjectRequest(BaseModel):
    project_id: Optional[int] = Field(None, description="Null removes the card from its project")


class ReviewQueueRequest(BaseModel):
    in_review_queue: bool


class CardIdsRequest(BaseModel):
    """Request schema for bulk card operations."""
    user_id: int
    card_ids: List[int] = Field(..., min_length=1)


class CardCountsResponse(BaseModel):
    total: int
    in_review_queue: int
    seen_today: int


class TagsResponse(BaseModel):
    tags: List[str]


class DeletedCountResponse(BaseModel):
    deleted_count: int
