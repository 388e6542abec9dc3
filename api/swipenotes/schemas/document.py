"""
Source document schemas.
"""
from pydantic import BaseModel, Field
from typing import List
from datetime import datetime
from swipenotes.models.enums import ImportMethod
from swipenotes.schemas.card import CardResponse


class ImportDocumentRequest(BaseModel):
    """Request to import a document and extract cards from it."""
    user_id: int = Field(..., description="User ID")
    file_name: str = Field(..., description="Original file name")
    raw_text: str = Field(..., description="Full text of the document")
    method: ImportMethod = Field(ImportMethod.MANUAL, description="'manual' chunking or 'ai' extraction")

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": 1,
                "file_name": "biology-notes.md",
                "raw_text": "# Cells\n\nThe cell is the basic unit of life.",
                "method": "manual"
            }
        }


class ImportDocumentResponse(BaseModel):
    """Response from a document import."""
    source_document_id: int
    cards: List[CardResponse]


class SourceDocumentResponse(BaseModel):
    """Source document response schema."""
    id: int
    user_id: int
    file_name: str
    imported_at: datetime
    raw_text: str
    content_hash: str
    byte_size: int

    class Config:
        from_attributes = True


class SourceDocumentsResponse(BaseModel):
    documents: List[SourceDocumentResponse]
