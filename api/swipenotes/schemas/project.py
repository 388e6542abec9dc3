"""
Project schemas.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class ProjectResponse(BaseModel):
    """Project response schema."""
    id: int
    user_id: int
    name: str
    color: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProjectWithCountResponse(ProjectResponse):
    card_count: int = 0


class CreateProjectRequest(BaseModel):
    user_id: int
    name: str
    color: Optional[str] = None


class UpdateProjectRequest(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None


class ProjectsResponse(BaseModel):
    projects: List[ProjectWithCountResponse]
