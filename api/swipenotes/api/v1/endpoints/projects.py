"""
Project endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from swipenotes.core.database import get_session
from swipenotes.schemas.card import DeletedCountResponse
from swipenotes.schemas.project import (
    CreateProjectRequest,
    ProjectResponse,
    ProjectsResponse,
    ProjectWithCountResponse,
    UpdateProjectRequest
)
from swipenotes.services.project_service import (
    create_project,
    delete_project,
    get_projects_with_card_counts,
    update_project
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=ProjectsResponse)
async def get_projects(user_id: int, session: Session = Depends(get_session)):
    """A user's projects with card counts, largest first."""
    rows = get_projects_with_card_counts(session, user_id)
    return ProjectsResponse(projects=[
        ProjectWithCountResponse(**ProjectResponse.model_validate(project).model_dump(), card_count=count)
        for project, count in rows
    ])


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def post_project(request: CreateProjectRequest, session: Session = Depends(get_session)):
    project = create_project(session, request.user_id, request.name, request.color)
    return ProjectResponse.model_validate(project)


@router.put("/{project_id}", response_model=ProjectResponse)
async def put_project(
    project_id: int,
    request: UpdateProjectRequest,
    session: Session = Depends(get_session)
):
    project = update_project(session, project_id, name=request.name, color=request.color)
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", response_model=DeletedCountResponse)
async def remove_project(project_id: int, session: Session = Depends(get_session)):
    """Delete a project. Its cards are kept and detached; deleted_count is 1."""
    delete_project(session, project_id)
    return DeletedCountResponse(deleted_count=1)
