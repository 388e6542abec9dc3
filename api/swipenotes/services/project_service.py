"""
Project service. Projects group cards; removing a project never removes cards.
"""
import logging
from typing import List, Optional, Tuple

from sqlmodel import Session, select
from sqlalchemy import func

from swipenotes.core.exceptions import NotFoundError, ValidationError
from swipenotes.models.models import Card, Project
from swipenotes.services.user_service import get_user

logger = logging.getLogger(__name__)


def get_project(session: Session, project_id: int) -> Project:
    project = session.get(Project, project_id)
    if not project:
        raise NotFoundError(f"Project with id {project_id} not found")
    return project


def create_project(session: Session, user_id: int, name: str, color: Optional[str] = None) -> Project:
    """
    Create a project for a user.

    Raises:
        NotFoundError: If user not found
        ValidationError: If the name is empty
    """
    get_user(session, user_id)
    name = name.strip()
    if not name:
        raise ValidationError("Project name cannot be empty")

    project = Project(user_id=user_id, name=name)
    if color:
        project.color = color
    session.add(project)
    session.commit()
    session.refresh(project)
    return project


def get_projects_by_user(session: Session, user_id: int) -> List[Project]:
    return list(session.exec(
        select(Project).where(Project.user_id == user_id).order_by(Project.created_at, Project.id)
    ).all())


def update_project(
    session: Session,
    project_id: int,
    name: Optional[str] = None,
    color: Optional[str] = None
) -> Project:
    project = get_project(session, project_id)
    if name is not None:
        if not name.strip():
            raise ValidationError("Project name cannot be empty")
        project.name = name.strip()
    if color is not None:
        project.color = color
    session.add(project)
    session.commit()
    session.refresh(project)
    return project


def delete_project(session: Session, project_id: int) -> int:
    """
    Delete a project and detach its cards.

    Returns:
        Number of cards that were detached
    """
    project = get_project(session, project_id)
    cards = session.exec(select(Card).where(Card.project_id == project_id)).all()
    try:
        for card in cards:
            card.project_id = None
            session.add(card)
        session.flush()
        session.delete(project)
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"Deleted project {project_id}, detached {len(cards)} card(s)")
    return len(cards)


def get_projects_with_card_counts(session: Session, user_id: int) -> List[Tuple[Project, int]]:
    """The user's projects with their card counts, largest first."""
    rows = session.exec(
        select(Project, func.count(Card.id))
        .join(Card, Card.project_id == Project.id, isouter=True)
        .where(Project.user_id == user_id)
        .group_by(Project.id)
        .order_by(func.count(Card.id).desc())
    ).all()
    return [(project, count) for project, count in rows]
