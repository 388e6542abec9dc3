"""
Models module - re-exports all models.

Importing this module registers every table with SQLModel.metadata:
    from swipenotes.models import models  # noqa: F401
"""
from swipenotes.models.enums import ExtractionMethod, ImportMethod, SwipeDirection, DayStatus
from swipenotes.models.user import User
from swipenotes.models.source_document import SourceDocument
from swipenotes.models.project import Project
from swipenotes.models.card_tag import CardTag
from swipenotes.models.tag import Tag
from swipenotes.models.card import Card
from swipenotes.models.study_session import StudySession

__all__ = [
    'ExtractionMethod',
    'ImportMethod',
    'SwipeDirection',
    'DayStatus',
    'User',
    'SourceDocument',
    'Project',
    'CardTag',
    'Tag',
    'Card',
    'StudySession',
]
