"""
Models package - imports all models.
"""
from swipenotes.models.models import (
    ExtractionMethod,
    ImportMethod,
    SwipeDirection,
    DayStatus,
    User,
    SourceDocument,
    Project,
    CardTag,
    Tag,
    Card,
    StudySession,
)

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
