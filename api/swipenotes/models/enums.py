"""
Model enums.
"""
from enum import Enum


class ExtractionMethod(str, Enum):
    """How a card was cut out of its source document."""
    FULL = "full"
    CHUNK_HEADER = "chunk_header"
    CHUNK_PARAGRAPH = "chunk_paragraph"
    AI = "ai"


class ImportMethod(str, Enum):
    """How a document import should produce cards."""
    MANUAL = "manual"
    AI = "ai"


class SwipeDirection(str, Enum):
    """Swipe decision on a card. Left = learned, right = keep for manual review."""
    LEFT = "left"
    RIGHT = "right"


class DayStatus(str, Enum):
    """Calendar state of a day in streak views."""
    STUDIED = "studied"
    MISSED = "missed"
    FUTURE = "future"
