"""
Custom exceptions for the application.
"""


class SwipeNotesException(Exception):
    """Base exception for all SwipeNotes application exceptions."""
    pass


class ValidationError(SwipeNotesException):
    """Raised when validation fails (e.g. empty content, non-positive daily limit)."""
    pass


class NotFoundError(SwipeNotesException):
    """Raised when a requested user, card, session or document is not found."""
    pass


class ConflictError(SwipeNotesException):
    """Raised when there's a conflict (e.g., duplicate entry, ended session)."""
    pass


class DuplicateDocumentError(ConflictError):
    """Raised when a user imports a document whose content hash they already imported."""
    pass


class NoCardsExtractedError(SwipeNotesException):
    """Raised when AI extraction returns nothing usable."""
    pass


class AIServiceError(SwipeNotesException):
    """Raised when the AI extraction service fails or cannot be reached."""
    pass


class AIExtractionTimeoutError(AIServiceError):
    """Raised when the AI extraction service does not answer in time."""
    pass


class MalformedAIResponseError(SwipeNotesException):
    """Raised when the AI extraction service returns an unparsable payload."""
    pass
