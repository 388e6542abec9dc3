"""
Text utility functions.
"""
import hashlib
import re

_WORD_RE = re.compile(r"\S+")


def count_words(text: str) -> int:
    """
    Count whitespace-separated tokens in text.

    Args:
        text: Any text (may be empty)

    Returns:
        Number of runs of non-whitespace characters
    """
    if not text:
        return 0
    return len(_WORD_RE.findall(text))


def content_hash(text: str) -> str:
    """SHA-256 hex digest of the UTF-8 encoded text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def byte_size(text: str) -> int:
    """Size of the text in bytes once UTF-8 encoded."""
    return len(text.encode("utf-8"))
