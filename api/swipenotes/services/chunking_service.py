"""
Chunking service: turns document text into word-bounded card payloads.

Short documents become a single card. Longer documents are split at markdown
headings, and headed sections that are still too long are packed paragraph
by paragraph.
"""
import logging
import re
from dataclasses import dataclass
from typing import List

from swipenotes.models.enums import ExtractionMethod
from swipenotes.utils.text_utils import count_words

logger = logging.getLogger(__name__)

MAX_WORDS_PER_CARD = 250

_HEADING_RE = re.compile(r"^#+\s")
_PARAGRAPH_BREAK_RE = re.compile(r"\n[ \t\r\f\v]*\n\s*")


@dataclass(frozen=True)
class ChunkedCard:
    """Card payload produced by the chunker."""
    content: str
    word_count: int
    method: ExtractionMethod


def split_sections(text: str) -> List[str]:
    """
    Split text into sections at heading lines (one or more '#' then whitespace).

    A heading owns every following line up to the next heading. Text before
    the first heading is its own section. Empty sections are dropped.
    """
    sections: List[List[str]] = [[]]
    for line in text.split("\n"):
        if _HEADING_RE.match(line) and any(part.strip() for part in sections[-1]):
            sections.append([])
        sections[-1].append(line)
    return [section for section in ("\n".join(lines).strip() for lines in sections) if section]


def split_paragraphs(text: str) -> List[str]:
    """Split text on one or more blank (whitespace-only) lines."""
    return [p.strip() for p in _PARAGRAPH_BREAK_RE.split(text) if p.strip()]


def pack_paragraphs(paragraphs: List[str], max_words: int = MAX_WORDS_PER_CARD) -> List[str]:
    """
    Greedily pack paragraphs into chunks of at most max_words words.

    A paragraph that alone exceeds max_words becomes its own chunk, unsplit.
    """
    chunks: List[str] = []
    buffer: List[str] = []
    buffer_words = 0
    for paragraph in paragraphs:
        words = count_words(paragraph)
        if buffer and buffer_words + words > max_words:
            chunks.append("\n\n".join(buffer))
            buffer, buffer_words = [], 0
        buffer.append(paragraph)
        buffer_words += words
    if buffer:
        chunks.append("\n\n".join(buffer))
    return chunks


def chunk_text(text: str, max_words: int = MAX_WORDS_PER_CARD) -> List[ChunkedCard]:
    """
    Split text into card payloads in document order.

    Args:
        text: Raw document text
        max_words: Word ceiling per card

    Returns:
        List of ChunkedCard; empty when the text has no words
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    total_words = count_words(normalized)
    if total_words == 0:
        return []

    if total_words <= max_words:
        return [ChunkedCard(normalized.strip(), total_words, ExtractionMethod.FULL)]

    cards: List[ChunkedCard] = []
    for section in split_sections(normalized):
        section_words = count_words(section)
        if section_words <= max_words:
            cards.append(ChunkedCard(section, section_words, ExtractionMethod.CHUNK_HEADER))
            continue
        for chunk in pack_paragraphs(split_paragraphs(section), max_words):
            chunk_words = count_words(chunk)
            if chunk_words > max_words:
                logger.debug(f"Emitting oversized paragraph of {chunk_words} words unsplit")
            cards.append(ChunkedCard(chunk, chunk_words, ExtractionMethod.CHUNK_PARAGRAPH))

    logger.info(f"Chunked {total_words} words into {len(cards)} card(s)")
    return cards
