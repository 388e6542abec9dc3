"""
Tests for the chunking service.
"""
from swipenotes.models.enums import ExtractionMethod
from swipenotes.services.chunking_service import (
    MAX_WORDS_PER_CARD,
    chunk_text,
    pack_paragraphs,
    split_paragraphs,
    split_sections
)
from swipenotes.utils.text_utils import count_words

from conftest import words


class TestSplitting:
    def test_split_sections_at_headings(self):
        text = "Intro line\n# First\nbody one\n## Second\nbody two"
        assert split_sections(text) == ["Intro line", "# First\nbody one", "## Second\nbody two"]

    def test_hash_without_whitespace_is_not_a_heading(self):
        text = "#hashtag line\nmore text\n# Real heading\nbody"
        assert split_sections(text) == ["#hashtag line\nmore text", "# Real heading\nbody"]

    def test_leading_heading_has_no_empty_preamble(self):
        assert split_sections("# Only\nbody") == ["# Only\nbody"]

    def test_split_paragraphs_on_blank_lines(self):
        text = "first para\nstill first\n\nsecond\n   \n\nthird"
        assert split_paragraphs(text) == ["first para\nstill first", "second", "third"]

    def test_pack_paragraphs_greedy(self):
        paragraphs = [words(100, "a"), words(100, "b"), words(100, "c")]
        chunks = pack_paragraphs(paragraphs, max_words=250)
        assert [count_words(chunk) for chunk in chunks] == [200, 100]

    def test_pack_keeps_oversized_paragraph_whole(self):
        paragraphs = [words(10, "a"), words(300, "b"), words(10, "c")]
        chunks = pack_paragraphs(paragraphs, max_words=250)
        assert [count_words(chunk) for chunk in chunks] == [10, 300, 10]


class TestChunkText:
    def test_empty_text_yields_no_cards(self):
        assert chunk_text("") == []
        assert chunk_text("   \n\n  ") == []

    def test_short_document_is_one_full_card(self):
        cards = chunk_text("  Photosynthesis converts light into chemical energy.  \n")
        assert len(cards) == 1
        assert cards[0].method == ExtractionMethod.FULL
        assert cards[0].content == "Photosynthesis converts light into chemical energy."
        assert cards[0].word_count == 6

    def test_exactly_limit_is_one_full_card(self):
        text = "# Heading\n\n" + words(MAX_WORDS_PER_CARD - 2)
        cards = chunk_text(text)
        assert len(cards) == 1
        assert cards[0].method == ExtractionMethod.FULL
        assert cards[0].word_count == MAX_WORDS_PER_CARD

    def test_document_with_two_headed_sections(self):
        # 100-word section, then a 500-word section made of 5 paragraphs
        first = "## Alpha\n\n" + words(98, "a")
        second = "## Beta\n\n" + "\n\n".join(
            words(n, f"p{i}-") for i, n in enumerate([100, 100, 100, 100, 98])
        )
        cards = chunk_text(first + "\n\n" + second)

        assert cards[0].method == ExtractionMethod.CHUNK_HEADER
        assert cards[0].word_count == 100
        rest = cards[1:]
        assert len(rest) >= 2
        assert all(card.method == ExtractionMethod.CHUNK_PARAGRAPH for card in rest)
        assert all(card.word_count <= MAX_WORDS_PER_CARD for card in rest)
        assert sum(card.word_count for card in rest) == 500
        assert rest[0].content.startswith("## Beta")

    def test_single_oversized_paragraph(self):
        cards = chunk_text(words(300))
        assert len(cards) == 1
        assert cards[0].method == ExtractionMethod.CHUNK_PARAGRAPH
        assert cards[0].word_count == 300

    def test_chunks_cover_every_word_in_order(self):
        text = (
            "Preamble " + words(40, "pre") + "\n\n"
            "# One\n\n" + words(120, "x") + "\n\n" + words(200, "y") + "\n\n"
            "# Two\n" + words(30, "z") + "\n\n"
            "# Three\n\n" + words(260, "big") + "\n\n" + words(5, "tail")
        )
        cards = chunk_text(text)

        chunked_words = " ".join(card.content for card in cards).split()
        assert chunked_words == text.split()
        for card in cards:
            assert card.word_count == count_words(card.content)

    def test_bounded_unless_single_paragraph(self):
        text = "\n\n".join(words(n, f"s{i}-") for i, n in enumerate([80, 120, 60, 240, 30, 90]))
        text = "# Notes\n\n" + text
        for card in chunk_text(text):
            assert card.word_count <= MAX_WORDS_PER_CARD or "\n\n" not in card.content

    def test_windows_line_endings(self):
        text = "# A\r\n\r\n" + words(200, "a") + "\r\n# B\r\n\r\n" + words(200, "b")
        cards = chunk_text(text)
        assert [card.method for card in cards] == [ExtractionMethod.CHUNK_HEADER, ExtractionMethod.CHUNK_HEADER]
        assert cards[1].content.startswith("# B")
