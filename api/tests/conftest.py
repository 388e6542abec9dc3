import itertools
import os
from datetime import datetime
from typing import List, Optional

import pytest

# Set test environment variables before the application reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["GOOGLE_GEMINI_API_KEY"] = "test-key"

from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from swipenotes.models.models import Card, ExtractionMethod, SourceDocument, StudySession, User  # noqa: E402
from swipenotes.services.ai_extraction_service import ExtractedCard  # noqa: E402
from swipenotes.utils.text_utils import content_hash, count_words  # noqa: E402

# Fixed reference time used across the suite: Tuesday 10 March 2026, noon
NOW = datetime(2026, 3, 10, 12, 0, 0)


def words(n: int, prefix: str = "w") -> str:
    """n distinct space-separated words."""
    return " ".join(f"{prefix}{i}" for i in range(n))


class FakeExtractor:
    """In-memory AI extractor recording its calls."""

    def __init__(self, cards: Optional[List[ExtractedCard]] = None, error: Optional[Exception] = None):
        self.cards = cards if cards is not None else []
        self.error = error
        self.calls = []

    def extract(self, content, existing_tags):
        self.calls.append((content, list(existing_tags)))
        if self.error is not None:
            raise self.error
        return self.cards


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def make_user(session):
    counter = itertools.count(1)

    def _make_user(daily_card_limit: int = 20) -> User:
        n = next(counter)
        user = User(
            email=f"user{n}@example.com",
            full_name=f"User {n}",
            password=User.hash_password("secret"),
            daily_card_limit=daily_card_limit,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def make_document(session):
    counter = itertools.count(1)

    def _make_document(user: User, raw_text: Optional[str] = None) -> SourceDocument:
        n = next(counter)
        raw_text = raw_text or f"document number {n}"
        document = SourceDocument(
            user_id=user.id,
            file_name=f"notes-{n}.md",
            raw_text=raw_text,
            content_hash=content_hash(raw_text),
            byte_size=len(raw_text.encode("utf-8")),
        )
        session.add(document)
        session.commit()
        session.refresh(document)
        return document

    return _make_document


@pytest.fixture
def make_card(session, make_document):
    """Create a card directly in the database, with its own source document by default."""

    def _make_card(
        user: User,
        content: str = "card content",
        document: Optional[SourceDocument] = None,
        **fields
    ) -> Card:
        document = document or make_document(user)
        card = Card(
            user_id=user.id,
            source_document_id=document.id,
            content=content,
            word_count=count_words(content),
            extraction_method=fields.pop("extraction_method", ExtractionMethod.FULL),
            **fields,
        )
        session.add(card)
        session.commit()
        session.refresh(card)
        return card

    return _make_card


@pytest.fixture
def make_completed_session(session):
    def _make_completed_session(user: User, started_at: datetime, is_active: bool = False) -> StudySession:
        study_session = StudySession(
            user_id=user.id,
            started_at=started_at,
            ended_at=None if is_active else started_at,
            is_active=is_active,
            swipe_history=[],
            cards=[],
        )
        session.add(study_session)
        session.commit()
        session.refresh(study_session)
        return study_session

    return _make_completed_session


@pytest.fixture
def fake_extractor():
    return FakeExtractor(cards=[
        ExtractedCard(content="Mitochondria produce ATP.", suggested_tags=["Biology", "Cells"]),
        ExtractedCard(content="Ribosomes build proteins.", suggested_tags=["Biology"]),
    ])
