from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool
from swipenotes.core.config import settings
import logging

logger = logging.getLogger(__name__)


def build_engine(database_url: str):
    """
    Create the SQLAlchemy engine for a database URL.

    Server databases get a pre-pinged connection pool. In-memory SQLite
    shares one connection so every session sees the same database.
    """
    # SQLAlchemy prefers postgresql:// over postgres://
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)

    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=False, **kwargs)

    return create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


logger.info(f"Connecting to database: {settings.database_url[:20]}...")  # Log partial URL for debugging

engine = build_engine(settings.database_url)


def get_session():
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session


def init_db():
    """Initialize database tables."""
    SQLModel.metadata.create_all(engine)
