from typing import TypeVar, Generic, Type, Optional, List, Generator
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.config import settings
from core.base import Base

logger = logging.getLogger(__name__)


def _build_engine(url: str):
    """Create the SQLAlchemy engine for the configured database URL."""
    if url.startswith("sqlite"):
        # In-memory SQLite must share one connection across threads
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )

    return create_engine(
        url,
        pool_size=20,
        max_overflow=30,
        pool_timeout=30,
        pool_recycle=3600,
        pool_pre_ping=True,
        echo=False,
    )


# Database engine configuration
engine = _build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Generic type for entities
T = TypeVar('T')


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Create all tables (development and tests; production uses Alembic)."""
    # Register models on Base.metadata
    import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


class BaseRepository(Generic[T]):
    """Base repository implementation bound to one session."""

    def __init__(self, session: Session, model: Type[T]):
        self.session = session
        self.model = model

    def create(self, entity: T) -> T:
        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)
        return entity

    def get_by_id(self, entity_id: str) -> Optional[T]:
        return self.session.get(self.model, entity_id)

    def delete(self, entity_id: str) -> bool:
        entity = self.session.get(self.model, entity_id)
        if entity:
            self.session.delete(entity)
            self.session.commit()
            return True
        return False
