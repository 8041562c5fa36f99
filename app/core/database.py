"""Database connection and session management."""

import logging
from collections.abc import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base class."""

    pass


class Database:
    """Owns the engine and session factory.

    Nothing connects until the first acquire(); later calls reuse the
    same engine until dispose().
    """

    def __init__(self, url: str, **engine_options):
        self.url = url
        self.engine_options = engine_options
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    def acquire(self) -> sessionmaker[Session]:
        """Return the session factory, creating the engine if needed."""
        if self._session_factory is None:
            logger.info("Creating database engine")
            self._engine = create_engine(self.url, **self.engine_options)
            self._session_factory = sessionmaker(
                bind=self._engine,
                class_=Session,
                expire_on_commit=False,
                autocommit=False,
                autoflush=False,
            )
        return self._session_factory

    def session(self) -> Session:
        return self.acquire()()

    def dispose(self) -> None:
        """Release pooled connections if the engine was ever created."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None


database = Database(
    str(settings.DATABASE_URL),
    echo=False,
    pool_pre_ping=True,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
)


def get_db() -> Generator[Session, None, None]:
    """Get database session dependency."""
    session = database.session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

