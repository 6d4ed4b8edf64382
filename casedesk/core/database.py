"""Store client: SQLAlchemy engine and session management with an explicit lifecycle."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from casedesk.core.errors import InternalError
from casedesk.models.base import Base

logger = logging.getLogger(__name__)


class Store:
    """
    Handle to the persistence backend.

    Constructed once by the application factory and connected during startup;
    request handlers receive sessions through get_db. connect() is idempotent.
    """

    def __init__(self, url: str, *, echo: bool = False, create_tables: bool = True) -> None:
        self.url = url
        self.echo = echo
        self.create_tables = create_tables
        self._engine: Engine | None = None
        self._sessionmaker: sessionmaker[Session] | None = None

    @property
    def connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Store is not connected; call connect() first")
        return self._engine

    def _engine_kwargs(self) -> dict:
        if self.url.startswith("sqlite"):
            kwargs: dict = {"connect_args": {"check_same_thread": False}}
            # In-memory SQLite lives inside one connection; share it across sessions.
            if ":memory:" in self.url or self.url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
                kwargs["poolclass"] = StaticPool
            return kwargs
        return {"pool_pre_ping": True}

    def connect(self) -> None:
        """Create the engine once, verify connectivity, and create tables if configured."""
        if self._engine is not None:
            return
        engine = create_engine(self.url, echo=self.echo, **self._engine_kwargs())
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        if self.create_tables:
            Base.metadata.create_all(bind=engine)
        self._engine = engine
        self._sessionmaker = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        logger.info("Store connected (dialect=%s)", engine.dialect.name)

    def session(self) -> Session:
        """Open a new session bound to the connected engine."""
        if self._sessionmaker is None:
            raise RuntimeError("Store is not connected; call connect() first")
        return self._sessionmaker()

    def check_connected(self) -> bool:
        """Run a trivial query to verify the store is reachable."""
        if self._engine is None:
            return False
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.warning("Store health check failed", exc_info=True)
            return False

    def dispose(self) -> None:
        """Release pooled connections; the store can be connected again afterwards."""
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Store disposed")


def get_store(request: Request) -> Store:
    """Dependency returning the store attached to the running application."""
    return request.app.state.store


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = get_store(request).session()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_errors(db: Session) -> Iterator[None]:
    """Roll back and re-raise store failures as InternalError (500, details logged server-side)."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        raise InternalError(cause=e) from e
