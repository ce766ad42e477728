# backend/tutorconnect/database.py
"""
Persistence adapter for the workflow engine.

Every entity class lives in its own table of an embedded SQLite store
(one store per client profile). Sessions never commit on their own;
the service layer owns transaction boundaries.
"""

from datetime import datetime
import logging
from typing import Any, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .core.config import settings

logger = logging.getLogger(__name__)

Base: DeclarativeMeta = declarative_base()


def create_db_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Create an engine for the local store.

    In-memory SQLite URLs share one connection (StaticPool) so that every
    session sees the same database.
    """
    url = database_url or settings.database_url
    kwargs: dict[str, Any] = {"echo": settings.sql_echo if echo is None else echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)

    @event.listens_for(engine, "connect")
    def receive_connect(dbapi_connection: Any, connection_record: Any) -> None:
        connection_record.info["connect_time"] = datetime.now()
        if engine.dialect.name == "sqlite":
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
        logger.debug("Database connection established")

    return engine


def init_db(engine: Engine) -> None:
    """Create missing tables; an empty store loads as empty collections."""
    import tutorconnect.models  # noqa: F401  registers every model on Base.metadata

    Base.metadata.create_all(bind=engine)
    logger.info("Local store initialized with %d tables", len(Base.metadata.tables))


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


def clear_all_tables(db: Session) -> None:
    """Delete every row from every table, children first. Does not commit."""
    for table in reversed(Base.metadata.sorted_tables):
        db.execute(table.delete())
    db.flush()
