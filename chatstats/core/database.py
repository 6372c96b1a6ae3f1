"""
Database engine and session management.

This is the connection provider for the report queries: one session per
request, handed out by the ``get_db`` dependency.
"""
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from chatstats.core.config import get_settings
from chatstats.core.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()

# Initialized lazily so settings overrides apply before first use
_engine = None
_SessionLocal = None


def _ensure_sqlite_dir(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    database = make_url(database_url).database
    if not database or database == ":memory:" or database.startswith("file:"):
        return
    db_dir = Path(database).parent
    if not db_dir.exists():
        db_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created database directory: {db_dir}")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Engine for ``database_url`` with the SQLite tweaks the store needs."""
    is_sqlite = make_url(database_url).get_backend_name() == "sqlite"

    connect_args = {}
    if is_sqlite:
        connect_args["check_same_thread"] = False
        _ensure_sqlite_dir(database_url)

    engine = create_engine(
        database_url,
        connect_args=connect_args,
        echo=echo,
        pool_pre_ping=True,
    )
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def get_engine() -> Engine:
    """Get or create the engine for the configured database."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = build_engine(settings.database_url, echo=settings.debug)
        logger.info("Database engine created", extra={"extra_data": {"database_url": settings.database_url}})

    return _engine


def get_session_factory():
    """Get or create the session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=get_engine()
        )
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Dependency yielding a request-scoped session."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create the message tables if they do not exist yet."""
    from chatstats.models import message  # noqa: F401 - registers the mappings

    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables created")


def check_db_connection() -> bool:
    """Check if database is reachable."""
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False
