"""Database configuration and session management"""

from sqlalchemy import create_engine, text, inspect
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from typing import Any, Dict, Generator
from codemaster.config import settings
import logging

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> Dict[str, Any]:
    """Pool options per backend; SQLite has no connection pool sizing."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DATABASE_POOL_SIZE,
        "max_overflow": settings.DATABASE_MAX_OVERFLOW,
        "pool_timeout": 30,
        "pool_recycle": 3600,
        "pool_pre_ping": True,
    }


_database_url = settings.get_database_url()

engine = create_engine(
    _database_url,
    echo=settings.DEBUG,
    **_engine_options(_database_url)
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create base class for models
Base = declarative_base()

# Import models after Base is defined so metadata is populated.
from codemaster import models  # noqa: E402,F401


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting database session

    Yields:
        Session: Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """
    Initialize database according to configured strategy.

    DB_INIT_MODE:
      - migrate: require alembic_version table (migration-first discipline)
      - create_all: create tables from metadata for local/dev bootstrap
      - off: skip initialization check
    """
    mode = settings.DB_INIT_MODE.lower().strip()
    if mode == "off":
        logger.info("DB initialization check skipped (DB_INIT_MODE=off)")
        return

    if mode == "create_all":
        Base.metadata.create_all(bind=engine)
        logger.warning("Using create_all database initialization (recommended only for local development).")
        return

    if mode == "migrate":
        with engine.connect() as conn:
            exists = "alembic_version" in inspect(conn).get_table_names()
            if settings.DB_REQUIRE_HEAD and not exists:
                raise RuntimeError(
                    "Migration table missing. Run `alembic upgrade head` before starting the API."
                )
            conn.execute(text("SELECT 1"))
        logger.info("Migration metadata detected.")
        return

    raise RuntimeError(f"Unknown DB_INIT_MODE: {settings.DB_INIT_MODE}")
