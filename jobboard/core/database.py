import logging
import re
from typing import Any, Dict, List, Sequence

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from jobboard.core.config import settings

logger = logging.getLogger(__name__)

# $1, $2, ... positional placeholders as written by the repositories
_POSITIONAL_PARAM = re.compile(r"\$(\d+)")


def _build_engine(url: str):
    if url.startswith("sqlite"):
        # Single shared connection so in-memory databases survive across sessions
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=10,
        max_overflow=20
    )


engine = _build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Create tables for every registered model.

    There is no migration tool; the schema is created in place on startup.
    create_all() is a no-op for tables that already exist.
    """
    from jobboard.models import company, job  # noqa: F401  Import models to register them
    Base.metadata.create_all(bind=engine)


def bind_positional(sql: str, values: Sequence[Any]) -> tuple:
    """
    Rewrite $n placeholders into SQLAlchemy named binds.

    Args:
        sql: Statement text using $1..$n placeholders
        values: Values where values[i] binds to $(i+1)

    Returns:
        Tuple of (statement text with :p<n> binds, params dict)
    """
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    return _POSITIONAL_PARAM.sub(r":p\1", sql), params


def execute(db: Session, sql: str, values: Sequence[Any] = (), commit: bool = False) -> List[Dict[str, Any]]:
    """
    Execute a positionally-parameterized statement and return its rows.

    Values are always sent out-of-band as bound parameters, never
    interpolated into the statement text.

    Args:
        db: Database session
        sql: Statement text using $1..$n placeholders
        values: Values bound positionally to the placeholders
        commit: Commit after fetching rows (for INSERT/UPDATE/DELETE)

    Returns:
        List of row mappings as plain dicts (empty for statements without rows)

    Raises:
        SQLAlchemyError: Store-level faults, after rolling back the session
    """
    statement, params = bind_positional(sql, values)
    logger.debug("Executing statement with %d bound value(s): %s", len(params), " ".join(statement.split()))
    try:
        result = db.execute(text(statement), params)
        rows = [dict(row) for row in result.mappings().all()] if result.returns_rows else []
        if commit:
            db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    return rows
