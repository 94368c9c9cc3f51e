"""
Database schema and statement execution.

Uses PostgreSQL through SQLAlchemy Core. Repositories speak raw SQL with
positional `$N` placeholders; SqlAlchemyExecutor is the bridge that runs
them against an engine and hands rows back as plain dicts.
"""

import re
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    Text,
    create_engine,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import declarative_base

from .env import get_settings
from .logger import get_logger

Base = declarative_base()

_PLACEHOLDER = re.compile(r"\$(\d+)")


class Company(Base):
    """Company the jobs belong to, keyed by its handle."""

    __tablename__ = "companies"

    handle = Column(Text, primary_key=True)
    name = Column(Text, unique=True, nullable=False)
    num_employees = Column(Integer, CheckConstraint("num_employees >= 0"))
    description = Column(Text, nullable=False, default="")
    logo_url = Column(Text)


class Job(Base):
    """Job posting row."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    salary = Column(Integer, CheckConstraint("salary >= 0"))
    equity = Column(Numeric, CheckConstraint("equity <= 1.0"))
    company_handle = Column(
        Text,
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
    )


class QueryExecutor(Protocol):
    """Anything that runs SQL text with positional parameters and returns rows."""

    def execute(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        ...


def to_named_binds(sql: str, params: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite `$N` placeholders into `:pN` binds understood by sqlalchemy.text.

    Args:
        sql: Statement using 1-indexed `$N` placeholders
        params: Positional values, params[0] binds to $1

    Returns:
        Tuple of (rewritten sql, bind dict)

    Raises:
        ValueError: If a placeholder has no matching parameter
    """
    for match in _PLACEHOLDER.finditer(sql):
        idx = int(match.group(1))
        if idx < 1 or idx > len(params):
            raise ValueError(
                f"Placeholder ${idx} has no parameter ({len(params)} supplied)"
            )
    rewritten = _PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", sql)
    binds = {f"p{i}": value for i, value in enumerate(params, start=1)}
    return rewritten, binds


class SqlAlchemyExecutor:
    """
    Runs one statement per call on a SQLAlchemy engine.

    Each call opens its own connection and commits on success; the engine
    owns pooling.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def execute(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        logger = get_logger()
        operation = sql.split(None, 1)[0].upper() if sql.strip() else "EMPTY"
        statement, binds = to_named_binds(sql, params)

        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(statement), binds)
                rows = [dict(row._mapping) for row in result] if result.returns_rows else []
        except DBAPIError as e:
            logger.record_error(type(e.orig).__name__ if e.orig is not None else type(e).__name__)
            raise

        logger.record_query(operation, len(rows))
        return rows


def get_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Build an engine for the given URL.

    Args:
        database_url: SQLAlchemy URL, e.g. postgresql+psycopg2://user@host/jobly
        echo: Log every statement SQLAlchemy emits

    Returns:
        SQLAlchemy Engine
    """
    return create_engine(database_url, pool_pre_ping=True, echo=echo)


def init_database(database_url: str) -> Engine:
    """
    Create the companies and jobs tables if they do not exist.

    Meant for local setup and tests; there are no migrations.

    Args:
        database_url: SQLAlchemy URL of the target database

    Returns:
        The engine used, so callers can reuse it
    """
    engine = get_engine(database_url)
    Base.metadata.create_all(engine)
    return engine


def get_executor(database_url: Optional[str] = None) -> SqlAlchemyExecutor:
    """Executor bound to database_url, or DATABASE_URL from the environment."""
    if database_url is None:
        database_url = get_settings().database_url
    return SqlAlchemyExecutor(get_engine(database_url))
