"""
Pytest configuration and shared fixtures.
"""

import os
import sqlite3
from types import SimpleNamespace
from typing import Any, Dict, List, Sequence

import pytest

from jobly.logger import reset_logger

PG_URL = os.getenv("JOBLY_TEST_DATABASE_URL")


class FakeExecutor:
    """Records every statement and replays queued results in order."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.responses: List[Any] = []

    def queue(self, result: Any) -> "FakeExecutor":
        """Queue a row list, or an exception to raise, for the next call."""
        self.responses.append(result)
        return self

    def execute(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        self.calls.append((sql, list(params)))
        if not self.responses:
            return []
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def last_sql(self) -> str:
        """Last statement with whitespace collapsed."""
        return " ".join(self.calls[-1][0].split())

    @property
    def last_params(self) -> List[Any]:
        return self.calls[-1][1]


@pytest.fixture(autouse=True)
def quiet_logger(monkeypatch):
    """Fresh global logger per test, never writing log files."""
    monkeypatch.setenv("JOBLY_LOG_TO_FILE", "false")
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def job_row() -> Dict[str, Any]:
    """Row shape returned by INSERT/UPDATE ... RETURNING."""
    return {
        "id": 1,
        "title": "J1",
        "salary": 10000,
        "equity": "0.1",
        "companyHandle": "c1",
    }


@pytest.fixture
def joined_job_row(job_row) -> Dict[str, Any]:
    """Row shape returned by the joined SELECT."""
    return {**job_row, "companyName": "C1"}


def seed_store(engine) -> List[int]:
    """Insert companies c1-c3 and jobs J1-J3; returns the job ids in title order."""
    from sqlalchemy import text

    with engine.begin() as conn:
        conn.execute(text("DELETE FROM jobs"))
        conn.execute(text("DELETE FROM companies"))
        conn.execute(text(
            "INSERT INTO companies (handle, name, num_employees, description, logo_url) VALUES "
            "('c1', 'C1', 1, 'Desc1', 'http://c1.img'), "
            "('c2', 'C2', 2, 'Desc2', 'http://c2.img'), "
            "('c3', 'C3', 3, 'Desc3', 'http://c3.img')"
        ))
        ids = []
        for title, salary, equity, handle in [
            ("J1", 10000, "0.1", "c1"),
            ("J2", 20000, "0.2", "c3"),
            ("J3", 30000, None, "c3"),
        ]:
            ids.append(conn.execute(
                text(
                    "INSERT INTO jobs (title, salary, equity, company_handle) "
                    "VALUES (:title, :salary, :equity, :handle) RETURNING id"
                ),
                {"title": title, "salary": salary, "equity": equity, "handle": handle},
            ).scalar_one())
    return ids


@pytest.fixture
def sqlite_db(tmp_path):
    """SQLite file database with c1-c3 and J1-J3 seeded."""
    if sqlite3.sqlite_version_info < (3, 35, 0):
        pytest.skip("SQLite 3.35+ needed for RETURNING")

    from jobly.database import init_database

    engine = init_database(f"sqlite:///{tmp_path / 'jobly.db'}")
    job_ids = seed_store(engine)
    yield SimpleNamespace(engine=engine, job_ids=job_ids)
    engine.dispose()


@pytest.fixture
def pg_db():
    """Live PostgreSQL database with c1-c3 and J1-J3 seeded; skipped without one."""
    if not PG_URL:
        pytest.skip("JOBLY_TEST_DATABASE_URL not set")

    from jobly.database import Base, init_database
    from jobly.env import normalize_database_url

    engine = init_database(normalize_database_url(PG_URL))
    job_ids = seed_store(engine)
    yield SimpleNamespace(engine=engine, job_ids=job_ids)
    Base.metadata.drop_all(engine)
    engine.dispose()
