"""
Jobs Repository.

Responsibilities:
- CRUD operations for jobs table.
- Filtered listing joined with the owning company.

Non-Responsibilities:
- No transactions beyond the single statement each method issues.
- No retries; store errors propagate unchanged.
- No HTTP concerns.

Invariant:
Every method issues exactly one statement and keeps no state between calls.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from ..database import QueryExecutor
from ..errors import NotFoundError, ValidationError
from ..logger import get_logger
from ..schema import validate_job_filters, validate_job_update
from ..sql import build_set_clause

JOB_COLUMNS = 'j.id, j.title, j.salary, j.equity, j.company_handle AS "companyHandle"'

RETURNING_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

SELECT_WITH_COMPANY = f"""SELECT {JOB_COLUMNS},
                 c.name AS "companyName"
          FROM jobs AS j
          LEFT JOIN companies AS c ON j.company_handle = c.handle"""


def _equity_text(value: Any) -> Any:
    """Render a numeric equity as fixed-point text, e.g. 1E-7 -> "0.0000001"."""
    if value is None or isinstance(value, (str, bool)):
        return value
    if isinstance(value, float):
        # SQLite hands NUMERIC back as REAL
        value = Decimal(str(value))
    if isinstance(value, (Decimal, int)):
        return format(Decimal(value), "f")
    return value


def _to_record(row: Dict[str, Any]) -> Dict[str, Any]:
    """Copy a row, rendering equity as fixed-point text."""
    record = dict(row)
    if "equity" in record:
        record["equity"] = _equity_text(record["equity"])
    return record


class JobRepository:
    """Data access for jobs, on top of any QueryExecutor."""

    def __init__(self, executor: QueryExecutor):
        self.executor = executor

    def _execute(self, action: str, sql: str, params: List[Any]) -> List[Dict[str, Any]]:
        """Run one statement; store failures are logged and re-raised as-is."""
        try:
            return self.executor.execute(sql, params)
        except Exception as e:
            get_logger().error(f"Job {action} failed: {e}", error_type=type(e).__name__)
            raise

    def create(
        self,
        title: str,
        salary: Optional[int],
        equity: Optional[str],
        company_handle: str,
    ) -> Dict[str, Any]:
        """
        Insert a job and return it.

        Returns:
            {id, title, salary, equity, companyHandle}
        """
        get_logger().debug("Creating job", title=title, company_handle=company_handle)
        rows = self._execute(
            "insert",
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {RETURNING_COLUMNS}""",
            [title, salary, equity, company_handle],
        )
        return _to_record(rows[0])

    def list_all(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Find all jobs, optionally filtered.

        Args:
            filters: Any of
                title: case-insensitive substring of the job title
                minSalary: inclusive salary floor (0 still applies)
                hasEquity: truthy keeps only jobs with equity above zero

        Returns:
            [{id, title, salary, equity, companyHandle, companyName}, ...]
            ordered by title

        Raises:
            ValidationError: If filters names an unknown key
        """
        filters = filters or {}
        errors = validate_job_filters(filters)
        if errors:
            raise ValidationError("; ".join(errors))

        conditions: List[str] = []
        params: List[Any] = []

        def bind(value: Any) -> str:
            params.append(value)
            return f"${len(params)}"

        title = filters.get("title")
        if title is not None:
            conditions.append(f"j.title ILIKE {bind(f'%{title}%')}")

        min_salary = filters.get("minSalary")
        if min_salary is not None:
            conditions.append(f"j.salary >= {bind(min_salary)}")

        if filters.get("hasEquity"):
            conditions.append("j.equity > 0")

        query = SELECT_WITH_COMPANY
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY j.title"

        get_logger().debug("Listing jobs", filters=filters)
        rows = self._execute("listing", query, params)
        return [_to_record(row) for row in rows]

    def get(self, id: int) -> Dict[str, Any]:
        """
        Given a job id, return data about the job.

        Returns:
            {id, title, salary, equity, companyHandle, companyName}

        Raises:
            NotFoundError: If no job has that id
        """
        rows = self._execute("lookup", SELECT_WITH_COMPANY + " WHERE j.id = $1", [id])
        if not rows:
            self._not_found(id)
        return _to_record(rows[0])

    def update(self, id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Partial update: only the fields present in data change.

        Data can include: {title, salary, equity}

        Returns:
            {id, title, salary, equity, companyHandle}

        Raises:
            ValidationError: If data is empty or names a non-updatable field
            NotFoundError: If no job has that id
        """
        errors = validate_job_update(data)
        if errors:
            raise ValidationError("; ".join(errors))

        # Job fields already match their column names
        set_cols, values = build_set_clause(data, {})
        id_idx = f"${len(values) + 1}"

        get_logger().debug("Updating job", id=id, fields=list(data))
        rows = self._execute(
            "update",
            f"""UPDATE jobs
                SET {set_cols}
                WHERE id = {id_idx}
                RETURNING {RETURNING_COLUMNS}""",
            [*values, id],
        )
        if not rows:
            self._not_found(id)
        return _to_record(rows[0])

    def remove(self, id: int) -> None:
        """
        Delete a job.

        Raises:
            NotFoundError: If no job has that id
        """
        rows = self._execute(
            "delete",
            """DELETE
               FROM jobs
               WHERE id = $1
               RETURNING id""",
            [id],
        )
        if not rows:
            self._not_found(id)
        get_logger().info("Removed job", id=id)

    def _not_found(self, id: int) -> None:
        logger = get_logger()
        logger.record_not_found()
        logger.info("No such job", id=id)
        raise NotFoundError(f"No job: {id}")
