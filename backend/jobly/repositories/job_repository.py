"""
Job Repository Implementation

Repository for job-related database operations: create with a duplicate
posting check, filtered search, detail lookup joined to the owning company,
partial update and delete.
"""

from decimal import Decimal
from typing import Any, Dict, Mapping

from jobly.core.database import Row
from jobly.core.exceptions import DuplicateError, NotFoundError
from jobly.repositories.base_repository import BaseRepository, fold_joined, format_decimal
from jobly.repositories.columns import COMPANY_COLUMNS, JOB_COLUMNS, aliases
from jobly.utils.logger import get_logger, log_database_operation
from jobly.utils.sql import FilterCriterion, FilterTable, columns_sql, match_all

logger = get_logger(__name__)

JOB_FIELD_OVERRIDES = {
    "companyHandle": "company_handle",
}

JOB_FILTERS = FilterTable(
    criteria=(
        FilterCriterion("title", "title", "contains"),
        FilterCriterion("minSalary", "salary", "gte"),
        FilterCriterion("equity", "equity", "positive_flag"),
    ),
)


def _as_decimal(value: Any) -> Any:
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class JobRepository(BaseRepository):
    """Repository for job database operations."""

    table = "jobs"
    key_column = "id"
    columns = JOB_COLUMNS
    filters = JOB_FILTERS
    resource_type = "job"
    order_by = "title"
    field_overrides = JOB_FIELD_OVERRIDES
    updatable = ("title", "salary", "equity")

    def shape(self, row: Row) -> Dict[str, Any]:
        job = dict(row)
        job["equity"] = format_decimal(job["equity"])
        return job

    async def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a job.

        ``data`` holds title, salary, equity, companyHandle.

        The duplicate check and the insert are separate statements, so two
        concurrent creates of the same posting can both succeed.

        Raises:
            DuplicateError: If a job with the same title, salary, equity and
                company already exists
        """
        posting = {
            "title": data["title"],
            "salary": data.get("salary"),
            "equity": _as_decimal(data.get("equity")),
            "companyHandle": data["companyHandle"],
        }

        same_posting = match_all(posting, self.field_overrides)
        existing = await self.execute(
            f"SELECT id FROM jobs WHERE {same_posting.sql}",
            same_posting.values,
        )
        if existing:
            raise DuplicateError(
                self.resource_type,
                f"{posting['title']} at {posting['companyHandle']}",
            )

        rows = await self.execute(
            f"""INSERT INTO jobs
                (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {columns_sql(self.columns)}""",
            list(posting.values()),
        )
        job = self.shape(rows[0])
        log_database_operation("create", self.table, record_id=job["id"])
        return job

    async def update(self, key: Any, fields: Mapping[str, Any]) -> Dict[str, Any]:
        if "equity" in fields:
            fields = {**fields, "equity": _as_decimal(fields["equity"])}
        return await super().update(key, fields)

    async def get(self, job_id: int) -> Dict[str, Any]:
        """
        Get a job and its company.

        Returns the job fields plus ``companies``, a list holding the owning
        company's ``{handle, name, description, numEmployees, logoUrl}``.

        Raises:
            NotFoundError: If no job has ``job_id``
        """
        rows = await self.execute(
            f"""SELECT {columns_sql(self.columns, prefix="j.")},
                       {columns_sql(COMPANY_COLUMNS, prefix="c.")}
                FROM jobs AS j
                LEFT JOIN companies AS c ON j.company_handle = c.handle
                WHERE j.id = $1""",
            [job_id],
        )
        if not rows:
            raise NotFoundError(self.resource_type, job_id)

        job = fold_joined(
            rows,
            owner_keys=aliases(self.columns),
            child_keys=aliases(COMPANY_COLUMNS),
            child_name="companies",
        )
        job["equity"] = format_decimal(job["equity"])
        logger.debug("Job fetched", job_id=job_id, companies=len(job["companies"]))
        return job
