"""
Company Repository Implementation

Repository for company-related database operations: create with handle
de-duplication, filtered search, detail lookup with the company's jobs,
partial update and delete.
"""

from typing import Any, Dict, Mapping

from jobly.core.exceptions import DuplicateError, NotFoundError
from jobly.repositories.base_repository import BaseRepository, fold_joined, format_decimal
from jobly.repositories.columns import COMPANY_COLUMNS, JOB_COLUMNS, aliases
from jobly.utils.logger import log_database_operation
from jobly.utils.sql import FilterCriterion, FilterTable, columns_sql

COMPANY_FIELD_OVERRIDES = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_FILTERS = FilterTable(
    criteria=(
        FilterCriterion("nameLike", "name", "contains"),
        FilterCriterion("minEmployees", "num_employees", "gte"),
        FilterCriterion("maxEmployees", "num_employees", "lte"),
    ),
    ranges=(("minEmployees", "maxEmployees"),),
)


class CompanyRepository(BaseRepository):
    """Repository for company database operations."""

    table = "companies"
    key_column = "handle"
    columns = COMPANY_COLUMNS
    filters = COMPANY_FILTERS
    resource_type = "company"
    order_by = "name"
    field_overrides = COMPANY_FIELD_OVERRIDES
    updatable = ("name", "description", "numEmployees", "logoUrl")

    async def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a company.

        ``data`` holds handle, name, description, numEmployees, logoUrl.

        Raises:
            DuplicateError: If the handle is taken
        """
        handle = data["handle"]
        existing = await self.execute(
            "SELECT handle FROM companies WHERE handle = $1",
            [handle],
        )
        if existing:
            raise DuplicateError(self.resource_type, handle)

        rows = await self.execute(
            f"""INSERT INTO companies
                (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {columns_sql(self.columns)}""",
            [
                handle,
                data["name"],
                data["description"],
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
        )
        log_database_operation("create", self.table, record_id=handle)
        return self.shape(rows[0])

    async def get(self, handle: str) -> Dict[str, Any]:
        """
        Get a company and its jobs.

        Returns the company fields plus ``jobs``, a list of
        ``{id, title, salary, equity, companyHandle}`` ordered by id.

        Raises:
            NotFoundError: If no company has ``handle``
        """
        rows = await self.execute(
            f"""SELECT {columns_sql(self.columns, prefix="c.")},
                       {columns_sql(JOB_COLUMNS, prefix="j.")}
                FROM companies AS c
                LEFT JOIN jobs AS j ON c.handle = j.company_handle
                WHERE c.handle = $1
                ORDER BY j.id""",
            [handle],
        )
        if not rows:
            raise NotFoundError(self.resource_type, handle)

        company = fold_joined(
            rows,
            owner_keys=aliases(self.columns),
            child_keys=aliases(JOB_COLUMNS),
            child_name="jobs",
        )
        for job in company["jobs"]:
            job["equity"] = format_decimal(job["equity"])
        return company
