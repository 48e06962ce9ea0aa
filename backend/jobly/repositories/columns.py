"""
Selected Columns

``(column, alias)`` pairs selected for each entity. Aliases are the logical
field names returned to callers.
"""

from typing import Tuple

ColumnList = Tuple[Tuple[str, str], ...]

COMPANY_COLUMNS: ColumnList = (
    ("handle", "handle"),
    ("name", "name"),
    ("description", "description"),
    ("num_employees", "numEmployees"),
    ("logo_url", "logoUrl"),
)

JOB_COLUMNS: ColumnList = (
    ("id", "id"),
    ("title", "title"),
    ("salary", "salary"),
    ("equity", "equity"),
    ("company_handle", "companyHandle"),
)


def aliases(columns: ColumnList) -> Tuple[str, ...]:
    return tuple(alias for _, alias in columns)
