"""
Tests for dynamic SQL construction.

Covers the identifier mapper, the partial-update SET builder, the filter
tables for companies and jobs, and the helpers used by the repositories.
"""

import re

import pytest

from jobly.core.exceptions import InvalidRangeError, InvalidUpdateError
from jobly.repositories.company_repository import COMPANY_FIELD_OVERRIDES, COMPANY_FILTERS
from jobly.repositories.job_repository import JOB_FILTERS
from jobly.utils.sql import (
    ClauseBuilder,
    FilterCriterion,
    FilterTable,
    SqlFragment,
    build_set_clause,
    columns_sql,
    map_field,
    match_all,
    where_clause,
)


@pytest.mark.unit
class TestMapField:
    """Test logical to physical name mapping."""

    def test_override_applies(self):
        """Test that an overridden name maps to its column."""
        assert map_field("numEmployees", {"numEmployees": "num_employees"}) == "num_employees"

    def test_unmapped_name_passes_through(self):
        """Test that names without an override are used as-is."""
        assert map_field("name", {"numEmployees": "num_employees"}) == "name"

    def test_no_overrides(self):
        """Test mapping without overrides."""
        assert map_field("title", None) == "title"
        assert map_field("title", {}) == "title"


@pytest.mark.unit
class TestClauseBuilder:
    """Test placeholder numbering."""

    def test_numbers_follow_values(self):
        """Test that placeholders are numbered by value position."""
        fragment = (
            ClauseBuilder()
            .add("a = {}", 1)
            .add("b IS NULL")
            .add("c BETWEEN {} AND {}", 2, 3)
            .build(" AND ")
        )

        assert fragment.sql == "a = $1 AND b IS NULL AND c BETWEEN $2 AND $3"
        assert fragment.values == [1, 2, 3]

    def test_first_index_offsets_numbering(self):
        """Test numbering from a later index."""
        builder = ClauseBuilder(first_index=4)
        builder.add("x = {}", "v")

        assert builder.next_index == 5
        assert builder.build(", ") == SqlFragment("x = $4", ["v"])

    def test_empty_builder(self):
        """Test building with no fragments."""
        builder = ClauseBuilder()

        assert len(builder) == 0
        assert builder.build(" AND ") == SqlFragment("", [])


@pytest.mark.unit
class TestBuildSetClause:
    """Test the partial-update SET builder."""

    def test_works(self):
        """Test a basic SET clause with one override."""
        result = build_set_clause(
            {"firstName": "Aliya", "age": 32},
            {"firstName": "first_name"},
        )

        assert result.sql == "first_name = $1, age = $2"
        assert result.values == ["Aliya", 32]

    def test_company_overrides(self):
        """Test the company field overrides."""
        set_cols, values = build_set_clause(
            {"name": "New", "numEmployees": 10, "logoUrl": "http://x.img"},
            COMPANY_FIELD_OVERRIDES,
        )

        assert set_cols == "name = $1, num_employees = $2, logo_url = $3"
        assert values == ["New", 10, "http://x.img"]

    def test_null_is_a_value(self):
        """Test that None is bound like any other value."""
        result = build_set_clause({"logoUrl": None}, COMPANY_FIELD_OVERRIDES)

        assert result.sql == "logo_url = $1"
        assert result.values == [None]

    def test_empty_fields_fails(self):
        """Test that an empty update is rejected."""
        with pytest.raises(InvalidUpdateError):
            build_set_clause({}, COMPANY_FIELD_OVERRIDES)

    @pytest.mark.parametrize("fields", [
        {"a": 1},
        {"a": None, "b": "two"},
        {"z": 1, "y": 2, "x": 3, "w": 4},
        {"numEmployees": 0, "name": "", "description": "d", "logoUrl": None},
    ])
    def test_one_parameter_per_field_in_order(self, fields):
        """Test one placeholder per field, numbered from 1 in field order."""
        result = build_set_clause(fields, COMPANY_FIELD_OVERRIDES)

        assert result.values == list(fields.values())
        placeholders = [int(n) for n in re.findall(r"\$(\d+)", result.sql)]
        assert placeholders == list(range(1, len(fields) + 1))

    def test_allowed_fields_pass(self):
        """Test that whitelisted fields build as usual."""
        result = build_set_clause(
            {"logoUrl": "http://x.img", "name": "X"},
            COMPANY_FIELD_OVERRIDES,
            allowed=("name", "description", "numEmployees", "logoUrl"),
        )

        assert result == SqlFragment("logo_url = $1, name = $2", ["http://x.img", "X"])

    @pytest.mark.parametrize("fields", [
        {"handle": "zz"},
        {"name": "ok", "num_employees": 5},
        {"name = 'pwned', description": "x"},
        {"name": "ok", "1=1; DROP TABLE companies; --": None},
    ])
    def test_fields_outside_allowed_fail(self, fields):
        """Test that any name outside the whitelist is rejected, naming the offenders."""
        allowed = ("name", "description", "numEmployees", "logoUrl")

        with pytest.raises(InvalidUpdateError) as exc_info:
            build_set_clause(fields, COMPANY_FIELD_OVERRIDES, allowed=allowed)

        assert exc_info.value.details["fields"] == [name for name in fields if name not in allowed]

    def test_empty_allowed_rejects_everything(self):
        """Test that an empty whitelist allows nothing."""
        with pytest.raises(InvalidUpdateError):
            build_set_clause({"title": "T"}, allowed=())

    def test_caller_appends_key_after_values(self):
        """Test where the caller's key placeholder goes."""
        set_cols, values = build_set_clause({"title": "T", "salary": 5})

        assert set_cols == "title = $1, salary = $2"
        assert len(values) + 1 == 3


@pytest.mark.unit
class TestCompanyFilters:
    """Test the company filter table."""

    def test_no_criteria(self):
        """Test that no criteria means no WHERE clause."""
        result = COMPANY_FILTERS.build_filter({})

        assert result == SqlFragment("", [])
        assert where_clause(result) == ""

    def test_name_like(self):
        """Test the case-insensitive name match."""
        result = COMPANY_FILTERS.build_filter({"nameLike": "net"})

        assert result.sql == "lower(name) LIKE lower($1)"
        assert result.values == ["%net%"]

    def test_all_criteria(self):
        """Test that conditions follow table order, not mapping order."""
        result = COMPANY_FILTERS.build_filter({
            "maxEmployees": 300,
            "nameLike": "c",
            "minEmployees": 10,
        })

        assert result.sql == (
            "lower(name) LIKE lower($1) AND num_employees >= $2 AND num_employees <= $3"
        )
        assert result.values == ["%c%", 10, 300]
        assert where_clause(result) == f" WHERE {result.sql}"

    def test_max_only_numbered_from_one(self):
        """Test that a lone max criterion is numbered from 1."""
        result = COMPANY_FILTERS.build_filter({"maxEmployees": 5})

        assert result == SqlFragment("num_employees <= $1", [5])

    def test_zero_is_a_value(self):
        """Test that zero is a real criterion value."""
        result = COMPANY_FILTERS.build_filter({"minEmployees": 0})

        assert result == SqlFragment("num_employees >= $1", [0])

    def test_none_and_unknown_keys_ignored(self):
        """Test that None and unknown keys add no condition."""
        result = COMPANY_FILTERS.build_filter({"nameLike": None, "handle": "c1"})

        assert result == SqlFragment("", [])

    @pytest.mark.parametrize("low,high", [(10, 5), (5, 5)])
    def test_contradictory_range_fails(self, low, high):
        """Test that min >= max is rejected with both values in details."""
        with pytest.raises(InvalidRangeError) as exc_info:
            COMPANY_FILTERS.build_filter({"minEmployees": low, "maxEmployees": high})

        assert exc_info.value.details == {"minEmployees": low, "maxEmployees": high}


@pytest.mark.unit
class TestJobFilters:
    """Test the job filter table, including the equity tri-state."""

    def test_title_and_min_salary(self):
        """Test title and salary conditions."""
        result = JOB_FILTERS.build_filter({"minSalary": 150, "title": "eng"})

        assert result.sql == "lower(title) LIKE lower($1) AND salary >= $2"
        assert result.values == ["%eng%", 150]

    def test_equity_true_requires_positive(self):
        """Test equity=True."""
        result = JOB_FILTERS.build_filter({"equity": True})

        assert result == SqlFragment("equity > 0", [])

    def test_equity_false_requires_zero(self):
        """Test equity=False."""
        result = JOB_FILTERS.build_filter({"equity": False})

        assert result == SqlFragment("equity = 0", [])

    def test_equity_absent_adds_nothing(self):
        """Test that missing equity adds no condition."""
        assert JOB_FILTERS.build_filter({}) == SqlFragment("", [])
        assert JOB_FILTERS.build_filter({"equity": None}) == SqlFragment("", [])

    def test_equity_takes_no_parameter(self):
        """Test that the equity condition binds no value."""
        result = JOB_FILTERS.build_filter({"title": "j", "equity": True, "minSalary": 1})

        assert result.sql == "lower(title) LIKE lower($1) AND salary >= $2 AND equity > 0"
        assert result.values == ["%j%", 1]


@pytest.mark.unit
class TestFilterTable:
    """Test filter table definitions."""

    def test_unknown_comparison_rejected(self):
        """Test that an unknown comparison name fails early."""
        with pytest.raises(ValueError):
            FilterCriterion("x", "x", "approximately")

    def test_keys_in_table_order(self):
        """Test the recognized keys of each table."""
        assert COMPANY_FILTERS.keys == ("nameLike", "minEmployees", "maxEmployees")
        assert JOB_FILTERS.keys == ("title", "minSalary", "equity")

    def test_range_check_needs_both_ends(self):
        """Test that a range is only checked when both ends are given."""
        table = FilterTable(
            criteria=(FilterCriterion("lo", "v", "gte"), FilterCriterion("hi", "v", "lte")),
            ranges=(("lo", "hi"),),
        )

        assert table.build_filter({"lo": 10}).values == [10]
        assert table.build_filter({"hi": 1}).values == [1]


@pytest.mark.unit
class TestHelpers:
    """Test the NULL-safe equality and select list helpers."""

    def test_match_all_null_safe(self):
        """Test that None compares with IS NULL and binds nothing."""
        result = match_all(
            {"title": "j1", "salary": None, "equity": 0, "companyHandle": "c1"},
            {"companyHandle": "company_handle"},
        )

        assert result.sql == "title = $1 AND salary IS NULL AND equity = $2 AND company_handle = $3"
        assert result.values == ["j1", 0, "c1"]

    def test_columns_sql_aliases_only_when_needed(self):
        """Test that columns are aliased only when the names differ."""
        columns = (("handle", "handle"), ("num_employees", "numEmployees"))

        assert columns_sql(columns) == 'handle, num_employees AS "numEmployees"'
        assert columns_sql(columns, prefix="c.") == 'c.handle, c.num_employees AS "numEmployees"'
