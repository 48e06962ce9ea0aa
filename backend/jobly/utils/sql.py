"""
Dynamic SQL Construction

Builders for the dynamically shaped parts of statements: the ``SET`` clause
of a partial update and the ``WHERE`` clause of a filtered search. Values
never enter the SQL text; each one is emitted as a ``$n`` positional
placeholder, numbered in the order it is appended.
"""

from dataclasses import dataclass
from typing import Any, Callable, Collection, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from jobly.core.exceptions import InvalidRangeError, InvalidUpdateError


class SqlFragment(NamedTuple):
    """A clause of SQL text and its positional parameters."""

    sql: str
    values: List[Any]


def map_field(logical_name: str, overrides: Optional[Mapping[str, str]] = None) -> str:
    """Map a logical field name to its column name; unmapped names pass through."""
    if not overrides:
        return logical_name
    return overrides.get(logical_name, logical_name)


class ClauseBuilder:
    """
    Ordered list of SQL fragments and the parameters they reference.

    Each ``{}`` in a fragment consumes one value and is replaced by the next
    positional placeholder, so placeholder numbers always match the position
    of the value in ``values``.
    """

    def __init__(self, first_index: int = 1) -> None:
        self._first_index = first_index
        self._fragments: List[str] = []
        self._values: List[Any] = []

    @property
    def next_index(self) -> int:
        """Placeholder number the next value will receive."""
        return self._first_index + len(self._values)

    def add(self, fragment: str, *values: Any) -> "ClauseBuilder":
        placeholders = []
        for value in values:
            placeholders.append(f"${self.next_index}")
            self._values.append(value)
        self._fragments.append(fragment.format(*placeholders))
        return self

    def __len__(self) -> int:
        return len(self._fragments)

    def build(self, separator: str) -> SqlFragment:
        return SqlFragment(separator.join(self._fragments), list(self._values))


def build_set_clause(
    fields: Mapping[str, Any],
    overrides: Optional[Mapping[str, str]] = None,
    allowed: Optional[Collection[str]] = None,
) -> SqlFragment:
    """
    Build the ``SET`` clause of a partial update.

    Args:
        fields: Logical field name -> new value, in the order to emit.
            ``None`` is a legal value and sets the column to NULL.
        overrides: Logical name -> column name for names that differ
        allowed: Logical names that may be set; field names become SQL
            text, so callers taking keys from outside must pass this

    Returns:
        SqlFragment such as ``('first_name = $1, age = $2', ['Aliya', 32])``.
        Callers place any trailing parameter at ``len(values) + 1``.

    Raises:
        InvalidUpdateError: If ``fields`` is empty or names a field not in
            ``allowed``
    """
    if not fields:
        raise InvalidUpdateError()

    if allowed is not None:
        unknown = [name for name in fields if name not in allowed]
        if unknown:
            raise InvalidUpdateError(
                f"Cannot update: {', '.join(unknown)}",
                details={"fields": unknown},
            )

    builder = ClauseBuilder()
    for name, value in fields.items():
        builder.add(f"{map_field(name, overrides)} = {{}}", value)
    return builder.build(", ")


# Comparison renderers: (builder, column, value) -> None
Comparison = Callable[[ClauseBuilder, str, Any], None]


def _contains(builder: ClauseBuilder, column: str, value: Any) -> None:
    builder.add(f"lower({column}) LIKE lower({{}})", f"%{value}%")


def _at_least(builder: ClauseBuilder, column: str, value: Any) -> None:
    builder.add(f"{column} >= {{}}", value)


def _at_most(builder: ClauseBuilder, column: str, value: Any) -> None:
    builder.add(f"{column} <= {{}}", value)


def _positive_flag(builder: ClauseBuilder, column: str, value: Any) -> None:
    if value:
        builder.add(f"{column} > 0")
    else:
        builder.add(f"{column} = 0")


COMPARISONS: Dict[str, Comparison] = {
    "contains": _contains,
    "gte": _at_least,
    "lte": _at_most,
    "positive_flag": _positive_flag,
}


@dataclass(frozen=True)
class FilterCriterion:
    """One recognized search key and how it constrains its column."""

    key: str
    column: str
    comparison: str

    def __post_init__(self) -> None:
        if self.comparison not in COMPARISONS:
            raise ValueError(f"Unknown comparison: {self.comparison}")


@dataclass(frozen=True)
class FilterTable:
    """
    The search criteria an entity recognizes.

    ``criteria`` is walked in order, so condition and parameter order are
    fixed by the table and not by the caller's mapping. ``ranges`` lists
    ``(min_key, max_key)`` pairs that must satisfy ``min < max`` when both
    are given.
    """

    criteria: Tuple[FilterCriterion, ...]
    ranges: Tuple[Tuple[str, str], ...] = ()

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(criterion.key for criterion in self.criteria)

    def check_ranges(self, criteria: Mapping[str, Any]) -> None:
        for min_key, max_key in self.ranges:
            low, high = criteria.get(min_key), criteria.get(max_key)
            if low is not None and high is not None and low >= high:
                raise InvalidRangeError(min_key, max_key, low, high)

    def build_filter(self, criteria: Mapping[str, Any]) -> SqlFragment:
        """
        Build the ``WHERE`` conditions for the given criteria.

        Keys that are missing or ``None`` add no condition; unrecognized
        keys are ignored. An empty ``sql`` means no filtering.

        Raises:
            InvalidRangeError: If a min/max pair is self-contradictory
        """
        self.check_ranges(criteria)

        builder = ClauseBuilder()
        for criterion in self.criteria:
            value = criteria.get(criterion.key)
            if value is None:
                continue
            COMPARISONS[criterion.comparison](builder, criterion.column, value)
        return builder.build(" AND ")


def where_clause(fragment: SqlFragment) -> str:
    """Render ``fragment`` as a ``WHERE`` clause, or nothing when empty."""
    return f" WHERE {fragment.sql}" if fragment.sql else ""


def match_all(
    fields: Mapping[str, Any],
    overrides: Optional[Mapping[str, str]] = None,
) -> SqlFragment:
    """
    Build a conjunction of equality conditions, NULL-safe.

    ``None`` values compare with ``IS NULL`` and take no parameter, since
    ``column = NULL`` never matches.
    """
    builder = ClauseBuilder()
    for name, value in fields.items():
        column = map_field(name, overrides)
        if value is None:
            builder.add(f"{column} IS NULL")
        else:
            builder.add(f"{column} = {{}}", value)
    return builder.build(" AND ")


def columns_sql(columns: Sequence[Tuple[str, str]], prefix: str = "") -> str:
    """Render ``(column, alias)`` pairs as a select list."""
    rendered = []
    for column, alias in columns:
        qualified = f"{prefix}{column}"
        rendered.append(qualified if column == alias else f'{qualified} AS "{alias}"')
    return ", ".join(rendered)
