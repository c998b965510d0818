"""Query composition for catalogue browsing.

Turns parsed request parameters into a store-neutral description of a query:
a keyword search clause, field-level equality and range conditions, and an
offset/limit page. Nothing here performs I/O; ``catalogue.search.executor``
translates a ``ComposedQuery`` into repository lookups.

Clauses are built independently from the same parameters, so
``query.search().filter()`` and ``query.filter().search()`` describe the same
query.
"""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from catalogue.search.params import QueryParameters
from catalogue.shared.errors import InvalidArgument

DEFAULT_PAGE_SIZE = 10

SEARCH_FIELD = "name"

_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class RangeOperator(Enum):
    """Comparison applied by a filter condition.

    Values are the lookup suffixes understood by the repository layer.
    """

    EQUALS = "exact"
    GREATER_THAN = "gt"
    GREATER_OR_EQUAL = "gte"
    LESS_THAN = "lt"
    LESS_OR_EQUAL = "lte"

    @classmethod
    def from_key(cls, key: str) -> "RangeOperator | None":
        return _OPERATOR_KEYS.get(key)


# Only these four keys are accepted inside a range mapping
_OPERATOR_KEYS = {
    "gt": RangeOperator.GREATER_THAN,
    "gte": RangeOperator.GREATER_OR_EQUAL,
    "lt": RangeOperator.LESS_THAN,
    "lte": RangeOperator.LESS_OR_EQUAL,
}


@dataclass(frozen=True)
class Condition:
    field: str
    operator: RangeOperator
    value: Any


@dataclass(frozen=True)
class FilterClause:
    """Conjunction of conditions, plus the operator keys that were dropped."""

    conditions: tuple[Condition, ...] = ()
    ignored: tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not self.conditions


@dataclass(frozen=True)
class SearchClause:
    """Case-insensitive literal substring match on one text field."""

    field: str = SEARCH_FIELD
    term: str | None = None

    def is_empty(self) -> bool:
        return not self.term


@dataclass(frozen=True)
class PageSpec:
    page_size: int
    page_number: int = 1

    @property
    def skip(self) -> int:
        return self.page_size * (self.page_number - 1)

    @property
    def limit(self) -> int:
        return self.page_size


def build_search(params) -> SearchClause:
    """Build the keyword clause. An absent or empty keyword matches everything."""
    params = QueryParameters.parse(params)
    keyword = params.keyword
    if keyword is None or isinstance(keyword, bool):
        return SearchClause()
    if isinstance(keyword, (Mapping, list, tuple, set)):
        raise InvalidArgument({"keyword": ["Keyword must be a single value"]})

    term = str(keyword)
    return SearchClause(term=term or None)


def build_filter(params) -> FilterClause:
    """Rewrite residual parameters into equality and range conditions.

    A scalar value becomes an exact match. A mapping contributes one condition
    per ``gt``/``gte``/``lt``/``lte`` key; any other key is dropped and reported
    as ``field[key]`` in ``ignored``.

    Raises:
        InvalidArgument: a field name is not a plain identifier, a value is a
            sequence, or a range mapping holds non-scalar operands or
            non-string keys.
    """
    params = QueryParameters.parse(params)
    conditions: list[Condition] = []
    ignored: list[str] = []

    for field_name, value in params.filters.items():
        if not _FIELD_NAME.match(field_name) or "__" in field_name:
            raise InvalidArgument({field_name: ["Invalid filter field name"]})

        if isinstance(value, Mapping):
            for key, operand in value.items():
                if not isinstance(key, str):
                    raise InvalidArgument({field_name: [f"Invalid operator: {key!r}"]})
                if _is_compound(operand):
                    raise InvalidArgument({field_name: [f"Operand for '{key}' must be a single value"]})

                operator = RangeOperator.from_key(key)
                if operator is None:
                    ignored.append(f"{field_name}[{key}]")
                    continue
                conditions.append(Condition(field_name, operator, operand))
            continue

        if _is_compound(value):
            raise InvalidArgument({field_name: ["Filter value must be a single value or a range"]})

        conditions.append(Condition(field_name, RangeOperator.EQUALS, value))

    return FilterClause(conditions=tuple(conditions), ignored=tuple(ignored))


def _is_compound(value) -> bool:
    return isinstance(value, (Mapping, list, tuple, set, frozenset))


def build_page(page_size, params) -> PageSpec:
    """Build the page window.

    Raises:
        InvalidArgument: `page_size` is not a positive whole number.
    """
    size = _validate_page_size(page_size)
    params = QueryParameters.parse(params)
    return PageSpec(page_size=size, page_number=_parse_page_number(params.page))


def _validate_page_size(page_size) -> int:
    if isinstance(page_size, bool) or not isinstance(page_size, (int, float)):
        raise InvalidArgument({"page_size": ["Page size must be a positive number"]})
    if isinstance(page_size, float) and (not math.isfinite(page_size) or not page_size.is_integer()):
        raise InvalidArgument({"page_size": ["Page size must be a whole number"]})
    if page_size <= 0:
        raise InvalidArgument({"page_size": ["Page size must be a positive number"]})
    return int(page_size)


def _parse_page_number(raw) -> int:
    if raw is None or isinstance(raw, bool):
        return 1

    try:
        number = float(str(raw).strip())
    except ValueError:
        return 1
    if not math.isfinite(number):
        return 1

    return max(1, int(number))


@dataclass(frozen=True)
class ComposedQuery:
    """An immutable query over a base scope.

    `scope` holds exact-match constraints that define the collection being
    browsed (for example ``{"seller_id": ...}``). It is also what the
    uncomposed count is taken over.
    """

    scope: Mapping[str, Any] = field(default_factory=dict)
    params: QueryParameters = field(default_factory=QueryParameters)
    search_clause: SearchClause = field(default_factory=SearchClause)
    filter_clause: FilterClause = field(default_factory=FilterClause)
    page_spec: PageSpec | None = None

    def search(self) -> "ComposedQuery":
        return replace(self, search_clause=build_search(self.params))

    def filter(self) -> "ComposedQuery":
        return replace(self, filter_clause=build_filter(self.params))

    def paginate(self, page_size) -> "ComposedQuery":
        return replace(self, page_spec=build_page(page_size, self.params))

    @property
    def skip(self) -> int:
        return self.page_spec.skip if self.page_spec else 0

    @property
    def limit(self) -> int | None:
        return self.page_spec.limit if self.page_spec else None

    @property
    def ignored(self) -> tuple[str, ...]:
        return self.filter_clause.ignored

    def conditions(self) -> tuple[Condition, ...]:
        scoped = tuple(Condition(name, RangeOperator.EQUALS, value) for name, value in self.scope.items())
        return scoped + self.filter_clause.conditions


def compose(scope, params, page_size=DEFAULT_PAGE_SIZE) -> ComposedQuery:
    """Build the full query: page window, keyword search and filters.

    `scope` may be ``None`` for the whole collection.
    """
    query = ComposedQuery(scope=dict(scope or {}), params=QueryParameters.parse(params))
    return query.paginate(page_size).search().filter()
