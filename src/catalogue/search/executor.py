"""Run a ComposedQuery against a Protean repository.

Conditions become repository lookups (``price__gte=10``, ``category="shoes"``,
``name__contains_text="phone"``). Operands arrive as request strings, so each one
is cast to the declared type of the field it targets before the lookup runs.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime

from protean.fields import Boolean, Date, DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.reflection import declared_fields

from catalogue.search.composer import ComposedQuery, RangeOperator
from catalogue.search.lookups import LITERAL_CONTAINS
from catalogue.shared.errors import InvalidArgument

# Field types a filter may target
_FILTERABLE = (Boolean, Date, DateTime, Float, Identifier, Integer, String, Text)


@dataclass
class QueryPage:
    items: list = field(default_factory=list)
    count: int = 0
    matched: int = 0
    page_number: int = 1
    page_size: int | None = None

    @property
    def total_pages(self) -> int:
        if not self.page_size:
            return 1 if self.matched else 0
        return math.ceil(self.matched / self.page_size)


def _cast(field_obj, field_name, value):
    if isinstance(field_obj, Boolean):
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in ("true", "1"):
            return True
        if text in ("false", "0"):
            return False
        raise InvalidArgument({field_name: [f"'{value}' is not a boolean"]})

    if isinstance(field_obj, (Integer, Float)):
        if isinstance(value, bool):
            raise InvalidArgument({field_name: [f"'{value}' is not a number"]})
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise InvalidArgument({field_name: [f"'{value}' is not a number"]}) from None
        if not math.isfinite(number):
            raise InvalidArgument({field_name: [f"'{value}' is not a number"]})
        if isinstance(field_obj, Integer) and number.is_integer():
            return int(number)
        return number

    if isinstance(field_obj, DateTime):
        if isinstance(value, datetime):
            return value
        try:
            return datetime.fromisoformat(str(value))
        except ValueError:
            raise InvalidArgument({field_name: [f"'{value}' is not an ISO date-time"]}) from None

    if isinstance(field_obj, Date):
        try:
            return datetime.fromisoformat(str(value)).date()
        except ValueError:
            raise InvalidArgument({field_name: [f"'{value}' is not an ISO date"]}) from None

    return str(value)


def _lookups(query: ComposedQuery, fields: dict) -> dict | None:
    """Translate the query's clauses into lookup keyword arguments.

    Returns None when a condition targets a field the entity does not have
    or cannot be filtered on; such a query matches nothing.
    """
    lookups = {}

    for condition in query.conditions():
        field_obj = fields.get(condition.field)
        if field_obj is None or not isinstance(field_obj, _FILTERABLE):
            return None

        operand = _cast(field_obj, condition.field, condition.value)
        if condition.operator is RangeOperator.EQUALS:
            key = condition.field
        else:
            key = f"{condition.field}__{condition.operator.value}"

        if key in lookups and lookups[key] != operand:
            # Two different exact values for one field can never both hold
            if condition.operator is RangeOperator.EQUALS:
                return None
            lookups[key] = _tighter(condition.operator, lookups[key], operand)
        else:
            lookups[key] = operand

    if not query.search_clause.is_empty():
        lookups[f"{query.search_clause.field}__{LITERAL_CONTAINS}"] = query.search_clause.term

    return lookups


def _tighter(operator: RangeOperator, current, candidate):
    if operator in (RangeOperator.GREATER_THAN, RangeOperator.GREATER_OR_EQUAL):
        return max(current, candidate)
    return min(current, candidate)


def execute(entity_cls, query: ComposedQuery, order_by: str | None = None) -> QueryPage:
    """Fetch one page of `entity_cls` records matching `query`.

    ``count`` is taken over the base scope alone, ignoring search, filters and
    paging. ``matched`` is the number of records the full query selects.
    """
    dao = current_domain.repository_for(entity_cls)._dao
    fields = declared_fields(entity_cls)
    page_number = query.page_spec.page_number if query.page_spec else 1
    page_size = query.limit

    base = dao.query.filter(**dict(query.scope)) if query.scope else dao.query
    count = base.all().total

    lookups = _lookups(query, fields)
    if lookups is None:
        return QueryPage(count=count, page_number=page_number, page_size=page_size)

    selection = dao.query.filter(**lookups) if lookups else dao.query
    if order_by:
        selection = selection.order_by(order_by)

    matched = selection.all().total
    if page_size is not None:
        selection = selection.offset(query.skip).limit(page_size)
    else:
        selection = selection.offset(query.skip).limit(max(matched, 1))

    return QueryPage(
        items=list(selection.all().items),
        count=count,
        matched=matched,
        page_number=page_number,
        page_size=page_size,
    )
