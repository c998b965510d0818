"""Typed parse boundary for raw catalogue query parameters.

Requests arrive as flat string mappings. ``QueryParameters.parse`` pulls the
three reserved keys (``keyword``, ``limit``, ``page``) into named fields and
leaves everything else in ``filters``. Bracketed keys are folded into nested
mappings, so ``price[gte]=10&price[lt]=50`` becomes
``{"price": {"gte": "10", "lt": "50"}}``.

A bracketed reserved key such as ``page[gt]`` is dropped, so it never becomes
a filter on a field named ``page``. A ``page`` or ``limit`` key nested under a
filter field stays in that field's mapping, where the composer treats it as an
unrecognised operator.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from catalogue.shared.errors import InvalidArgument

RESERVED_KEYS = frozenset({"keyword", "limit", "page"})

MAX_PAGE_SIZE = 100

_BRACKETED_KEY = re.compile(r"^([^\[\]]+)\[([^\[\]]+)\]$")


@dataclass(frozen=True)
class QueryParameters:
    keyword: Any = None
    limit: Any = None
    page: Any = None
    filters: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def parse(cls, raw: "Mapping[str, Any] | QueryParameters | None") -> "QueryParameters":
        """Split `raw` into reserved fields and residual filters.

        Raises:
            InvalidArgument: `raw` is not a mapping, has non-string keys, uses
                malformed bracket syntax, or gives one field both an exact value
                and operators.
        """
        if isinstance(raw, QueryParameters):
            return raw
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise InvalidArgument({"query": ["Query parameters must be a mapping"]})

        reserved: dict[str, Any] = {}
        filters: dict[str, Any] = {}

        for key, value in raw.items():
            if not isinstance(key, str) or not key:
                raise InvalidArgument({"query": [f"Invalid parameter name: {key!r}"]})

            if key in RESERVED_KEYS:
                reserved[key] = value
                continue

            if "[" not in key and "]" not in key:
                _merge(filters, key, value)
                continue

            match = _BRACKETED_KEY.match(key)
            if match is None:
                raise InvalidArgument({key: ["Malformed filter parameter"]})
            field_name, operator_key = match.groups()
            if field_name in RESERVED_KEYS:
                continue
            _merge(filters, field_name, {operator_key: value})

        return cls(
            keyword=reserved.get("keyword"),
            limit=reserved.get("limit"),
            page=reserved.get("page"),
            filters=filters,
        )


def _merge(filters: dict[str, Any], field_name: str, value: Any) -> None:
    existing = filters.get(field_name)
    if existing is None:
        filters[field_name] = dict(value) if isinstance(value, Mapping) else value
        return

    if isinstance(existing, Mapping) and isinstance(value, Mapping):
        filters[field_name] = {**existing, **value}
        return

    raise InvalidArgument({field_name: ["Cannot combine an exact value with range operators"]})


def resolve_page_size(params: QueryParameters, default: int) -> Any:
    """Pick the page size for a request, capped at ``MAX_PAGE_SIZE``.

    A missing or empty ``limit`` yields `default`. Anything that is not an
    integer string is returned unchanged so that ``build_page`` rejects it.
    """
    raw = params.limit
    if raw is None or raw == "":
        return default

    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int):
        size = raw
    else:
        try:
            size = int(str(raw).strip())
        except ValueError:
            return raw

    return min(size, MAX_PAGE_SIZE)
