"""Repository lookup for keyword search.

``<field>__contains_text=<term>`` is a case-insensitive substring match in
which every character of the term is literal. On SQL providers the LIKE
wildcards ``%`` and ``_`` (and the escape character itself) are escaped, so a
search for ``100%`` finds "100% Wool Socks" and nothing else.
"""

import re

from protean.adapters.repository.memory import MemoryLookup, MemoryProvider
from protean.adapters.repository.sqlalchemy import DefaultLookup, SAProvider

LITERAL_CONTAINS = "contains_text"

LIKE_ESCAPE = "\\"

_LIKE_SPECIAL = re.compile(r"([\\%_])")


def escape_like(term: str) -> str:
    return _LIKE_SPECIAL.sub(r"\\\1", term)


@SAProvider.register_lookup
class SQLLiteralContains(DefaultLookup):
    lookup_name = LITERAL_CONTAINS

    def as_expression(self):
        pattern = f"%{escape_like(str(self.target))}%"
        return self.process_source().ilike(pattern, escape=LIKE_ESCAPE)


@MemoryProvider.register_lookup
class MemoryLiteralContains(MemoryLookup):
    lookup_name = LITERAL_CONTAINS

    def evaluate(self) -> bool:
        return str(self.target).casefold() in str(self.source).casefold()
