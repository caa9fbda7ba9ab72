"""Query matching against the symbol index.

The query text is used as a regular expression as typed, so ``png.*16`` or
``read_(bmp|tga)$`` work for power searches. Swap ``compile_pattern`` to
change that policy (literal or fuzzy matching) without touching callers.
"""
from __future__ import annotations

import re
from typing import Iterable

from symbolsearch.index import Entry


class InvalidPatternError(ValueError):
    """The query text is not a valid regular expression."""

    def __init__(self, query: str, reason: str) -> None:
        super().__init__(f"Invalid search pattern {query!r}: {reason}")
        self.query = query
        self.reason = reason


def compile_pattern(query: str) -> re.Pattern[str]:
    """Compile raw query text as a case-insensitive pattern."""
    try:
        return re.compile(query, re.IGNORECASE)
    except re.error as exc:
        raise InvalidPatternError(query, str(exc)) from exc


def match(index: Iterable[Entry], query: str) -> list[Entry]:
    """Return entries whose qualified name contains a match, in index order.

    An empty query matches everything.
    """
    pattern = compile_pattern(query)
    return [entry for entry in index if pattern.search(entry.qualified_name.lower())]
