"""Result presentation for the symbol search box.

``ResultPresenter`` owns one result surface. Every update starts from an
empty surface and either hides it or fills it with the current matches, so
there is never any diffing against earlier output.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence, TextIO

from symbolsearch.index import Entry, SymbolIndex
from symbolsearch.matcher import match

logger = logging.getLogger(__name__)

ESCAPE_KEY = 27
NO_RESULTS_TEXT = "No results"
LINK_ID_PREFIX = "link"


@dataclass(frozen=True)
class ResultRow:
    text: str
    url: Optional[str] = None
    identifier: Optional[str] = None

    @property
    def is_link(self) -> bool:
        return self.url is not None


class ResultSurface(Protocol):
    """Anything that can display result rows."""

    def clear(self) -> None: ...

    def show(self, rows: Sequence[ResultRow]) -> None: ...

    def hide(self) -> None: ...


def rows_for(entries: Sequence[Entry]) -> list[ResultRow]:
    """Turn matched entries into display rows, or the placeholder row."""
    if not entries:
        return [ResultRow(NO_RESULTS_TEXT)]
    return [
        ResultRow(entry.qualified_name, entry.url, f"{LINK_ID_PREFIX}{i}")
        for i, entry in enumerate(entries)
    ]


class ResultPresenter:
    def __init__(
        self,
        index: SymbolIndex,
        surface: ResultSurface,
        matcher: Callable[[SymbolIndex, str], Sequence[Entry]] = match,
    ) -> None:
        self.index = index
        self.surface = surface
        self._matcher = matcher
        self.visible = False
        self.rows: tuple[ResultRow, ...] = ()

    def update(self, query: str, key_code: Optional[int] = None) -> None:
        """Re-render results for ``query``.

        An empty query or the Escape key hides the results. Raises
        ``InvalidPatternError`` when the query does not compile; the surface
        is already cleared at that point.
        """
        self.surface.clear()
        self.rows = ()
        if query == "" or key_code == ESCAPE_KEY:
            self._hide()
            return
        entries = self._matcher(self.index, query)
        rows = rows_for(entries)
        logger.debug("Query %r matched %d of %d symbols", query, len(entries), len(self.index))
        self.surface.show(rows)
        self.visible = True
        self.rows = tuple(rows)

    def dismiss(self, key_code: Optional[int]) -> None:
        """Clear and hide on Escape; ignore every other key."""
        if key_code != ESCAPE_KEY:
            return
        self.reset()

    def reset(self) -> None:
        self.surface.clear()
        self.rows = ()
        self._hide()

    def _hide(self) -> None:
        self.surface.hide()
        self.visible = False


class TextResultSurface:
    """Writes rows to a text stream, one per line."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def clear(self) -> None:
        """Lines already written to a stream can't be taken back."""

    def show(self, rows: Sequence[ResultRow]) -> None:
        for row in rows:
            if row.is_link:
                self.stream.write(f"{row.text}\t{row.url}\n")
            else:
                self.stream.write(f"{row.text}\n")

    def hide(self) -> None:
        """A stream has no visibility; hidden results just print nothing."""
