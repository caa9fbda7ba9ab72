"""Symbol index: the fixed list of documented names and their pages.

The index is produced by the documentation generator and only read here.
Two artifact shapes are understood: a JSON file, and the ``search.js``
script the generator drops next to the HTML pages
(``var items = [{"name" : "url"}, ...];``).
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Sequence

logger = logging.getLogger(__name__)

_JS_ITEMS_PATTERN = re.compile(r"var\s+items\s*=\s*(\[.*?\])\s*;", re.DOTALL)
_TRAILING_COMMA_PATTERN = re.compile(r",\s*\]\s*$")


class IndexFormatError(ValueError):
    """Raised when an index artifact cannot be turned into entries."""


@dataclass(frozen=True)
class Entry:
    qualified_name: str
    url: str


class SymbolIndex(Sequence[Entry]):
    """Immutable, ordered collection of entries."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._entries: tuple[Entry, ...] = tuple(entries)

    @classmethod
    def from_pairs(cls, pairs: Iterable[object]) -> "SymbolIndex":
        """Build an index from ``(name, url)`` tuples or mappings.

        Mappings may be single-key ``{name: url}`` objects, as the generator
        writes them, or carry explicit ``name``/``url`` keys.
        """
        return cls(_coerce_entry(item, position) for position, item in enumerate(pairs))

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    def __getitem__(self, item):  # type: ignore[override]
        if isinstance(item, slice):
            return SymbolIndex(self._entries[item])
        return self._entries[item]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SymbolIndex):
            return self._entries == other._entries
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"SymbolIndex({len(self._entries)} entries)"


def _coerce_entry(item: object, position: int) -> Entry:
    if isinstance(item, Entry):
        return item
    if isinstance(item, Mapping):
        if "name" in item and "url" in item:
            name, url = item["name"], item["url"]
        elif len(item) == 1:
            name, url = next(iter(item.items()))
        else:
            raise IndexFormatError(f"Entry {position} has unexpected keys: {sorted(item)}")
    elif isinstance(item, (tuple, list)) and len(item) == 2:
        name, url = item
    else:
        raise IndexFormatError(f"Entry {position} is not a name/url pair: {item!r}")
    if not isinstance(name, str) or not isinstance(url, str):
        raise IndexFormatError(f"Entry {position} must map a string name to a string url")
    return Entry(qualified_name=name, url=url)


def _extract_js_items(text: str) -> str:
    found = _JS_ITEMS_PATTERN.search(text)
    if not found:
        raise IndexFormatError("No 'var items = [...]' array found")
    # The generator leaves a trailing comma after the last object.
    return _TRAILING_COMMA_PATTERN.sub("]", found.group(1))


def parse_index(text: str, *, fmt: str = "json") -> SymbolIndex:
    """Parse index artifact text. ``fmt`` is ``"json"`` or ``"js"``."""
    if fmt == "js":
        text = _extract_js_items(text)
    elif fmt != "json":
        raise IndexFormatError(f"Unknown index format: {fmt}")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise IndexFormatError(f"Index is not valid JSON: {exc}") from exc
    if isinstance(payload, dict):
        payload = list(payload.items())
    if not isinstance(payload, list):
        raise IndexFormatError("Index must be a list of entries or a name -> url object")
    return SymbolIndex.from_pairs(payload)


def load_index(path: str | Path) -> SymbolIndex:
    """Load an index artifact from disk, picking the parser by file suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".js":
        fmt = "js"
    elif suffix == ".json":
        fmt = "json"
    else:
        raise IndexFormatError(f"{path}: unsupported index file type '{suffix}'")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise IndexFormatError(f"{path}: not UTF-8 text: {exc}") from exc
    try:
        index = parse_index(text, fmt=fmt)
    except IndexFormatError as exc:
        raise IndexFormatError(f"{path}: {exc}") from exc
    logger.info("Loaded %d symbols from %s", len(index), path)
    return index
