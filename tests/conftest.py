from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from symbolsearch.app import config
from symbolsearch.index import Entry, SymbolIndex


@pytest.fixture
def sample_index():
    return SymbolIndex(
        [
            Entry("imageformats.png.read_png", "png.html#read_png"),
            Entry("imageformats.png.read_png16", "png.html#read_png16"),
            Entry("imageformats.bmp.read_bmp", "bmp.html#read_bmp"),
        ]
    )


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the global config file at a per-test location."""
    path = tmp_path / "symbolsearch_config.json"
    monkeypatch.setattr(config, "GLOBAL_CONFIG", path)
    return path
