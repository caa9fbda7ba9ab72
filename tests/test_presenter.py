"""Tests for the result presenter and dismiss handling."""
import io
from unittest import mock

import pytest

from symbolsearch.index import SymbolIndex
from symbolsearch.matcher import InvalidPatternError
from symbolsearch.presenter import (
    ESCAPE_KEY,
    NO_RESULTS_TEXT,
    ResultPresenter,
    ResultRow,
    TextResultSurface,
    rows_for,
)


class RecordingSurface:
    """In-memory surface that mirrors what a real container would show."""

    def __init__(self) -> None:
        self.rows: list[ResultRow] = []
        self.visible = False
        self.calls: list[str] = []

    def clear(self) -> None:
        self.calls.append("clear")
        self.rows = []

    def show(self, rows) -> None:
        self.calls.append("show")
        self.rows.extend(rows)
        self.visible = True

    def hide(self) -> None:
        self.calls.append("hide")
        self.visible = False


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def presenter(sample_index, surface):
    return ResultPresenter(sample_index, surface)


class TestUpdate:
    def test_initially_hidden(self, presenter):
        assert presenter.visible is False
        assert presenter.rows == ()

    def test_matches_render_as_links(self, presenter, surface):
        presenter.update("read_png", 0)

        assert surface.visible
        assert [row.text for row in surface.rows] == [
            "imageformats.png.read_png",
            "imageformats.png.read_png16",
        ]
        assert [row.url for row in surface.rows] == ["png.html#read_png", "png.html#read_png16"]
        assert presenter.visible
        assert presenter.rows == tuple(surface.rows)

    def test_links_get_sequential_identifiers(self, presenter, surface):
        presenter.update("imageformats", 0)
        assert [row.identifier for row in surface.rows] == ["link0", "link1", "link2"]

    def test_no_results_placeholder(self, presenter, surface):
        presenter.update("zzz", 0)

        assert surface.visible
        assert surface.rows == [ResultRow(NO_RESULTS_TEXT)]
        assert not surface.rows[0].is_link

    def test_escape_overrides_match(self, presenter, surface):
        presenter.update("read_png", 0)
        presenter.update("read_png", ESCAPE_KEY)

        assert not surface.visible
        assert surface.rows == []
        assert presenter.visible is False
        assert presenter.rows == ()

    @pytest.mark.parametrize("key", [None, 0, 13, ESCAPE_KEY])
    def test_empty_query_hides(self, presenter, surface, key):
        presenter.update("png", 0)
        presenter.update("", key)

        assert not surface.visible
        assert surface.rows == []

    def test_hide_cases_skip_matching(self, sample_index, surface):
        matcher = mock.Mock(return_value=[])
        presenter = ResultPresenter(sample_index, surface, matcher=matcher)

        presenter.update("", 0)
        presenter.update("png", ESCAPE_KEY)

        matcher.assert_not_called()

    def test_every_update_clears_first(self, presenter, surface):
        presenter.update("png", 0)
        presenter.update("bmp", 0)

        assert surface.calls == ["clear", "show", "clear", "show"]
        assert [row.text for row in surface.rows] == ["imageformats.bmp.read_bmp"]

    def test_key_code_is_optional(self, presenter, surface):
        presenter.update("bmp")
        assert len(surface.rows) == 1

    def test_invalid_pattern_propagates_after_clear(self, presenter, surface):
        presenter.update("png", 0)

        with pytest.raises(InvalidPatternError):
            presenter.update("png(", 0)

        assert surface.rows == []
        assert presenter.rows == ()
        assert surface.calls[-1] == "clear"

    def test_mock_surface(self, sample_index):
        surface = mock.Mock()
        presenter = ResultPresenter(sample_index, surface)

        presenter.update("read_bmp", 65)

        surface.clear.assert_called_once_with()
        surface.show.assert_called_once_with(
            [ResultRow("imageformats.bmp.read_bmp", "bmp.html#read_bmp", "link0")]
        )
        surface.hide.assert_not_called()


class TestDismiss:
    def test_escape_clears_and_hides(self, presenter, surface):
        presenter.update("png", 0)
        presenter.dismiss(ESCAPE_KEY)

        assert not surface.visible
        assert surface.rows == []
        assert presenter.visible is False

    def test_escape_when_already_hidden(self, presenter, surface):
        presenter.dismiss(ESCAPE_KEY)
        assert not surface.visible
        assert surface.rows == []

    @pytest.mark.parametrize("key", [0, 13, 65, None])
    def test_other_keys_are_ignored(self, presenter, surface, key):
        presenter.update("png", 0)
        before = list(surface.rows)
        calls = list(surface.calls)

        presenter.dismiss(key)

        assert surface.visible
        assert surface.rows == before
        assert surface.calls == calls
        assert presenter.visible

    def test_reset_always_hides(self, presenter, surface):
        presenter.update("png", 0)
        presenter.reset()
        assert not surface.visible
        assert surface.rows == []


class TestRowsFor:
    def test_empty_gives_placeholder(self):
        assert rows_for([]) == [ResultRow("No results")]

    def test_large_index_numbering(self):
        index = SymbolIndex.from_pairs((f"mod.fn{i}", f"mod.html#fn{i}") for i in range(12))
        rows = rows_for(list(index))
        assert rows[11].identifier == "link11"
        assert rows[11].url == "mod.html#fn11"


class TestTextResultSurface:
    def test_writes_links_and_placeholder(self, sample_index):
        stream = io.StringIO()
        presenter = ResultPresenter(sample_index, TextResultSurface(stream))

        presenter.update("read_bmp")
        presenter.update("zzz")

        assert stream.getvalue() == "imageformats.bmp.read_bmp\tbmp.html#read_bmp\nNo results\n"

    def test_clear_and_hide_write_nothing(self):
        stream = io.StringIO()
        surface = TextResultSurface(stream)
        surface.clear()
        surface.hide()
        assert stream.getvalue() == ""

    def test_hidden_writes_nothing(self, sample_index):
        stream = io.StringIO()
        presenter = ResultPresenter(sample_index, TextResultSurface(stream))
        presenter.update("")
        assert stream.getvalue() == ""
