"""Tests for the top-level search window."""
import pytest
from PySide6.QtCore import Qt
from PySide6.QtTest import QTest
from PySide6.QtWidgets import QApplication

from symbolsearch.app import config
from symbolsearch.app.ui.search_window import GEOMETRY_KEY, SearchWindow


@pytest.fixture
def window(qapp, qtbot, sample_index):
    w = SearchWindow(sample_index, title="Symbol search - docs")
    qtbot.addWidget(w)
    w.show()
    QApplication.processEvents()
    return w


def test_window_title(window):
    assert window.windowTitle() == "Symbol search - docs"


def test_escape_on_window_dismisses(window):
    QTest.keyClicks(window.search_widget.search, "png")
    assert window.search_widget.results.rowCount() == 2

    QTest.keyClick(window, Qt.Key_Escape)
    QApplication.processEvents()

    assert window.search_widget.results.rowCount() == 0
    assert not window.search_widget.presenter.visible


def test_close_saves_geometry(window):
    window.close()
    assert config.load_window_geometry(GEOMETRY_KEY)


def test_bad_saved_geometry_is_ignored(qapp, qtbot, sample_index):
    config.save_window_geometry(GEOMETRY_KEY, "bm90IGEgZ2VvbWV0cnk=")
    w = SearchWindow(sample_index)
    qtbot.addWidget(w)
    assert w.width() == 640
    assert w.height() == 360
