from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QEvent, QObject, Qt, Signal
from PySide6.QtWidgets import QLineEdit, QVBoxLayout, QWidget

from symbolsearch.index import SymbolIndex
from symbolsearch.matcher import InvalidPatternError
from symbolsearch.presenter import ESCAPE_KEY, ResultPresenter

from .results_table import TableResultSurface, make_results_table

logger = logging.getLogger(__name__)

_ERROR_STYLE = "QLineEdit { border: 1px solid #c62828; }"


def key_code_for(event) -> int:
    """Qt key value, except Escape which maps to its ASCII code."""
    if event.key() == Qt.Key_Escape:
        return ESCAPE_KEY
    return int(event.key())


class SymbolSearchWidget(QWidget):
    linkActivated = Signal(str)

    def __init__(self, index: SymbolIndex, parent=None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.search = QLineEdit()
        self.search.setPlaceholderText("Search symbols (regex)…")
        self.search.setClearButtonEnabled(True)
        layout.addWidget(self.search)

        self.results = make_results_table(self)
        layout.addWidget(self.results, 1)

        self.presenter = ResultPresenter(index, TableResultSurface(self.results, self.linkActivated.emit))

        self._dismiss_sources: list[QObject] = []
        self.search.textChanged.connect(lambda text: self._run_update(text, None))
        self.search.installEventFilter(self)
        self.bind_dismiss(self.search)

    def bind_dismiss(self, widget: QObject) -> None:
        """Let Escape pressed on ``widget`` dismiss the results."""
        if widget not in self._dismiss_sources:
            self._dismiss_sources.append(widget)
            if widget is not self.search:
                widget.installEventFilter(self)

    def eventFilter(self, obj: QObject, event: QEvent):  # type: ignore[override]
        if event.type() == QEvent.KeyPress and obj in self._dismiss_sources:
            self.presenter.dismiss(key_code_for(event))
        elif event.type() == QEvent.KeyRelease and obj is self.search:
            self._run_update(self.search.text(), key_code_for(event))
        return super().eventFilter(obj, event)

    def _run_update(self, query: str, key_code: Optional[int]) -> None:
        try:
            self.presenter.update(query, key_code)
        except InvalidPatternError as exc:
            logger.debug("%s", exc)
            self.presenter.reset()
            self.search.setStyleSheet(_ERROR_STYLE)
            self.search.setToolTip(exc.reason)
            return
        if self.search.styleSheet():
            self.search.setStyleSheet("")
            self.search.setToolTip("")
