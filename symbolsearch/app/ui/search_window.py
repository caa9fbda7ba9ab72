from __future__ import annotations

import logging

from PySide6.QtCore import QByteArray, QTimer
from PySide6.QtWidgets import QVBoxLayout, QWidget

from symbolsearch.app import config
from symbolsearch.index import SymbolIndex

from .search_widget import SymbolSearchWidget

logger = logging.getLogger(__name__)

GEOMETRY_KEY = "search_window"


class SearchWindow(QWidget):
    def __init__(self, index: SymbolIndex, title: str = "Symbol search", parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)

        # Debounced geometry save
        self.geometry_save_timer = QTimer(self)
        self.geometry_save_timer.setInterval(500)
        self.geometry_save_timer.setSingleShot(True)
        self.geometry_save_timer.timeout.connect(self._save_geometry)

        self.resize(640, 360)
        layout = QVBoxLayout(self)
        self.search_widget = SymbolSearchWidget(index, self)
        layout.addWidget(self.search_widget)
        # Escape anywhere in the window closes the result list.
        self.search_widget.bind_dismiss(self)

        self._restore_geometry()
        self.search_widget.search.setFocus()

    def _restore_geometry(self) -> None:
        saved_geometry = config.load_window_geometry(GEOMETRY_KEY)
        if not saved_geometry:
            logger.debug("No saved search window geometry found")
            return
        geometry_bytes = QByteArray.fromBase64(saved_geometry.encode("ascii"))
        if not self.restoreGeometry(geometry_bytes):
            logger.debug("Saved search window geometry was rejected")

    def _save_geometry(self) -> None:
        geometry_b64 = self.saveGeometry().toBase64().data().decode("ascii")
        try:
            config.save_window_geometry(GEOMETRY_KEY, geometry_b64)
        except OSError as exc:
            logger.warning("Failed to save search window geometry: %s", exc)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self.geometry_save_timer.start()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.geometry_save_timer.stop()
        self._save_geometry()
        super().closeEvent(event)
