from __future__ import annotations

import html
from typing import Callable, Optional, Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QAbstractItemView, QHeaderView, QLabel, QTableWidget, QTableWidgetItem

from symbolsearch.presenter import ResultRow


def make_results_table(parent=None) -> QTableWidget:
    """Single-column table used as the results container."""
    table = QTableWidget(0, 1, parent)
    table.setObjectName("results")
    table.horizontalHeader().hide()
    table.verticalHeader().hide()
    table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
    table.setShowGrid(False)
    table.setEditTriggers(QAbstractItemView.NoEditTriggers)
    table.setSelectionMode(QAbstractItemView.NoSelection)
    table.setVisible(False)
    return table


class TableResultSurface:
    """Renders result rows into a ``QTableWidget``.

    Link rows become ``QLabel`` widgets whose ``objectName`` is the row
    identifier, so ``table.findChild(QLabel, "link0")`` finds the first link.
    """

    def __init__(self, table: QTableWidget, on_link: Optional[Callable[[str], None]] = None) -> None:
        self.table = table
        self._on_link = on_link

    def clear(self) -> None:
        for position in range(self.table.rowCount()):
            widget = self.table.cellWidget(position, 0)
            if widget is not None:
                self.table.removeCellWidget(position, 0)
                # Detach now so a stale label can't be found by its identifier.
                widget.setParent(None)
        self.table.clearContents()
        self.table.setRowCount(0)

    def show(self, rows: Sequence[ResultRow]) -> None:
        for row in rows:
            position = self.table.rowCount()
            self.table.insertRow(position)
            if row.is_link:
                self.table.setCellWidget(position, 0, self._link_label(row))
            else:
                item = QTableWidgetItem(row.text)
                item.setFlags(Qt.ItemIsEnabled)
                self.table.setItem(position, 0, item)
        self.table.setVisible(True)

    def hide(self) -> None:
        self.table.setVisible(False)

    def _link_label(self, row: ResultRow) -> QLabel:
        label = QLabel(f"<a href='{html.escape(row.url or '', quote=True)}'>{html.escape(row.text)}</a>")
        label.setObjectName(row.identifier or "")
        label.setTextFormat(Qt.RichText)
        label.setTextInteractionFlags(Qt.TextBrowserInteraction)
        label.setOpenExternalLinks(False)
        label.setToolTip(row.url or "")
        label.linkActivated.connect(self._activate)
        return label

    def _activate(self, url: str) -> None:
        if self._on_link:
            self._on_link(url)
