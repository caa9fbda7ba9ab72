from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from PySide6.QtCore import QtMsgType, QUrl, qInstallMessageHandler
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QApplication

from symbolsearch.app import config
from symbolsearch.app.ui.search_window import SearchWindow
from symbolsearch.index import IndexFormatError, SymbolIndex, load_index
from symbolsearch.matcher import InvalidPatternError
from symbolsearch.presenter import ResultPresenter, TextResultSurface

logger = logging.getLogger(__name__)

# ============================================================================
# DEBUG CONFIGURATION - Environment Variables
# ============================================================================
# SYMBOLSEARCH_DEBUG   - DEBUG level logging (same as --debug)
# SYMBOLSEARCH_CONFIG  - Alternate location for the JSON config file
# ============================================================================


def _debug_enabled(var_name: str) -> bool:
    """Check if a debug flag is enabled."""
    return os.getenv(var_name, "0") not in ("0", "false", "False", "")


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search the symbols of a generated documentation site.")
    parser.add_argument("--index", help="Index artifact to load (search.js or .json). Defaults to the last one used.")
    parser.add_argument("--query", help="Print matches for this pattern and exit without opening a window.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def _resolve_index_path(args: argparse.Namespace) -> Optional[Path]:
    if args.index:
        return Path(args.index).expanduser().resolve()
    last = config.load_last_index()
    return Path(last) if last else None


def _run_query(index: SymbolIndex, query: str) -> int:
    presenter = ResultPresenter(index, TextResultSurface(sys.stdout))
    try:
        presenter.update(query)
    except InvalidPatternError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    return 0


def _qt_message_handler(mode, context, message: str) -> None:
    """Route Qt diagnostics through logging."""
    if "Accessible invalid" in message or "Could not find accessible on path" in message:
        return
    if mode == QtMsgType.QtDebugMsg:
        logger.debug("Qt: %s", message)
    elif mode == QtMsgType.QtWarningMsg:
        logger.warning("Qt: %s", message)
    else:
        logger.error("Qt: %s", message)


def open_link(base_dir: Path, url: str) -> None:
    """Open ``url`` relative to the documentation directory."""
    target = QUrl.fromLocalFile(str(base_dir) + "/").resolved(QUrl(url))
    logger.debug("Opening %s", target.toString())
    if not QDesktopServices.openUrl(target):
        logger.warning("Could not open %s", target.toString())


def _run_gui(index: SymbolIndex, index_path: Path) -> int:
    qInstallMessageHandler(_qt_message_handler)
    app = QApplication.instance() or QApplication(sys.argv)
    window = SearchWindow(index, title=f"Symbol search - {index_path.parent.name}")
    window.search_widget.linkActivated.connect(lambda url: open_link(index_path.parent, url))
    window.show()
    return app.exec()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(list(sys.argv[1:] if argv is None else argv))
    _configure_logging(args.debug or _debug_enabled("SYMBOLSEARCH_DEBUG"))

    index_path = _resolve_index_path(args)
    if index_path is None:
        print("Error: No index specified. Use --index <path>", file=sys.stderr)
        return 2
    try:
        index = load_index(index_path)
    except (OSError, IndexFormatError) as exc:
        print(f"Error: Could not load index: {exc}", file=sys.stderr)
        return 2
    try:
        config.save_last_index(str(index_path))
    except OSError as exc:
        logger.warning("Could not remember index path: %s", exc)

    if args.query is not None:
        return _run_query(index, args.query)
    return _run_gui(index, index_path)


if __name__ == "__main__":
    sys.exit(main())
