from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

GLOBAL_CONFIG = Path(os.getenv("SYMBOLSEARCH_CONFIG") or Path.home() / ".symbolsearch_config.json")


def _read_global_config() -> dict:
    """Return the parsed global config, or an empty dict on error/missing."""
    if not GLOBAL_CONFIG.exists():
        return {}
    try:
        payload = json.loads(GLOBAL_CONFIG.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return {}
    return payload if isinstance(payload, dict) else {}


def _update_global_config(updates: dict) -> None:
    """Merge updates into global config file."""
    existing = _read_global_config()
    existing.update(updates)
    GLOBAL_CONFIG.parent.mkdir(parents=True, exist_ok=True)
    GLOBAL_CONFIG.write_text(json.dumps(existing, indent=2), encoding="utf-8")


def load_last_index() -> Optional[str]:
    payload = _read_global_config()
    last = payload.get("last_index")
    return last if isinstance(last, str) else None


def save_last_index(path: str) -> None:
    _update_global_config({"last_index": str(Path(path))})


def load_window_geometry(window_name: str) -> Optional[str]:
    """Load the saved window geometry (base64 encoded QByteArray)."""
    geometries = _read_global_config().get("geometry")
    if not isinstance(geometries, dict):
        return None
    value = geometries.get(window_name)
    return value if isinstance(value, str) else None


def save_window_geometry(window_name: str, geometry: str) -> None:
    """Save the window geometry (base64 encoded QByteArray)."""
    geometries = _read_global_config().get("geometry")
    if not isinstance(geometries, dict):
        geometries = {}
    geometries[window_name] = geometry
    _update_global_config({"geometry": geometries})
