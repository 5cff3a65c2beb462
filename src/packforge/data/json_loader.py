"""Low-level JSON helpers for the loader and repositories."""
from __future__ import annotations

import json
from pathlib import Path

from .errors import DataLoadError


def parse_json(text: str, location: str) -> object:
    """Parse JSON text fetched from ``location``."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(location, f"parse error: {exc}") from exc


def read_text(path: Path) -> str:
    """Read a definition file from disk and raise DataLoadError on failure."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(str(path), "definition file not found") from exc
    except OSError as exc:
        raise DataLoadError(str(path), f"unable to read definition file: {exc}") from exc


def load_json(path: Path) -> object:
    """Load JSON from disk and raise DataLoadError on failure."""
    return parse_json(read_text(path), str(path))
