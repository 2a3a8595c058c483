"""Helpers for the flat JSON documents VocabDeck persists to disk."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def read_json(path: str | Path, default: Any = None) -> Any:
    """Read a JSON document, returning ``default`` when the file does not exist.

    A file that exists but cannot be parsed raises ``json.JSONDecodeError``.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return default
    return json.loads(raw)


def write_json_atomic(path: str | Path, data: Any) -> None:
    """Write ``data`` as pretty-printed JSON, replacing ``path`` atomically.

    The document is written to a temporary file in the same directory and moved into place with ``os.replace`` so a
    crash mid-write never leaves a truncated document behind.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise
