from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any


def read_bytes(path: Path) -> bytes | None:
    """
    Read a file's raw bytes.

    Returns None when the file does not exist.
    """
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None


def dump_json_bytes(payload: Any, *, indent: int = 4) -> bytes:
    """
    Serialize a payload the way the catalog is kept on disk.

    Pretty-printed, non-ASCII escaped, slashes left as-is, exactly one trailing newline.
    Raises ValueError for NaN or infinite floats, which have no JSON form.
    """
    text = json.dumps(payload, indent=indent, ensure_ascii=True, allow_nan=False)
    return (text.rstrip("\n") + "\n").encode("utf-8")


def write_bytes(path: Path, data: bytes) -> None:
    """
    Write bytes to a path and flush them to stable storage before returning.
    """
    with path.open("wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
