from __future__ import annotations

import os
import tempfile
from pathlib import Path

STAGING_MODE = 0o644


def project_root() -> Path:
    # persistence/paths.py -> persistence -> project root
    return Path(__file__).resolve().parents[1]


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def new_staging_path(path: Path) -> Path:
    """
    Create an empty, uniquely named staging file next to `path`.

    Colocated so the final rename stays on one filesystem; unique so concurrent
    writers never share one. The caller owns (and must remove) the file.
    """
    fd, name = tempfile.mkstemp(dir=path.parent, prefix=path.name + ".", suffix=".tmp")
    os.close(fd)
    # mkstemp creates 0600; the document it becomes is read by other processes.
    os.chmod(name, STAGING_MODE)
    return Path(name)
