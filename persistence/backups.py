from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from json_store import write_bytes

from .interfaces import BackupArchiver, BackupOutcome
from .paths import ensure_dir

logger = logging.getLogger(__name__)


class DiskBackupArchiver(BackupArchiver):
    """
    Drops a copy of the document into `backup_dir` before each accepted write:

    - backups/products-20250101-120000.json

    Names have second resolution; two saves in the same second share a name and
    the later one wins. Backups are never read back or pruned.
    """

    def __init__(self, backup_dir: Path, *, prefix: str = "products", clock: Callable[[], datetime] = datetime.now):
        self._backup_dir = backup_dir
        self._prefix = prefix
        self._clock = clock

    @property
    def backup_dir(self) -> Path:
        return self._backup_dir

    def backup_path(self, when: datetime) -> Path:
        return self._backup_dir / f"{self._prefix}-{when.strftime('%Y%m%d-%H%M%S')}.json"

    def snapshot(self, data: bytes) -> BackupOutcome:
        path = self.backup_path(self._clock())
        try:
            ensure_dir(self._backup_dir)
            write_bytes(path, data)
        except OSError as e:
            logger.warning("CATALOG BACKUP: failed to write %s: %r", path, e)
            return BackupOutcome(error=repr(e))
        return BackupOutcome(path=path)
