from __future__ import annotations

import logging
import os
from pathlib import Path

from json_store import read_bytes, write_bytes

from .errors import WriteFailed
from .fingerprint import fingerprint
from .interfaces import CatalogDocumentStore
from .paths import ensure_dir, new_staging_path

logger = logging.getLogger(__name__)


class DiskCatalogDocumentStore(CatalogDocumentStore):
    """
    Stores the catalog document on disk at a fixed path.

    - Returns the bytes exactly as stored (None when missing).
    - Each commit writes its own `<name>.<random>.tmp` next to the document and
      renames it over the document, so readers see the old bytes or the new
      bytes and never a partial file.
    """

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def read_bytes(self) -> bytes | None:
        return read_bytes(self._path)

    def commit(self, data: bytes) -> str:
        tmp_path = self._stage(data)

        try:
            os.replace(tmp_path, self._path)
        except OSError as e:
            # Some mounts refuse the rename; overwrite in place instead. A failure
            # from here on may leave the document partially written.
            logger.warning("CATALOG SAVE: rename %s -> %s failed (%r); writing in place", tmp_path, self._path, e)
            try:
                write_bytes(self._path, data)
            except OSError as e2:
                logger.error("CATALOG SAVE: failed to write %s: %r", self._path, e2)
                raise WriteFailed("Failed to save file") from e2
            finally:
                self._discard(tmp_path)

        return fingerprint(data)

    def _stage(self, data: bytes) -> Path:
        tmp_path: Path | None = None
        try:
            ensure_dir(self._path.parent)
            tmp_path = new_staging_path(self._path)
            write_bytes(tmp_path, data)
        except OSError as e:
            logger.warning("CATALOG SAVE: failed to write temp file for %s: %r", self._path, e)
            if tmp_path is not None:
                self._discard(tmp_path)
            raise WriteFailed("Failed to write temp file") from e
        return tmp_path

    def _discard(self, tmp_path: Path) -> None:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("CATALOG SAVE: could not remove %s: %r", tmp_path, e)
