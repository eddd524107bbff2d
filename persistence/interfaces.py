from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class BackupOutcome:
    """Where the pre-write snapshot went, or why there is none."""

    path: Path | None = None
    error: str | None = None

    @property
    def written(self) -> bool:
        return self.path is not None and self.error is None


class CatalogDocumentStore(Protocol):
    """
    The one catalog document, as raw bytes.

    Narrow so that a backend with a real compare-and-swap primitive can replace
    the disk store without the pipeline changing.
    """

    def read_bytes(self) -> bytes | None:
        """Current document bytes, or None when nothing has been written yet."""
        ...

    def commit(self, data: bytes) -> str:
        """Replace the document atomically and return the new fingerprint."""
        ...


class BackupArchiver(Protocol):
    def snapshot(self, data: bytes) -> BackupOutcome:
        """Keep a copy of the pre-write bytes. Never raises."""
        ...
