from __future__ import annotations

from .backups import DiskBackupArchiver
from .catalog_store import CatalogSnapshot, CatalogStore, CommitResult
from .disk_store import DiskCatalogDocumentStore
from .errors import (
    CatalogError,
    InvalidItem,
    MalformedPayload,
    PreconditionFailed,
    PreconditionRequired,
    WriteFailed,
)
from .fingerprint import fingerprint
from .interfaces import BackupArchiver, BackupOutcome, CatalogDocumentStore

__all__ = [
    "BackupArchiver",
    "BackupOutcome",
    "CatalogDocumentStore",
    "CatalogError",
    "CatalogSnapshot",
    "CatalogStore",
    "CommitResult",
    "DiskBackupArchiver",
    "DiskCatalogDocumentStore",
    "InvalidItem",
    "MalformedPayload",
    "PreconditionFailed",
    "PreconditionRequired",
    "WriteFailed",
    "fingerprint",
]
