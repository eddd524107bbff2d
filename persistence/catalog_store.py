from __future__ import annotations

import logging
from dataclasses import dataclass

from json_store import dump_json_bytes

from . import catalog_payload, guard
from .fingerprint import EMPTY_DOCUMENT, fingerprint
from .interfaces import BackupArchiver, BackupOutcome, CatalogDocumentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    body: bytes
    etag: str


@dataclass(frozen=True)
class CommitResult:
    """
    A landed write. `backup` records whether the prior version was archived;
    a skipped backup is a warning, not a failure.
    """

    etag: str
    backup: BackupOutcome

    @property
    def warnings(self) -> list[str]:
        if self.backup.written:
            return []
        return [f"backup skipped: {self.backup.error}"]


class CatalogStore:
    """
    Validated, optimistic-concurrency writes of the product catalog.

    save(): read current -> check If-Match -> decode -> normalize -> validate
            -> serialize -> back up current -> atomic replace -> new ETag

    Every step before the backup raises a `CatalogError` and leaves the document
    untouched. Nothing here locks; callers echo the ETag they last read.
    """

    def __init__(
        self,
        documents: CatalogDocumentStore,
        backups: BackupArchiver,
        *,
        require_precondition: bool = False,
        log_requests: bool = False,
    ):
        self._documents = documents
        self._backups = backups
        self._require_precondition = require_precondition
        self._log_requests = log_requests

    def current(self) -> CatalogSnapshot:
        body = self._read_current()
        return CatalogSnapshot(body=body, etag=fingerprint(body))

    def save(self, raw_body: bytes, precondition: str | None = None) -> CommitResult:
        current = self._read_current()
        if self._log_requests:
            logger.info(
                "CATALOG SAVE: current ETag %s, If-Match %s", fingerprint(current), precondition or "not set"
            )
        guard.admit(current, precondition, require=self._require_precondition)

        payload = catalog_payload.extract(catalog_payload.decode(raw_body))
        catalog_payload.validate(payload.products)
        new_bytes = dump_json_bytes(payload.to_document())

        backup = self._backups.snapshot(current)
        etag = self._documents.commit(new_bytes)

        logger.info(
            "CATALOG SAVE: committed %d products (etag %s, backup %s)",
            len(payload.products),
            etag,
            backup.path if backup.written else "skipped",
        )
        return CommitResult(etag=etag, backup=backup)

    def _read_current(self) -> bytes:
        data = self._documents.read_bytes()
        return EMPTY_DOCUMENT if data is None else data
