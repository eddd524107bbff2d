from __future__ import annotations

import logging

from .errors import PreconditionFailed, PreconditionRequired
from .fingerprint import fingerprint

logger = logging.getLogger(__name__)


def admit(current: bytes, precondition: str | None, *, require: bool = False) -> str:
    """
    Decide whether a write based on `precondition` may replace `current`.

    Returns the current fingerprint when admitted.

    No precondition means an unconditional overwrite unless `require` is set.
    Admission and commit are separate steps: two callers holding the same valid
    token can both be admitted, and whichever rename lands last wins.
    """
    current_etag = fingerprint(current)
    if not precondition:
        if require:
            raise PreconditionRequired()
        return current_etag
    if precondition.strip() != current_etag:
        logger.info("CATALOG GUARD: stale If-Match %r (current %s)", precondition, current_etag)
        raise PreconditionFailed()
    return current_etag
