from __future__ import annotations

import hashlib

EMPTY_DOCUMENT = b"[]"


def fingerprint(data: bytes) -> str:
    """
    Quoted sha1 hex of a document's bytes, as sent in the ETag / If-Match headers.
    """
    return '"' + hashlib.sha1(data).hexdigest() + '"'
