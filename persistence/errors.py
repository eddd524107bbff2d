from __future__ import annotations


class CatalogError(Exception):
    """
    Base for every outcome that ends a save request early.

    `message` is the plain-text body handed back to the caller; `status_code`
    is the HTTP status the router answers with.
    """

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PreconditionFailed(CatalogError):
    status_code = 412

    def __init__(self, message: str = "Precondition Failed"):
        super().__init__(message)


class PreconditionRequired(CatalogError):
    status_code = 428

    def __init__(self, message: str = "Precondition Required"):
        super().__init__(message)


class MalformedPayload(CatalogError):
    status_code = 400

    def __init__(
        self,
        message: str = "Payload must be a JSON array of products or an object with a products array",
    ):
        super().__init__(message)


class InvalidItem(CatalogError):
    status_code = 400

    def __init__(self, index: int, message: str):
        super().__init__(message)
        self.index = index


class WriteFailed(CatalogError):
    status_code = 500
