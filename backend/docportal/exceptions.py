"""Error taxonomy shared by the document store, the HTTP layer and the client.

Each exception carries the HTTP status the API answers with, so the single
handler registered in ``docportal.main`` can map any of them to a plain-text
response.
"""


class DocumentPortalError(Exception):
    """Base class for every error the portal raises on purpose."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DocumentPortalError):
    """Malformed or empty request."""

    status_code = 400
    default_message = "Invalid request"


class NotFoundError(DocumentPortalError):
    status_code = 404
    default_message = "Document not found"


class StorageError(DocumentPortalError):
    """A blob filesystem operation failed."""

    default_message = "Storage operation failed"


class StorageWriteError(StorageError):
    default_message = "Failed to write file to storage"


class StorageReadError(StorageError):
    # The record exists but its blob is gone.
    status_code = 404
    default_message = "Document file missing from storage"


class StorageDeleteError(StorageError):
    default_message = "Failed to delete file from storage"


class IndexStoreError(DocumentPortalError):
    """The document index (SQL table) could not be read or written."""

    default_message = "Document index operation failed"


class IndexReadError(IndexStoreError):
    default_message = "Failed to read document index"


class IndexWriteError(IndexStoreError):
    default_message = "Failed to write document index"


class ServiceUnavailableError(DocumentPortalError):
    """The document service could not be reached at all (client side)."""

    status_code = 503
    default_message = "Document service is not reachable"


class RemoteError(DocumentPortalError):
    """The document service answered with an unexpected error status."""

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        super().__init__(message or f"Document service returned HTTP {status_code}")
