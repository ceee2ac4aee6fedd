class StorageError(Exception):
    """Raised when a blob cannot be durably written or read."""


class BlobNotFoundError(StorageError):
    """Raised when no object exists under the requested key."""


class UnsupportedStorageUrlError(StorageError):
    """Raised when a URL does not address an object in the configured store."""
