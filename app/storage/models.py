from dataclasses import dataclass


@dataclass(frozen=True)
class StoredDocument:
    """An object that has been fully written to the blob store."""

    storage_key: str
    public_url: str
    content_type: str


@dataclass(frozen=True)
class UploadProgress:
    """One progress event of a blob write.

    Only the final event carries `stored_document`.
    """

    bytes_transferred: int
    total_bytes: int
    stored_document: StoredDocument | None = None

    @property
    def done(self) -> bool:
        return self.stored_document is not None
