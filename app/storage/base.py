from abc import ABC, abstractmethod
from collections.abc import Iterator

from app.storage.exceptions import StorageError
from app.storage.models import StoredDocument, UploadProgress

RESUME_KEY_PREFIX = "resumes"


def resume_storage_key(owner_id: str, file_name: str) -> str:
    """Build the object key for a resume: resumes/{owner_id}/{file_name}"""
    return f"{RESUME_KEY_PREFIX}/{owner_id}/{file_name}"


class BaseBlobStore(ABC):
    """Contract for durable resume storage backends.

    Writes are last-write-wins per key. An object becomes visible at its
    public URL only once the whole payload has been written.
    """

    CHUNK_SIZE = 256 * 1024

    def __init__(self, max_object_bytes: int) -> None:
        self._max_object_bytes = max_object_bytes

    def store(
        self,
        owner_id: str,
        file_name: str,
        content: bytes,
        content_type: str,
    ) -> StoredDocument:
        """Write `content` under the owner's resume key and return its address.

        Raises:
            StorageError: if the write does not complete.
        """
        stored: StoredDocument | None = None
        for progress in self.iter_store(owner_id, file_name, content, content_type):
            stored = progress.stored_document
        if stored is None:
            raise StorageError("Upload finished without a stored document")
        return stored

    def iter_store(
        self,
        owner_id: str,
        file_name: str,
        content: bytes,
        content_type: str,
    ) -> Iterator[UploadProgress]:
        """Write `content` and yield progress events; the last one carries the document."""
        if not file_name:
            raise ValueError("file_name must be a non-empty string")
        if len(content) > self._max_object_bytes:
            raise ValueError(
                f"content is {len(content)} bytes, limit is {self._max_object_bytes}"
            )
        key = resume_storage_key(owner_id, file_name)
        total = len(content)
        for transferred in self._write_chunks(key, content, content_type):
            yield UploadProgress(bytes_transferred=transferred, total_bytes=total)
        yield UploadProgress(
            bytes_transferred=total,
            total_bytes=total,
            stored_document=StoredDocument(
                storage_key=key,
                public_url=self.public_url(key),
                content_type=content_type,
            ),
        )

    @abstractmethod
    def _write_chunks(self, key: str, content: bytes, content_type: str) -> Iterator[int]:
        """Write the payload, yielding the running byte count after each chunk.

        Raises:
            StorageError: on any write failure.
        """

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Return the publicly resolvable address of `key`."""

    @abstractmethod
    def key_from_url(self, url: str) -> str:
        """Resolve a public URL produced by this store back to its key.

        Raises:
            UnsupportedStorageUrlError: if the URL is not served by this store.
        """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True if an object is stored under `key`."""

    @abstractmethod
    def download(self, key: str) -> bytes:
        """Read the full object.

        Raises:
            BlobNotFoundError: if nothing is stored under `key`.
            StorageError: on any other read failure.
        """
