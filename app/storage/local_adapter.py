import os
import uuid
from collections.abc import Iterator
from pathlib import Path
from urllib.parse import quote, unquote

from app.storage.base import BaseBlobStore
from app.storage.exceptions import BlobNotFoundError, StorageError, UnsupportedStorageUrlError


def _is_safe_key(key: str) -> bool:
    return all(part not in ("", ".", "..") for part in key.split("/"))


class LocalBlobStore(BaseBlobStore):
    """Stores resumes on the local filesystem: {root}/{key}.

    Each write goes to a hidden temporary file next to the target and is
    renamed into place once complete.
    """

    def __init__(
        self,
        root: Path,
        public_base_url: str,
        max_object_bytes: int,
    ) -> None:
        super().__init__(max_object_bytes)
        self._root = root
        self._public_base_url = public_base_url.rstrip("/")

    @property
    def root(self) -> Path:
        return self._root

    def _write_chunks(self, key: str, content: bytes, content_type: str) -> Iterator[int]:
        path = self._resolve_path(key)
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.part")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("wb") as fh:
                for offset in range(0, len(content), self.CHUNK_SIZE):
                    chunk = content[offset : offset + self.CHUNK_SIZE]
                    fh.write(chunk)
                    yield offset + len(chunk)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, path)
        except OSError as exc:
            raise StorageError(f"Storage write failed for {key}: {exc}") from exc
        finally:
            tmp_path.unlink(missing_ok=True)

    def public_url(self, key: str) -> str:
        return f"{self._public_base_url}/{quote(key)}"

    def key_from_url(self, url: str) -> str:
        prefix = f"{self._public_base_url}/"
        if not url.startswith(prefix):
            raise UnsupportedStorageUrlError(f"URL is not served by this store: {url}")
        key = unquote(url[len(prefix) :])
        if not _is_safe_key(key):
            raise UnsupportedStorageUrlError(f"URL does not name a stored object: {url}")
        return key

    def exists(self, key: str) -> bool:
        return self._resolve_path(key).is_file()

    def download(self, key: str) -> bytes:
        path = self._resolve_path(key)
        if not path.is_file():
            raise BlobNotFoundError(f"File not found: {key}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Storage read failed for {key}: {exc}") from exc

    def _resolve_path(self, key: str) -> Path:
        if not _is_safe_key(key):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._root.joinpath(*key.split("/"))
