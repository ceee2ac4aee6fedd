from collections.abc import Iterator
from urllib.parse import quote, unquote

from google.api_core import exceptions as gcs_exceptions
from google.cloud import storage

from app.storage.base import BaseBlobStore
from app.storage.exceptions import BlobNotFoundError, StorageError, UnsupportedStorageUrlError


class GcsBlobStore(BaseBlobStore):
    """Stores resumes in a Google Cloud Storage bucket.

    Uploads use a resumable session; the object only exists in the bucket
    once the session is finalized.
    """

    PUBLIC_HOST = "https://storage.googleapis.com"

    def __init__(
        self,
        bucket_name: str,
        max_object_bytes: int,
        *,
        credentials_file: str = "",
        client: storage.Client | None = None,
    ) -> None:
        super().__init__(max_object_bytes)
        if client is None:
            client = (
                storage.Client.from_service_account_json(credentials_file)
                if credentials_file
                else storage.Client()
            )
        self._bucket = client.bucket(bucket_name)

    def _write_chunks(self, key: str, content: bytes, content_type: str) -> Iterator[int]:
        blob = self._bucket.blob(key)
        try:
            with blob.open("wb", content_type=content_type, chunk_size=self.CHUNK_SIZE) as writer:
                for offset in range(0, len(content), self.CHUNK_SIZE):
                    chunk = content[offset : offset + self.CHUNK_SIZE]
                    writer.write(chunk)
                    yield offset + len(chunk)
        except Exception as exc:
            raise StorageError(f"Storage upload failed for {key}: {exc}") from exc

    def public_url(self, key: str) -> str:
        return f"{self.PUBLIC_HOST}/{self._bucket.name}/{quote(key)}"

    def key_from_url(self, url: str) -> str:
        prefix = f"{self.PUBLIC_HOST}/"
        decoded = unquote(url)
        if not decoded.startswith(prefix):
            raise UnsupportedStorageUrlError(f"URL is not a Cloud Storage URL: {url}")
        bucket_name, _, key = decoded[len(prefix) :].partition("/")
        if bucket_name != self._bucket.name or not key:
            raise UnsupportedStorageUrlError(
                f"URL does not address bucket '{self._bucket.name}': {url}"
            )
        return key

    def exists(self, key: str) -> bool:
        try:
            return bool(self._bucket.blob(key).exists())
        except gcs_exceptions.GoogleAPIError as exc:
            raise StorageError(f"Storage lookup failed for {key}: {exc}") from exc

    def download(self, key: str) -> bytes:
        try:
            return self._bucket.blob(key).download_as_bytes()
        except gcs_exceptions.NotFound as exc:
            raise BlobNotFoundError(f"File not found: {key}") from exc
        except gcs_exceptions.GoogleAPIError as exc:
            raise StorageError(f"Storage download failed for {key}: {exc}") from exc
