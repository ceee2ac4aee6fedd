from pathlib import Path

from app.config.settings import Settings
from app.storage.base import BaseBlobStore
from app.storage.gcs_adapter import GcsBlobStore
from app.storage.local_adapter import LocalBlobStore


class BlobStoreFactory:
    """Creates the blob store named by `storage_backend`."""

    BACKENDS = ("local", "gcs")

    @classmethod
    def create(cls, settings: Settings) -> BaseBlobStore:
        backend = settings.storage_backend.strip().lower()
        if backend == "local":
            return LocalBlobStore(
                root=Path(settings.storage_local_root),
                public_base_url=settings.storage_public_base_url,
                max_object_bytes=settings.max_upload_bytes,
            )
        if backend == "gcs":
            if not settings.storage_gcs_bucket:
                raise ValueError("storage_gcs_bucket is required for storage_backend=gcs")
            return GcsBlobStore(
                bucket_name=settings.storage_gcs_bucket,
                max_object_bytes=settings.max_upload_bytes,
                credentials_file=settings.storage_gcs_credentials_file,
            )
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
