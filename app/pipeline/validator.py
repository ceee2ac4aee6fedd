"""Upload checks applied before any collaborator is contacted."""

from app.pipeline.exceptions import UploadValidationError
from app.pipeline.models import UploadRequest

_PATH_SEPARATORS = ("/", "\\")


def validate_upload(
    request: UploadRequest,
    *,
    max_upload_bytes: int,
    allowed_content_types: list[str],
) -> None:
    """Reject uploads that must not reach the blob store.

    Raises:
        UploadValidationError: on the first failed check.
    """
    _require_path_segment(request.owner_id, "user id")
    _require_path_segment(request.file_name, "file name")
    _require_content_type(request.mime_type, allowed_content_types)
    _require_size(request.size_bytes, max_upload_bytes)


def normalize_content_type(mime_type: str) -> str:
    return mime_type.split(";", 1)[0].strip().lower()


def _require_path_segment(value: str, label: str) -> None:
    if not value or not value.strip():
        raise UploadValidationError(f"Missing {label}")
    if value in (".", "..") or any(sep in value for sep in _PATH_SEPARATORS):
        raise UploadValidationError(f"Invalid {label}: {value!r}")


def _require_content_type(mime_type: str, allowed: list[str]) -> None:
    content_type = normalize_content_type(mime_type)
    if content_type not in {normalize_content_type(t) for t in allowed}:
        raise UploadValidationError(
            f"Unsupported file type '{mime_type or 'unknown'}'. Allowed: {', '.join(allowed)}"
        )


def _require_size(size_bytes: int, max_upload_bytes: int) -> None:
    if size_bytes == 0:
        raise UploadValidationError("Uploaded file is empty")
    if size_bytes > max_upload_bytes:
        raise UploadValidationError(
            f"File size exceeds {max_upload_bytes // (1024 * 1024)}MB limit"
        )
