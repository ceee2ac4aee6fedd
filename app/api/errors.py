from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.pipeline.exceptions import (
    DocumentNotFoundError,
    PipelineFailedError,
    UploadValidationError,
)
from app.pipeline.models import PipelineStage
from app.storage.exceptions import BlobNotFoundError


def status_for_failure(exc: PipelineFailedError) -> int:
    """Map a failed run to its HTTP status: bad input 400, missing object 404, else 500."""
    if exc.stage is PipelineStage.RECEIVED or isinstance(exc.cause, UploadValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc.cause, (DocumentNotFoundError, BlobNotFoundError)):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def describe_request_errors(exc: RequestValidationError) -> str:
    """Flatten FastAPI's validation details into one readable message."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "Invalid request: " + ("; ".join(parts) or "malformed input")


async def _pipeline_failed_handler(_request: Request, exc: PipelineFailedError) -> JSONResponse:
    return JSONResponse(status_code=status_for_failure(exc), content={"error": str(exc)})


async def _validation_handler(_request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})


async def _request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": describe_request_errors(exc)},
    )


async def _not_found_handler(_request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    """Every error leaves the service as `{"error": <message>}`."""
    app.add_exception_handler(PipelineFailedError, _pipeline_failed_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(UploadValidationError, _validation_handler)
    app.add_exception_handler(DocumentNotFoundError, _not_found_handler)
