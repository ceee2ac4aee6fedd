from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from app.api.schemas import (
    AnalyzeResumeRequest,
    AnalyzeResumeResponse,
    ErrorResponse,
    ResumeResponse,
    UploadResponse,
)
from app.config.settings import Settings
from app.database.repositories.resume_repository import ResumeRepository
from app.pipeline.exceptions import DocumentNotFoundError, UploadValidationError
from app.pipeline.models import UploadRequest
from app.pipeline.processor import ResumeIngestionPipeline

router = APIRouter()
resumes_router = APIRouter()

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_pipeline(request: Request) -> ResumeIngestionPipeline:
    return request.app.state.pipeline


def get_resume_repository(request: Request) -> ResumeRepository:
    return request.app.state.resume_repo


@router.get("/health", summary="Health Check")
def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@router.post("/upload", response_model=UploadResponse, responses=_ERROR_RESPONSES)
def upload_resume(
    file: UploadFile | None = File(None),
    uid: str | None = Form(None),
    settings: Settings = Depends(get_settings),
    pipeline: ResumeIngestionPipeline = Depends(get_pipeline),
) -> UploadResponse:
    if file is None:
        raise UploadValidationError("No file uploaded")
    # One byte past the limit is enough for validation to reject the upload.
    content = file.file.read(settings.max_upload_bytes + 1)
    outcome = pipeline.ingest(
        UploadRequest(
            owner_id=uid or "",
            file_name=file.filename or "",
            mime_type=file.content_type or "",
            content=content,
        )
    )
    return UploadResponse(url=outcome.public_url, analysis=outcome.analysis)


@router.post("/analyze-resume", response_model=AnalyzeResumeResponse, responses=_ERROR_RESPONSES)
def analyze_resume(
    payload: AnalyzeResumeRequest | None = None,
    pipeline: ResumeIngestionPipeline = Depends(get_pipeline),
) -> AnalyzeResumeResponse:
    if payload is None or not payload.file_url:
        raise UploadValidationError("No file URL provided")
    outcome = pipeline.analyze_stored(payload.file_url)
    return AnalyzeResumeResponse(analysis=outcome.analysis)


@resumes_router.get("/resumes/{uid}", response_model=ResumeResponse, responses=_ERROR_RESPONSES)
def get_current_resume(
    uid: str,
    resume_repo: ResumeRepository = Depends(get_resume_repository),
) -> ResumeResponse:
    record = resume_repo.find_by_owner(uid)
    if record is None:
        raise DocumentNotFoundError(f"No resume on file for user {uid}")
    return ResumeResponse(
        resume_url=record.resume_url,
        resume_file_name=record.file_name,
        resume_updated_at=record.updated_at,
    )
