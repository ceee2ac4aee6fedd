import psycopg

from app.analysis.base import BaseAnalyzer
from app.database.repositories.resume_repository import ResumeRepository
from app.logging.logger import Log
from app.pdf.base import BasePdfExtractor
from app.pdf.exceptions import PdfExtractionError
from app.pipeline.exceptions import DocumentNotFoundError, UploadValidationError
from app.pipeline.models import PipelineStage
from app.pipeline.pipeline import PipelineContext, PipelineStep
from app.pipeline.validator import normalize_content_type, validate_upload
from app.storage.base import BaseBlobStore
from app.storage.exceptions import StorageError, UnsupportedStorageUrlError
from app.storage.models import StoredDocument


class LogFailureStep(PipelineStep):
    stage = PipelineStage.RECEIVED

    def run(self, context: PipelineContext) -> PipelineContext:
        stage = context.failed_stage.value if context.failed_stage else "unknown"
        Log.error(
            f"Pipeline failed at {stage}: {context.error_message}",
            stage=stage,
            storage_key=context.storage_key or "-",
        )
        return context


class ValidateUploadStep(PipelineStep):
    stage = PipelineStage.RECEIVED

    def __init__(self, max_upload_bytes: int, allowed_content_types: list[str]) -> None:
        self._max_upload_bytes = max_upload_bytes
        self._allowed_content_types = allowed_content_types

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None:
            raise UploadValidationError("No file uploaded")
        validate_upload(
            context.upload,
            max_upload_bytes=self._max_upload_bytes,
            allowed_content_types=self._allowed_content_types,
        )
        context.raw_bytes = context.upload.content
        Log.info(
            f"Received {len(context.raw_bytes)} bytes from user {context.upload.owner_id}",
            file_name=context.upload.file_name,
        )
        return context


class StoreDocumentStep(PipelineStep):
    stage = PipelineStage.STORED

    def __init__(self, blob_store: BaseBlobStore) -> None:
        self._blob_store = blob_store

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None:
            raise ValueError("PipelineContext.upload must be set before storing")
        upload = context.upload
        for progress in self._blob_store.iter_store(
            upload.owner_id,
            upload.file_name,
            context.raw_bytes,
            normalize_content_type(upload.mime_type),
        ):
            if progress.stored_document is None:
                Log.debug(
                    f"Uploaded {progress.bytes_transferred}/{progress.total_bytes} bytes"
                )
                continue
            context.storage_key = progress.stored_document.storage_key
            context.public_url = progress.stored_document.public_url
        if not context.public_url:
            raise StorageError("Upload finished without a stored document")
        Log.info(f"Stored resume at {context.public_url}", storage_key=context.storage_key)
        return context


class RecordResumeStep(PipelineStep):
    """Points the owner's profile at the newly stored resume."""

    stage = PipelineStage.STORED

    def __init__(self, resume_repo: ResumeRepository) -> None:
        self._resume_repo = resume_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None or not context.storage_key:
            raise ValueError("PipelineContext must hold a stored upload before recording it")
        document = StoredDocument(
            storage_key=context.storage_key,
            public_url=context.public_url,
            content_type=normalize_content_type(context.upload.mime_type),
        )
        try:
            self._resume_repo.save(context.upload.owner_id, document, context.upload.file_name)
        except psycopg.Error as exc:
            raise StorageError(
                f"Resume was uploaded but could not be saved to the profile: {exc}"
            ) from exc
        Log.info(f"Recorded resume for user {context.upload.owner_id}")
        return context


class LoadStoredDocumentStep(PipelineStep):
    stage = PipelineStage.STORED

    def __init__(self, blob_store: BaseBlobStore) -> None:
        self._blob_store = blob_store

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.file_url.strip():
            raise UploadValidationError("No file URL provided")
        try:
            key = self._blob_store.key_from_url(context.file_url)
        except UnsupportedStorageUrlError as exc:
            raise UploadValidationError(str(exc)) from exc
        if not self._blob_store.exists(key):
            raise DocumentNotFoundError("File not found")
        context.storage_key = key
        context.public_url = self._blob_store.public_url(key)
        context.raw_bytes = self._blob_store.download(key)
        Log.info(f"Loaded {len(context.raw_bytes)} bytes", storage_key=key)
        return context


class ExtractTextStep(PipelineStep):
    stage = PipelineStage.EXTRACTED

    def __init__(self, pdf_extractor: BasePdfExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        text = self._pdf_extractor.extract(context.raw_bytes)
        if not text:
            raise PdfExtractionError("Failed to extract text from PDF: no text layer found")
        context.extracted_text = text
        Log.info(
            f"Extracted {len(text)} chars",
            storage_key=context.storage_key or "-",
        )
        return context


class AnalyzeStep(PipelineStep):
    stage = PipelineStage.ANALYZED

    def __init__(self, analyzer: BaseAnalyzer) -> None:
        self._analyzer = analyzer

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.extracted_text:
            raise ValueError("PipelineContext.extracted_text must be set before analysis")
        context.analysis = self._analyzer.analyze(context.extracted_text)
        return context
