from app.analysis.base import BaseAnalyzer
from app.analysis.factory import AnalyzerFactory
from app.config.settings import Settings
from app.database.repositories.resume_repository import ResumeRepository
from app.logging.logger import Log
from app.pdf.base import BasePdfExtractor
from app.pdf.factory import PdfExtractorFactory
from app.pipeline.exceptions import PipelineFailedError
from app.pipeline.models import PipelineOutcome, PipelineStage, UploadRequest
from app.pipeline.pipeline import PipelineContext, PipelineStep
from app.pipeline.steps import (
    AnalyzeStep,
    ExtractTextStep,
    LoadStoredDocumentStep,
    LogFailureStep,
    RecordResumeStep,
    StoreDocumentStep,
    ValidateUploadStep,
)
from app.storage.base import BaseBlobStore
from app.storage.factory import BlobStoreFactory


class Processor:
    """Runs steps in strict order; the first failure ends the run."""

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def run(self, context: PipelineContext) -> PipelineContext:
        """Advance `context` through every step.

        Raises:
            PipelineFailedError: tagged with the stage of the failing step.
        """
        for step in self._steps:
            try:
                context = step.run(context)
            except Exception as exc:
                context.failed_stage = step.stage
                context.error_message = str(exc)
                self._failed_step.run(context)
                raise PipelineFailedError(step.stage, exc) from exc
            context.stage = step.stage
        context.stage = PipelineStage.COMPLETED
        return context


class ResumeIngestionPipeline:
    """Entry points for uploading a new resume and re-analysing a stored one.

    Each call is a single attempt; a failed run is retried by calling again
    with the full payload.
    """

    def __init__(self, ingest_processor: Processor, reanalyze_processor: Processor) -> None:
        self._ingest_processor = ingest_processor
        self._reanalyze_processor = reanalyze_processor

    def ingest(self, request: UploadRequest) -> PipelineOutcome:
        """Store, extract and analyse an uploaded resume."""
        Log.info(f"Ingesting {request.file_name} for user {request.owner_id}")
        context = self._ingest_processor.run(PipelineContext(upload=request))
        return self._outcome(context)

    def analyze_stored(self, file_url: str) -> PipelineOutcome:
        """Extract and analyse a resume that is already in the blob store."""
        Log.info(f"Re-analysing stored resume {file_url}")
        context = self._reanalyze_processor.run(PipelineContext(file_url=file_url))
        return self._outcome(context)

    @staticmethod
    def _outcome(context: PipelineContext) -> PipelineOutcome:
        if context.analysis is None:
            raise ValueError("Completed pipeline run has no analysis")
        return PipelineOutcome(
            public_url=context.public_url,
            analysis=context.analysis.narrative_feedback,
        )


def build_pipeline(
    settings: Settings,
    *,
    blob_store: BaseBlobStore | None = None,
    pdf_extractor: BasePdfExtractor | None = None,
    analyzer: BaseAnalyzer | None = None,
    resume_repo: ResumeRepository | None = None,
) -> ResumeIngestionPipeline:
    """Wire the pipeline from settings; explicit collaborators take precedence."""
    blob_store = blob_store or BlobStoreFactory.create(settings)
    pdf_extractor = pdf_extractor or PdfExtractorFactory.create(settings)
    analyzer = analyzer or AnalyzerFactory.create(settings)
    if resume_repo is None and settings.resume_registry_enabled:
        resume_repo = ResumeRepository()

    ingest_steps: list[PipelineStep] = [
        ValidateUploadStep(
            max_upload_bytes=settings.max_upload_bytes,
            allowed_content_types=settings.allowed_content_types,
        ),
        StoreDocumentStep(blob_store),
    ]
    if resume_repo is not None:
        ingest_steps.append(RecordResumeStep(resume_repo))
    ingest_steps += [ExtractTextStep(pdf_extractor), AnalyzeStep(analyzer)]

    reanalyze_steps: list[PipelineStep] = [
        LoadStoredDocumentStep(blob_store),
        ExtractTextStep(pdf_extractor),
        AnalyzeStep(analyzer),
    ]
    failed_step = LogFailureStep()
    return ResumeIngestionPipeline(
        ingest_processor=Processor(ingest_steps, failed_step),
        reanalyze_processor=Processor(reanalyze_steps, failed_step),
    )
