from app.pipeline.models import PipelineStage


class PipelineError(Exception):
    """Base exception for all pipeline-related errors."""


class UploadValidationError(PipelineError):
    """Raised when an upload request is malformed, too large or of the wrong type."""


class DocumentNotFoundError(PipelineError):
    """Raised when a referenced resume does not exist in the blob store."""


class PipelineFailedError(PipelineError):
    """Terminal failure of a run, tagged with the stage that could not be reached."""

    def __init__(self, stage: PipelineStage, cause: Exception) -> None:
        super().__init__(str(cause))
        self.stage = stage
        self.cause = cause
