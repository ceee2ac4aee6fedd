from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.analysis.models import AnalysisResult
from app.pipeline.models import PipelineStage, UploadRequest


@dataclass(slots=True)
class PipelineContext:
    """Per-invocation state; never shared between runs."""

    upload: UploadRequest | None = None
    file_url: str = ""
    stage: PipelineStage = PipelineStage.RECEIVED
    raw_bytes: bytes = b""
    storage_key: str = ""
    public_url: str = ""
    extracted_text: str = ""
    analysis: AnalysisResult | None = None
    failed_stage: PipelineStage | None = None
    error_message: str = ""


class PipelineStep(ABC):
    """One transition of the state machine.

    `stage` is the state the run is in once the step succeeds, and the
    stage reported as failed if it raises.
    """

    stage: PipelineStage

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
