from dataclasses import dataclass
from enum import Enum


class PipelineStage(str, Enum):
    """States of one ingestion run, in the order they are reached."""

    RECEIVED = "received"
    STORED = "stored"
    EXTRACTED = "extracted"
    ANALYZED = "analyzed"
    COMPLETED = "completed"


@dataclass(frozen=True)
class UploadRequest:
    """An uploaded resume as received from the client."""

    owner_id: str
    file_name: str
    mime_type: str
    content: bytes = b""

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class PipelineOutcome:
    """Result of a completed run."""

    public_url: str
    analysis: str
