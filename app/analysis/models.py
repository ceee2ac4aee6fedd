from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisResult:
    """Free-form reviewer feedback produced by the text-generation service."""

    narrative_feedback: str
