from abc import ABC, abstractmethod

from app.analysis.models import AnalysisResult


class BaseAnalyzer(ABC):
    """Contract for resume analyzers."""

    @abstractmethod
    def analyze(self, resume_text: str) -> AnalysisResult:
        """Request reviewer feedback for extracted resume text.

        Raises:
            AnalysisError: on any failure; feedback is never substituted.
        """
