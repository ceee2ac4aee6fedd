class AnalysisError(Exception):
    """Raised when resume analysis fails."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the AI provider call fails due to network, quota or provider errors."""


class AnalysisResponseError(AnalysisError):
    """Raised when the AI provider returns an unusable response."""
