from app.analysis.analyzer import ResumeAnalyzer
from app.analysis.base import BaseAnalyzer
from app.analysis.factory import AnalyzerFactory

__all__ = ["AnalyzerFactory", "BaseAnalyzer", "ResumeAnalyzer"]
