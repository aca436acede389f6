"""Doctor finding models."""

from kss.models.doctor.finding import AnalysisResult, Finding

__all__ = ["AnalysisResult", "Finding"]
