from __future__ import annotations


class InsightsError(Exception):
    pass


class InsightsInputError(InsightsError):
    """Raised when an AnalysisResult document cannot be read or does not validate."""
