from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from src.insights.exceptions import InsightsInputError
from src.insights.models import AnalysisResult


log = logging.getLogger(__name__)


def parse_analysis_result(data: Any) -> AnalysisResult:
    """Validates an already-decoded AnalysisResult document (camelCase wire names)."""
    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as e:
        raise InsightsInputError(f"Invalid AnalysisResult: {e.error_count()} error(s)\n{e}") from e


def load_analysis_result(path: Path) -> AnalysisResult:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InsightsInputError(f"Cannot read {path}: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InsightsInputError(f"Invalid JSON in {path}: {e}") from e
    result = parse_analysis_result(data)
    log.debug("Loaded %d month(s) from %s", len(result.monthly_expenses), path)
    return result
