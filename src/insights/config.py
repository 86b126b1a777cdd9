from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class RecurringConfig(BaseModel):
    top_n: int = Field(default=10, ge=0)


class TrendsConfig(BaseModel):
    top_n: int = Field(default=6, ge=0)
    other_label: str = "Other"


class ColorsConfig(BaseModel):
    saturation: int = Field(default=70, ge=0, le=100)
    lightness: int = Field(default=60, ge=0, le=100)


class InsightsConfig(BaseModel):
    default_mode: str = "month"  # month|period
    recurring: RecurringConfig = Field(default_factory=RecurringConfig)
    trends: TrendsConfig = Field(default_factory=TrendsConfig)
    colors: ColorsConfig = Field(default_factory=ColorsConfig)


def _candidate_paths() -> list[Path]:
    paths = [Path("insights.yaml")]
    home = Path(os.path.expanduser("~"))
    paths.append(home / ".spend_insights" / "insights.yaml")
    return paths


def load_insights_config(path: Optional[Path] = None) -> tuple[InsightsConfig, Optional[str]]:
    candidates = [path] if path is not None else _candidate_paths()
    for p in candidates:
        if p.exists():
            data = yaml.safe_load(p.read_text()) or {}
            return InsightsConfig.model_validate(data.get("insights") or data), str(p)
    return InsightsConfig(), None
