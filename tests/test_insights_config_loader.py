from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from src.insights.config import InsightsConfig, load_insights_config
from src.insights.exceptions import InsightsInputError
from src.insights.loader import load_analysis_result, parse_analysis_result


def test_config_defaults_when_no_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    cfg, path = load_insights_config()
    assert path is None
    assert cfg.trends.top_n == 6
    assert cfg.recurring.top_n == 10
    assert cfg.colors.saturation == 70
    assert cfg.colors.lightness == 60


def test_config_from_yaml_with_section(tmp_path: Path) -> None:
    p = tmp_path / "insights.yaml"
    p.write_text(yaml.safe_dump({"insights": {"trends": {"top_n": 3}, "colors": {"lightness": 45}}}))
    cfg, path = load_insights_config(p)
    assert path == str(p)
    assert cfg.trends.top_n == 3
    assert cfg.colors.lightness == 45
    assert cfg.recurring == InsightsConfig().recurring


def test_config_in_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "insights.yaml").write_text(yaml.safe_dump({"default_mode": "period"}))
    cfg, path = load_insights_config()
    assert path == "insights.yaml"
    assert cfg.default_mode == "period"


def test_load_analysis_result_camel_case(tmp_path: Path, document: dict[str, Any]) -> None:
    p = tmp_path / "analysis.json"
    p.write_text(json.dumps(document))
    r = load_analysis_result(p)
    assert r.average_month_expenses == "310.00 euros"
    assert [m.month for m in r.monthly_expenses] == ["Dec 2025", "Nov 2025", "Oct 2025"]
    assert r.monthly_expenses[0].categories["Bills"].transactions["2"].startswith("card payment")


def test_load_analysis_result_errors(tmp_path: Path) -> None:
    with pytest.raises(InsightsInputError):
        load_analysis_result(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(InsightsInputError):
        load_analysis_result(bad)
    with pytest.raises(InsightsInputError):
        parse_analysis_result({"monthlyExpenses": [{"sum": "1 euro"}]})


def test_analysis_result_is_immutable(document: dict[str, Any]) -> None:
    r = parse_analysis_result(document)
    with pytest.raises(Exception):
        r.monthly_expenses[0].month = "Jan 2000"
