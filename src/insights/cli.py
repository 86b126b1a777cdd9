from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from dotenv import load_dotenv

from src.insights.categories import category_breakdown
from src.insights.colors import color_map
from src.insights.config import InsightsConfig, load_insights_config
from src.insights.exceptions import InsightsInputError
from src.insights.loader import load_analysis_result
from src.insights.models import AnalysisResult
from src.insights.recurring import identical_recurring, top_recurring
from src.insights.reports import (
    breakdown_table,
    recurring_table,
    subscriptions_table,
    totals_table,
    trends_table,
)
from src.insights.trends import category_trends, monthly_totals


insights_app = typer.Typer(help="Spending insights over an analyzed monthly expense file.")

_FILE_HELP = "AnalysisResult JSON file (monthlyExpenses / averageMonthExpenses)"


def _setup(verbose: bool, config_path: Optional[Path]) -> InsightsConfig:
    load_dotenv()
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    cfg, cfg_path = load_insights_config(config_path)
    if cfg_path:
        typer.echo(f"Using config: {cfg_path}", err=True)
    return cfg


def _load(file: Path) -> AnalysisResult:
    try:
        return load_analysis_result(file)
    except InsightsInputError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)


def _emit(payload: Any, text: str, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(payload, indent=2))
    else:
        typer.echo(text)


def _top(value: int, default: int) -> int:
    return value if value > 0 else default


@insights_app.command("breakdown")
def breakdown_cmd(
    file: Path = typer.Option(..., exists=True, dir_okay=False, help=_FILE_HELP),
    mode: str = typer.Option("", help="month|period (defaults to config)"),
    month: str = typer.Option("", help="Month label for mode=month (falls back to the first month)"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    config: Optional[Path] = typer.Option(None, dir_okay=False, help="Config YAML override"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    cfg = _setup(verbose, config)
    result = _load(file)
    try:
        b = category_breakdown(
            result,
            mode=(mode.strip() or cfg.default_mode),
            selected_month=(month.strip() or None),
            saturation=cfg.colors.saturation,
            lightness=cfg.colors.lightness,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))
    _emit(b.model_dump(mode="json"), f"Category breakdown ({b.scope})\n" + breakdown_table(b), as_json)


@insights_app.command("trends")
def trends_cmd(
    file: Path = typer.Option(..., exists=True, dir_okay=False, help=_FILE_HELP),
    top: int = typer.Option(0, help="Number of categories to chart (defaults to config)"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    config: Optional[Path] = typer.Option(None, dir_okay=False, help="Config YAML override"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    cfg = _setup(verbose, config)
    result = _load(file)
    t = category_trends(result.monthly_expenses, _top(top, cfg.trends.top_n), other_label=cfg.trends.other_label)
    _emit(t.model_dump(mode="json"), trends_table(t), as_json)


@insights_app.command("recurring")
def recurring_cmd(
    file: Path = typer.Option(..., exists=True, dir_okay=False, help=_FILE_HELP),
    top: int = typer.Option(0, help="Max merchants to show (defaults to config)"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    config: Optional[Path] = typer.Option(None, dir_okay=False, help="Config YAML override"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    cfg = _setup(verbose, config)
    result = _load(file)
    items = top_recurring(result.monthly_expenses, _top(top, cfg.recurring.top_n))
    _emit([i.model_dump(mode="json") for i in items], recurring_table(items), as_json)


@insights_app.command("subscriptions")
def subscriptions_cmd(
    file: Path = typer.Option(..., exists=True, dir_okay=False, help=_FILE_HELP),
    top: int = typer.Option(0, help="Max charges to show (defaults to config)"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    config: Optional[Path] = typer.Option(None, dir_okay=False, help="Config YAML override"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    cfg = _setup(verbose, config)
    result = _load(file)
    items = identical_recurring(result.monthly_expenses, _top(top, cfg.recurring.top_n))
    _emit([i.model_dump(mode="json") for i in items], subscriptions_table(items), as_json)


@insights_app.command("colors")
def colors_cmd(
    file: Path = typer.Option(..., exists=True, dir_okay=False, help=_FILE_HELP),
    config: Optional[Path] = typer.Option(None, dir_okay=False, help="Config YAML override"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    cfg = _setup(verbose, config)
    result = _load(file)
    colors = color_map(result.monthly_expenses, saturation=cfg.colors.saturation, lightness=cfg.colors.lightness)
    typer.echo(json.dumps(colors, indent=2))


@insights_app.command("totals")
def totals_cmd(
    file: Path = typer.Option(..., exists=True, dir_okay=False, help=_FILE_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    config: Optional[Path] = typer.Option(None, dir_okay=False, help="Config YAML override"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    _setup(verbose, config)
    result = _load(file)
    t = monthly_totals(result)
    _emit(t.model_dump(mode="json"), totals_table(t), as_json)
