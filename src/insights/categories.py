from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional

from src.insights.models import AnalysisResult, CategoryBreakdown, CategoryPercentageRow, MonthlyExpense
from src.insights.normalize import to_decimal


PERIOD_SCOPE = "period"
_PERIOD_MODES = {"period", "year"}


def month_category_amounts(month: MonthlyExpense) -> dict[str, Decimal]:
    return {name: to_decimal(info.amount) for name, info in (month.categories or {}).items()}


def aggregate_amounts(months: Iterable[MonthlyExpense]) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for m in months:
        for cat, amount in month_category_amounts(m).items():
            totals[cat] += amount
    return dict(totals)


def rank_categories(amounts: dict[str, Decimal]) -> list[str]:
    """Category names by total descending, equal totals by name ascending."""
    return [k for k, _ in sorted(amounts.items(), key=lambda kv: (-kv[1], kv[0]))]


def percentage_rows(amounts: dict[str, Decimal]) -> list[CategoryPercentageRow]:
    """
    Share-of-spend rows for the positive totals in `amounts`.

    Zero and negative totals (refund-only categories) are dropped before the grand total
    is taken, so the percents of the returned rows sum to 100 whenever any row is returned.
    """
    kept = {k: v for k, v in amounts.items() if v > 0}
    grand = sum(kept.values(), Decimal("0"))
    rows: list[CategoryPercentageRow] = []
    for cat in rank_categories(kept):
        total = kept[cat]
        percent = (total / grand * Decimal("100")) if grand > 0 else Decimal("0")
        rows.append(CategoryPercentageRow(category=cat, total=total, percent=percent))
    return rows


def select_month(result: AnalysisResult, label: Optional[str]) -> Optional[MonthlyExpense]:
    months = result.monthly_expenses
    if not months:
        return None
    for m in months:
        if m.month == label:
            return m
    return months[0]


def category_breakdown(
    result: AnalysisResult,
    *,
    mode: str = "month",
    selected_month: Optional[str] = None,
    saturation: int = 70,
    lightness: int = 60,
) -> CategoryBreakdown:
    """
    Category share rows for one month ("month") or for every month ("period"/"year").

    Colors are always ranked on the full period, so a category keeps its color when the
    caller switches views.
    """
    from src.insights.colors import color_map

    m = (mode or "").strip().lower()
    colors = color_map(result.monthly_expenses, saturation=saturation, lightness=lightness)
    if m in _PERIOD_MODES:
        amounts = aggregate_amounts(result.monthly_expenses)
        return CategoryBreakdown(scope=PERIOD_SCOPE, rows=percentage_rows(amounts), colors=colors)
    if m != "month":
        raise ValueError(f"Unknown breakdown mode: {mode!r} (expected month|period)")
    month = select_month(result, selected_month)
    if month is None:
        return CategoryBreakdown(scope=selected_month or "", rows=[], colors=colors)
    rows = percentage_rows(month_category_amounts(month))
    return CategoryBreakdown(scope=month.month, rows=rows, colors=colors)
