from __future__ import annotations

import datetime as dt
import logging
from decimal import Decimal
from typing import Optional, Sequence

from src.insights.categories import aggregate_amounts, month_category_amounts, rank_categories
from src.insights.models import AnalysisResult, CategoryTrend, CategoryTrends, MonthlyExpense, MonthlyTotals
from src.insights.normalize import parse_amount


log = logging.getLogger(__name__)

OTHER_LABEL = "Other"
_MONTH_FORMATS = ("%b %Y", "%B %Y", "%Y-%m")


def _parse_month_label(label: str) -> Optional[dt.date]:
    s = (label or "").strip()
    for fmt in _MONTH_FORMATS:
        try:
            return dt.datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


def chronological_months(months: Sequence[MonthlyExpense]) -> list[MonthlyExpense]:
    """
    Oldest month first.

    Labels like "Dec 2025", "December 2025" or "2025-12" are sorted by date. If any label
    does not parse, the input is assumed to be newest-first and is reversed.
    """
    dates = [_parse_month_label(m.month) for m in months]
    if all(d is not None for d in dates):
        order = sorted(range(len(months)), key=lambda i: dates[i])
        return [months[i] for i in order]
    log.debug("Unrecognized month label(s); assuming newest-first input order")
    return list(reversed(months))


def category_trends(
    months: Sequence[MonthlyExpense],
    top_n: int = 6,
    *,
    other_label: str = OTHER_LABEL,
) -> CategoryTrends:
    """
    Per-category monthly series for the `top_n` categories by full-period total.

    Every other category is folded into one `other_label` series; when a selected
    category already carries that name, the bucket is labelled "<other_label> (rest)".
    All series have one value per month in chronological order (0 where a month has no
    data), and series that are zero throughout are dropped.
    """
    ordered = chronological_months(months)
    labels = [m.month for m in ordered]
    top = rank_categories(aggregate_amounts(ordered))[: max(int(top_n), 0)]
    top_set = set(top)

    bucket = other_label
    while bucket in top_set:
        bucket = f"{bucket} (rest)"
    names = [*top, bucket]
    series: dict[str, list[Decimal]] = {n: [Decimal("0")] * len(ordered) for n in names}

    for idx, m in enumerate(ordered):
        for cat, amount in month_category_amounts(m).items():
            key = cat if cat in top_set else bucket
            series[key][idx] += amount

    trends = [CategoryTrend(category=n, series=series[n]) for n in names if any(v != 0 for v in series[n])]
    return CategoryTrends(labels=labels, trends=trends)


def monthly_totals(result: AnalysisResult) -> MonthlyTotals:
    ordered = chronological_months(result.monthly_expenses)
    values = [parse_amount(m.sum) for m in ordered]
    if result.average_month_expenses:
        average = parse_amount(result.average_month_expenses)
    elif values:
        average = sum(values, Decimal("0")) / len(values)
    else:
        average = Decimal("0")
    return MonthlyTotals(labels=[m.month for m in ordered], values=values, average=average)
