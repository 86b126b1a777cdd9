from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from src.insights.models import (
    CategoryBreakdown,
    CategoryTrends,
    IdenticalRecurringTransaction,
    MonthlyTotals,
    RecurringTransaction,
)
from src.insights.normalize import money_2dp


def _money(value: Decimal) -> str:
    return str(money_2dp(value))


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]], *, align_left: int = 1) -> str:
    """Fixed-width text table; the first `align_left` columns are left aligned, the rest right."""
    if not rows:
        return "(no rows)"
    widths = [max(len(h), *(len(r[i]) for r in rows)) for i, h in enumerate(headers)]

    def line(cells: Sequence[str]) -> str:
        parts = [f"{c:<{w}}" if i < align_left else f"{c:>{w}}" for i, (c, w) in enumerate(zip(cells, widths))]
        return "  ".join(parts).rstrip()

    out = [line(headers), line(["-" * w for w in widths])]
    for r in rows:
        out.append(line(r))
    return "\n".join(out)


def breakdown_table(b: CategoryBreakdown) -> str:
    rows = [
        [r.category, _money(r.total), f"{r.percent.quantize(Decimal('0.1'))}%", b.colors.get(r.category, "")]
        for r in b.rows
    ]
    return format_table(("Category", "Total", "Share", "Color"), rows)


def recurring_table(items: Sequence[RecurringTransaction]) -> str:
    rows = [[r.name, r.category, str(r.count), _money(r.avg_amount), _money(r.total_amount)] for r in items]
    return format_table(("Merchant", "Category", "Count", "Average", "Total"), rows, align_left=2)


def subscriptions_table(items: Sequence[IdenticalRecurringTransaction]) -> str:
    rows = [[r.name, r.category, _money(r.amount), str(r.count), _money(r.total_amount)] for r in items]
    return format_table(("Merchant", "Category", "Amount", "Count", "Total"), rows, align_left=2)


def trends_table(t: CategoryTrends) -> str:
    rows = [[tr.category, *(_money(v) for v in tr.series)] for tr in t.trends]
    return format_table(("Category", *t.labels), rows)


def totals_table(t: MonthlyTotals) -> str:
    rows = [[label, _money(v)] for label, v in zip(t.labels, t.values)]
    return format_table(("Month", "Total"), rows) + f"\nAverage: {_money(t.average)}"
