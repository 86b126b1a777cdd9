from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Iterator

from src.insights.models import (
    RESERVED_TRANSACTION_KEY,
    IdenticalRecurringTransaction,
    MonthlyExpense,
    RecurringTransaction,
)
from src.insights.normalize import money_2dp, normalize_merchant_name, parse_summary_line


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Line:
    merchant: str
    amount: Decimal
    category: str


@dataclass
class _Group:
    count: int = 0
    total: Decimal = Decimal("0")
    by_cat: dict[str, int] = field(default_factory=lambda: defaultdict(int))

    def add(self, line: _Line) -> None:
        self.count += 1
        self.total += line.amount
        self.by_cat[line.category] += 1

    def average(self) -> Decimal:
        return self.total / self.count if self.count else Decimal("0")

    def dominant_category(self) -> str:
        # Most frequent category; equal tallies resolve to the lowest name.
        return sorted(self.by_cat.items(), key=lambda kv: (-kv[1], kv[0]))[0][0]


def _iter_lines(months: Iterable[MonthlyExpense]) -> Iterator[_Line]:
    """
    Yields every parseable transaction summary line with its category.

    Categories and transaction keys are walked in name order. The reserved "on average"
    row and lines that do not match the summary pattern are skipped.
    """
    skipped = 0
    for m in months:
        cats = m.categories or {}
        for cat in sorted(cats):
            txns = cats[cat].transactions or {}
            for key in sorted(txns):
                if key == RESERVED_TRANSACTION_KEY:
                    continue
                parsed = parse_summary_line(txns[key])
                if parsed is None:
                    skipped += 1
                    continue
                name = normalize_merchant_name(parsed.name)
                if not name:
                    skipped += 1
                    continue
                yield _Line(merchant=name, amount=parsed.amount, category=cat)
    if skipped:
        log.debug("Skipped %d transaction line(s) not matching the summary pattern", skipped)


def top_recurring(months: Iterable[MonthlyExpense], top_n: int = 10) -> list[RecurringTransaction]:
    """
    Groups transaction lines by merchant name regardless of amount.

    Ordered by occurrence count, then average amount (both descending), then name.
    """
    groups: dict[str, _Group] = defaultdict(_Group)
    for line in _iter_lines(months):
        groups[line.merchant].add(line)

    # Ranked on the exact average; only the emitted value is rounded to cents.
    ranked = sorted(groups.items(), key=lambda kv: (-kv[1].count, -kv[1].average(), kv[0]))
    out: list[RecurringTransaction] = []
    for name, g in ranked[: max(int(top_n), 0)]:
        out.append(
            RecurringTransaction(
                name=name,
                category=g.dominant_category(),
                count=g.count,
                avg_amount=money_2dp(g.average()),
                total_amount=money_2dp(g.total),
            )
        )
    return out


def identical_recurring(months: Iterable[MonthlyExpense], top_n: int = 10) -> list[IdenticalRecurringTransaction]:
    """
    Groups transaction lines by (merchant, amount to the cent): fixed-price charges such
    as subscriptions. A charge seen only once is not recurring and is left out.
    """
    groups: dict[tuple[str, Decimal], _Group] = defaultdict(_Group)
    for line in _iter_lines(months):
        groups[(line.merchant, money_2dp(line.amount))].add(line)

    out: list[IdenticalRecurringTransaction] = []
    for (name, amount), g in groups.items():
        if g.count < 2:
            continue
        out.append(
            IdenticalRecurringTransaction(
                name=name,
                category=g.dominant_category(),
                amount=amount,
                count=g.count,
                total_amount=money_2dp(amount * g.count),
            )
        )
    out.sort(key=lambda r: (-r.count, -r.amount, r.name))
    return out[: max(int(top_n), 0)]
