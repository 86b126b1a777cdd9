from __future__ import annotations

from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


RESERVED_TRANSACTION_KEY = "on average"


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class CategoryInfo(_Snapshot):
    amount: Union[float, str, None] = None
    percentage: Union[float, str, None] = None
    transactions: Optional[dict[str, str]] = None


class MonthlyExpense(_Snapshot):
    month: str
    sum: str = ""
    categories: Optional[dict[str, CategoryInfo]] = None


class AnalysisResult(_Snapshot):
    average_month_expenses: Optional[str] = Field(default=None, alias="averageMonthExpenses")
    monthly_expenses: list[MonthlyExpense] = Field(default_factory=list, alias="monthlyExpenses")


class CategoryPercentageRow(BaseModel):
    category: str
    total: Decimal
    percent: Decimal


class CategoryBreakdown(BaseModel):
    scope: str  # month label, or "period"
    rows: list[CategoryPercentageRow]
    colors: dict[str, str] = Field(default_factory=dict)


class RecurringTransaction(BaseModel):
    name: str
    category: str
    count: int
    avg_amount: Decimal
    total_amount: Decimal


class IdenticalRecurringTransaction(BaseModel):
    name: str
    category: str
    amount: Decimal
    count: int
    total_amount: Decimal


class CategoryTrend(BaseModel):
    category: str
    series: list[Decimal]


class CategoryTrends(BaseModel):
    labels: list[str]
    trends: list[CategoryTrend]


class MonthlyTotals(BaseModel):
    labels: list[str]
    values: list[Decimal]
    average: Decimal
