from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.insights.models import AnalysisResult


def _line(amount: str, merchant: str, date: str = "Tue Dec 09 2025") -> str:
    return f"spent {amount} euros in {merchant} on {date}"


def sample_document() -> dict[str, Any]:
    # Newest first, as produced by the analyzer.
    return {
        "averageMonthExpenses": "310.00 euros",
        "monthlyExpenses": [
            {
                "month": "Dec 2025",
                "sum": "330.00 euros",
                "categories": {
                    "Groceries": {
                        "amount": 200.0,
                        "percentage": 60.6,
                        "transactions": {
                            "1": _line("120.00", "Lidl Helsinki"),
                            "2": _line("80.00", "K-Market"),
                            "on average": "spent 100 euros in average on groceries",
                        },
                    },
                    "Entertainment": {
                        "amount": 12.99,
                        "percentage": 3.9,
                        "transactions": {"1": _line("12.99", "Netflix")},
                    },
                    "Bills": {
                        "amount": 117.01,
                        "percentage": 35.5,
                        "transactions": {
                            "1": _line("28.33", "Paytrail Oyj DNA Oyj Mobiilipa"),
                            "2": "card payment without a recognizable pattern",
                        },
                    },
                },
            },
            {
                "month": "Nov 2025",
                "sum": "290.00 euros",
                "categories": {
                    "Groceries": {
                        "amount": 150.0,
                        "percentage": 51.7,
                        "transactions": {"1": _line("150.00", "Lidl  Helsinki", "Mon Nov 10 2025")},
                    },
                    "Entertainment": {
                        "amount": 22.98,
                        "percentage": 7.9,
                        "transactions": {
                            "1": _line("12.99", "Netflix", "Fri Nov 07 2025"),
                            "2": _line("9.99", "Spotify", "Sat Nov 08 2025"),
                        },
                    },
                    "Travel": {
                        "amount": 117.02,
                        "percentage": 40.4,
                        "transactions": {"1": _line("117.02", "VR Group", "Sun Nov 02 2025")},
                    },
                },
            },
            {
                "month": "Oct 2025",
                "sum": "12.99 euros",
                "categories": {
                    "Entertainment": {
                        "amount": 12.99,
                        "percentage": 100.0,
                        "transactions": {"1": _line("12.99", "Netflix", "Tue Oct 07 2025")},
                    },
                },
            },
        ],
    }


@pytest.fixture()
def document() -> dict[str, Any]:
    return sample_document()


@pytest.fixture()
def result() -> AnalysisResult:
    return AnalysisResult.model_validate(sample_document())
