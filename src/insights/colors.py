from __future__ import annotations

from typing import Iterable

from src.insights.categories import aggregate_amounts, rank_categories
from src.insights.models import MonthlyExpense


DEFAULT_SATURATION = 70
DEFAULT_LIGHTNESS = 60


def hsl_colors(n: int, *, saturation: int = DEFAULT_SATURATION, lightness: int = DEFAULT_LIGHTNESS) -> list[str]:
    # Hues evenly spaced around the full circle, rounded half up.
    return [f"hsl({int(360 * i / n + 0.5)}, {saturation}%, {lightness}%)" for i in range(max(n, 0))]


def color_map(
    months: Iterable[MonthlyExpense],
    *,
    saturation: int = DEFAULT_SATURATION,
    lightness: int = DEFAULT_LIGHTNESS,
) -> dict[str, str]:
    """
    Maps every category seen in `months` to a color chosen by its rank on total spend.

    Pass all months of the result (never a selected month) so that the month and period
    views share one assignment.
    """
    ranked = rank_categories(aggregate_amounts(months))
    palette = hsl_colors(len(ranked), saturation=saturation, lightness=lightness)
    return {cat: palette[i] for i, cat in enumerate(ranked)}
