from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional


_WS_RE = re.compile(r"\s+")
_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")
_SPENT_RE = re.compile(r"\bspent\s+(-?\d+(?:\.\d+)?)\s+euros?\b", re.IGNORECASE)

_IN_RE = re.compile(r" in ", re.IGNORECASE)
_ON_RE = re.compile(r" on ", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedLine:
    name: str
    amount: Decimal


def money_2dp(value: Decimal) -> Decimal:
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def parse_amount(text: Optional[str]) -> Decimal:
    """
    Returns the first decimal number found anywhere in `text` ("1330.84 euros" -> 1330.84).

    A string without a number yields 0; this never raises.
    """
    m = _NUMBER_RE.search(text or "")
    if not m:
        return Decimal("0")
    return Decimal(m.group(0))


def to_decimal(value: Any) -> Decimal:
    """Coerces a loosely typed category amount; anything non-numeric counts as 0."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        d = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not d.is_finite():
        return Decimal("0")
    return d


def normalize_merchant_name(name: str) -> str:
    return _WS_RE.sub(" ", name or "").strip()


def parse_summary_line(line: Optional[str]) -> Optional[ParsedLine]:
    """
    Extracts (merchant, amount) from "spent <amount> euro(s) in <merchant> on <date>".

    The merchant is everything after the FIRST " in " of the line and before the LAST
    " on " of what follows it, so "spent 5 euros in Bar on Main on Tue Dec 09 2025"
    yields "Bar on Main". A merchant that itself contains " in " keeps it (only the
    first occurrence splits). Without any " on " the whole remainder is the merchant.
    Keyword matching is case-insensitive; lines without "spent <n> euro(s)", without
    " in ", or with an empty merchant are rejected with None.
    """
    s = line or ""
    m = _SPENT_RE.search(s)
    if not m:
        return None
    first_in = _IN_RE.search(s)
    if not first_in:
        return None
    rest = s[first_in.end():]
    ons = list(_ON_RE.finditer(rest))
    if ons:
        rest = rest[: ons[-1].start()]
    name = rest.strip()
    if not name:
        return None
    return ParsedLine(name=name, amount=Decimal(m.group(1)))
