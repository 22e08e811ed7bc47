"""
Human-readable rendering of a regime comparison.

Amounts use Indian digit grouping (₹12,34,567) with no decimals, the way
salaries are quoted in India.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from taxregime.evaluator.schemas import Comparison

_REGIME_LABELS = {"old": "Old Regime", "new": "New Regime"}


def format_inr(amount: Decimal | int | float) -> str:
    """Format an amount as rupees: last three digits, then groups of two."""
    rupees = Decimal(str(amount)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    sign = "-" if rupees < 0 else ""
    digits = str(abs(int(rupees)))

    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups: list[str] = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])

    return f"{sign}₹{digits}"


def build_summary(comparison: Comparison) -> str:
    if comparison.savings == 0:
        return "Both regimes result in the same tax. New Regime is recommended."
    label = _REGIME_LABELS[comparison.cheaper]
    return (
        f"{label} is better for you! "
        f"You can save {format_inr(comparison.savings)} annually."
    )
