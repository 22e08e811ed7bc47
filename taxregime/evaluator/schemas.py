"""
schemas.py — evaluator data contracts (pydantic v2).

Defines:
  - TaxBreakdown  (full tax computation for one regime)
  - Comparison    (which regime is cheaper, and by how much)
  - TaxResult     (both breakdowns + comparison — output of calculate())

All models are frozen value objects: built once per calculation, never mutated.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from taxregime.intake.schemas import Money, Regime


class TaxBreakdown(BaseModel):
    """
    Complete tax computation for a single regime (old or new).

    Computation sequence:
      1. taxable_income = max(0, gross - standard - hra - 80C - other)
      2. income_tax = progressive slab tax on taxable_income
      3. cess = 4% of income_tax
      4. total_tax = income_tax + cess
      5. net_salary = gross - total_tax
      6. effective_rate = 100 * total_tax / gross  (0 when gross is 0)

    New regime: hra_exemption, section_80c and other_deductions are always 0.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_salary: Money
    standard_deduction: Money
    hra_exemption: Money
    section_80c: Money
    other_deductions: Money
    taxable_income: Money
    income_tax: Money            # Slab tax, before cess
    cess: Money                  # 4% of income_tax
    total_tax: Money             # income_tax + cess (final payable amount)
    net_salary: Money
    effective_rate: Money        # Percentage of gross_salary


class Comparison(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    cheaper: Regime              # Ties resolve to "new"
    savings: Money               # abs(old.total_tax - new.total_tax)


class TaxResult(BaseModel):
    """Output of calculate(): one breakdown per regime plus the comparison."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    old_regime: TaxBreakdown
    new_regime: TaxBreakdown
    comparison: Comparison
    summary: str                 # One-line recommendation, rupee amounts formatted


__all__ = [
    "TaxBreakdown",
    "Comparison",
    "TaxResult",
]
