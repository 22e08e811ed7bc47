"""
Tax engine — old vs new regime for salaried income.
Pure Python, deterministic Decimal arithmetic. Same input → same output.

Pipeline:
  resolve_gross_income → calculate_hra_exemption (detailed input only)
  → calculate_old_regime + calculate_new_regime → compare_regimes

Old-regime 80C and "other deductions" are flat approximations
(10% of gross capped at ₹1.5L, and ₹25K), not user-entered figures.
"""
from __future__ import annotations

from decimal import Decimal

from taxregime.evaluator.schemas import Comparison, TaxBreakdown, TaxResult
from taxregime.evaluator.summary import build_summary
from taxregime.intake.schemas import CityClass, DetailedIncome, TaxInput

# ===========================================================================
# OLD REGIME SLAB BREAKPOINTS
# ===========================================================================

OLD_SLAB_2_5L = Decimal(250_000)
OLD_SLAB_5L   = Decimal(500_000)
OLD_SLAB_10L  = Decimal(1_000_000)

# ===========================================================================
# NEW REGIME SLAB BREAKPOINTS
# ===========================================================================

NEW_SLAB_3L  = Decimal(300_000)
NEW_SLAB_7L  = Decimal(700_000)
NEW_SLAB_10L = Decimal(1_000_000)
NEW_SLAB_12L = Decimal(1_200_000)
NEW_SLAB_15L = Decimal(1_500_000)

# ===========================================================================
# DEDUCTION CONSTANTS
# ===========================================================================

OLD_STD_DEDUCTION     = Decimal(50_000)
NEW_STD_DEDUCTION     = Decimal(75_000)

CAP_80C               = Decimal(150_000)
RATE_80C              = Decimal("0.10")    # Assumed investment: 10% of gross
OLD_OTHER_DEDUCTIONS  = Decimal(25_000)    # Flat allowance for 80D and similar

HRA_METRO_PCT         = Decimal("0.50")
HRA_NON_METRO_PCT     = Decimal("0.40")
HRA_RENT_BASIC_PCT    = Decimal("0.10")

CESS_RATE             = Decimal("0.04")

_ZERO = Decimal(0)
_HUNDRED = Decimal(100)
_NO_CEILING = Decimal("Infinity")

# ===========================================================================
# SLAB TABLES — list[tuple[ceiling, rate]]
# ===========================================================================

OLD_REGIME_SLABS: list[tuple[Decimal, Decimal]] = [
    (OLD_SLAB_2_5L, Decimal("0.00")),   # 0–2.5L: 0%
    (OLD_SLAB_5L,   Decimal("0.05")),   # 2.5–5L: 5%
    (OLD_SLAB_10L,  Decimal("0.20")),   # 5–10L: 20%
    (_NO_CEILING,   Decimal("0.30")),   # >10L: 30%
]

NEW_REGIME_SLABS: list[tuple[Decimal, Decimal]] = [
    (NEW_SLAB_3L,  Decimal("0.00")),    # 0–3L: 0%
    (NEW_SLAB_7L,  Decimal("0.05")),    # 3–7L: 5%
    (NEW_SLAB_10L, Decimal("0.10")),    # 7–10L: 10%
    (NEW_SLAB_12L, Decimal("0.15")),    # 10–12L: 15%
    (NEW_SLAB_15L, Decimal("0.20")),    # 12–15L: 20%
    (_NO_CEILING,  Decimal("0.30")),    # >15L: 30%
]


class InvalidIncomeError(ValueError):
    """Resolved gross income is zero or negative — no breakdown can be produced."""

    def __init__(self, gross_income: Decimal) -> None:
        self.gross_income = gross_income
        super().__init__("Please enter a valid salary amount (gross income must be above zero)")


# ===========================================================================
# INTERNAL HELPERS (pure functions — no side effects, no I/O)
# ===========================================================================

def _calculate_slab_tax(taxable_income: Decimal, slabs: list[tuple[Decimal, Decimal]]) -> Decimal:
    """
    Apply progressive slab tax to taxable_income using a bracket-list pattern.
    Accumulates tax on each bracket, stops when taxable_income <= previous ceiling.
    """
    tax = _ZERO
    prev_ceiling = _ZERO
    for ceiling, rate in slabs:
        if taxable_income <= prev_ceiling:
            break
        slab_income = min(taxable_income, ceiling) - prev_ceiling
        tax += slab_income * rate
        prev_ceiling = ceiling
    return tax


def _build_breakdown(
    gross_income: Decimal,
    standard_deduction: Decimal,
    hra_exemption: Decimal,
    section_80c: Decimal,
    other_deductions: Decimal,
    slabs: list[tuple[Decimal, Decimal]],
) -> TaxBreakdown:
    taxable_income = max(
        _ZERO,
        gross_income - standard_deduction - hra_exemption - section_80c - other_deductions,
    )
    income_tax = _calculate_slab_tax(taxable_income, slabs)
    cess = income_tax * CESS_RATE
    total_tax = income_tax + cess
    effective_rate = total_tax * _HUNDRED / gross_income if gross_income > 0 else _ZERO

    return TaxBreakdown(
        gross_salary=gross_income,
        standard_deduction=standard_deduction,
        hra_exemption=hra_exemption,
        section_80c=section_80c,
        other_deductions=other_deductions,
        taxable_income=taxable_income,
        income_tax=income_tax,
        cess=cess,
        total_tax=total_tax,
        net_salary=gross_income - total_tax,
        effective_rate=effective_rate,
    )


# ===========================================================================
# INPUT NORMALIZER
# ===========================================================================

def resolve_gross_income(tax_input: TaxInput) -> Decimal:
    """
    Gross annual income from whichever field set the input's mode selects.
    Does not reject zero — that is calculate()'s job.
    """
    if isinstance(tax_input, DetailedIncome):
        return tax_input.basic_salary + tax_input.hra + tax_input.other_allowances
    return tax_input.total_annual_salary


# ===========================================================================
# HRA EXEMPTION
# ===========================================================================

def calculate_hra_exemption(
    basic: Decimal,
    hra: Decimal,
    rent_paid: Decimal,
    city_class: CityClass,
) -> Decimal:
    """
    HRA exemption under Section 10(13A): minimum of three components, floored at 0.

    Component 1: HRA received
    Component 2: 50% of basic (metro) or 40% (non-metro)
    Component 3: rent_paid - 10% of basic   (may be negative; the floor handles it)

    Returns 0 immediately when no rent is paid.
    """
    if rent_paid == 0:
        return _ZERO
    city_pct = HRA_METRO_PCT if city_class == CityClass.metro else HRA_NON_METRO_PCT
    component_1 = hra
    component_2 = city_pct * basic
    component_3 = rent_paid - HRA_RENT_BASIC_PCT * basic
    return max(_ZERO, min(component_1, component_2, component_3))


# ===========================================================================
# REGIME CALCULATORS
# ===========================================================================

def calculate_old_regime(gross_income: Decimal, hra_exemption: Decimal) -> TaxBreakdown:
    """
    Old regime: std deduction ₹50K, HRA exemption, 80C (10% of gross, cap ₹1.5L),
    flat ₹25K other deductions. Slabs 0 / 5 / 20 / 30% at 2.5L / 5L / 10L.
    """
    section_80c = min(CAP_80C, RATE_80C * gross_income)
    return _build_breakdown(
        gross_income,
        standard_deduction=OLD_STD_DEDUCTION,
        hra_exemption=hra_exemption,
        section_80c=section_80c,
        other_deductions=OLD_OTHER_DEDUCTIONS,
        slabs=OLD_REGIME_SLABS,
    )


def calculate_new_regime(gross_income: Decimal) -> TaxBreakdown:
    """
    New regime: std deduction ₹75K only.
    Slabs 0 / 5 / 10 / 15 / 20 / 30% at 3L / 7L / 10L / 12L / 15L.
    """
    return _build_breakdown(
        gross_income,
        standard_deduction=NEW_STD_DEDUCTION,
        hra_exemption=_ZERO,
        section_80c=_ZERO,
        other_deductions=_ZERO,
        slabs=NEW_REGIME_SLABS,
    )


# ===========================================================================
# COMPARISON
# ===========================================================================

def compare_regimes(old: TaxBreakdown, new: TaxBreakdown) -> Comparison:
    """Lower total tax wins; ties go to the new regime."""
    cheaper = "old" if old.total_tax < new.total_tax else "new"
    return Comparison(cheaper=cheaper, savings=abs(old.total_tax - new.total_tax))


# ===========================================================================
# CALCULATE — public API
# ===========================================================================

def calculate(tax_input: TaxInput) -> TaxResult:
    """
    Compute both regimes for one input and compare them.

    Raises:
        InvalidIncomeError: if the resolved gross income is <= 0.
    """
    gross_income = resolve_gross_income(tax_input)
    if gross_income <= 0:
        raise InvalidIncomeError(gross_income)

    if isinstance(tax_input, DetailedIncome):
        hra_exemption = calculate_hra_exemption(
            tax_input.basic_salary,
            tax_input.hra,
            tax_input.rent_paid,
            tax_input.city_class,
        )
    else:
        hra_exemption = _ZERO

    old = calculate_old_regime(gross_income, hra_exemption)
    new = calculate_new_regime(gross_income)
    comparison = compare_regimes(old, new)

    return TaxResult(
        old_regime=old,
        new_regime=new,
        comparison=comparison,
        summary=build_summary(comparison),
    )
