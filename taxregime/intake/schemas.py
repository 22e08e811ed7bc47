"""
schemas.py — intake data contracts (pydantic v2).

Defines:
  - CityClass enum
  - Money                 (Decimal that serializes to a JSON number)
  - DetailedIncome, TotalIncome, TaxInput  (strict engine input, tagged on `mode`)
  - SalaryForm            (lenient form payload, what the input screen collects)
  - ErrorDetail, ErrorBody, ErrorResponse  (cross-cutting error envelope)

TaxInput is a tagged union: the `mode` field picks the variant, and the variant
only carries the fields that are authoritative for that mode. A total-salary
input has no basic/HRA fields to mistake for real data.
"""
import math
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
)

# Decimal internally, plain number on the wire
Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]

Regime = Literal["old", "new"]

# Input ceilings. Amounts above ₹1 lakh crore are rejected so every derived
# figure stays a finite float on the wire.
MAX_AMOUNT = Decimal(1_000_000_000_000)
MAX_AGE = 150

PROFESSIONS: tuple[str, ...] = (
    "Software Engineer",
    "Doctor",
    "Teacher",
    "Lawyer",
    "Accountant",
    "Manager",
    "Consultant",
    "Sales Executive",
    "Marketing Professional",
    "Engineer",
    "Banker",
    "Government Employee",
    "Business Owner",
    "Freelancer",
    "Other",
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class CityClass(str, Enum):
    metro = "metro"
    non_metro = "non_metro"


# ---------------------------------------------------------------------------
# TaxInput — strict engine input
# ---------------------------------------------------------------------------

class DetailedIncome(BaseModel):
    """
    Salary given as its components. All amounts are ANNUAL, in INR.

    Gross income = basic_salary + hra + other_allowances.
    rent_paid only feeds the HRA exemption (old regime).
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Literal["detailed"] = "detailed"
    basic_salary: Money = Field(default=Decimal(0), ge=0, le=MAX_AMOUNT)
    hra: Money = Field(default=Decimal(0), ge=0, le=MAX_AMOUNT)
    rent_paid: Money = Field(default=Decimal(0), ge=0, le=MAX_AMOUNT)
    other_allowances: Money = Field(default=Decimal(0), ge=0, le=MAX_AMOUNT)
    city_class: CityClass = CityClass.metro


class TotalIncome(BaseModel):
    """Salary given as a single annual figure. No HRA exemption can be claimed."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Literal["total"] = "total"
    total_annual_salary: Money = Field(default=Decimal(0), ge=0, le=MAX_AMOUNT)
    city_class: CityClass = CityClass.metro


TaxInput = Annotated[Union[DetailedIncome, TotalIncome], Field(discriminator="mode")]


# ---------------------------------------------------------------------------
# SalaryForm — lenient form payload
# ---------------------------------------------------------------------------

def coerce_amount(value: Any) -> Any:
    """
    Turn whatever a form field holds into a number.

    Blank, None, unparsable text ("12a", "1,2") and non-finite values all become 0.
    Negative numbers pass through so that the ge=0 constraint reports them.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, Decimal):
        return value if value.is_finite() else 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return 0
        return amount if amount.is_finite() else 0
    return 0


class SalaryForm(BaseModel):
    """
    Everything the salary input screen collects, including fields the engine
    never reads (name, age, profession, tax_regime).

    use_detailed_breakdown decides which amounts are authoritative:
      True  → basic_salary, hra, rent_paid, other_allowances
      False → total_annual_salary
    This is also the shape persisted by the saved-input store.
    """
    model_config = ConfigDict(extra="forbid")

    name: str = ""
    age: int = Field(default=25, ge=0, le=MAX_AGE)
    profession: str = ""

    basic_salary: Money = Field(default=Decimal(0), ge=0, le=MAX_AMOUNT)
    hra: Money = Field(default=Decimal(0), ge=0, le=MAX_AMOUNT)
    rent_paid: Money = Field(default=Decimal(0), ge=0, le=MAX_AMOUNT)
    other_allowances: Money = Field(default=Decimal(0), ge=0, le=MAX_AMOUNT)
    total_annual_salary: Money = Field(default=Decimal(0), ge=0, le=MAX_AMOUNT)

    use_detailed_breakdown: bool = False
    tax_regime: Regime = "new"
    city: CityClass = CityClass.metro

    @field_validator(
        "basic_salary", "hra", "rent_paid", "other_allowances", "total_annual_salary",
        mode="before",
    )
    @classmethod
    def coerce_amounts(cls, value: Any) -> Any:
        return coerce_amount(value)

    @field_validator("age", mode="before")
    @classmethod
    def coerce_age(cls, value: Any) -> int:
        amount = coerce_amount(value)
        # int() of a huge exponent ("1e1000000") materialises every digit
        if abs(amount) > MAX_AGE:
            raise ValueError(f"age must be between 0 and {MAX_AGE}")
        return int(amount)

    @field_validator("city", mode="before")
    @classmethod
    def normalize_city(cls, value: Any) -> Any:
        # Older saved forms spell it "non-metro"
        if isinstance(value, str):
            return value.strip().lower().replace("-", "_")
        return value

    @field_validator("profession")
    @classmethod
    def known_profession(cls, value: str) -> str:
        if value and value not in PROFESSIONS:
            raise ValueError(f"unknown profession {value!r}")
        return value


# ---------------------------------------------------------------------------
# Error response models — used by main.py exception handlers (cross-cutting)
# ---------------------------------------------------------------------------

class ErrorDetail(BaseModel):
    """Single field-level validation error."""
    model_config = ConfigDict(extra="forbid")

    field: Optional[str] = None   # Dot-notation field path, e.g. "basic_salary"
    issue: str


class ErrorBody(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: str                                      # VALIDATION_ERROR, INVALID_INCOME, etc.
    message: str
    details: List[ErrorDetail] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """
    Standard error response format for all endpoints.

    Structure: {"error": {"code": "...", "message": "...", "details": [...]}}
    """
    model_config = ConfigDict(extra="forbid")

    error: ErrorBody


__all__ = [
    "PROFESSIONS",
    "Money",
    "Regime",
    "MAX_AMOUNT",
    "MAX_AGE",
    "CityClass",
    "DetailedIncome",
    "TotalIncome",
    "TaxInput",
    "SalaryForm",
    "coerce_amount",
    "ErrorDetail",
    "ErrorBody",
    "ErrorResponse",
]
