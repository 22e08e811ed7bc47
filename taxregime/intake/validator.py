"""
Intake conversion — form payloads into the strict engine input.

Two request shapes reach POST /api/calculate:
  - Form shape:   a SalaryForm (use_detailed_breakdown flag + every form field)
  - Strict shape: a TaxInput carrying an explicit `mode` discriminator

Both end up as a frozen DetailedIncome or TotalIncome. Fields the selected mode
does not use are dropped here and never reach the engine.
"""
from __future__ import annotations

import logging
from typing import Any

from pydantic import TypeAdapter

from taxregime.intake.schemas import (
    DetailedIncome,
    SalaryForm,
    TaxInput,
    TotalIncome,
)

logger = logging.getLogger(__name__)

_tax_input_adapter: TypeAdapter[TaxInput] = TypeAdapter(TaxInput)


def build_tax_input(form: SalaryForm) -> DetailedIncome | TotalIncome:
    """Select the authoritative field set from a form."""
    if form.use_detailed_breakdown:
        return DetailedIncome(
            basic_salary=form.basic_salary,
            hra=form.hra,
            rent_paid=form.rent_paid,
            other_allowances=form.other_allowances,
            city_class=form.city,
        )
    return TotalIncome(
        total_annual_salary=form.total_annual_salary,
        city_class=form.city,
    )


def parse_calculate_body(body: dict[str, Any]) -> DetailedIncome | TotalIncome:
    """
    Validate a raw request body of either shape.

    Raises:
        pydantic.ValidationError: if the body matches neither shape's rules.
    """
    if "mode" in body:
        logger.debug("Strict TaxInput body mode=%s", body.get("mode"))
        return _tax_input_adapter.validate_python(body)
    form = SalaryForm.model_validate(body)
    return build_tax_input(form)
