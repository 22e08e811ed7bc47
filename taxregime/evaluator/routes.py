"""
Evaluator HTTP routes — POST /api/calculate

Accepts two request shapes:
  - Form shape:   SalaryForm fields (use_detailed_breakdown, basic_salary, ...)
  - Strict shape: TaxInput with an explicit "mode": "detailed" | "total"

Returns the TaxResult for both regimes. Gross income <= 0 raises
InvalidIncomeError, which main.py turns into a 422 INVALID_INCOME envelope.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from taxregime.evaluator.tax_engine import calculate
from taxregime.intake.validator import parse_calculate_body

router = APIRouter(prefix="/api", tags=["evaluator"])
logger = logging.getLogger(__name__)


@router.post("/calculate")
async def calculate_tax(request_body: dict) -> JSONResponse:
    """Compute old and new regime tax for one salary input and compare them."""
    try:
        tax_input = parse_calculate_body(request_body)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc

    result = calculate(tax_input)

    logger.info(
        "Tax calculated mode=%s cheaper=%s",
        tax_input.mode,
        result.comparison.cheaper,
    )
    return JSONResponse(status_code=200, content=result.model_dump(mode="json"))
