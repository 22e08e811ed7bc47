"""
Intake HTTP routes — GET / PUT / DELETE /api/saved-input

Load, save and clear the last-used salary form. Persistence lives here at the
service boundary; POST /api/calculate never reads or writes it.
"""
from __future__ import annotations

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import JSONResponse

from taxregime.cache import clear_form, get_redis, load_form, save_form
from taxregime.intake.schemas import SalaryForm

router = APIRouter(prefix="/api", tags=["saved_input"])


@router.get("/saved-input")
async def get_saved_input(client: aioredis.Redis = Depends(get_redis)) -> JSONResponse:
    """Return the saved form, or 404 if nothing has been saved."""
    form = await load_form(client)
    if form is None:
        raise HTTPException(status_code=404, detail="No saved input found")
    return JSONResponse(status_code=200, content=form.model_dump(mode="json"))


@router.put("/saved-input")
async def put_saved_input(
    form: SalaryForm,
    client: aioredis.Redis = Depends(get_redis),
) -> JSONResponse:
    """Save the form (malformed numbers already coerced to 0) and echo it back."""
    await save_form(client, form)
    return JSONResponse(status_code=200, content=form.model_dump(mode="json"))


@router.delete("/saved-input", status_code=204)
async def delete_saved_input(client: aioredis.Redis = Depends(get_redis)) -> Response:
    await clear_form(client)
    return Response(status_code=204)
