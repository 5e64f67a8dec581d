"""Settings API: runtime validation limits."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from confcheck.deps import get_validation_engine
from confcheck.engine.engine import ValidationEngine
from confcheck.validator.models import ValidationLimits

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["settings"])


class LimitsUpdateRequest(BaseModel):
    max_content_bytes: int | None = Field(None, gt=0)
    timeout_seconds: float | None = Field(None, gt=0)


@router.get("/settings/limits", response_model=ValidationLimits)
async def get_limits(
    engine: ValidationEngine = Depends(get_validation_engine),
) -> ValidationLimits:
    """Return the limits applied to every validation call."""
    return engine.limits


@router.put("/settings/limits", response_model=ValidationLimits)
async def update_limits(
    body: LimitsUpdateRequest,
    engine: ValidationEngine = Depends(get_validation_engine),
) -> ValidationLimits:
    """Update limits at runtime (no restart needed).

    Only provided fields are updated; omitted fields keep their current value.
    """
    updates = body.model_dump(exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")
    limits = engine.limits.model_copy(update=updates)
    engine.update_limits(limits)
    return limits
