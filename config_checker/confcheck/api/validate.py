"""Validation API: validate, detect and quick-fix endpoints."""

from __future__ import annotations

import logging
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from confcheck.deps import get_validation_engine
from confcheck.engine.engine import ValidationEngine
from confcheck.engine.errors import (
    AnalysisError,
    ContentTooLargeError,
    ValidationCancelledError,
    ValidationFailure,
    ValidationTimeoutError,
)
from confcheck.quickfix.models import BatchResult
from confcheck.validator.models import (
    DeclaredType,
    Dialect,
    ValidationOptions,
    ValidationOutcome,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["validate"])


class ValidateRequest(BaseModel):
    content: str = Field("", description="Raw configuration text")
    options: ValidationOptions = Field(default_factory=ValidationOptions)


class DetectRequest(BaseModel):
    content: str
    file_type: DeclaredType = DeclaredType.auto


class DetectResponse(BaseModel):
    dialect: Dialect


class FixRequest(BaseModel):
    content: str = Field(..., min_length=1)
    options: ValidationOptions = Field(default_factory=ValidationOptions)


def _raise_http(e: ValidationFailure) -> NoReturn:
    """Map an engine failure onto the matching HTTP status."""
    if isinstance(e, ContentTooLargeError):
        raise HTTPException(status_code=413, detail=str(e)) from e
    if isinstance(e, ValidationTimeoutError):
        raise HTTPException(status_code=504, detail=str(e)) from e
    if isinstance(e, ValidationCancelledError):
        raise HTTPException(status_code=503, detail=str(e)) from e
    if isinstance(e, AnalysisError):
        logger.error("Analysis failed: %s", e)
    raise HTTPException(status_code=500, detail=str(e)) from e


@router.post("/validate", response_model=ValidationOutcome)
async def validate_content(
    body: ValidateRequest,
    engine: ValidationEngine = Depends(get_validation_engine),
) -> ValidationOutcome:
    """Validate a configuration file and return the rendered report."""
    try:
        return await engine.validate(body.content, body.options)
    except ValidationFailure as e:
        _raise_http(e)


@router.post("/detect", response_model=DetectResponse)
async def detect_format(
    body: DetectRequest,
    engine: ValidationEngine = Depends(get_validation_engine),
) -> DetectResponse:
    """Sniff the dialect of ``content`` without validating it."""
    if not body.content.strip():
        raise HTTPException(status_code=400, detail="Content cannot be empty")
    return DetectResponse(dialect=engine.detect(body.content, body.file_type))


@router.get("/dialects")
async def list_dialects() -> dict[str, list[str]]:
    """List the dialects that can be declared or detected."""
    return {"dialects": [d.value for d in Dialect]}


@router.post("/fix", response_model=BatchResult)
async def apply_fixes(
    body: FixRequest,
    engine: ValidationEngine = Depends(get_validation_engine),
) -> BatchResult:
    """Apply every automated suggestion and return the fixed content."""
    try:
        result = await engine.apply_fixes(body.content, body.options)
    except ValidationFailure as e:
        _raise_http(e)
    logger.info("Fix request: %d/%d applied", result.applied, result.total)
    return result


@router.get("/health")
async def health_check(
    engine: ValidationEngine = Depends(get_validation_engine),
) -> dict:
    """Liveness probe plus the limits currently in force."""
    return {"healthy": True, "limits": engine.limits.model_dump()}
