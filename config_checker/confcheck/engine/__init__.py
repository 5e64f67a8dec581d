"""Validation engine: limits, cancellation and orchestration."""

from confcheck.engine.engine import ValidationEngine
from confcheck.engine.errors import (
    AnalysisError,
    ContentTooLargeError,
    ValidationCancelledError,
    ValidationFailure,
    ValidationTimeoutError,
)
from confcheck.engine.pipeline import CancelToken, analyze, run, validate

__all__ = [
    "AnalysisError",
    "CancelToken",
    "ContentTooLargeError",
    "ValidationCancelledError",
    "ValidationEngine",
    "ValidationFailure",
    "ValidationTimeoutError",
    "analyze",
    "run",
    "validate",
]
