"""Format detection and per-dialect syntax validation."""

from confcheck.validator.detector import detect_dialect
from confcheck.validator.models import (
    DeclaredType,
    Diagnostic,
    Dialect,
    OutputFormat,
    Severity,
    SyntaxValidation,
    ValidationLevel,
    ValidationLimits,
    ValidationOptions,
    ValidationOutcome,
    ValidationResult,
)
from confcheck.validator.syntax import validate_syntax

__all__ = [
    "DeclaredType",
    "Diagnostic",
    "Dialect",
    "OutputFormat",
    "Severity",
    "SyntaxValidation",
    "ValidationLevel",
    "ValidationLimits",
    "ValidationOptions",
    "ValidationOutcome",
    "ValidationResult",
    "detect_dialect",
    "validate_syntax",
]
