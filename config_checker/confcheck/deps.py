"""Shared FastAPI dependencies."""

from __future__ import annotations

from confcheck.engine.engine import ValidationEngine

_validation_engine: ValidationEngine | None = None


def get_validation_engine() -> ValidationEngine:
    """FastAPI dependency: return the shared ValidationEngine."""
    assert _validation_engine is not None, "ValidationEngine not initialised"
    return _validation_engine
