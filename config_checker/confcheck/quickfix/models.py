"""Suggestion and quick-fix models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SuggestionType(str, Enum):
    fix = "fix"
    optimization = "optimization"
    security = "security"
    style = "style"


class Priority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


PRIORITY_ORDER: dict[Priority, int] = {
    Priority.critical: 4,
    Priority.high: 3,
    Priority.medium: 2,
    Priority.low: 1,
}


class Suggestion(BaseModel):
    """A ranked, user-facing action item."""

    type: SuggestionType
    priority: Priority
    description: str
    location: str
    line: int | None = None
    before: str = ""
    after: str = ""
    automated: bool = False


class FixApplicationResult(BaseModel):
    """Result of applying a single automated fix."""

    line: int
    description: str
    success: bool
    error: str = ""


class BatchResult(BaseModel):
    """Result of a batch fix application."""

    total: int
    applied: int
    failed: int
    content: str
    results: list[FixApplicationResult] = Field(default_factory=list)
