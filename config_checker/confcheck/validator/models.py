"""Validation data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from confcheck.quickfix.models import Suggestion
from confcheck.reviewer.models import (
    BestPracticesCheck,
    PerformanceAnalysis,
    SecurityAnalysis,
)


class Dialect(str, Enum):
    """Supported configuration file formats."""

    json = "json"
    yaml = "yaml"
    toml = "toml"
    xml = "xml"
    ini = "ini"
    env = "env"
    properties = "properties"
    dockerfile = "dockerfile"
    nginx = "nginx"
    apache = "apache"


class DeclaredType(str, Enum):
    """File type as chosen by the caller; ``auto`` asks for detection."""

    auto = "auto"
    json = "json"
    yaml = "yaml"
    toml = "toml"
    xml = "xml"
    ini = "ini"
    env = "env"
    properties = "properties"
    dockerfile = "dockerfile"
    nginx = "nginx"
    apache = "apache"


class ValidationLevel(str, Enum):
    syntax = "syntax"
    schema = "schema"
    comprehensive = "comprehensive"


class OutputFormat(str, Enum):
    detailed = "detailed"
    summary = "summary"
    json = "json"
    junit = "junit"


class Severity(str, Enum):
    """Severity of a syntax diagnostic."""

    error = "error"
    warning = "warning"


class Diagnostic(BaseModel):
    """A located syntax error or warning. Positions are 1-indexed."""

    line: int = Field(1, ge=1)
    column: int = Field(1, ge=1)
    message: str
    severity: Severity = Severity.error
    code: str
    context: str = ""
    suggestion: str | None = None


class FormattingIssue(BaseModel):
    """Cosmetic issue; never affects validity."""

    line: int = Field(1, ge=1)
    issue: str
    expected: str
    actual: str
    auto_fixable: bool = False


class SyntaxValidation(BaseModel):
    """Output of a single dialect syntax validator."""

    valid: bool = True
    errors: list[Diagnostic] = Field(default_factory=list)
    warnings: list[Diagnostic] = Field(default_factory=list)
    formatting_issues: list[FormattingIssue] = Field(default_factory=list)

    @model_validator(mode="after")
    def _sync_valid(self) -> SyntaxValidation:
        self.valid = not self.errors
        return self


class SchemaError(BaseModel):
    path: str
    message: str
    expected_type: str = ""
    actual_type: str = ""
    constraint: str = ""


class SchemaWarning(BaseModel):
    path: str
    message: str
    suggestion: str = ""


class SchemaValidation(BaseModel):
    """Minimal structural check against a caller-supplied schema."""

    valid: bool = True
    errors: list[SchemaError] = Field(default_factory=list)
    warnings: list[SchemaWarning] = Field(default_factory=list)
    coverage: float = 100.0
    missing_fields: list[str] = Field(default_factory=list)
    extra_fields: list[str] = Field(default_factory=list)


class ValidationOptions(BaseModel):
    """Caller options for a single validation request."""

    file_type: DeclaredType = DeclaredType.auto
    validation_level: ValidationLevel = ValidationLevel.comprehensive
    check_security: bool = True
    check_performance: bool = True
    check_best_practices: bool = True
    output_format: OutputFormat = OutputFormat.detailed
    fix_suggestions: bool = True
    include_warnings: bool = True
    context_lines: int = Field(2, ge=0)
    strict_mode: bool = False
    schema_validation: bool = False
    custom_schema: str | None = None


class ValidationLimits(BaseModel):
    """Resource limits applied to every validation call."""

    max_content_bytes: int = Field(5 * 1024 * 1024, gt=0)
    timeout_seconds: float = Field(10.0, gt=0)


class ValidationMetadata(BaseModel):
    file_type: DeclaredType
    detected_format: Dialect
    # What the content looks like on its own, whatever the declaration.
    sniffed_format: Dialect | None = None
    file_size: int = 0
    line_count: int = 0
    validation_level: ValidationLevel = ValidationLevel.comprehensive
    timestamp: str = ""
    processing_time_ms: int = 0


class ValidationMetrics(BaseModel):
    total_lines: int = 0
    valid_lines: int = 0
    error_lines: int = 0
    warning_lines: int = 0
    complexity: int = 0
    maintainability_index: int = 100


class ValidationResult(BaseModel):
    """Aggregate result of every analysis run for one request."""

    metadata: ValidationMetadata
    syntax_validation: SyntaxValidation
    schema_validation: SchemaValidation | None = None
    security_analysis: SecurityAnalysis = Field(default_factory=SecurityAnalysis)
    performance_analysis: PerformanceAnalysis = Field(default_factory=PerformanceAnalysis)
    best_practices_check: BestPracticesCheck = Field(default_factory=BestPracticesCheck)
    suggestions: list[Suggestion] = Field(default_factory=list)
    metrics: ValidationMetrics = Field(default_factory=ValidationMetrics)


class ValidationOutcome(BaseModel):
    """What the caller gets back from ``validate``."""

    success: bool
    report: str = ""
    result: ValidationResult | None = None
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None

