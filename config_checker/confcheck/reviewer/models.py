"""Data models for the security, performance and best-practice analyses."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_serializer


class RiskLevel(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


class Impact(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class ViolationSeverity(str, Enum):
    info = "info"
    warning = "warning"
    error = "error"


class SensitiveDataKind(str, Enum):
    password = "password"
    api_key = "api_key"
    token = "token"
    secret = "secret"
    database_url = "database_url"
    private_key = "private_key"


def mask_secret(value: str) -> str:
    """Mask a secret, keeping at most two characters at each end."""
    if len(value) <= 4:
        return "*" * len(value)
    keep = 2 if len(value) > 8 else 1
    return value[:keep] + "*" * (len(value) - 2 * keep) + value[-keep:]


class SecurityVulnerability(BaseModel):
    type: str
    severity: RiskLevel
    description: str
    location: str
    recommendation: str
    cwe: str | None = None


class SensitiveDataFinding(BaseModel):
    """A secret-looking value found in the content.

    ``value`` holds the raw match; JSON serialization masks it.
    """

    kind: SensitiveDataKind
    line: int = Field(1, ge=1)
    location: str
    value: str
    recommendation: str

    @property
    def masked_value(self) -> str:
        return mask_secret(self.value)

    @field_serializer("value", when_used="json")
    def _mask_value(self, value: str) -> str:
        return mask_secret(value)


class SecurityAnalysis(BaseModel):
    risk_level: RiskLevel = RiskLevel.low
    vulnerabilities: list[SecurityVulnerability] = Field(default_factory=list)
    sensitive_data_exposed: list[SensitiveDataFinding] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    score: int = 100


class PerformanceIssue(BaseModel):
    type: str
    description: str
    impact: Impact
    location: str
    suggestion: str


class PerformanceOptimization(BaseModel):
    type: str
    description: str
    estimated_improvement: str
    implementation: str


class ResourceUsage(BaseModel):
    memory_impact: Impact = Impact.low
    cpu_impact: Impact = Impact.low
    network_impact: Impact = Impact.low
    disk_impact: Impact = Impact.low


class PerformanceAnalysis(BaseModel):
    score: int = 100
    issues: list[PerformanceIssue] = Field(default_factory=list)
    optimizations: list[PerformanceOptimization] = Field(default_factory=list)
    resource_usage: ResourceUsage = Field(default_factory=ResourceUsage)


class BestPracticeViolation(BaseModel):
    rule: str
    description: str
    location: str
    severity: ViolationSeverity
    fix: str


class ComplianceCheck(BaseModel):
    standard: str
    compliant: bool
    violations: list[str] = Field(default_factory=list)
    score: int = 100


class BestPracticesCheck(BaseModel):
    score: float = 100.0
    violations: list[BestPracticeViolation] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    compliance: list[ComplianceCheck] = Field(default_factory=list)
