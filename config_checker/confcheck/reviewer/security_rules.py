"""Security scan: secret leakage plus dialect-specific vulnerability rules."""

from __future__ import annotations

import re

from confcheck.reviewer.models import (
    RiskLevel,
    SecurityAnalysis,
    SecurityVulnerability,
    SensitiveDataFinding,
    SensitiveDataKind,
)
from confcheck.validator.lines import offset_to_position
from confcheck.validator.models import Dialect

# Key, optional closing quote, separator, optional opening quote, value.
# Every quantifier is followed by a disjoint character class, so matching
# stays linear.
_VALUE = r"""["']?\s*[:=]\s*["']?([^"'\s]+)"""

SENSITIVE_PATTERNS: dict[SensitiveDataKind, re.Pattern[str]] = {
    SensitiveDataKind.password: re.compile(r"password" + _VALUE, re.IGNORECASE),
    SensitiveDataKind.api_key: re.compile(r"(?:api[_-]?key|apikey)" + _VALUE, re.IGNORECASE),
    SensitiveDataKind.token: re.compile(r"(?:auth[_-]?token|token)" + _VALUE, re.IGNORECASE),
    SensitiveDataKind.secret: re.compile(r"(?:client[_-]?secret|secret)" + _VALUE, re.IGNORECASE),
    SensitiveDataKind.database_url: re.compile(
        r"(?:database[_-]?url|db[_-]?url|connection[_-]?string)" + _VALUE, re.IGNORECASE,
    ),
    SensitiveDataKind.private_key: re.compile(
        r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----", re.IGNORECASE,
    ),
}

RECOMMENDATIONS: dict[SensitiveDataKind, str] = {
    SensitiveDataKind.password: "Move password to environment variables or secure vault",
    SensitiveDataKind.api_key: "Move API key to environment variables or secure vault",
    SensitiveDataKind.token: "Move token to environment variables or secure vault",
    SensitiveDataKind.secret: "Move secret to environment variables or secure vault",
    SensitiveDataKind.database_url: (
        "Move database URL to environment variables or secure vault"
    ),
    SensitiveDataKind.private_key: (
        "Remove the private key from the file and load it from a secrets store"
    ),
}

USER_DIRECTIVE_RE = re.compile(r"^\s*USER\s+(\S+)", re.MULTILINE | re.IGNORECASE)
COPY_ALL_RE = re.compile(r"^\s*(?:COPY|ADD)\s+\.\s+\.(?:\s|$)", re.MULTILINE | re.IGNORECASE)
SERVER_TOKENS_OFF_RE = re.compile(r"\bserver_tokens\s+off\b")

MAX_RECOMMENDATIONS = 5


def find_sensitive_data(content: str) -> list[SensitiveDataFinding]:
    """Report every secret-looking assignment with its 1-indexed line."""
    findings: list[SensitiveDataFinding] = []
    for kind, pattern in SENSITIVE_PATTERNS.items():
        for match in pattern.finditer(content):
            line, _ = offset_to_position(content, match.start())
            value = match.group(1) if match.groups() else match.group(0)
            findings.append(
                SensitiveDataFinding(
                    kind=kind,
                    line=line,
                    location=f"Line {line}",
                    value=value,
                    recommendation=RECOMMENDATIONS[kind],
                )
            )
    return findings


def check_dockerfile(content: str) -> list[SecurityVulnerability]:
    vulnerabilities: list[SecurityVulnerability] = []

    users = [u.lower() for u in USER_DIRECTIVE_RE.findall(content)]
    if not users or "root" in users or "0" in users:
        vulnerabilities.append(
            SecurityVulnerability(
                type="Privilege Escalation",
                severity=RiskLevel.medium,
                description="Container runs as root user",
                location="Dockerfile",
                recommendation="Create and use non-root user",
                cwe="CWE-250",
            )
        )

    if COPY_ALL_RE.search(content):
        vulnerabilities.append(
            SecurityVulnerability(
                type="Excessive File Permissions",
                severity=RiskLevel.low,
                description="Copying entire context to container",
                location="Dockerfile",
                recommendation="Use .dockerignore and copy specific files only",
            )
        )
    return vulnerabilities


def check_nginx(content: str) -> list[SecurityVulnerability]:
    if SERVER_TOKENS_OFF_RE.search(content):
        return []
    return [
        SecurityVulnerability(
            type="Information Disclosure",
            severity=RiskLevel.low,
            description="Server version disclosed in headers",
            location="Nginx config",
            recommendation='Add "server_tokens off;" to hide server version',
            cwe="CWE-200",
        )
    ]


DIALECT_RULES = {
    Dialect.dockerfile: check_dockerfile,
    Dialect.nginx: check_nginx,
}


def _risk_level(
    findings: list[SensitiveDataFinding],
    vulnerabilities: list[SecurityVulnerability],
) -> RiskLevel:
    if findings or any(
        v.severity in (RiskLevel.high, RiskLevel.critical) for v in vulnerabilities
    ):
        return RiskLevel.high
    if vulnerabilities:
        return RiskLevel.medium
    return RiskLevel.low


def scan(content: str, dialect: Dialect) -> SecurityAnalysis:
    """Run the sensitive-data pass and the dialect rules, then score."""
    findings = find_sensitive_data(content)
    rule = DIALECT_RULES.get(dialect)
    vulnerabilities = rule(content) if rule else []

    score = max(0, 100 - 15 * len(findings) - 10 * len(vulnerabilities))
    recommendations = [f.recommendation for f in findings] + [
        v.recommendation for v in vulnerabilities
    ]

    return SecurityAnalysis(
        risk_level=_risk_level(findings, vulnerabilities),
        vulnerabilities=vulnerabilities,
        sensitive_data_exposed=findings,
        recommendations=recommendations[:MAX_RECOMMENDATIONS],
        score=min(100, score),
    )
