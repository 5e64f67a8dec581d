"""Deterministic best-practice rules — style and conventions."""

from __future__ import annotations

from confcheck.reviewer.models import (
    BestPracticeViolation,
    BestPracticesCheck,
    ComplianceCheck,
    ViolationSeverity,
)
from confcheck.validator.models import Dialect

MAX_LINE_LENGTH = 120
GENERAL_STANDARD = "General Best Practices"
MAX_RECOMMENDATIONS = 5
MAX_LISTED_LINES = 5


def _line_list(line_numbers: list[int]) -> str:
    listed = ", ".join(str(n) for n in line_numbers[:MAX_LISTED_LINES])
    if len(line_numbers) > MAX_LISTED_LINES:
        listed += f" (+{len(line_numbers) - MAX_LISTED_LINES} more)"
    prefix = "Line" if len(line_numbers) == 1 else "Lines"
    return f"{prefix} {listed}"


def check_line_length(lines: list[str]) -> list[BestPracticeViolation]:
    long_lines = [i + 1 for i, line in enumerate(lines) if len(line) > MAX_LINE_LENGTH]
    if not long_lines:
        return []
    return [
        BestPracticeViolation(
            rule="Line Length",
            description=f"Lines should not exceed {MAX_LINE_LENGTH} characters",
            location=_line_list(long_lines),
            severity=ViolationSeverity.warning,
            fix="Break long lines for better readability",
        )
    ]


def check_json(content: str, lines: list[str]) -> list[BestPracticeViolation]:
    if "\n" in content:
        return []
    return [
        BestPracticeViolation(
            rule="Formatting",
            description="JSON should be formatted for readability",
            location="Entire file",
            severity=ViolationSeverity.info,
            fix="Use proper indentation and line breaks",
        )
    ]


def check_yaml(content: str, lines: list[str]) -> list[BestPracticeViolation]:
    # Reported here as well as by the syntax checker: this is the style view.
    tab_lines = [i + 1 for i, line in enumerate(lines) if "\t" in line]
    if not tab_lines:
        return []
    return [
        BestPracticeViolation(
            rule="Indentation",
            description="YAML should use spaces, not tabs",
            location=_line_list(tab_lines),
            severity=ViolationSeverity.error,
            fix="Replace tabs with spaces",
        )
    ]


def check_dockerfile(content: str, lines: list[str]) -> list[BestPracticeViolation]:
    violations: list[BestPracticeViolation] = []
    instructions = {
        line.split()[0].upper()
        for line in lines
        if line.strip() and not line.strip().startswith("#")
    }

    if "HEALTHCHECK" not in instructions:
        violations.append(
            BestPracticeViolation(
                rule="Health Checks",
                description="Dockerfile should include health checks",
                location="Missing HEALTHCHECK instruction",
                severity=ViolationSeverity.warning,
                fix="Add HEALTHCHECK instruction to monitor container health",
            )
        )

    if "FROM" in instructions and "LABEL" not in instructions:
        violations.append(
            BestPracticeViolation(
                rule="Metadata",
                description="Dockerfile should include metadata labels",
                location="Missing LABEL instructions",
                severity=ViolationSeverity.info,
                fix="Add LABEL instructions for maintainer, version, description",
            )
        )
    return violations


DIALECT_RULES = {
    Dialect.json: check_json,
    Dialect.yaml: check_yaml,
    Dialect.dockerfile: check_dockerfile,
}


def run_all_rules(content: str, dialect: Dialect, lines: list[str]) -> BestPracticesCheck:
    """Run general and dialect rules, then score each compliance standard."""
    violations = check_line_length(lines)
    rule = DIALECT_RULES.get(dialect)
    if rule:
        violations.extend(rule(content, lines))

    compliance = [
        ComplianceCheck(
            standard=GENERAL_STANDARD,
            compliant=not any(v.severity is ViolationSeverity.error for v in violations),
            violations=[v.description for v in violations],
            score=max(0, 100 - 10 * len(violations)),
        )
    ]
    score = sum(c.score for c in compliance) / len(compliance)

    return BestPracticesCheck(
        score=score,
        violations=violations,
        recommendations=[v.fix for v in violations][:MAX_RECOMMENDATIONS],
        compliance=compliance,
    )
