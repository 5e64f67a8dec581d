"""Render a ValidationResult as text, JSON or JUnit XML.

Rendering is a pure function of (result, options). Nothing time-dependent
is printed, so repeated runs on the same input give the same report.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from confcheck.validator.models import (
    Diagnostic,
    OutputFormat,
    ValidationOptions,
    ValidationResult,
)

RULE = "─" * 60
MAX_LISTED_ERRORS = 10
MAX_LISTED_FINDINGS = 5
MAX_LISTED_OPTIMIZATIONS = 3


def _section(title: str, rows: list[tuple[str, object]]) -> list[str]:
    out = [title, RULE]
    for i, (label, value) in enumerate(rows):
        branch = "└─" if i == len(rows) - 1 else "├─"
        out.append(f"{branch} {label}: {value}")
    return out


def _diagnostic_lines(index: int, diag: Diagnostic, options: ValidationOptions) -> list[str]:
    out = [
        f"{index}. Line {diag.line}, Column {diag.column} [{diag.code}]",
        f"   {diag.message}",
    ]
    if options.context_lines > 0 and diag.context:
        out.append(f"   Context: {diag.context}")
    if diag.suggestion:
        out.append(f"   Suggestion: {diag.suggestion}")
    return out


def format_detailed(result: ValidationResult, options: ValidationOptions) -> str:
    meta = result.metadata
    syntax = result.syntax_validation
    security = result.security_analysis
    performance = result.performance_analysis
    practices = result.best_practices_check

    out: list[str] = ["Configuration File Validation Report", "═" * 60, ""]

    out += _section(
        "File Information",
        [
            ("File Type", meta.file_type.value.upper()),
            ("Detected Format", meta.detected_format.value),
            ("File Size", f"{meta.file_size} bytes"),
            ("Line Count", meta.line_count),
            ("Validation Level", meta.validation_level.value),
        ],
    )

    out += [""] + _section(
        "Syntax Validation",
        [
            ("Valid", "Yes" if syntax.valid else "No"),
            ("Errors", len(syntax.errors)),
            ("Warnings", len(syntax.warnings)),
            ("Formatting Issues", len(syntax.formatting_issues)),
        ],
    )

    if syntax.errors:
        out += ["", f"Syntax Errors ({len(syntax.errors)})", RULE]
        for i, error in enumerate(syntax.errors[:MAX_LISTED_ERRORS], 1):
            out += _diagnostic_lines(i, error, options)
        if len(syntax.errors) > MAX_LISTED_ERRORS:
            out.append(f"... and {len(syntax.errors) - MAX_LISTED_ERRORS} more")

    if options.include_warnings and syntax.warnings:
        out += ["", f"Syntax Warnings ({len(syntax.warnings)})", RULE]
        for i, warning in enumerate(syntax.warnings[:MAX_LISTED_ERRORS], 1):
            out += _diagnostic_lines(i, warning, options)
        if len(syntax.warnings) > MAX_LISTED_ERRORS:
            out.append(f"... and {len(syntax.warnings) - MAX_LISTED_ERRORS} more")

    if syntax.formatting_issues:
        out += ["", f"Formatting Issues ({len(syntax.formatting_issues)})", RULE]
        for i, issue in enumerate(syntax.formatting_issues[:MAX_LISTED_ERRORS], 1):
            fix = " (auto-fixable)" if issue.auto_fixable else ""
            out += [
                f"{i}. Line {issue.line}: {issue.issue}{fix}",
                f"   Expected: {issue.expected.strip()}",
            ]

    schema = result.schema_validation
    if schema is not None:
        out += [""] + _section(
            "Schema Validation",
            [
                ("Valid", "Yes" if schema.valid else "No"),
                ("Coverage", f"{schema.coverage:.1f}%"),
                ("Missing Fields", ", ".join(schema.missing_fields) or "none"),
                ("Extra Fields", ", ".join(schema.extra_fields) or "none"),
            ],
        )
        for error in schema.errors:
            out.append(f"   ERROR {error.path}: {error.message}")
        for warning in schema.warnings:
            out.append(f"   WARNING {warning.path}: {warning.message}")

    out += [""] + _section(
        "Security Analysis",
        [
            ("Risk Level", security.risk_level.value.upper()),
            ("Security Score", f"{security.score}/100"),
            ("Vulnerabilities", len(security.vulnerabilities)),
            ("Sensitive Data Exposed", len(security.sensitive_data_exposed)),
        ],
    )

    if security.vulnerabilities:
        out += ["", "Security Vulnerabilities", RULE]
        for i, vuln in enumerate(security.vulnerabilities, 1):
            out += [
                f"{i}. {vuln.type} ({vuln.severity.value.upper()})",
                f"   {vuln.description}",
                f"   Location: {vuln.location}",
                f"   Fix: {vuln.recommendation}",
            ]
            if vuln.cwe:
                out.append(f"   CWE: {vuln.cwe}")

    if security.sensitive_data_exposed:
        out += ["", "Sensitive Data Exposure", RULE]
        for i, finding in enumerate(security.sensitive_data_exposed[:MAX_LISTED_FINDINGS], 1):
            out += [
                f"{i}. {finding.kind.value.upper()} at {finding.location}: {finding.masked_value}",
                f"   Recommendation: {finding.recommendation}",
            ]

    usage = performance.resource_usage
    out += [""] + _section(
        "Performance Analysis",
        [
            ("Performance Score", f"{performance.score}/100"),
            ("Issues", len(performance.issues)),
            ("Optimizations Available", len(performance.optimizations)),
            (
                "Resource Impact",
                f"Memory({usage.memory_impact.value}) CPU({usage.cpu_impact.value}) "
                f"Network({usage.network_impact.value}) Disk({usage.disk_impact.value})",
            ),
        ],
    )

    if performance.issues:
        out += ["", "Performance Issues", RULE]
        for i, issue in enumerate(performance.issues, 1):
            out += [
                f"{i}. {issue.type} ({issue.impact.value.upper()} impact)",
                f"   {issue.description}",
                f"   Location: {issue.location}",
                f"   Fix: {issue.suggestion}",
            ]

    if performance.optimizations:
        out += ["", "Optimization Opportunities", RULE]
        for i, opt in enumerate(performance.optimizations[:MAX_LISTED_OPTIMIZATIONS], 1):
            out += [
                f"{i}. {opt.type}",
                f"   {opt.description}",
                f"   Estimated Improvement: {opt.estimated_improvement}",
                f"   Implementation: {opt.implementation}",
            ]

    out += [""] + _section(
        "Best Practices Check",
        [
            ("Overall Score", f"{practices.score:.1f}/100"),
            ("Violations", len(practices.violations)),
            ("Compliance Checks", len(practices.compliance)),
        ],
    )

    if practices.violations:
        out += ["", "Best Practice Violations", RULE]
        for i, violation in enumerate(practices.violations[:MAX_LISTED_FINDINGS], 1):
            out += [
                f"{i}. [{violation.severity.value.upper()}] {violation.rule}",
                f"   {violation.description}",
                f"   Location: {violation.location}",
                f"   Fix: {violation.fix}",
            ]

    if options.fix_suggestions and result.suggestions:
        out += ["", "Fix Suggestions", RULE]
        for i, suggestion in enumerate(result.suggestions[:MAX_LISTED_FINDINGS], 1):
            out += [
                f"{i}. [{suggestion.priority.value.upper()}] {suggestion.description}",
                f"   Location: {suggestion.location}",
                f"   Type: {suggestion.type.value.upper()}",
            ]
            if suggestion.automated:
                out.append("   Can be automatically fixed")

    return "\n".join(out) + "\n"


def format_summary(result: ValidationResult, options: ValidationOptions) -> str:
    syntax = result.syntax_validation
    status = "VALID" if syntax.valid else "INVALID"
    lines = [
        f"{status}: {result.metadata.detected_format.value} "
        f"({result.metadata.line_count} lines, {result.metadata.file_size} bytes)",
        f"Syntax: {len(syntax.errors)} error(s), {len(syntax.warnings)} warning(s), "
        f"{len(syntax.formatting_issues)} formatting issue(s)",
        f"Security: {result.security_analysis.risk_level.value} risk, "
        f"score {result.security_analysis.score}/100",
        f"Performance: score {result.performance_analysis.score}/100",
        f"Best practices: score {result.best_practices_check.score:.1f}/100",
    ]
    if options.fix_suggestions:
        lines.append(f"Suggestions: {len(result.suggestions)}")
    if syntax.errors:
        first = syntax.errors[0]
        lines.append(f"First error: line {first.line}, column {first.column}: {first.message}")
    return "\n".join(lines) + "\n"


def format_json(result: ValidationResult) -> str:
    return result.model_dump_json(
        indent=2, exclude={"metadata": {"timestamp", "processing_time_ms"}},
    ) + "\n"


def _testcase(
    suite: ET.Element,
    name: str,
    classname: str,
    failure: str | None = None,
    failure_type: str = "",
    detail: str = "",
) -> None:
    case = ET.SubElement(suite, "testcase", name=name, classname=classname)
    if failure is not None:
        node = ET.SubElement(case, "failure", message=failure, type=failure_type)
        node.text = detail


def _suite(root: ET.Element, name: str, cases: list[dict]) -> None:
    suite = ET.SubElement(
        root,
        "testsuite",
        name=name,
        tests=str(max(1, len(cases))),
        failures=str(len(cases)),
        errors="0",
    )
    if not cases:
        _testcase(suite, f"{name} checks passed", f"confcheck.{name}")
    for case in cases:
        _testcase(suite, classname=f"confcheck.{name}", **case)


def format_junit(result: ValidationResult) -> str:
    """CI-style rendering: one suite per analysis, one failing case per finding."""
    dialect = result.metadata.detected_format.value
    syntax = result.syntax_validation

    syntax_cases = [
        {
            "name": f"line {e.line}: {e.code}",
            "failure": e.message,
            "failure_type": e.code,
            "detail": e.context,
        }
        for e in syntax.errors
    ]
    security_cases = [
        {
            "name": v.type,
            "failure": v.description,
            "failure_type": v.severity.value,
            "detail": v.recommendation,
        }
        for v in result.security_analysis.vulnerabilities
    ] + [
        {
            "name": f"{f.kind.value} at {f.location}",
            "failure": f"Sensitive data exposed: {f.masked_value}",
            "failure_type": "sensitive_data",
            "detail": f.recommendation,
        }
        for f in result.security_analysis.sensitive_data_exposed
    ]
    performance_cases = [
        {
            "name": i.type,
            "failure": i.description,
            "failure_type": i.impact.value,
            "detail": i.suggestion,
        }
        for i in result.performance_analysis.issues
    ]
    practice_cases = [
        {
            "name": v.rule,
            "failure": v.description,
            "failure_type": v.severity.value,
            "detail": f"{v.location}: {v.fix}",
        }
        for v in result.best_practices_check.violations
    ]

    suites = [syntax_cases, security_cases, performance_cases, practice_cases]
    root = ET.Element(
        "testsuites",
        name=f"confcheck {dialect}",
        tests=str(sum(max(1, len(cases)) for cases in suites)),
        failures=str(sum(len(cases) for cases in suites)),
    )
    _suite(root, "syntax", syntax_cases)
    _suite(root, "security", security_cases)
    _suite(root, "performance", performance_cases)
    _suite(root, "best-practices", practice_cases)

    ET.indent(root)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(root, encoding="unicode") + "\n"


def format_report(result: ValidationResult, options: ValidationOptions) -> str:
    """Render ``result`` in the format requested by ``options``."""
    if options.output_format is OutputFormat.summary:
        return format_summary(result, options)
    if options.output_format is OutputFormat.json:
        return format_json(result)
    if options.output_format is OutputFormat.junit:
        return format_junit(result)
    return format_detailed(result, options)
