"""Merge syntax, formatting and security findings into ranked suggestions."""

from __future__ import annotations

from confcheck.quickfix.models import PRIORITY_ORDER, Priority, Suggestion, SuggestionType
from confcheck.reviewer.models import SecurityAnalysis
from confcheck.validator.models import SyntaxValidation


def _from_syntax(syntax: SyntaxValidation) -> list[Suggestion]:
    suggestions = [
        Suggestion(
            type=SuggestionType.fix,
            priority=Priority.critical,
            description=error.message,
            location=f"Line {error.line}, Column {error.column}",
            line=error.line,
            before=error.context,
            after=error.suggestion or "Fix syntax error",
            automated=False,
        )
        for error in syntax.errors
    ]
    suggestions.extend(
        Suggestion(
            type=SuggestionType.style,
            priority=Priority.low,
            description=issue.issue,
            location=f"Line {issue.line}",
            line=issue.line,
            before=issue.actual,
            after=issue.expected,
            automated=issue.auto_fixable,
        )
        for issue in syntax.formatting_issues
    )
    return suggestions


def _from_security(security: SecurityAnalysis) -> list[Suggestion]:
    return [
        Suggestion(
            type=SuggestionType.security,
            priority=Priority(vuln.severity.value),
            description=vuln.description,
            location=vuln.location,
            before="Current configuration",
            after=vuln.recommendation,
            automated=False,
        )
        for vuln in security.vulnerabilities
    ]


def rank(syntax: SyntaxValidation, security: SecurityAnalysis) -> list[Suggestion]:
    """Flatten findings and sort by priority, highest first.

    Discovery order is syntax errors, formatting issues, then security
    vulnerabilities; ``sorted`` is stable, so ties keep that order.
    """
    suggestions = _from_syntax(syntax) + _from_security(security)
    return sorted(suggestions, key=lambda s: PRIORITY_ORDER[s.priority], reverse=True)
