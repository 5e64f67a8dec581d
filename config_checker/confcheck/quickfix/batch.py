"""Batch application of automated fixes."""

from __future__ import annotations

import logging

from confcheck.quickfix.models import BatchResult, FixApplicationResult, Suggestion
from confcheck.validator.lines import split_lines

logger = logging.getLogger(__name__)


def apply_automated_fixes(content: str, suggestions: list[Suggestion]) -> BatchResult:
    """Apply every automated suggestion by replacing its source line.

    A fix is skipped when the current line no longer matches the
    suggestion's ``before`` text (e.g. two fixes target the same line).
    """
    lines = split_lines(content)
    newline = "\r\n" if "\r\n" in content else "\n"
    automated = [s for s in suggestions if s.automated and s.line is not None]
    results: list[FixApplicationResult] = []

    for suggestion in automated:
        index = suggestion.line - 1
        if not 0 <= index < len(lines):
            results.append(
                FixApplicationResult(
                    line=suggestion.line,
                    description=suggestion.description,
                    success=False,
                    error="Line is out of range",
                )
            )
            continue
        if lines[index] != suggestion.before:
            results.append(
                FixApplicationResult(
                    line=suggestion.line,
                    description=suggestion.description,
                    success=False,
                    error="Line changed since validation",
                )
            )
            continue

        lines[index] = suggestion.after
        results.append(
            FixApplicationResult(
                line=suggestion.line,
                description=suggestion.description,
                success=True,
            )
        )

    applied = sum(1 for r in results if r.success)
    logger.info("Applied %d of %d automated fixes", applied, len(automated))

    fixed = newline.join(lines)
    if content.endswith("\n"):
        fixed += newline

    return BatchResult(
        total=len(automated),
        applied=applied,
        failed=len(results) - applied,
        content=fixed,
        results=results,
    )
