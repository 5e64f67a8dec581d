"""Abstract syntax checker interface shared by every dialect."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from confcheck.validator.lines import line_at
from confcheck.validator.models import (
    Diagnostic,
    Dialect,
    FormattingIssue,
    Severity,
    SyntaxValidation,
)


class SyntaxChecker(ABC):
    """One checker per dialect family.

    Subclasses walk the content once and collect diagnostics on the
    instance lists; ``run`` packages them into a ``SyntaxValidation``.
    A checker instance is used for a single call only.
    """

    dialects: ClassVar[tuple[Dialect, ...]] = ()

    def __init__(self, content: str, lines: list[str], strict: bool = False) -> None:
        self.content = content
        self.lines = lines
        self.strict = strict
        self.errors: list[Diagnostic] = []
        self.warnings: list[Diagnostic] = []
        self.formatting_issues: list[FormattingIssue] = []

    @abstractmethod
    def check(self) -> None:
        """Walk the content and record diagnostics."""
        ...

    def run(self) -> SyntaxValidation:
        self.check()
        return SyntaxValidation(
            errors=self.errors,
            warnings=self.warnings,
            formatting_issues=self.formatting_issues,
        )

    def error(self, line: int, message: str, code: str, column: int = 1) -> None:
        self.errors.append(
            Diagnostic(
                line=max(1, line),
                column=max(1, column),
                message=message,
                severity=Severity.error,
                code=code,
                context=line_at(self.lines, line),
            )
        )

    def warning(
        self,
        line: int,
        message: str,
        code: str,
        suggestion: str | None = None,
        column: int = 1,
    ) -> None:
        self.warnings.append(
            Diagnostic(
                line=max(1, line),
                column=max(1, column),
                message=message,
                severity=Severity.warning,
                code=code,
                context=line_at(self.lines, line),
                suggestion=suggestion,
            )
        )

    def parser_failure(
        self, line: int, message: str, code: str, column: int = 1,
    ) -> None:
        """Record a real-parser failure: an error in strict mode, else a warning."""
        if self.strict:
            self.error(line, message, code, column=column)
        else:
            self.warning(
                line,
                message,
                code,
                suggestion="Fix the structure reported by the parser",
                column=column,
            )
