"""Syntax validation dispatch — one checker class per dialect."""

from __future__ import annotations

import logging

from confcheck.validator.apache_syntax import ApacheChecker
from confcheck.validator.base import SyntaxChecker
from confcheck.validator.dockerfile_syntax import DockerfileChecker
from confcheck.validator.env_syntax import EnvChecker
from confcheck.validator.ini_syntax import IniChecker
from confcheck.validator.json_syntax import JsonChecker
from confcheck.validator.lines import line_at, split_lines
from confcheck.validator.models import Diagnostic, Dialect, Severity, SyntaxValidation
from confcheck.validator.nginx_syntax import NginxChecker
from confcheck.validator.toml_syntax import TomlChecker
from confcheck.validator.xml_syntax import XmlChecker
from confcheck.validator.yaml_syntax import YamlChecker

logger = logging.getLogger(__name__)

CHECKER_CLASSES: list[type[SyntaxChecker]] = [
    JsonChecker,
    YamlChecker,
    TomlChecker,
    XmlChecker,
    DockerfileChecker,
    NginxChecker,
    ApacheChecker,
    EnvChecker,
    IniChecker,
]

CHECKERS: dict[Dialect, type[SyntaxChecker]] = {
    dialect: cls for cls in CHECKER_CLASSES for dialect in cls.dialects
}

_missing = set(Dialect) - set(CHECKERS)
if _missing:
    raise RuntimeError(
        f"No syntax checker registered for: {', '.join(sorted(d.value for d in _missing))}"
    )


def _promote_warnings(result: SyntaxValidation) -> SyntaxValidation:
    """Strict mode: every warning becomes an error."""
    promoted = [
        w.model_copy(update={"severity": Severity.error}) for w in result.warnings
    ]
    errors = sorted(result.errors + promoted, key=lambda d: (d.line, d.column))
    return SyntaxValidation(errors=errors, formatting_issues=result.formatting_issues)


def validate_syntax(
    content: str,
    dialect: Dialect,
    strict: bool = False,
    lines: list[str] | None = None,
) -> SyntaxValidation:
    """Run the syntax checker for ``dialect``.

    Never raises: an exception inside a checker is reported as a single
    ``SYNTAX_ERROR`` diagnostic.
    """
    if lines is None:
        lines = split_lines(content)

    try:
        result = CHECKERS[dialect](content, lines, strict=strict).run()
    except Exception as e:
        logger.warning("%s syntax checker failed: %s", dialect.value, e)
        return SyntaxValidation(
            errors=[
                Diagnostic(
                    line=1,
                    column=1,
                    message=f"Syntax validation failed: {e}",
                    severity=Severity.error,
                    code="SYNTAX_ERROR",
                    context=line_at(lines, 1),
                )
            ]
        )

    if strict and result.warnings:
        result = _promote_warnings(result)
    return result
