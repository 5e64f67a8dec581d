"""Validation pipeline: detection, parallel analyses, ranking, rendering."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import Any, Callable

from confcheck.engine.errors import (
    AnalysisError,
    ContentTooLargeError,
    ValidationCancelledError,
    ValidationFailure,
    ValidationTimeoutError,
)
from confcheck.quickfix.ranker import rank
from confcheck.report.formatter import format_report
from confcheck.reviewer import best_practices, performance_rules, security_rules
from confcheck.reviewer.models import (
    BestPracticesCheck,
    PerformanceAnalysis,
    RiskLevel,
    SecurityAnalysis,
    ViolationSeverity,
)
from confcheck.validator.detector import detect_dialect
from confcheck.validator.lines import split_lines
from confcheck.validator.models import (
    DeclaredType,
    Dialect,
    ValidationLevel,
    ValidationLimits,
    ValidationMetadata,
    ValidationMetrics,
    ValidationOptions,
    ValidationOutcome,
    ValidationResult,
)
from confcheck.validator.schema_check import check_schema
from confcheck.validator.syntax import validate_syntax

logger = logging.getLogger(__name__)

EMPTY_CONTENT_MESSAGE = "Content required: please provide configuration file content to validate"


class CancelToken:
    """Cooperative cancellation shared by every analysis of one run."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ValidationCancelledError()


def _guarded(token: CancelToken, name: str, fn: Callable[..., Any], *args: Any) -> Any:
    token.raise_if_cancelled()
    try:
        result = fn(*args)
    except ValidationFailure:
        raise
    except Exception as e:
        logger.exception("%s analysis raised", name)
        raise AnalysisError(name, e) from e
    token.raise_if_cancelled()
    return result


def _coerce_options(options: ValidationOptions | dict | None) -> ValidationOptions:
    if options is None:
        return ValidationOptions()
    if isinstance(options, dict):
        return ValidationOptions.model_validate(options)
    return options


def _metrics(lines: list[str], result_errors: int, result_warnings: int) -> ValidationMetrics:
    valid_lines = sum(1 for line in lines if line.strip() and not line.strip().startswith("#"))
    return ValidationMetrics(
        total_lines=len(lines),
        valid_lines=valid_lines,
        error_lines=result_errors,
        warning_lines=result_warnings,
        complexity=min(100, len(lines) // 10),
        maintainability_index=max(0, 100 - 5 * result_errors - 2 * result_warnings),
    )


def _outcome_warnings(result: ValidationResult) -> list[str]:
    meta = result.metadata
    syntax = result.syntax_validation
    security = result.security_analysis
    warnings: list[str] = []

    sniffed = meta.sniffed_format
    if meta.file_type is not DeclaredType.auto and sniffed is not None:
        if sniffed is not Dialect.properties and sniffed.value != meta.file_type.value:
            warnings.append(
                f"File type mismatch: declared as {meta.file_type.value}, "
                f"content looks like {sniffed.value}"
            )
    if not syntax.valid:
        warnings.append(f"{len(syntax.errors)} syntax error(s) found")
    if security.risk_level in (RiskLevel.high, RiskLevel.critical):
        warnings.append(
            f"High security risk detected - {len(security.vulnerabilities)} "
            f"vulnerability(ies) found"
        )
    if security.sensitive_data_exposed:
        warnings.append(
            f"{len(security.sensitive_data_exposed)} sensitive value(s) exposed"
        )
    if result.performance_analysis.issues:
        warnings.append(
            f"{len(result.performance_analysis.issues)} performance issue(s) found"
        )
    practice_errors = [
        v for v in result.best_practices_check.violations
        if v.severity is ViolationSeverity.error
    ]
    if practice_errors:
        warnings.append(f"{len(practice_errors)} best-practice error(s) found")
    return warnings


def analyze(
    content: str,
    options: ValidationOptions,
    limits: ValidationLimits | None = None,
    token: CancelToken | None = None,
) -> ValidationResult:
    """Run every enabled analysis and assemble the result.

    The syntax, security, performance and best-practice analyses only
    read the content, so they run in parallel; ranking waits for all of
    them. On timeout or cancellation nothing partial is returned.
    """
    limits = limits or ValidationLimits()
    token = token or CancelToken()
    started = time.monotonic()

    dialect = detect_dialect(content, options.file_type)
    lines = split_lines(content)
    full = options.validation_level is not ValidationLevel.syntax
    logger.info(
        "Validating %d line(s) as %s (level=%s)",
        len(lines), dialect.value, options.validation_level.value,
    )

    executor = ThreadPoolExecutor(max_workers=5, thread_name_prefix="confcheck")
    try:
        futures: dict[str, Future] = {
            "syntax": executor.submit(
                _guarded, token, "syntax", validate_syntax,
                content, dialect, options.strict_mode, lines,
            ),
        }
        if options.file_type is not DeclaredType.auto:
            futures["detect"] = executor.submit(
                _guarded, token, "detect", detect_dialect, content,
            )
        if full and options.check_security:
            futures["security"] = executor.submit(
                _guarded, token, "security", security_rules.scan, content, dialect,
            )
        if full and options.check_performance:
            futures["performance"] = executor.submit(
                _guarded, token, "performance", performance_rules.analyze,
                content, dialect, len(lines),
            )
        if full and options.check_best_practices:
            futures["best_practices"] = executor.submit(
                _guarded, token, "best_practices", best_practices.run_all_rules,
                content, dialect, lines,
            )
        if full and options.schema_validation:
            futures["schema"] = executor.submit(
                _guarded, token, "schema", check_schema,
                content, dialect, options.custom_schema,
            )

        _, pending = wait(futures.values(), timeout=limits.timeout_seconds)
        if pending:
            token.cancel()
            logger.warning("Validation timed out after %.1fs", limits.timeout_seconds)
            raise ValidationTimeoutError(limits.timeout_seconds)
        token.raise_if_cancelled()
        outputs = {name: future.result() for name, future in futures.items()}
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    syntax = outputs["syntax"]
    security = outputs.get("security") or SecurityAnalysis()
    result = ValidationResult(
        metadata=ValidationMetadata(
            file_type=options.file_type,
            detected_format=dialect,
            sniffed_format=outputs.get("detect", dialect),
            file_size=len(content.encode("utf-8")),
            line_count=len(lines),
            validation_level=options.validation_level,
            timestamp=datetime.now(timezone.utc).isoformat(),
            processing_time_ms=int((time.monotonic() - started) * 1000),
        ),
        syntax_validation=syntax,
        schema_validation=outputs.get("schema"),
        security_analysis=security,
        performance_analysis=outputs.get("performance") or PerformanceAnalysis(),
        best_practices_check=outputs.get("best_practices") or BestPracticesCheck(),
        suggestions=rank(syntax, security) if options.fix_suggestions else [],
        metrics=_metrics(lines, len(syntax.errors), len(syntax.warnings)),
    )
    logger.info(
        "%s validation finished: %d error(s), %d warning(s), %d suggestion(s)",
        dialect.value,
        len(syntax.errors),
        len(syntax.warnings),
        len(result.suggestions),
    )
    return result


def run(
    content: str,
    options: ValidationOptions | dict | None = None,
    limits: ValidationLimits | None = None,
    token: CancelToken | None = None,
) -> ValidationOutcome:
    """Validate and render. Raises ``ValidationFailure`` for size limits,
    timeouts and cancellation."""
    options = _coerce_options(options)
    limits = limits or ValidationLimits()

    if not content or not content.strip():
        return ValidationOutcome(
            success=False, report=EMPTY_CONTENT_MESSAGE, error=EMPTY_CONTENT_MESSAGE,
        )

    size = len(content.encode("utf-8"))
    if size > limits.max_content_bytes:
        raise ContentTooLargeError(size, limits.max_content_bytes)

    result = analyze(content, options, limits, token)
    report = format_report(result, options)
    return ValidationOutcome(
        success=result.syntax_validation.valid,
        report=report,
        result=result,
        warnings=_outcome_warnings(result),
    )


def validate(
    content: str,
    options: ValidationOptions | dict | None = None,
    limits: ValidationLimits | None = None,
    token: CancelToken | None = None,
) -> ValidationOutcome:
    """Validate configuration content. Never raises for engine failures;
    they come back as ``success=False`` with ``error`` set."""
    try:
        return run(content, options, limits, token)
    except ValidationFailure as e:
        logger.warning("Validation failed: %s", e)
        return ValidationOutcome(success=False, report=str(e), error=str(e))
