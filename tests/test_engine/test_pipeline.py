"""Tests for the validation pipeline entry points."""

from __future__ import annotations

import threading

import pytest

from confcheck.engine import pipeline
from confcheck.engine.errors import (
    AnalysisError,
    ContentTooLargeError,
    ValidationCancelledError,
    ValidationTimeoutError,
)
from confcheck.engine.pipeline import EMPTY_CONTENT_MESSAGE, CancelToken, run, validate
from confcheck.reviewer import security_rules
from confcheck.reviewer.models import RiskLevel, SensitiveDataKind
from confcheck.validator.models import (
    DeclaredType,
    Dialect,
    OutputFormat,
    ValidationLevel,
    ValidationLimits,
    ValidationOptions,
)


def _options(**overrides: object) -> ValidationOptions:
    return ValidationOptions(**overrides)


class TestEmptyInput:
    @pytest.mark.parametrize("content", ["", "   ", "\n\t\n"])
    def test_rejected_without_analysis(self, content: str) -> None:
        outcome = validate(content)
        assert outcome.success is False
        assert outcome.result is None
        assert outcome.report == EMPTY_CONTENT_MESSAGE
        assert outcome.error == EMPTY_CONTENT_MESSAGE


class TestOutcome:
    def test_valid_json(self) -> None:
        outcome = validate('{\n  "name": "app",\n  "port": 8080\n}\n')
        assert outcome.success is True
        assert outcome.result is not None
        assert outcome.result.metadata.detected_format is Dialect.json
        assert outcome.result.metadata.line_count == 4
        assert outcome.result.syntax_validation.errors == []

    def test_success_mirrors_syntax_only(self, yaml_with_password: str) -> None:
        outcome = validate(yaml_with_password)
        assert outcome.success is True
        security = outcome.result.security_analysis
        assert security.risk_level is RiskLevel.high
        assert security.sensitive_data_exposed[0].kind is SensitiveDataKind.password
        assert "1 sensitive value(s) exposed" in outcome.warnings

    def test_syntax_error_fails(self) -> None:
        outcome = validate("RUN echo hi\n")
        assert outcome.success is False
        assert "1 syntax error(s) found" in outcome.warnings
        assert outcome.result.suggestions[0].priority.value == "critical"

    def test_dict_options_accepted(self) -> None:
        outcome = validate("name: app\n", {"output_format": "summary"})
        assert outcome.report.startswith("VALID: yaml")

    def test_declared_type_mismatch_warns(self) -> None:
        outcome = validate("name: app\nport: 80\n", _options(file_type=DeclaredType.json))
        assert outcome.result.metadata.detected_format is Dialect.json
        assert outcome.success is False
        assert any(w.startswith("File type mismatch") for w in outcome.warnings)

    def test_sniffed_format_recorded_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple] = []
        real = pipeline.detect_dialect

        def counting(*args):
            calls.append(args)
            return real(*args)

        monkeypatch.setattr(pipeline, "detect_dialect", counting)
        outcome = validate("name: app\nport: 80\n", _options(file_type=DeclaredType.json))
        assert outcome.result.metadata.sniffed_format is Dialect.yaml
        assert len(calls) == 2

        calls.clear()
        outcome = validate("name: app\n")
        assert outcome.result.metadata.sniffed_format is Dialect.yaml
        assert len(calls) == 1

    def test_line_numbers_not_shifted_by_leading_blank_lines(self) -> None:
        outcome = validate("\n\nFROM alpine\nBOGUS x\n")
        assert outcome.result.syntax_validation.errors[0].line == 4

    def test_metrics(self) -> None:
        outcome = validate("# comment\nA=1\nB=\n")
        metrics = outcome.result.metrics
        assert metrics.total_lines == 3
        assert metrics.valid_lines == 2
        assert metrics.warning_lines == 1


class TestOptions:
    def test_syntax_level_skips_other_analyses(self, yaml_with_password: str) -> None:
        outcome = validate(yaml_with_password, _options(validation_level=ValidationLevel.syntax))
        result = outcome.result
        assert result.security_analysis.sensitive_data_exposed == []
        assert result.security_analysis.score == 100
        assert result.performance_analysis.score == 100
        assert result.best_practices_check.violations == []

    def test_disabled_security_uses_neutral_default(self, yaml_with_password: str) -> None:
        outcome = validate(yaml_with_password, _options(check_security=False))
        assert outcome.result.security_analysis.risk_level is RiskLevel.low
        assert outcome.result.security_analysis.sensitive_data_exposed == []

    def test_strict_mode(self) -> None:
        content = "server:\n   port: 80\n"
        assert validate(content).success is True
        assert validate(content, _options(strict_mode=True)).success is False

    def test_schema_validation(self) -> None:
        schema = '{"required": ["name", "port"]}'
        outcome = validate(
            '{"name": "app"}',
            _options(schema_validation=True, custom_schema=schema),
        )
        assert outcome.result.schema_validation is not None
        assert outcome.result.schema_validation.missing_fields == ["port"]

    def test_schema_not_run_by_default(self) -> None:
        assert validate('{"a": 1}').result.schema_validation is None

    def test_malformed_schema_does_not_fail_validation(self) -> None:
        outcome = validate(
            '{"a": 1}',
            _options(schema_validation=True, custom_schema='{"properties": ["a"]}'),
        )
        assert outcome.success is True
        assert outcome.result.schema_validation.valid is False
        assert outcome.result.schema_validation.errors[0].path == "$schema"


class TestIdempotence:
    @pytest.mark.parametrize("fmt", list(OutputFormat))
    def test_reports_identical(self, fmt: OutputFormat, nginx_config: str) -> None:
        first = validate(nginx_config, _options(output_format=fmt))
        second = validate(nginx_config, _options(output_format=fmt))
        assert first.report == second.report


class TestLimits:
    def test_too_large_raises(self) -> None:
        with pytest.raises(ContentTooLargeError) as excinfo:
            run("a" * 100, limits=ValidationLimits(max_content_bytes=10))
        assert excinfo.value.size == 100
        assert excinfo.value.limit == 10

    def test_too_large_is_failure_outcome(self) -> None:
        outcome = validate("a" * 100, limits=ValidationLimits(max_content_bytes=10))
        assert outcome.success is False
        assert outcome.result is None
        assert "limit is 10 bytes" in outcome.error

    def test_size_counts_utf8_bytes(self) -> None:
        with pytest.raises(ContentTooLargeError):
            run("é" * 6, limits=ValidationLimits(max_content_bytes=10))

    def test_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        release = threading.Event()

        def slow_syntax(*args: object):
            release.wait(5)
            raise AssertionError("should have been abandoned")

        monkeypatch.setattr(pipeline, "validate_syntax", slow_syntax)
        try:
            with pytest.raises(ValidationTimeoutError):
                run("name: app\n", limits=ValidationLimits(timeout_seconds=0.05))
        finally:
            release.set()

    def test_timeout_is_failure_outcome(self, monkeypatch: pytest.MonkeyPatch) -> None:
        release = threading.Event()
        monkeypatch.setattr(pipeline, "validate_syntax", lambda *a: release.wait(5))
        try:
            outcome = validate("name: app\n", limits=ValidationLimits(timeout_seconds=0.05))
        finally:
            release.set()
        assert outcome.success is False
        assert "timed out" in outcome.error


class TestCancellationAndErrors:
    def test_cancelled_token(self) -> None:
        token = CancelToken()
        token.cancel()
        with pytest.raises(ValidationCancelledError):
            run("name: app\n", token=token)

    def test_analysis_exception_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def boom(content: str, dialect: Dialect):
            raise RuntimeError("scanner broke")

        monkeypatch.setattr(security_rules, "scan", boom)
        with pytest.raises(AnalysisError) as excinfo:
            run("name: app\n")
        assert excinfo.value.analysis == "security"

        outcome = validate("name: app\n")
        assert outcome.success is False
        assert "scanner broke" in outcome.error
