"""Tests for the best-practice rules."""

from __future__ import annotations

from confcheck.reviewer.best_practices import run_all_rules
from confcheck.reviewer.models import ViolationSeverity
from confcheck.validator.lines import split_lines
from confcheck.validator.models import Dialect


def _run(content: str, dialect: Dialect):
    return run_all_rules(content, dialect, split_lines(content))


class TestRunAllRules:
    def test_clean_content(self) -> None:
        result = _run("name: app\n", Dialect.yaml)
        assert result.violations == []
        assert result.score == 100.0
        assert result.compliance[0].compliant is True

    def test_long_lines_reported_once(self) -> None:
        long_line = "x" * 121
        result = _run(f"a: 1\nb: {long_line}\nc: {long_line}\n", Dialect.yaml)
        assert [v.rule for v in result.violations] == ["Line Length"]
        assert result.violations[0].location == "Lines 2, 3"

    def test_long_line_list_is_capped(self) -> None:
        content = "\n".join("k: " + "y" * 130 for _ in range(7))
        result = _run(content, Dialect.yaml)
        assert result.violations[0].location == "Lines 1, 2, 3, 4, 5 (+2 more)"

    def test_single_line_json(self) -> None:
        result = _run('{"a": 1}', Dialect.json)
        assert [v.rule for v in result.violations] == ["Formatting"]
        assert result.violations[0].severity is ViolationSeverity.info
        assert result.score == 90.0

    def test_yaml_tabs(self) -> None:
        result = _run("server:\n\tport: 80\n", Dialect.yaml)
        assert [v.rule for v in result.violations] == ["Indentation"]
        assert result.violations[0].severity is ViolationSeverity.error
        assert result.compliance[0].compliant is False

    def test_dockerfile_missing_healthcheck_and_labels(self) -> None:
        result = _run("FROM alpine\nCMD [\"sh\"]\n", Dialect.dockerfile)
        assert [v.rule for v in result.violations] == ["Health Checks", "Metadata"]
        assert result.score == 80.0
        assert result.recommendations == [v.fix for v in result.violations]

    def test_complete_dockerfile(self, dockerfile: str) -> None:
        assert _run(dockerfile, Dialect.dockerfile).violations == []
