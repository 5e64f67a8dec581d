"""Tests for quickfix batch application."""

from __future__ import annotations

from confcheck.quickfix.batch import apply_automated_fixes
from confcheck.quickfix.models import Priority, Suggestion, SuggestionType


def _suggestion(
    line: int | None = 1,
    before: str = "[1,]",
    after: str = "[1]",
    automated: bool = True,
    description: str = "Trailing comma",
) -> Suggestion:
    return Suggestion(
        type=SuggestionType.style,
        priority=Priority.low,
        description=description,
        location=f"Line {line}",
        line=line,
        before=before,
        after=after,
        automated=automated,
    )


class TestApplyAutomatedFixes:
    def test_applies_matching_line(self) -> None:
        result = apply_automated_fixes("a\n[1,]\nb\n", [_suggestion(line=2)])
        assert result.total == 1
        assert result.applied == 1
        assert result.failed == 0
        assert result.content == "a\n[1]\nb\n"

    def test_preserves_missing_trailing_newline(self) -> None:
        result = apply_automated_fixes("[1,]", [_suggestion()])
        assert result.content == "[1]"

    def test_skips_manual_suggestions(self) -> None:
        suggestions = [_suggestion(automated=False), _suggestion(line=None)]
        result = apply_automated_fixes("[1,]\n", suggestions)
        assert result.total == 0
        assert result.content == "[1,]\n"

    def test_out_of_range_line_fails(self) -> None:
        result = apply_automated_fixes("[1,]\n", [_suggestion(line=5)])
        assert result.applied == 0
        assert result.failed == 1
        assert result.results[0].error == "Line is out of range"

    def test_changed_line_fails(self) -> None:
        # The second fix targets the same line, which the first one rewrote.
        suggestions = [_suggestion(), _suggestion(after="[2]")]
        result = apply_automated_fixes("[1,]\n", suggestions)
        assert result.applied == 1
        assert result.failed == 1
        assert result.results[1].error == "Line changed since validation"
        assert result.content == "[1]\n"

    def test_crlf_line_endings_preserved(self) -> None:
        result = apply_automated_fixes(
            '{\r\n  "a": [1,]\r\n}\r\n',
            [_suggestion(line=2, before='  "a": [1,]', after='  "a": [1]')],
        )
        assert result.applied == 1
        assert result.content == '{\r\n  "a": [1]\r\n}\r\n'
