"""JSON syntax validation."""

from __future__ import annotations

import json

from confcheck.validator.base import SyntaxChecker
from confcheck.validator.lines import has_odd_indent, offset_to_position
from confcheck.validator.models import Dialect, FormattingIssue


def strip_trailing_comma(line: str) -> str | None:
    """Return ``line`` without its first trailing comma, or None if it has none.

    Only commas outside string literals count, and only when the next
    non-blank character on the line is a closing bracket.
    """
    in_string = False
    escaped = False
    for pos, char in enumerate(line):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == ",":
            rest = line[pos + 1 :].lstrip()
            if rest[:1] in ("}", "]"):
                return line[:pos] + rest
    return None


class JsonChecker(SyntaxChecker):
    """Full parse with the stdlib decoder plus line-level style checks.

    Trailing commas are only looked for when the parse fails.
    """

    dialects = (Dialect.json,)

    def check(self) -> None:
        try:
            json.loads(self.content)
            parsed = True
        except json.JSONDecodeError as e:
            parsed = False
            line, column = offset_to_position(self.content, e.pos)
            self.error(line, f"Invalid JSON: {e.msg}", "JSON_PARSE_ERROR", column=column)

        for index, line in enumerate(self.lines):
            line_num = index + 1
            fixed = None if parsed else strip_trailing_comma(line)
            if fixed is not None:
                self.formatting_issues.append(
                    FormattingIssue(
                        line=line_num,
                        issue="Trailing comma before closing bracket",
                        expected=fixed,
                        actual=line,
                        auto_fixable=True,
                    )
                )
            if has_odd_indent(line):
                self.warning(
                    line_num,
                    "Inconsistent indentation (should use 2 spaces)",
                    "JSON_INCONSISTENT_INDENT",
                    suggestion="Use consistent 2-space indentation",
                )
