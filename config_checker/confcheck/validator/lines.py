"""Line and offset helpers shared by the syntax validators and analyses."""

from __future__ import annotations


def split_lines(content: str) -> list[str]:
    """Split content on ``\\n`` so line N is ``lines[N - 1]``.

    A trailing newline does not produce an extra empty line, and a
    trailing ``\\r`` (CRLF input) is dropped from each line.
    """
    lines = content.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def offset_to_position(content: str, offset: int) -> tuple[int, int]:
    """Translate a character offset into a 1-indexed (line, column) pair."""
    offset = max(0, min(offset, len(content)))
    line = content.count("\n", 0, offset) + 1
    column = offset - (content.rfind("\n", 0, offset) + 1) + 1
    return line, column


def line_at(lines: list[str], line: int) -> str:
    """Return the verbatim source line for a 1-indexed line number."""
    if 1 <= line <= len(lines):
        return lines[line - 1]
    return ""


def leading_spaces(line: str) -> int:
    """Count the run of spaces at the start of a line."""
    return len(line) - len(line.lstrip(" "))


def has_odd_indent(line: str) -> bool:
    """True for a non-blank line indented by an odd number of spaces."""
    if not line.strip() or not line.startswith(" "):
        return False
    return leading_spaces(line) % 2 != 0


def is_significant(stripped: str, comment_prefixes: tuple[str, ...] = ("#",)) -> bool:
    """True for a stripped line that is neither blank nor a comment."""
    return bool(stripped) and not stripped.startswith(comment_prefixes)
