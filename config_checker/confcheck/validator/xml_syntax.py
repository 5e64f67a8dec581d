"""XML well-formedness check using an explicit tag stack."""

from __future__ import annotations

import re

from confcheck.validator.base import SyntaxChecker
from confcheck.validator.lines import offset_to_position
from confcheck.validator.models import Dialect

TAG_RE = re.compile(r"<(/?)([A-Za-z_][\w.:-]*)[^<>]*?(/?)>")
# Regions whose content is not markup: comments, CDATA, PIs, DOCTYPE.
OPAQUE_RE = re.compile(
    r"<!--.*?-->|<!\[CDATA\[.*?\]\]>|<\?.*?\?>|<!DOCTYPE[^>]*>",
    re.DOTALL,
)


def _blank_out(match: re.Match) -> str:
    """Replace a region with spaces, keeping newlines so offsets stay valid."""
    return re.sub(r"[^\n]", " ", match.group(0))


class XmlChecker(SyntaxChecker):
    dialects = (Dialect.xml,)

    def check(self) -> None:
        markup = OPAQUE_RE.sub(_blank_out, self.content)
        stack: list[str] = []

        for match in TAG_RE.finditer(markup):
            is_closing = match.group(1) == "/"
            tag = match.group(2)
            if match.group(3) == "/":
                continue

            if not is_closing:
                stack.append(tag)
                continue

            line, column = offset_to_position(self.content, match.start())
            if tag not in stack:
                self.error(
                    line,
                    f"Closing tag </{tag}> without matching opening tag",
                    "XML_UNMATCHED_CLOSING_TAG",
                    column=column,
                )
                continue

            last = stack.pop()
            if last != tag:
                self.error(
                    line,
                    f"Mismatched tags: expected </{last}>, found </{tag}>",
                    "XML_MISMATCHED_TAGS",
                    column=column,
                )
                # Close everything up to the matching opener.
                while stack and stack[-1] != tag:
                    stack.pop()
                if stack:
                    stack.pop()

        if stack:
            self.error(
                len(self.lines),
                f"Unclosed tags: {', '.join(stack)}",
                "XML_UNCLOSED_TAGS",
            )
