"""Apache httpd configuration validation."""

from __future__ import annotations

import re

from confcheck.validator.base import SyntaxChecker
from confcheck.validator.models import Dialect

CONTAINER_RE = re.compile(r"^<\s*(/?)\s*([A-Za-z][\w.-]*)[^>]*>$")
ALLOW_OVERRIDE_ALL_RE = re.compile(r"\bAllowOverride\s+All\b", re.IGNORECASE)


class ApacheChecker(SyntaxChecker):
    dialects = (Dialect.apache,)

    def check(self) -> None:
        stack: list[tuple[str, int]] = []

        for index, line in enumerate(self.lines):
            line_num = index + 1
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            match = CONTAINER_RE.match(stripped)
            if match:
                name = match.group(2)
                if match.group(1) == "/":
                    opened = stack.pop()[0] if stack else None
                    if opened is None or opened.lower() != name.lower():
                        expected = f" (expected </{opened}>)" if opened else ""
                        self.error(
                            line_num,
                            f"Mismatched Apache directive: </{name}>{expected}",
                            "APACHE_MISMATCHED_DIRECTIVE",
                        )
                else:
                    stack.append((name, line_num))

            if ALLOW_OVERRIDE_ALL_RE.search(stripped):
                self.warning(
                    line_num,
                    "AllowOverride All can impact performance",
                    "APACHE_ALLOW_OVERRIDE_ALL",
                    suggestion="Consider using specific override options instead of All",
                )

        for name, line_num in stack:
            self.error(
                line_num,
                f"Unclosed Apache directive: <{name}>",
                "APACHE_UNCLOSED_DIRECTIVE",
            )
