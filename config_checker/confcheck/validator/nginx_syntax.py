"""Nginx configuration validation."""

from __future__ import annotations

import re

from confcheck.validator.base import SyntaxChecker
from confcheck.validator.models import Dialect

INLINE_COMMENT_RE = re.compile(r"\s+#.*$")
LISTEN_RE = re.compile(r"^listen\b")
LISTEN_PORT_RE = re.compile(r"^listen\s+(?:\S*:)?\d+\b")


class NginxChecker(SyntaxChecker):
    dialects = (Dialect.nginx,)

    def check(self) -> None:
        balance = 0

        for index, line in enumerate(self.lines):
            line_num = index + 1
            stripped = INLINE_COMMENT_RE.sub("", line.strip())
            if not stripped or stripped.startswith("#"):
                continue

            balance += stripped.count("{") - stripped.count("}")

            if not stripped.endswith((";", "{", "}")):
                self.warning(
                    line_num,
                    "Nginx directive should end with semicolon",
                    "NGINX_MISSING_SEMICOLON",
                    suggestion="Add semicolon at the end of the directive",
                    column=len(line.rstrip()),
                )

            if LISTEN_RE.match(stripped) and not LISTEN_PORT_RE.match(stripped):
                self.warning(
                    line_num,
                    "Invalid listen directive format",
                    "NGINX_INVALID_LISTEN",
                    suggestion="Use format: listen port_number;",
                )

        if balance != 0:
            kind = "missing closing" if balance > 0 else "extra closing"
            self.error(
                len(self.lines),
                f"Unmatched braces: {kind} braces",
                "NGINX_UNMATCHED_BRACES",
            )
