"""TOML syntax validation."""

from __future__ import annotations

import re
import tomllib

from confcheck.validator.base import SyntaxChecker
from confcheck.validator.models import Dialect

SECTION_NAME_RE = re.compile(r"^[a-zA-Z0-9._-]+$")
DECODE_POSITION_RE = re.compile(r"line (\d+), column (\d+)")


class TomlChecker(SyntaxChecker):
    """Header names and key/value shape; a full ``tomllib`` parse in strict mode."""

    dialects = (Dialect.toml,)

    def check(self) -> None:
        for index, line in enumerate(self.lines):
            line_num = index + 1
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            if stripped.startswith("[") and stripped.endswith("]"):
                section = stripped[1:-1]
                # Array of tables: [[name]]
                if section.startswith("[") and section.endswith("]"):
                    section = section[1:-1]
                if not SECTION_NAME_RE.match(section.strip()):
                    self.error(line_num, "Invalid section name in TOML", "TOML_SECTION_ERROR")
            elif "=" in stripped:
                key, _, value = stripped.partition("=")
                if not key.strip():
                    self.error(line_num, "Empty key in TOML key-value pair", "TOML_EMPTY_KEY")
                if not value.strip():
                    self.warning(
                        line_num,
                        "Empty value in TOML key-value pair",
                        "TOML_EMPTY_VALUE",
                        suggestion="Consider providing a default value or removing the key",
                        column=line.index("=") + 2,
                    )

        if self.strict:
            self._parse()

    def _parse(self) -> None:
        try:
            tomllib.loads(self.content)
        except tomllib.TOMLDecodeError as e:
            line, column = 1, 1
            match = DECODE_POSITION_RE.search(str(e))
            if match:
                line, column = int(match.group(1)), int(match.group(2))
            self.parser_failure(line, f"TOML parse error: {e}", "TOML_PARSE_ERROR", column=column)
