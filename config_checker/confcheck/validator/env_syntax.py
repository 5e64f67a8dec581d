"""Dotenv (.env) file validation."""

from __future__ import annotations

import re

from confcheck.validator.base import SyntaxChecker
from confcheck.validator.models import Dialect

VARIABLE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
EXPORT_PREFIX_RE = re.compile(r"^export\s+")
EMPTY_VALUES = {"", '""', "''"}


class EnvChecker(SyntaxChecker):
    dialects = (Dialect.env,)

    def check(self) -> None:
        first_seen: dict[str, int] = {}

        for index, line in enumerate(self.lines):
            line_num = index + 1
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            if "=" not in stripped:
                self.error(
                    line_num,
                    "Invalid environment variable format (missing =)",
                    "ENV_INVALID_FORMAT",
                )
                continue

            key, _, value = stripped.partition("=")
            variable = EXPORT_PREFIX_RE.sub("", key.strip())

            if not VARIABLE_NAME_RE.match(variable):
                self.warning(
                    line_num,
                    f"Environment variable name '{variable}' should follow naming conventions",
                    "ENV_INVALID_NAME",
                    suggestion="Use uppercase letters, numbers, and underscores only",
                )

            if variable in first_seen:
                self.warning(
                    line_num,
                    f"Duplicate environment variable: {variable}",
                    "ENV_DUPLICATE_VARIABLE",
                    suggestion=(
                        f"Remove duplicate variable definition (first defined on line "
                        f"{first_seen[variable]})"
                    ),
                )
            else:
                first_seen[variable] = line_num

            if value.strip() in EMPTY_VALUES:
                self.warning(
                    line_num,
                    f"Empty environment variable value for {variable}",
                    "ENV_EMPTY_VALUE",
                    suggestion="Consider providing a default value",
                    column=line.index("=") + 1,
                )
