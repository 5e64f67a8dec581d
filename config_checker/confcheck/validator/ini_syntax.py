"""INI and Java properties validation."""

from __future__ import annotations

from confcheck.validator.base import SyntaxChecker
from confcheck.validator.models import Dialect


class IniChecker(SyntaxChecker):
    """Sections, section-less properties and malformed lines.

    ``properties`` content shares these rules, so a properties file
    without sections gets one warning per key/value line.
    """

    dialects = (Dialect.ini, Dialect.properties)

    def check(self) -> None:
        current_section = ""
        sections: dict[str, int] = {}

        for index, line in enumerate(self.lines):
            line_num = index + 1
            stripped = line.strip()
            if not stripped or stripped.startswith(("#", ";")):
                continue

            if stripped.startswith("[") and stripped.endswith("]"):
                current_section = stripped[1:-1].strip()
                if current_section in sections:
                    self.warning(
                        line_num,
                        f"Duplicate section: [{current_section}]",
                        "INI_DUPLICATE_SECTION",
                        suggestion=(
                            f"Consider merging with the section on line "
                            f"{sections[current_section]}"
                        ),
                    )
                else:
                    sections[current_section] = line_num
            elif "=" in stripped:
                if not current_section:
                    self.warning(
                        line_num,
                        "Property defined outside of section",
                        "INI_PROPERTY_OUTSIDE_SECTION",
                        suggestion="Define properties within a section",
                    )
                key = stripped.partition("=")[0]
                if not key.strip():
                    self.error(line_num, "Empty property name", "INI_EMPTY_KEY")
            else:
                self.warning(
                    line_num,
                    "Invalid INI format (not a section or key-value pair)",
                    "INI_INVALID_LINE",
                    suggestion="Ensure line is either [section] or key=value format",
                )
