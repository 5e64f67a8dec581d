"""Dockerfile instruction validation."""

from __future__ import annotations

from confcheck.validator.base import SyntaxChecker
from confcheck.validator.models import Dialect

VALID_INSTRUCTIONS = {
    "FROM",
    "RUN",
    "CMD",
    "LABEL",
    "EXPOSE",
    "ENV",
    "ADD",
    "COPY",
    "ENTRYPOINT",
    "VOLUME",
    "USER",
    "WORKDIR",
    "ARG",
    "ONBUILD",
    "STOPSIGNAL",
    "HEALTHCHECK",
    "SHELL",
}

# FROM on a later (1-indexed) line than this is flagged.
FROM_LINE_LIMIT = 10


class DockerfileChecker(SyntaxChecker):
    dialects = (Dialect.dockerfile,)

    def check(self) -> None:
        has_from = False
        continued = False

        for index, line in enumerate(self.lines):
            line_num = index + 1
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            # Lines after a trailing backslash belong to the previous instruction.
            is_continuation = continued
            continued = stripped.endswith("\\")
            if is_continuation:
                continue

            instruction = stripped.split()[0].upper()

            if instruction == "FROM":
                has_from = True
                if line_num > FROM_LINE_LIMIT:
                    self.warning(
                        line_num,
                        "FROM instruction should be near the beginning of Dockerfile",
                        "DOCKERFILE_FROM_POSITION",
                        suggestion="Move FROM instruction to the top of the file",
                    )

            if instruction not in VALID_INSTRUCTIONS:
                self.error(
                    line_num,
                    f"Unknown Dockerfile instruction: {instruction}",
                    "DOCKERFILE_UNKNOWN_INSTRUCTION",
                )

            if (
                instruction == "RUN"
                and "apt-get update" in stripped
                and "apt-get install" not in stripped
            ):
                self.warning(
                    line_num,
                    "apt-get update should be combined with apt-get install",
                    "DOCKERFILE_APT_UPDATE",
                    suggestion="Combine apt-get update && apt-get install in single RUN instruction",
                )

        if not has_from:
            self.error(1, "Dockerfile must contain a FROM instruction", "DOCKERFILE_MISSING_FROM")
