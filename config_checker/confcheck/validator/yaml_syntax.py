"""YAML syntax validation: line scan plus a ruamel.yaml parse."""

from __future__ import annotations

import logging
import re
from io import StringIO

from ruamel.yaml import YAML, YAMLError

from confcheck.validator.base import SyntaxChecker
from confcheck.validator.lines import has_odd_indent
from confcheck.validator.models import Dialect

logger = logging.getLogger(__name__)

TOP_LEVEL_KEY_RE = re.compile(r"^([^\s#:-][^:#]*?)\s*:(?:\s|$)")
DOCUMENT_MARKER_RE = re.compile(r"^(?:---|\.\.\.)(?:\s|$)")


class YamlChecker(SyntaxChecker):
    dialects = (Dialect.yaml,)

    def check(self) -> None:
        seen_keys: dict[str, int] = {}
        has_tabs = False

        for index, line in enumerate(self.lines):
            line_num = index + 1

            if "\t" in line:
                has_tabs = True
                self.error(
                    line_num,
                    "YAML does not allow tabs for indentation",
                    "YAML_TAB_ERROR",
                    column=line.index("\t") + 1,
                )

            if has_odd_indent(line):
                self.warning(
                    line_num,
                    "Inconsistent indentation in YAML",
                    "YAML_INCONSISTENT_INDENT",
                    suggestion="Use consistent 2-space indentation",
                )

            # Each document has its own top-level key namespace.
            if DOCUMENT_MARKER_RE.match(line):
                seen_keys.clear()
                continue

            match = TOP_LEVEL_KEY_RE.match(line)
            if not match:
                continue
            key = match.group(1).strip().strip("'\"")
            first_line = seen_keys.get(key)
            if first_line is None:
                seen_keys[key] = line_num
            else:
                self.warning(
                    line_num,
                    f"Duplicate key '{key}' found",
                    "YAML_DUPLICATE_KEY",
                    suggestion=(
                        f"Remove or rename duplicate key (first defined on line {first_line})"
                    ),
                )

        if not has_tabs:
            self._parse()

    def _parse(self) -> None:
        yaml = YAML()
        yaml.allow_duplicate_keys = True
        try:
            for _ in yaml.load_all(StringIO(self.content)):
                pass
        except YAMLError as e:
            line = 1
            column = 1
            mark = getattr(e, "problem_mark", None) or getattr(e, "context_mark", None)
            if mark is not None:
                line = mark.line + 1  # 0-indexed to 1-indexed
                column = mark.column + 1
            problem = getattr(e, "problem", None) or (str(e).splitlines() or ["unknown error"])[0]
            logger.debug("YAML parser rejected content at line %d: %s", line, problem)
            self.parser_failure(line, f"YAML parse error: {problem}", "YAML_PARSE_ERROR", column=column)
