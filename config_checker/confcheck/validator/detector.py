"""Format detection: classify unknown content into a dialect."""

from __future__ import annotations

import json
import logging
import re
from typing import Callable

from confcheck.validator.lines import is_significant
from confcheck.validator.models import DeclaredType, Dialect

logger = logging.getLogger(__name__)

# Patterns are anchored per line and avoid nested quantifiers.
YAML_KEY_RE = re.compile(r"^\s*[\w.-]+\s*:(?:\s|$)")
YAML_LIST_ITEM_RE = re.compile(r"^\s*-(?:\s|$)")
TOML_HEADER_RE = re.compile(r"^\s*\[\[?[^\[\]\n]+\]\]?\s*$", re.MULTILINE)
TOML_ASSIGNMENT_RE = re.compile(r"^\s*[^\s=#\[][^=\n]*=", re.MULTILINE)
DOCKERFILE_RE = re.compile(r"^\s*(?:FROM|RUN|COPY)\s", re.MULTILINE)
ENV_ASSIGNMENT_RE = re.compile(r"^(?:export\s+)?[A-Za-z_]\w*=")
ENV_EXPORT_RE = re.compile(r"^\s*export\s", re.MULTILINE)
INI_SECTION_RE = re.compile(r"^\s*\[[^\]\n]+\]\s*$", re.MULTILINE)


def _first_significant_line(lines: list[str]) -> str:
    for line in lines:
        stripped = line.strip()
        if is_significant(stripped):
            return stripped
    return ""


def looks_like_json(trimmed: str) -> bool:
    if not trimmed.startswith(("{", "[")):
        return False
    try:
        json.loads(trimmed)
    except ValueError:
        return False
    return True


def looks_like_yaml(trimmed: str) -> bool:
    """YAML when the first line is a key or document marker and key/list
    lines make up at least half of the significant lines."""
    lines = trimmed.split("\n")
    first = _first_significant_line(lines)
    if not (first == "---" or first.startswith("--- ") or YAML_KEY_RE.match(first)):
        return False
    significant = [line for line in lines if is_significant(line.strip())]
    yaml_lines = sum(
        1
        for line in significant
        if line.strip() == "---" or YAML_KEY_RE.match(line) or YAML_LIST_ITEM_RE.match(line)
    )
    return yaml_lines * 2 >= len(significant)


def looks_like_toml(trimmed: str) -> bool:
    return bool(TOML_HEADER_RE.search(trimmed)) and bool(TOML_ASSIGNMENT_RE.search(trimmed))


def looks_like_xml(trimmed: str) -> bool:
    return trimmed.startswith("<?xml") or trimmed.startswith("<")


def looks_like_dockerfile(trimmed: str) -> bool:
    return bool(DOCKERFILE_RE.search(trimmed))


def looks_like_nginx(trimmed: str) -> bool:
    return "server {" in trimmed or "location /" in trimmed


def looks_like_apache(trimmed: str) -> bool:
    return "<VirtualHost" in trimmed or "LoadModule" in trimmed


def looks_like_env(trimmed: str) -> bool:
    first = _first_significant_line(trimmed.split("\n"))
    return bool(ENV_ASSIGNMENT_RE.match(first)) or bool(ENV_EXPORT_RE.search(trimmed))


def looks_like_ini(trimmed: str) -> bool:
    return bool(INI_SECTION_RE.search(trimmed))


# First match wins; the order resolves overlapping signatures
# (e.g. TOML before INI, XML before Apache).
SIGNATURES: list[tuple[Dialect, Callable[[str], bool]]] = [
    (Dialect.json, looks_like_json),
    (Dialect.yaml, looks_like_yaml),
    (Dialect.toml, looks_like_toml),
    (Dialect.xml, looks_like_xml),
    (Dialect.dockerfile, looks_like_dockerfile),
    (Dialect.nginx, looks_like_nginx),
    (Dialect.apache, looks_like_apache),
    (Dialect.env, looks_like_env),
    (Dialect.ini, looks_like_ini),
]


def detect_dialect(content: str, declared: DeclaredType | str = DeclaredType.auto) -> Dialect:
    """Resolve the dialect for ``content``.

    An explicit declaration always wins. In auto mode the trimmed content
    is tested against each signature in priority order; ``properties`` is
    the fallback, so detection never fails.
    """
    declared = DeclaredType(declared)
    if declared is not DeclaredType.auto:
        return Dialect(declared.value)

    trimmed = content.strip()
    for dialect, matches in SIGNATURES:
        if matches(trimmed):
            logger.debug("Detected dialect: %s", dialect.value)
            return dialect
    return Dialect.properties
