"""Performance heuristics: size, structure and dialect-specific hints."""

from __future__ import annotations

import json
import re

from confcheck.reviewer.models import (
    Impact,
    PerformanceAnalysis,
    PerformanceIssue,
    PerformanceOptimization,
    ResourceUsage,
)
from confcheck.validator.models import Dialect

LARGE_FILE_LINES = 1000
MAX_RUN_INSTRUCTIONS = 5
# Minified JSON must save at least this share of the original size.
MINIFY_MIN_SAVING = 0.10

RUN_RE = re.compile(r"^RUN\s+", re.MULTILINE)
GZIP_ON_RE = re.compile(r"\bgzip\s+on\b")
CACHE_HEADERS_RE = re.compile(r"\bexpires\s|Cache-Control")


def _tier(value: int, medium: int, high: int) -> Impact:
    if value > high:
        return Impact.high
    if value > medium:
        return Impact.medium
    return Impact.low


def resource_usage(line_count: int, byte_size: int, dialect: Dialect) -> ResourceUsage:
    """Derive coarse impact levels from line count and byte size."""
    network = _tier(byte_size, 50_000, 500_000)
    if dialect is Dialect.json and byte_size > 50_000:
        network = Impact.high
    return ResourceUsage(
        memory_impact=_tier(line_count, 500, 5_000),
        cpu_impact=_tier(byte_size, 10_000, 100_000),
        network_impact=network,
        disk_impact=_tier(byte_size, 100_000, 1_000_000),
    )


def check_json(content: str) -> tuple[list[PerformanceIssue], list[PerformanceOptimization]]:
    try:
        parsed = json.loads(content)
    except ValueError:
        return [], []
    minified = json.dumps(parsed, separators=(",", ":"), ensure_ascii=False)
    saving = len(content) - len(minified)
    if saving > 0 and saving >= len(content) * MINIFY_MIN_SAVING:
        return [], [
            PerformanceOptimization(
                type="JSON Minification",
                description="JSON can be minified for production",
                estimated_improvement=f"{round(saving * 100 / len(content))}% size reduction",
                implementation="Remove whitespace and formatting",
            )
        ]
    return [], []


def check_nginx(content: str) -> tuple[list[PerformanceIssue], list[PerformanceOptimization]]:
    optimizations: list[PerformanceOptimization] = []
    if not GZIP_ON_RE.search(content):
        optimizations.append(
            PerformanceOptimization(
                type="Compression",
                description="Enable gzip compression",
                estimated_improvement="60-80% bandwidth reduction",
                implementation='Add "gzip on;" and configure gzip settings',
            )
        )
    if not CACHE_HEADERS_RE.search(content):
        optimizations.append(
            PerformanceOptimization(
                type="Caching",
                description="Configure browser caching headers",
                estimated_improvement="50-90% reduced server load",
                implementation="Add expires or add_header Cache-Control directives",
            )
        )
    return [], optimizations


def check_dockerfile(content: str) -> tuple[list[PerformanceIssue], list[PerformanceOptimization]]:
    run_count = len(RUN_RE.findall(content))
    if run_count <= MAX_RUN_INSTRUCTIONS:
        return [], []
    return [
        PerformanceIssue(
            type="Excessive Layers",
            description=f"{run_count} RUN commands create excessive layers",
            impact=Impact.medium,
            location="Multiple RUN commands",
            suggestion="Combine RUN commands with && to reduce layers",
        )
    ], []


DIALECT_RULES = {
    Dialect.json: check_json,
    Dialect.nginx: check_nginx,
    Dialect.dockerfile: check_dockerfile,
}


def analyze(content: str, dialect: Dialect, line_count: int) -> PerformanceAnalysis:
    issues: list[PerformanceIssue] = []
    optimizations: list[PerformanceOptimization] = []

    if line_count > LARGE_FILE_LINES:
        issues.append(
            PerformanceIssue(
                type="Large File Size",
                description=f"Configuration file is very large ({line_count} lines)",
                impact=Impact.medium,
                location="Entire file",
                suggestion="Consider breaking into smaller, modular configuration files",
            )
        )

    rule = DIALECT_RULES.get(dialect)
    if rule:
        dialect_issues, dialect_optimizations = rule(content)
        issues.extend(dialect_issues)
        optimizations.extend(dialect_optimizations)

    return PerformanceAnalysis(
        score=max(0, 100 - 15 * len(issues)),
        issues=issues,
        optimizations=optimizations,
        resource_usage=resource_usage(line_count, len(content.encode("utf-8")), dialect),
    )
