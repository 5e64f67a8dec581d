"""Tests for the performance heuristics."""

from __future__ import annotations

import json

from confcheck.reviewer.models import Impact
from confcheck.reviewer.performance_rules import analyze, resource_usage
from confcheck.validator.models import Dialect


def _types(items: list) -> list[str]:
    return [item.type for item in items]


class TestNginx:
    def test_missing_gzip_gives_one_compression_hint(self, nginx_config: str) -> None:
        result = analyze(nginx_config, Dialect.nginx, nginx_config.count("\n"))
        assert _types(result.optimizations).count("Compression") == 1

    def test_gzip_on_suppresses_hint(self, nginx_config: str) -> None:
        content = nginx_config.replace("listen 80;", "listen 80;\n    gzip on;")
        result = analyze(content, Dialect.nginx, content.count("\n"))
        assert "Compression" not in _types(result.optimizations)

    def test_caching_hint(self, nginx_config: str) -> None:
        result = analyze(nginx_config, Dialect.nginx, nginx_config.count("\n"))
        assert "Caching" in _types(result.optimizations)

        cached = nginx_config.replace("root /var/www/html;", "root /var/www/html;\n        expires 30d;")
        assert "Caching" not in _types(analyze(cached, Dialect.nginx, 8).optimizations)


class TestJson:
    def test_pretty_json_can_be_minified(self) -> None:
        content = json.dumps({f"key_{i}": {"value": i, "enabled": True} for i in range(20)}, indent=4)
        result = analyze(content, Dialect.json, content.count("\n") + 1)
        assert _types(result.optimizations) == ["JSON Minification"]
        assert result.optimizations[0].estimated_improvement.endswith("% size reduction")

    def test_compact_json_left_alone(self) -> None:
        content = json.dumps({"a": 1, "b": [1, 2]}, separators=(",", ":"))
        assert analyze(content, Dialect.json, 1).optimizations == []

    def test_invalid_json_ignored(self) -> None:
        assert analyze('{"a": ', Dialect.json, 1).optimizations == []


class TestDockerfile:
    def test_many_run_instructions(self) -> None:
        content = "FROM alpine\n" + "".join(f"RUN echo {i}\n" for i in range(6))
        result = analyze(content, Dialect.dockerfile, 7)
        assert _types(result.issues) == ["Excessive Layers"]
        assert result.score == 85

    def test_few_run_instructions(self, dockerfile: str) -> None:
        assert analyze(dockerfile, Dialect.dockerfile, 8).issues == []


class TestGeneral:
    def test_large_file(self) -> None:
        content = "a=1\n" * 1001
        result = analyze(content, Dialect.env, 1001)
        assert _types(result.issues) == ["Large File Size"]
        assert result.resource_usage.memory_impact is Impact.medium

    def test_small_file_is_clean(self) -> None:
        result = analyze("a=1\n", Dialect.env, 1)
        assert result.score == 100
        assert result.issues == []
        assert result.optimizations == []

    def test_resource_tiers(self) -> None:
        usage = resource_usage(10, 200_000, Dialect.yaml)
        assert usage.memory_impact is Impact.low
        assert usage.cpu_impact is Impact.high
        assert usage.network_impact is Impact.medium
        assert usage.disk_impact is Impact.medium

    def test_large_json_network_is_high(self) -> None:
        assert resource_usage(10, 60_000, Dialect.json).network_impact is Impact.high
        assert resource_usage(10, 60_000, Dialect.yaml).network_impact is Impact.medium
