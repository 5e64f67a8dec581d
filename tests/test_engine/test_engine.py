"""Tests for the async ValidationEngine."""

from __future__ import annotations

import asyncio
import threading

import pytest

from confcheck.engine import engine as engine_module
from confcheck.engine import pipeline
from confcheck.engine.engine import ValidationEngine
from confcheck.engine.errors import ContentTooLargeError
from confcheck.engine.pipeline import CancelToken
from confcheck.validator.models import (
    DeclaredType,
    Dialect,
    ValidationLimits,
    ValidationOptions,
)


class TestValidationEngine:
    @pytest.mark.asyncio
    async def test_validate(self, dockerfile: str) -> None:
        engine = ValidationEngine()
        outcome = await engine.validate(dockerfile)
        assert outcome.success is True
        assert outcome.result.metadata.detected_format is Dialect.dockerfile

    @pytest.mark.asyncio
    async def test_limits_enforced(self) -> None:
        engine = ValidationEngine(ValidationLimits(max_content_bytes=5))
        with pytest.raises(ContentTooLargeError):
            await engine.validate("name: app\n")

    @pytest.mark.asyncio
    async def test_update_limits(self) -> None:
        engine = ValidationEngine()
        engine.update_limits(ValidationLimits(max_content_bytes=5))
        assert engine.limits.max_content_bytes == 5
        with pytest.raises(ContentTooLargeError):
            await engine.validate("name: app\n")

    def test_detect(self) -> None:
        engine = ValidationEngine()
        assert engine.detect('{"a": 1}') is Dialect.json
        assert engine.detect('{"a": 1}', DeclaredType.yaml) is Dialect.yaml

    @pytest.mark.asyncio
    async def test_apply_fixes(self) -> None:
        engine = ValidationEngine()
        result = await engine.apply_fixes(
            '{"a": [1, 2,]}\n', ValidationOptions(file_type=DeclaredType.json),
        )
        assert result.applied == 1
        assert result.content == '{"a": [1, 2]}\n'

    @pytest.mark.asyncio
    async def test_apply_fixes_leaves_string_values_alone(self) -> None:
        content = '{\n  "sep": "a,}"\n}\n'
        result = await ValidationEngine().apply_fixes(
            content, ValidationOptions(file_type=DeclaredType.json),
        )
        assert result.total == 0
        assert result.content == content

    @pytest.mark.asyncio
    async def test_apply_fixes_on_empty_content(self) -> None:
        result = await ValidationEngine().apply_fixes("  ")
        assert result.total == 0
        assert result.content == "  "

    @pytest.mark.asyncio
    async def test_cancel_sets_token(self, monkeypatch: pytest.MonkeyPatch) -> None:
        tokens: list[CancelToken] = []
        started = threading.Event()
        release = threading.Event()

        class RecordingToken(CancelToken):
            def __init__(self) -> None:
                super().__init__()
                tokens.append(self)

        def slow_syntax(*args: object):
            started.set()
            release.wait(5)

        monkeypatch.setattr(engine_module, "CancelToken", RecordingToken)
        monkeypatch.setattr(pipeline, "validate_syntax", slow_syntax)

        engine = ValidationEngine()
        task = asyncio.create_task(engine.validate("name: app\n"))
        try:
            await asyncio.to_thread(started.wait, 5)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            assert tokens[0].cancelled is True
        finally:
            release.set()
