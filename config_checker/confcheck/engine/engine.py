"""Validation engine: async front door over the threaded pipeline."""

from __future__ import annotations

import asyncio
import logging

from confcheck.engine.pipeline import CancelToken, run
from confcheck.quickfix.batch import apply_automated_fixes
from confcheck.quickfix.models import BatchResult
from confcheck.validator.detector import detect_dialect
from confcheck.validator.models import (
    DeclaredType,
    Dialect,
    ValidationLimits,
    ValidationOptions,
    ValidationOutcome,
)

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Runs validations off the event loop under the current limits."""

    def __init__(self, limits: ValidationLimits | None = None) -> None:
        self._limits = limits or ValidationLimits()

    @property
    def limits(self) -> ValidationLimits:
        return self._limits

    def update_limits(self, limits: ValidationLimits) -> None:
        self._limits = limits
        logger.info(
            "Validation limits updated: max_content_bytes=%d, timeout_seconds=%.1f",
            limits.max_content_bytes,
            limits.timeout_seconds,
        )

    async def validate(
        self,
        content: str,
        options: ValidationOptions | None = None,
    ) -> ValidationOutcome:
        """Validate ``content`` in a worker thread.

        ``ValidationFailure`` subclasses propagate to the caller. If the
        awaiting task is cancelled, the shared token is set so the
        analyses stop at their next checkpoint.
        """
        options = options or ValidationOptions()
        token = CancelToken()
        try:
            outcome = await asyncio.to_thread(run, content, options, self._limits, token)
        except asyncio.CancelledError:
            token.cancel()
            logger.info("Validation cancelled by caller")
            raise

        if outcome.result is not None:
            logger.info(
                "Validated %s content: success=%s, %d warning(s)",
                outcome.result.metadata.detected_format.value,
                outcome.success,
                len(outcome.warnings),
            )
        return outcome

    def detect(self, content: str, declared: DeclaredType = DeclaredType.auto) -> Dialect:
        return detect_dialect(content, declared)

    async def apply_fixes(
        self,
        content: str,
        options: ValidationOptions | None = None,
    ) -> BatchResult:
        """Validate with suggestions enabled, then apply the automated ones."""
        options = (options or ValidationOptions()).model_copy(
            update={"fix_suggestions": True},
        )
        outcome = await self.validate(content, options)
        if outcome.result is None:
            return BatchResult(total=0, applied=0, failed=0, content=content)
        return apply_automated_fixes(content, outcome.result.suggestions)
