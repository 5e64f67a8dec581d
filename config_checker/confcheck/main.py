"""FastAPI application -- config checker entrypoint."""

from __future__ import annotations

import json
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI

import confcheck.deps as deps
from confcheck.api.settings import router as settings_router
from confcheck.api.validate import router as validate_router
from confcheck.engine.engine import ValidationEngine
from confcheck.validator.models import ValidationLimits

logger = logging.getLogger(__name__)


def _load_options() -> dict:
    """Load service options from /data/options.json or env fallback."""
    opts_path = os.environ.get("CONFCHECK_OPTIONS_PATH", "/data/options.json")
    if Path(opts_path).exists():
        return json.loads(Path(opts_path).read_text())
    options: dict = {}
    if "CONFCHECK_MAX_CONTENT_BYTES" in os.environ:
        options["max_content_bytes"] = int(os.environ["CONFCHECK_MAX_CONTENT_BYTES"])
    if "CONFCHECK_TIMEOUT_SECONDS" in os.environ:
        options["timeout_seconds"] = float(os.environ["CONFCHECK_TIMEOUT_SECONDS"])
    return options


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: init resources on startup, clean up on shutdown."""
    log_level = logging.DEBUG if os.environ.get("CONFCHECK_DEV_MODE") else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    options = _load_options()
    limits = ValidationLimits.model_validate(
        {k: v for k, v in options.items() if k in ValidationLimits.model_fields}
    )
    logger.info(
        "Config checker starting: max_content_bytes=%d, timeout_seconds=%.1f",
        limits.max_content_bytes,
        limits.timeout_seconds,
    )

    deps._validation_engine = ValidationEngine(limits)

    yield

    deps._validation_engine = None


app = FastAPI(
    title="Config Checker",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(validate_router)
app.include_router(settings_router)


def serve() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(
        app,
        host=os.environ.get("CONFCHECK_HOST", "0.0.0.0"),
        port=int(os.environ.get("CONFCHECK_PORT", "8099")),
    )
