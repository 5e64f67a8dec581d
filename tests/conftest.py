"""Shared test fixtures and configuration."""

import os
import sys
from pathlib import Path

# Add config_checker/ to Python path so `from confcheck.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "config_checker"))

import pytest

os.environ["CONFCHECK_DEV_MODE"] = "true"


@pytest.fixture
def nginx_config() -> str:
    return (
        "server {\n"
        "    listen 80;\n"
        "    server_name example.com;\n"
        "    location / {\n"
        "        root /var/www/html;\n"
        "    }\n"
        "}\n"
    )


@pytest.fixture
def dockerfile() -> str:
    return (
        "FROM python:3.12-slim\n"
        "LABEL maintainer=\"ops@example.com\"\n"
        "WORKDIR /app\n"
        "COPY requirements.txt .\n"
        "RUN pip install -r requirements.txt\n"
        "USER app\n"
        "HEALTHCHECK CMD curl -f http://localhost/ || exit 1\n"
        "CMD [\"python\", \"main.py\"]\n"
    )


@pytest.fixture
def yaml_with_password() -> str:
    return (
        "database:\n"
        "  host: db.internal\n"
        "  password: \"secret123\"\n"
    )
