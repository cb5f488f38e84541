"""
Repository-level pytest configuration.

Why this exists:
  - Provide safe defaults for local runs (public demo application, no secrets)
  - Register command line options shared by every suite
  - Keep behavior explicit and discoverable
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


def pytest_addoption(parser):
    """Register suite-wide command line options."""
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run browser end-to-end tests against the live demo application",
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _demo_safe_env_defaults() -> Generator[None, None, None]:
    """
    Set demo-safe environment defaults if not already provided by the user/CI.
    """
    defaults = {
        "UI_BASE_URL": "https://www.way2automation.com",
        "UI_BROWSER": "chromium",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
