"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers, tags tests by location and keeps browser
end-to-end tests opt-in.

================================================================================
"""

import os

import pytest

from e2e_suites.common import init_logger


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "unit: Browser-free tests"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests against the live demo application"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )
    config.addinivalue_line(
        "markers", "banking: Tests related to the banking demo application"
    )
    config.addinivalue_line(
        "markers", "ledger: Tests related to transaction ledger reconciliation"
    )

    init_logger()


def _e2e_enabled(config) -> bool:
    if config.getoption("--run-e2e", default=False):
        return True
    return os.environ.get("RUN_E2E", "").lower() in ("1", "true", "yes", "on")


def pytest_collection_modifyitems(config, items):
    """
    Tag collected tests by directory and skip e2e tests unless enabled.
    """
    skip_e2e = pytest.mark.skip(reason="browser e2e test: use --run-e2e or RUN_E2E=1")
    run_e2e = _e2e_enabled(config)

    for item in items:
        path = str(item.fspath)

        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.e2e)

        if "unit" in path.replace("\\", "/").split("/"):
            item.add_marker(pytest.mark.unit)

        if "e2e" in item.keywords and not run_e2e:
            item.add_marker(skip_e2e)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Banking UI Suite / Ledger Reconciliation",
        "=" * 60,
        "",
    ]
