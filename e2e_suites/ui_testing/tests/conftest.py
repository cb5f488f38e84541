"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for browser management, page objects and per-test customer data.

Key Features:
- Browser and page lifecycle management
- Page Object fixtures
- Unique customer identities per test

================================================================================
"""

from typing import AsyncGenerator, Dict
from uuid import uuid4

import pytest
import pytest_asyncio
from playwright.async_api import Page

from e2e_suites.common import get_config
from e2e_suites.ui_testing.framework.browser_manager import BrowserManager
from e2e_suites.ui_testing.pages.banking_page import BankingPage


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest_asyncio.fixture
async def browser_manager() -> AsyncGenerator[BrowserManager, None]:
    """
    Function-scoped browser manager.

    Each banking flow gets its own browser; the demo app keeps state in
    localStorage, so sharing a context would leak customers between tests.
    """
    async with BrowserManager() as manager:
        yield manager


@pytest_asyncio.fixture
async def page(browser_manager: BrowserManager) -> AsyncGenerator[Page, None]:
    """Fresh page in an isolated context."""
    page = await browser_manager.new_page()
    yield page
    await page.close()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest_asyncio.fixture
async def banking_page(page: Page) -> BankingPage:
    """Provides BankingPage opened on the login screen."""
    return await BankingPage(page).open()


# ================================================================================
# Test Data Fixtures
# ================================================================================

@pytest.fixture
def customer() -> Dict[str, str]:
    """
    Unique customer identity for one test.
    """
    suffix = uuid4().hex[:6]
    first_name = f"TestUser{suffix}"
    last_name = f"LastName{suffix}"
    return {
        "first_name": first_name,
        "last_name": last_name,
        "post_code": f"PC{suffix}",
        "full_name": f"{first_name} {last_name}",
        "currency": get_config("banking.currency", "Dollar"),
    }


@pytest.fixture
def large_withdrawal() -> str:
    """Amount well above any balance a test builds up."""
    return str(get_config("banking.large_withdrawal", "1000000"))
