"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation relative to a configured base URL
    - Direct selector interactions wrapped in Allure steps
    - Wait strategies
    - Browser dialog (alert) capture

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, List

import allure
from loguru import logger
from playwright.async_api import Dialog, Page

from e2e_suites.common import get_config


class DialogTimeoutError(Exception):
    """Raised when an expected browser dialog does not appear."""
    pass


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class BankingPage(BasePage):
            URL_PATH = "/angularjs-protractor/banking/#/login"

            async def login_as_bank_manager(self):
                await self.click_selector(self.BANK_MANAGER_LOGIN)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        page: Page,
        base_url: str = "",
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the application
        """
        self.page = page
        if not base_url:
            # UI_BASE_URL overrides ui.base_url
            base_url = get_config("ui.base_url", "https://www.way2automation.com")
        self.base_url = base_url.rstrip("/")

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    async def navigate(self, wait_for: str = "domcontentloaded") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        with allure.step(f"Navigate to {self.URL_PATH}"):
            await self.page.goto(self.url, wait_until=wait_for)
            logger.debug(f"Navigated to: {self.url}")

    # =========================================================================
    # Direct Locator Access
    # =========================================================================

    async def click_selector(
        self,
        selector: str,
        timeout: int = 5000,
    ) -> None:
        """Click element by selector."""
        with allure.step(f"Click selector: {selector}"):
            await self.page.click(selector, timeout=timeout)

    async def fill_selector(
        self,
        selector: str,
        value: str,
        timeout: int = 5000,
    ) -> None:
        """Clear and fill element by selector."""
        with allure.step(f"Fill selector: {selector}"):
            await self.page.fill(selector, value, timeout=timeout)

    async def select_option(
        self,
        selector: str,
        label: str,
        timeout: int = 5000,
    ) -> None:
        """Select a <select> option by its visible text."""
        with allure.step(f"Select '{label}' in {selector}"):
            await self.page.select_option(selector, label=label, timeout=timeout)

    async def get_text(
        self,
        selector: str,
        timeout: int = 5000,
    ) -> str:
        """Get inner text of the first element matching selector."""
        locator = self.page.locator(selector).first
        await locator.wait_for(state="visible", timeout=timeout)
        return await locator.inner_text()

    async def is_visible(
        self,
        selector: str,
        timeout: int = 2000,
    ) -> bool:
        """Check if the first element matching selector becomes visible."""
        try:
            await self.page.locator(selector).first.wait_for(state="visible", timeout=timeout)
            return True
        except Exception:
            return False

    async def all_texts(self, selector: str) -> List[str]:
        """Inner texts of every element currently matching selector."""
        return [await item.inner_text() for item in await self.page.locator(selector).all()]

    # =========================================================================
    # Wait Utilities
    # =========================================================================

    async def wait_for_element(
        self,
        selector: str,
        state: str = "visible",
        timeout: int = 5000,
    ) -> None:
        """
        Wait for element to reach specified state.

        Args:
            selector: CSS / XPath / text selector
            state: Target state - 'visible', 'hidden', 'attached', 'detached'
            timeout: Timeout in milliseconds
        """
        await self.page.wait_for_selector(selector, state=state, timeout=timeout)

    # =========================================================================
    # Dialogs
    # =========================================================================

    async def accept_next_dialog(
        self,
        trigger: Callable[[], Awaitable[Any]],
        timeout: int = 5000,
    ) -> str:
        """
        Run `trigger`, accept the alert it opens and return the alert text.

        The handler is only registered while this call runs, so later dialogs
        are left to Playwright's default (dismiss).

        Raises:
            DialogTimeoutError: If no dialog appears within timeout
        """
        message: asyncio.Future = asyncio.get_running_loop().create_future()

        async def _handle(dialog: Dialog) -> None:
            if not message.done():
                message.set_result(dialog.message)
            await dialog.accept()

        self.page.on("dialog", _handle)
        try:
            await trigger()
            text = await asyncio.wait_for(message, timeout / 1000)
        except asyncio.TimeoutError as e:
            raise DialogTimeoutError(
                f"No dialog appeared within {timeout}ms on {self.page.url}"
            ) from e
        finally:
            self.page.remove_listener("dialog", _handle)

        logger.debug(f"Dialog accepted: {text}")
        allure.attach(text, name="Dialog", attachment_type=allure.attachment_type.TEXT)
        return text


__all__ = [
    "BasePage",
    "PageBase",
    "DialogTimeoutError",
]

# Many Page Objects prefer PageBase naming
PageBase = BasePage
