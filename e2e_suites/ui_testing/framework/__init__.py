"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework.

Components:
    - page_base: Base page object for common operations
    - browser_manager: Browser lifecycle management
    - wait_helpers: Poll-with-timeout for asynchronously rendered UI state

Author: Automation Team
License: MIT
================================================================================
"""

from .page_base import BasePage, DialogTimeoutError
from .browser_manager import BrowserManager
from .wait_helpers import AsyncWaiter, WaitConfig, WaitTimeoutError, get_wait_config

__all__ = [
    "BasePage",
    "DialogTimeoutError",
    "BrowserManager",
    "AsyncWaiter",
    "WaitConfig",
    "WaitTimeoutError",
    "get_wait_config",
]
