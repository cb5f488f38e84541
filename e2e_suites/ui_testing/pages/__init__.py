"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for application pages.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Scraping of data handed to browser-free checks

Author: Automation Team
License: MIT
================================================================================
"""

from .banking_page import BankingPage, BankingPageError

__all__ = [
    "BankingPage",
    "BankingPageError",
]
