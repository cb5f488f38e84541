"""
================================================================================
Banking Page Object (Async / Playwright)
================================================================================

Page Object for the XYZ Bank AngularJS demo
(`/angularjs-protractor/banking/#/login`).

Two roles share one page:
  - Bank manager: add customers, open accounts, search and delete customers
  - Customer: deposit, withdraw, browse and reset the transaction history

Transaction rows are only scraped here. Parsing, balance recomputation and
presence checks live in `e2e_suites.ledger`, which never sees a browser.

================================================================================
"""

from __future__ import annotations

from typing import List, Tuple

import allure
from loguru import logger
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import expect

from e2e_suites.ledger import (
    LedgerSnapshot,
    contains_exact_typed_amount,
    count_visible,
    parse_balance_label,
)
from e2e_suites.ui_testing.framework.page_base import DialogTimeoutError, PageBase
from e2e_suites.ui_testing.framework.wait_helpers import AsyncWaiter, get_wait_config


class BankingPageError(Exception):
    """Raised when a banking UI step cannot be completed."""
    pass


class BankingPage(PageBase):
    """XYZ Bank page object (async)."""

    URL_PATH = "/angularjs-protractor/banking/#/login"
    PAGE_TITLE = "XYZ Bank"

    # Home
    BANK_MANAGER_LOGIN = "button:has-text('Bank Manager Login')"
    CUSTOMER_LOGIN = "button:has-text('Customer Login')"
    HOME_BUTTON = "button:has-text('Home')"

    # Manager tabs and forms
    ADD_CUSTOMER_TAB = "button.tab:has-text('Add Customer')"
    OPEN_ACCOUNT_TAB = "button.tab:has-text('Open Account')"
    CUSTOMERS_TAB = "button.tab:has-text('Customers')"
    FIRST_NAME_INPUT = "input[ng-model='fName']"
    LAST_NAME_INPUT = "input[ng-model='lName']"
    POST_CODE_INPUT = "input[ng-model='postCd']"
    ADD_CUSTOMER_SUBMIT = "form[name='myForm'] button[type='submit']"
    CUSTOMER_SELECT = "#userSelect"
    CURRENCY_SELECT = "#currency"
    PROCESS_BUTTON = "form[ng-submit='process()'] button[type='submit']"
    CUSTOMER_SEARCH = "input[placeholder='Search Customer']"
    CUSTOMER_ROWS = "table.table-bordered tbody tr"

    # Customer account
    CUSTOMER_LOGIN_SUBMIT = "button[type='submit']:has-text('Login')"
    WELCOME_MESSAGE = "span.fontBig"
    DEPOSIT_TAB = "button[ng-click='deposit()']"
    WITHDRAW_TAB = "button[ng-click='withdrawl()']"
    TRANSACTIONS_TAB = "button[ng-click='transactions()']"
    LOGOUT_BUTTON = "button:has-text('Logout')"
    AMOUNT_INPUT = "input[ng-model='amount']"
    DEPOSIT_SUBMIT = "form button[type='submit']:has-text('Deposit')"
    WITHDRAW_SUBMIT = "form button[type='submit']:has-text('Withdraw')"
    TRANSACTION_MESSAGE = "span.error[ng-show*='message']"
    BALANCE_LABEL = "xpath=//div[@ng-hide='noAccount']//strong[@class='ng-binding'][2]"

    # Transactions
    TRANSACTIONS_TABLE = "table.table"
    TRANSACTION_ROWS = "table.table tbody tr"
    RESET_BUTTON = "button:has-text('Reset')"
    BACK_BUTTON = "button:has-text('Back')"

    @allure.step("Open banking app")
    async def open(self) -> "BankingPage":
        """Navigate to the banking login page."""
        await self.navigate()
        await self.wait_for_element(self.BANK_MANAGER_LOGIN, timeout=15000)
        return self

    @allure.step("Go to home page")
    async def go_home(self) -> None:
        await self.click_selector(self.HOME_BUTTON)
        await self.wait_for_element(self.CUSTOMER_LOGIN, timeout=10000)

    # =========================================================================
    # Bank Manager
    # =========================================================================

    @allure.step("Login as bank manager")
    async def login_as_bank_manager(self) -> None:
        await self.click_selector(self.BANK_MANAGER_LOGIN)
        await self.wait_for_element(self.ADD_CUSTOMER_TAB)

    @allure.step("Add customer {first_name} {last_name}")
    async def add_customer(self, first_name: str, last_name: str, post_code: str) -> str:
        """
        Fill and submit the Add Customer form.

        Returns:
            Text of the confirmation alert

        Raises:
            BankingPageError: If no confirmation alert appears
        """
        await self.click_selector(self.ADD_CUSTOMER_TAB)
        await self.wait_for_element(self.FIRST_NAME_INPUT)
        await self.fill_selector(self.FIRST_NAME_INPUT, first_name)
        await self.fill_selector(self.LAST_NAME_INPUT, last_name)
        await self.fill_selector(self.POST_CODE_INPUT, post_code)

        try:
            return await self.accept_next_dialog(
                lambda: self.page.click(self.ADD_CUSTOMER_SUBMIT)
            )
        except DialogTimeoutError as e:
            raise BankingPageError(f"Customer {first_name} {last_name} was not confirmed") from e

    @allure.step("Open {currency} account for {customer_full_name}")
    async def open_account(self, customer_full_name: str, currency: str = "Dollar") -> str:
        """
        Open an account for an existing customer.

        Returns:
            Text of the confirmation alert (contains the account number)
        """
        await self.click_selector(self.OPEN_ACCOUNT_TAB)
        await self.wait_for_element(self.CUSTOMER_SELECT)
        await self.select_option(self.CUSTOMER_SELECT, customer_full_name)
        await self.select_option(self.CURRENCY_SELECT, currency)

        try:
            return await self.accept_next_dialog(
                lambda: self.page.click(self.PROCESS_BUTTON)
            )
        except DialogTimeoutError as e:
            raise BankingPageError(f"Account for {customer_full_name} was not confirmed") from e

    @allure.step("Open customers tab")
    async def open_customers_tab(self) -> None:
        await self.click_selector(self.CUSTOMERS_TAB)
        await self.wait_for_element(self.CUSTOMER_SEARCH, timeout=3000)

    @allure.step("Search customer: {first_name}")
    async def search_customer(self, first_name: str) -> None:
        await self.open_customers_tab()
        await self.fill_selector(self.CUSTOMER_SEARCH, first_name)

    async def is_customer_listed(self, first_name: str) -> bool:
        """Check the customers table for a row mentioning first_name."""
        return any(first_name in text for text in await self.all_texts(self.CUSTOMER_ROWS))

    @allure.step("Delete customer: {first_name}")
    async def delete_customer(self, first_name: str) -> None:
        rows = self.page.locator(self.CUSTOMER_ROWS).filter(has_text=first_name)
        if await rows.count() == 0:
            raise BankingPageError(f"Customer {first_name} is not listed")
        await rows.first.locator("button:has-text('Delete')").click()
        await expect(rows).to_have_count(0)

    @allure.step("Clear customer search")
    async def clear_search(self) -> None:
        await self.fill_selector(self.CUSTOMER_SEARCH, "")

    # =========================================================================
    # Customer Account
    # =========================================================================

    @allure.step("Login as customer {customer_full_name}")
    async def login_as_customer(self, customer_full_name: str) -> None:
        await self.click_selector(self.CUSTOMER_LOGIN)
        await self.wait_for_element(self.CUSTOMER_SELECT)
        await self.select_option(self.CUSTOMER_SELECT, customer_full_name)
        await self.click_selector(self.CUSTOMER_LOGIN_SUBMIT)
        await self.wait_for_element(self.DEPOSIT_TAB)

    async def welcome_text(self) -> str:
        return await self.get_text(self.WELCOME_MESSAGE)

    async def is_customer_logged_in(self, customer_name: str) -> bool:
        return customer_name in await self.welcome_text()

    async def _submit_amount(self, tab: str, submit: str, amount: str) -> None:
        await self.click_selector(tab)
        amount_input = self.page.locator(self.AMOUNT_INPUT)
        await amount_input.wait_for(state="visible", timeout=5000)
        await amount_input.fill(amount)
        await expect(amount_input).to_have_value(amount)
        await self.click_selector(submit)

    @allure.step("Deposit {amount}")
    async def deposit(self, amount: str) -> None:
        await self._submit_amount(self.DEPOSIT_TAB, self.DEPOSIT_SUBMIT, amount)

    @allure.step("Withdraw {amount}")
    async def withdraw(self, amount: str) -> None:
        await self._submit_amount(self.WITHDRAW_TAB, self.WITHDRAW_SUBMIT, amount)

    async def transaction_message(self, timeout: int = 3000) -> str:
        """Text of the operation result message, or "" if none is shown."""
        try:
            return await self.get_text(self.TRANSACTION_MESSAGE, timeout=timeout)
        except PlaywrightTimeoutError:
            return ""

    async def balance(self) -> int:
        """Displayed account balance; 0 when the label cannot be read."""
        try:
            label = await self.get_text(self.BALANCE_LABEL)
        except PlaywrightTimeoutError:
            logger.warning("Balance label not found, reading balance as 0")
            return 0
        logger.debug(f"Balance label: {label}")
        return parse_balance_label(label)

    @allure.step("Wait for balance {expected}")
    async def wait_for_balance(self, expected: int, scenario: str = "balance_update") -> int:
        """
        Poll the balance label until it reads expected.

        Raises:
            WaitTimeoutError: If the label never shows expected
        """
        async def check() -> Tuple[bool, int]:
            current = await self.balance()
            return current == expected, current

        return await AsyncWaiter(get_wait_config(scenario)).wait(
            check, description=f"Balance {expected}"
        )

    @allure.step("Logout customer")
    async def logout(self) -> None:
        await self.click_selector(self.LOGOUT_BUTTON)
        await self.go_home()

    # =========================================================================
    # Transactions
    # =========================================================================

    async def is_on_transactions_page(self) -> bool:
        return (
            await self.is_visible(self.RESET_BUTTON, timeout=500)
            and await self.is_visible(self.BACK_BUTTON, timeout=500)
        )

    @allure.step("Open transactions")
    async def open_transactions(self) -> None:
        if await self.is_on_transactions_page():
            return
        await self.click_selector(self.TRANSACTIONS_TAB)
        await self.wait_for_element(self.BACK_BUTTON)
        await self.wait_for_element(self.TRANSACTIONS_TABLE, state="attached")

    @allure.step("Back from transactions")
    async def back_from_transactions(self) -> None:
        await self.click_selector(self.BACK_BUTTON)
        await self.wait_for_element(self.DEPOSIT_TAB)

    async def refresh_transactions(self) -> None:
        """Leave and reopen the history so late rows get rendered."""
        if await self.is_visible(self.BACK_BUTTON, timeout=500):
            await self.back_from_transactions()
            await self.open_transactions()

    async def read_rows(self) -> List[Tuple[str, bool]]:
        """(text, visible) for every rendered transaction row."""
        rows: List[Tuple[str, bool]] = []
        for row in await self.page.locator(self.TRANSACTION_ROWS).all():
            rows.append((await row.inner_text(), await row.is_visible()))
        logger.debug(f"Scraped {len(rows)} transaction rows")
        return rows

    async def row_texts(self) -> List[str]:
        return [text for text, _visible in await self.read_rows()]

    async def transaction_count(self) -> int:
        return count_visible(await self.read_rows())

    @allure.step("Capture ledger snapshot")
    async def snapshot(self) -> LedgerSnapshot:
        """
        Read the balance label once, then the transaction rows.

        Leaves the page on the transactions view.
        """
        if await self.is_on_transactions_page():
            await self.back_from_transactions()
        displayed = await self.balance()

        await self.open_transactions()
        snapshot = LedgerSnapshot.from_text(await self.row_texts(), displayed)

        logger.info(f"Ledger snapshot: {snapshot.summary()}")
        allure.attach(
            "\n".join(row.raw_text for row in snapshot.rows),
            name="Transaction rows",
            attachment_type=allure.attachment_type.TEXT,
        )
        return snapshot

    @allure.step("Wait for transaction {amount}")
    async def wait_for_transaction(
        self,
        amount: str,
        scenario: str = "transaction_rows",
    ) -> List[str]:
        """
        Poll the history until a row shows amount followed by Credit or Debit.

        Digits inside dates or times never satisfy the wait.

        Returns:
            Row texts at the moment the amount was found

        Raises:
            WaitTimeoutError: If the amount never shows up
        """
        await self.open_transactions()

        async def check() -> Tuple[bool, List[str]]:
            texts = await self.row_texts()
            if contains_exact_typed_amount(texts, amount):
                return True, texts
            await self.refresh_transactions()
            return False, texts

        return await AsyncWaiter(get_wait_config(scenario)).wait(
            check, description=f"Transaction {amount} in history"
        )

    @allure.step("Reset transactions")
    async def reset_transactions(self) -> None:
        await self.open_transactions()
        if await self.transaction_count() == 0:
            return
        await self.click_selector(self.RESET_BUTTON)

        async def cleared() -> Tuple[bool, int]:
            count = await self.transaction_count()
            return count == 0, count

        await AsyncWaiter(get_wait_config("fast")).wait(
            cleared, description="Transaction history cleared"
        )


__all__ = [
    "BankingPage",
    "BankingPageError",
]
