# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# Poll-with-timeout utilities for UI state that appears asynchronously
# (transaction rows rendered after a deposit, a balance label updating).
#
# Key Features:
#   - Exponential backoff with jitter
#   - Named wait scenarios
#   - Async waiter for Playwright page objects, sync or async checks
#   - Allure integration for step reporting
#
# Usage:
#   rows = await AsyncWaiter(get_wait_config("transaction_rows")).wait(check_rows)
#
# ================================================================================

import asyncio
import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import allure
from loguru import logger


@dataclass
class WaitConfig:
    """
    Configuration for wait operations.

    Attributes:
        initial_interval: Initial wait interval in seconds
        multiplier: Multiplier for exponential backoff
        max_interval: Maximum interval between attempts
        timeout: Total timeout in seconds
        jitter: Add random jitter to the interval
    """
    initial_interval: float = 1.0
    multiplier: float = 2.0
    max_interval: float = 10.0
    timeout: float = 30.0
    jitter: bool = True


WAIT_SCENARIOS: Dict[str, WaitConfig] = {
    "default": WaitConfig(),

    "fast": WaitConfig(
        initial_interval=0.25,
        multiplier=1.5,
        max_interval=2.0,
        timeout=10.0
    ),

    # Rows can show up seconds after the operation message
    "transaction_rows": WaitConfig(
        initial_interval=1.0,
        multiplier=1.5,
        max_interval=5.0,
        timeout=20.0
    ),
    "balance_update": WaitConfig(
        initial_interval=0.5,
        multiplier=1.5,
        max_interval=2.0,
        timeout=10.0
    ),
}


class WaitTimeoutError(Exception):
    """Raised when a wait operation times out."""
    pass


def get_wait_config(scenario: str) -> WaitConfig:
    """
    Get wait configuration for a specific scenario.

    Args:
        scenario: Scenario name (e.g., "transaction_rows")

    Returns:
        WaitConfig for the scenario, or default if not found
    """
    return WAIT_SCENARIOS.get(scenario, WAIT_SCENARIOS["default"])


def calculate_next_interval(
    current_interval: float,
    config: WaitConfig
) -> float:
    """
    Calculate the next wait interval with exponential backoff and jitter.

    Args:
        current_interval: Current interval in seconds
        config: Wait configuration

    Returns:
        Next interval in seconds
    """
    next_interval = min(
        current_interval * config.multiplier,
        config.max_interval
    )

    if config.jitter:
        # +/- 25%
        jitter_factor = 0.75 + (random.random() * 0.5)
        next_interval = next_interval * jitter_factor

    return next_interval


class AsyncWaiter:
    """
    Async waiter for Playwright page objects.

    Accepts sync or async check functions returning (success, result).
    """

    def __init__(self, config: Optional[WaitConfig] = None):
        self.config = config or WaitConfig()

    async def wait(
        self,
        check_fn: Callable[[], Any],
        description: str = "Waiting for condition"
    ) -> Any:
        """
        Poll check_fn with exponential backoff until it reports success.

        Exceptions raised by check_fn count as a failed attempt; the last
        one is reported if the wait times out.

        Args:
            check_fn: Async or sync function that returns (success, result)
            description: Description for logging and the Allure step

        Returns:
            Result from check_fn when successful

        Raises:
            WaitTimeoutError: If timeout is reached without success
        """
        with allure.step(f"Waiting: {description}"):
            return await self._poll(check_fn, description)

    async def _poll(self, check_fn: Callable[[], Any], description: str) -> Any:
        start_time = time.time()
        current_interval = self.config.initial_interval
        attempt = 0
        last_result: Any = None
        last_error: Optional[str] = None

        logger.debug(f"Starting wait: {description} (timeout={self.config.timeout}s)")

        while True:
            elapsed = time.time() - start_time

            if elapsed >= self.config.timeout:
                error_msg = (
                    f"Timeout after {elapsed:.1f}s: {description}. "
                    f"Last result: {last_result}, Last error: {last_error}"
                )
                logger.error(error_msg)
                raise WaitTimeoutError(error_msg)

            attempt += 1
            try:
                if asyncio.iscoroutinefunction(check_fn):
                    success, result = await check_fn()
                else:
                    success, result = check_fn()
                last_result = result

                if success:
                    logger.debug(f"Wait successful after {attempt} attempts: {description}")
                    return result

            except Exception as e:
                last_error = str(e)
                logger.warning(f"Attempt {attempt} failed: {e}")

            await asyncio.sleep(current_interval)
            current_interval = calculate_next_interval(
                current_interval,
                self.config
            )


__all__ = [
    "WaitConfig",
    "WAIT_SCENARIOS",
    "WaitTimeoutError",
    "get_wait_config",
    "calculate_next_interval",
    "AsyncWaiter",
]
