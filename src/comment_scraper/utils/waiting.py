#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Condition waits for the pipeline.

UI interactions are followed by a wait that yields to the page's rendering
cycle. Instead of fixed sleeps, stages poll a predicate until it holds or a
timeout elapses.
"""

import math
import time
from typing import Callable

from tenacity import Retrying, retry_if_result, stop_after_attempt, wait_fixed


def _not_satisfied(result: bool) -> bool:
    return not result


class Waiter:
    """Poll-based condition waits with an injectable sleep.

    Args:
        poll_interval: Seconds between predicate evaluations
        sleep: Sleep callable, replaced by a no-op in tests

    Example:
        waiter = Waiter(poll_interval=0.25)
        if not waiter.until(lambda: page.query(".menu") is not None, timeout=1.0):
            logger.warning("Menu did not render")
    """

    def __init__(self, poll_interval: float = 0.25, sleep: Callable[[float], None] = time.sleep):
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self.poll_interval = poll_interval
        self._sleep = sleep

    def attempts_for(self, timeout: float) -> int:
        """Number of predicate evaluations that fit in ``timeout``."""
        if timeout <= 0:
            return 1
        return int(math.ceil(timeout / self.poll_interval)) + 1

    def until(self, predicate: Callable[[], bool], timeout: float) -> bool:
        """Wait until ``predicate`` returns a truthy value.

        Returns:
            bool: True if the predicate held before the timeout, False otherwise.
            Exceptions raised by the predicate propagate.
        """
        retrying = Retrying(
            stop=stop_after_attempt(self.attempts_for(timeout)),
            wait=wait_fixed(self.poll_interval),
            retry=retry_if_result(_not_satisfied),
            retry_error_callback=lambda retry_state: False,
            sleep=self._sleep,
        )
        return bool(retrying(lambda: bool(predicate())))

    def pause(self, seconds: float) -> None:
        """Unconditional settle interval."""
        if seconds > 0:
            self._sleep(seconds)
