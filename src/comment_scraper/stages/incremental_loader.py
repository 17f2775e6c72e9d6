#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Incremental Loader - Materializes every lazily loaded comment.

Each iteration scrolls to the bottom, clicks the first visible "load more"
affordance, waits for content and measures the document. Loading stops once
the document has stopped growing for several iterations without a click, or
when the iteration cap is hit.
"""

import logging

from comment_scraper.exceptions import PageAccessError
from comment_scraper.locators import Locators, DEFAULT_LOCATORS
from comment_scraper.models.participant import LoadState
from comment_scraper.page.base import PageAccessor
from comment_scraper.utils.logger import get_logger, log_pipeline_event
from comment_scraper.utils.waiting import Waiter

logger = get_logger(__name__)

STAGE = "load"

# Constants
DEFAULT_MAX_SCROLL_ITERATIONS = 50
DEFAULT_MAX_STAGNANT_ITERATIONS = 3


class IncrementalLoader:
    """Drives scroll and "load more" pagination until the thread is complete."""

    def __init__(
        self,
        page: PageAccessor,
        waiter: Waiter,
        locators: Locators = DEFAULT_LOCATORS,
        max_scroll_iterations: int = DEFAULT_MAX_SCROLL_ITERATIONS,
        max_stagnant_iterations: int = DEFAULT_MAX_STAGNANT_ITERATIONS,
        click_settle_seconds: float = 0.5,
        load_settle_seconds: float = 1.5,
    ):
        self.page = page
        self.waiter = waiter
        self.locators = locators
        self.max_scroll_iterations = max_scroll_iterations
        self.max_stagnant_iterations = max_stagnant_iterations
        self.click_settle_seconds = click_settle_seconds
        self.load_settle_seconds = load_settle_seconds

    def load_all(self) -> LoadState:
        """
        Load comments until the document stabilizes or the cap is reached.

        Never raises for page access failures; they end loading early.

        Returns:
            LoadState: Final loop state
        """
        log_pipeline_event(STAGE, "start", "Loading all comments")
        state = LoadState()

        try:
            state.last_document_height = self.page.content_height()
            self._run(state)
        except PageAccessError as e:
            log_pipeline_event(
                STAGE, "degraded",
                f"Page access failed after {state.scroll_iterations} iterations: {str(e)}",
                logging.WARNING,
            )
            return state

        log_pipeline_event(
            STAGE, "complete",
            f"Finished loading after {state.scroll_iterations} iterations "
            f"(height {state.last_document_height})",
        )
        return state

    def _run(self, state: LoadState) -> None:
        while state.scroll_iterations < self.max_scroll_iterations:
            self.page.scroll_to_bottom()

            clicked = self._click_load_more()

            previous_height = state.last_document_height
            self.waiter.until(lambda: self.page.content_height() != previous_height,
                              timeout=self.load_settle_seconds)

            current_height = self.page.content_height()
            if current_height == previous_height and not clicked:
                state.stagnant_iteration_count += 1
            else:
                state.stagnant_iteration_count = 0

            state.last_document_height = current_height
            state.scroll_iterations += 1

            logger.debug(
                f"Iteration {state.scroll_iterations}: height={current_height} "
                f"clicked={clicked} stagnant={state.stagnant_iteration_count}"
            )

            if state.stagnant_iteration_count >= self.max_stagnant_iterations:
                logger.info(f"Content stable for {state.stagnant_iteration_count} iterations")
                return

        logger.info(f"Reached iteration cap of {self.max_scroll_iterations}")

    def _click_load_more(self) -> bool:
        # Only one click per iteration: the first visible match in locator order
        for selector in self.locators.load_more:
            for button in self.page.query_all(selector):
                if self.page.is_visible(button):
                    logger.info(f"Clicking load more button: {selector}")
                    self.page.click(button)
                    self.waiter.pause(self.click_settle_seconds)
                    return True
        return False
