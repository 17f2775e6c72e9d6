#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Sort Selector - Switches the comment thread to "most recent" ordering.

Best effort: a missing control or menu leaves the page's default ordering in
place and is only logged.
"""

import abc
import logging
from typing import List, Optional

from comment_scraper.exceptions import PageAccessError
from comment_scraper.locators import Locators, DEFAULT_LOCATORS
from comment_scraper.page.base import Element, PageAccessor
from comment_scraper.utils.logger import get_logger, log_pipeline_event
from comment_scraper.utils.waiting import Waiter

logger = get_logger(__name__)

STAGE = "sort"


class OptionChooser(abc.ABC):
    """Picks the "most recent" entry among the sort menu options."""

    @abc.abstractmethod
    def choose(self, page: PageAccessor, options: List[Element]) -> Optional[Element]:
        """
        Pick the option to click.

        Args:
            page: Accessor for reading option details
            options: Candidate option elements in document order

        Returns:
            The option to click, or None to leave the ordering unchanged
        """
        pass


class PositionalOptionChooser(OptionChooser):
    """
    Chooses the option at a fixed position.

    Option labels are localized, so they cannot be matched. The menu has
    historically offered {relevance, recency} in that order, making index 1
    "most recent". This is an assumption about the layout, not a guarantee.
    """

    def __init__(self, index: int = 1):
        self.index = index

    def choose(self, page: PageAccessor, options: List[Element]) -> Optional[Element]:
        if len(options) <= self.index:
            return None
        return options[self.index]


class SortSelector:
    """Brings the thread into a deterministic "most recent first" order."""

    def __init__(
        self,
        page: PageAccessor,
        waiter: Waiter,
        locators: Locators = DEFAULT_LOCATORS,
        chooser: Optional[OptionChooser] = None,
        menu_settle_seconds: float = 1.0,
        apply_settle_seconds: float = 2.0,
    ):
        self.page = page
        self.waiter = waiter
        self.locators = locators
        self.chooser = chooser or PositionalOptionChooser()
        self.menu_settle_seconds = menu_settle_seconds
        self.apply_settle_seconds = apply_settle_seconds

    def select_most_recent_order(self) -> bool:
        """
        Open the sort menu and pick the most recent ordering.

        Never raises for missing UI or page access failures.

        Returns:
            bool: True if an option was clicked, False if the stage degraded
        """
        log_pipeline_event(STAGE, "start", "Switching to most recent ordering")

        try:
            return self._select()
        except PageAccessError as e:
            log_pipeline_event(STAGE, "degraded", f"Page access failed: {str(e)}", logging.WARNING)
            return False

    def _select(self) -> bool:
        trigger = self.page.query(self.locators.sort_trigger)
        if trigger is None:
            log_pipeline_event(
                STAGE, "degraded", "Sort trigger not found, keeping default ordering", logging.WARNING
            )
            return False

        # Overlays already on the page belong to other menus
        known_overlays = self._overlay_count()

        self.page.click(trigger)
        if not self.waiter.until(lambda: self._find_options_container(known_overlays) is not None,
                                 timeout=self.menu_settle_seconds):
            log_pipeline_event(STAGE, "degraded", "Sort options menu did not render", logging.WARNING)
            return False

        container = self._find_options_container(known_overlays)
        if container is None:
            log_pipeline_event(STAGE, "degraded", "Sort options menu disappeared", logging.WARNING)
            return False

        options = self.page.query_all(self.locators.sort_option, root=container)
        logger.debug(f"Found {len(options)} sort options")

        option = self.chooser.choose(self.page, options)
        if option is None:
            log_pipeline_event(
                STAGE, "degraded", f"Not enough sort options ({len(options)}) to choose from", logging.WARNING
            )
            return False

        self.page.click(option)
        # The menu closes once the new ordering is applied
        self.waiter.until(lambda: self._find_options_container(known_overlays) is None,
                          timeout=self.apply_settle_seconds)

        log_pipeline_event(STAGE, "complete", "Selected most recent ordering")
        return True

    def _overlay_count(self) -> int:
        return len(self.page.query_all(self.locators.sort_options_overlay))

    def _find_options_container(self, known_overlays: int) -> Optional[Element]:
        """
        Locate the open sort menu.

        Args:
            known_overlays: Number of detached overlays present before the trigger was clicked

        Returns:
            The inline menu, else the newest overlay appended since the trigger click, else None
        """
        container = self.page.query(self.locators.sort_options_container)
        if container is not None:
            return container

        # Menus rendered through a portal land at the end of the document
        overlays = self.page.query_all(self.locators.sort_options_overlay)
        if len(overlays) > known_overlays:
            return overlays[-1]
        return None
