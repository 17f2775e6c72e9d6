#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Browser Page - PageAccessor over a live Playwright page.

``BrowserSession`` owns the Playwright browser, context and page for one
comment thread and exposes the page through ``PlaywrightPage``.
"""

import functools
from pathlib import Path
from typing import Any, Callable, List, Optional, TypeVar

from playwright.sync_api import sync_playwright, Page, Error as PlaywrightError

from comment_scraper.config import AppConfig, config as default_config
from comment_scraper.exceptions import PageAccessError
from comment_scraper.page.base import Element, PageAccessor
from comment_scraper.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# innerText keeps line breaks between rendered blocks, unlike textContent
INNER_TEXT_SCRIPT = "el => el.innerText || ''"
HREF_SCRIPT = "el => el.href || el.getAttribute('href')"
VISIBLE_SCRIPT = "el => el.offsetParent !== null"
CLOSEST_SCRIPT = "(el, selector) => el.closest(selector)"
SCROLL_SCRIPT = "() => window.scrollTo(0, document.body.scrollHeight)"
HEIGHT_SCRIPT = "() => document.body.scrollHeight"


def _page_access(func: Callable[..., T]) -> Callable[..., T]:
    """Re-raise Playwright failures as PageAccessError."""
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return func(*args, **kwargs)
        except PlaywrightError as e:
            raise PageAccessError(f"{func.__name__} failed: {e}") from e
    return wrapper


class PlaywrightPage(PageAccessor):
    """PageAccessor backed by a Playwright sync ``Page``."""

    def __init__(self, page: Page):
        super().__init__()
        self.page = page

    @_page_access
    def query_all(self, selector: str, root: Optional[Element] = None) -> List[Element]:
        scope = root if root is not None else self.page
        return scope.query_selector_all(selector)

    @_page_access
    def query(self, selector: str, root: Optional[Element] = None) -> Optional[Element]:
        scope = root if root is not None else self.page
        return scope.query_selector(selector)

    @_page_access
    def text(self, element: Element) -> str:
        return element.evaluate(INNER_TEXT_SCRIPT)

    @_page_access
    def href(self, element: Element) -> Optional[str]:
        return element.evaluate(HREF_SCRIPT)

    @_page_access
    def is_visible(self, element: Element) -> bool:
        return bool(element.evaluate(VISIBLE_SCRIPT))

    @_page_access
    def closest(self, element: Element, selector: str) -> Optional[Element]:
        handle = element.evaluate_handle(CLOSEST_SCRIPT, selector)
        return handle.as_element()

    @_page_access
    def click(self, element: Element) -> None:
        # Synthetic DOM click, no actionability checks
        element.evaluate("el => el.click()")

    @_page_access
    def scroll_to_bottom(self) -> None:
        self.page.evaluate(SCROLL_SCRIPT)

    @_page_access
    def content_height(self) -> int:
        return int(self.page.evaluate(HEIGHT_SCRIPT))


class BrowserSession:
    """
    Launches a browser, opens a comment thread and cleans everything up.

    Example:
        with BrowserSession(url) as page:
            records = ScrapePipeline(page).run()
    """

    def __init__(self, url: str, app_config: Optional[AppConfig] = None):
        """
        Initialize the browser session.

        Args:
            url: Address of the page holding the comment thread
            app_config: Application configuration (or None to use default)
        """
        self.url = url
        self.config = app_config or default_config
        self.playwright = None
        self.browser = None
        self.context = None
        self.page: Optional[Page] = None

    def __enter__(self) -> PlaywrightPage:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> PlaywrightPage:
        """
        Launch the browser and navigate to the thread.

        Returns:
            PlaywrightPage: Accessor over the opened page

        Raises:
            PageAccessError: If the browser cannot be launched or the page cannot be loaded
        """
        logger.info(f"Opening {self.config.browser} browser for {self.url}")

        try:
            self.playwright = sync_playwright().start()
            browser_type = getattr(self.playwright, self.config.browser)
            self.browser = browser_type.launch(headless=self.config.headless)

            context_options = {
                "viewport": {"width": 1920, "height": 1080},
            }
            storage_state = self.config.storage_state_path
            if storage_state is not None:
                context_options["storage_state"] = str(Path(storage_state))

            self.context = self.browser.new_context(**context_options)
            self.page = self.context.new_page()
            self.page.set_default_navigation_timeout(self.config.navigation_timeout_ms)
            self.page.set_default_timeout(self.config.navigation_timeout_ms)

            self.page.goto(self.url, wait_until="domcontentloaded")
            return PlaywrightPage(self.page)

        except PlaywrightError as e:
            logger.error(f"Error opening {self.url}: {str(e)}")
            self.close()
            raise PageAccessError(f"Could not open {self.url}: {e}") from e

    def close(self) -> None:
        """Close page, context, browser and Playwright, in that order."""
        logger.info("Closing browser session")

        for name in ("page", "context", "browser"):
            resource = getattr(self, name)
            if resource is None:
                continue
            try:
                resource.close()
            except PlaywrightError as e:
                logger.warning(f"Error closing {name}: {str(e)}")
            setattr(self, name, None)

        if self.playwright is not None:
            try:
                self.playwright.stop()
            except PlaywrightError as e:
                logger.warning(f"Error stopping Playwright: {str(e)}")
            self.playwright = None
