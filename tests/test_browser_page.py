#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for the Playwright page accessor and browser session.
"""

import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from playwright.sync_api import Error as PlaywrightError

from comment_scraper.config import AppConfig
from comment_scraper.exceptions import PageAccessError
from comment_scraper.page.browser import (
    BrowserSession,
    PlaywrightPage,
    HEIGHT_SCRIPT,
    SCROLL_SCRIPT,
)


class TestPlaywrightPage(unittest.TestCase):
    """Test cases for PlaywrightPage"""

    def setUp(self):
        """Set up test fixtures"""
        self.mock_page = MagicMock()
        self.page = PlaywrightPage(self.mock_page)

    def test_query_all_uses_page_or_root(self):
        """Queries run on the page, or on the root element when given"""
        self.mock_page.query_selector_all.return_value = ["a", "b"]
        root = MagicMock()
        root.query_selector_all.return_value = ["c"]

        self.assertEqual(self.page.query_all("article"), ["a", "b"])
        self.assertEqual(self.page.query_all("a", root=root), ["c"])
        self.mock_page.query_selector_all.assert_called_with("article")
        root.query_selector_all.assert_called_with("a")

    def test_query_returns_first_match(self):
        """query uses query_selector"""
        self.mock_page.query_selector.return_value = None
        self.assertIsNone(self.page.query(".comments-sort-order-toggle__trigger"))

    def test_element_reads(self):
        """Text, href and visibility are read in the page"""
        element = MagicMock()
        element.evaluate.side_effect = ["A\nEngineer", "https://www.linkedin.com/in/a", True]

        self.assertEqual(self.page.text(element), "A\nEngineer")
        self.assertEqual(self.page.href(element), "https://www.linkedin.com/in/a")
        self.assertTrue(self.page.is_visible(element))

    def test_closest(self):
        """closest resolves the JS handle to an element"""
        element = MagicMock()
        anchor = MagicMock()
        element.evaluate_handle.return_value.as_element.return_value = anchor

        self.assertIs(self.page.closest(element, "a"), anchor)
        self.assertEqual(element.evaluate_handle.call_args[0][1], "a")

    def test_scroll_and_height(self):
        """Scrolling and measuring evaluate scripts on the page"""
        self.mock_page.evaluate.return_value = 1234

        self.page.scroll_to_bottom()
        self.assertEqual(self.page.content_height(), 1234)
        self.mock_page.evaluate.assert_any_call(SCROLL_SCRIPT)
        self.mock_page.evaluate.assert_any_call(HEIGHT_SCRIPT)

    def test_click(self):
        """Clicks are dispatched on the element"""
        element = MagicMock()
        self.page.click(element)
        element.evaluate.assert_called_once()

    def test_playwright_errors_become_page_access_errors(self):
        """Playwright failures are re-raised as PageAccessError"""
        element = MagicMock()
        element.evaluate.side_effect = PlaywrightError("Target page, context or browser has been closed")

        with self.assertRaises(PageAccessError):
            self.page.text(element)

        self.mock_page.evaluate.side_effect = PlaywrightError("Execution context was destroyed")
        with self.assertRaises(PageAccessError):
            self.page.content_height()


class TestBrowserSession(unittest.TestCase):
    """Test cases for BrowserSession"""

    def setUp(self):
        """Set up test fixtures"""
        self.config = AppConfig(
            browser="chromium",
            headless=True,
            navigation_timeout_ms=5000,
            storage_state_path=None,
        )

    def _mock_playwright(self, mock_playwright):
        mock_instance = MagicMock()
        mock_playwright.return_value.start.return_value = mock_instance
        mock_browser = MagicMock()
        mock_instance.chromium.launch.return_value = mock_browser
        mock_context = MagicMock()
        mock_browser.new_context.return_value = mock_context
        mock_page = MagicMock()
        mock_context.new_page.return_value = mock_page
        return mock_instance, mock_browser, mock_context, mock_page

    @patch("comment_scraper.page.browser.sync_playwright")
    def test_open_and_close(self, mock_playwright):
        """The session opens the thread and releases everything on exit"""
        mock_instance, mock_browser, mock_context, mock_page = self._mock_playwright(mock_playwright)

        with BrowserSession("https://example.com/post/1", app_config=self.config) as page:
            self.assertIsInstance(page, PlaywrightPage)
            self.assertIs(page.page, mock_page)

        mock_instance.chromium.launch.assert_called_once_with(headless=True)
        mock_page.goto.assert_called_once_with("https://example.com/post/1", wait_until="domcontentloaded")
        mock_page.set_default_timeout.assert_called_with(5000)
        mock_page.close.assert_called_once()
        mock_context.close.assert_called_once()
        mock_browser.close.assert_called_once()
        mock_instance.stop.assert_called_once()

    @patch("comment_scraper.page.browser.sync_playwright")
    def test_storage_state_is_loaded(self, mock_playwright):
        """An authenticated storage state is passed to the context"""
        mock_instance, mock_browser, _, _ = self._mock_playwright(mock_playwright)
        self.config.storage_state_path = Path("state.json")

        session = BrowserSession("https://example.com/post/1", app_config=self.config)
        session.open()
        session.close()

        kwargs = mock_browser.new_context.call_args.kwargs
        self.assertEqual(kwargs["storage_state"], "state.json")

    @patch("comment_scraper.page.browser.sync_playwright")
    def test_close_errors_do_not_mask_run_errors(self, mock_playwright):
        """Failures while releasing the browser are logged, not raised"""
        mock_instance, mock_browser, _, _ = self._mock_playwright(mock_playwright)
        mock_browser.close.side_effect = PlaywrightError("browser already closed")
        mock_instance.stop.side_effect = PlaywrightError("connection closed")

        with self.assertRaises(RuntimeError):
            with BrowserSession("https://example.com/post/1", app_config=self.config):
                raise RuntimeError("extraction failed")

        mock_instance.stop.assert_called_once()

    @patch("comment_scraper.page.browser.sync_playwright")
    def test_navigation_failure(self, mock_playwright):
        """Navigation errors close the session and raise PageAccessError"""
        mock_instance, mock_browser, _, mock_page = self._mock_playwright(mock_playwright)
        mock_page.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")

        session = BrowserSession("https://invalid.example", app_config=self.config)
        with self.assertRaises(PageAccessError):
            session.open()

        mock_browser.close.assert_called_once()
        mock_instance.stop.assert_called_once()
        self.assertIsNone(session.browser)


if __name__ == "__main__":
    unittest.main()
