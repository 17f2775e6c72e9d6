#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Pytest configuration file for the Comment Author Scraper test suite.
"""

import os
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import pytest

# Add the src directory to Python path for accessing comment_scraper
project_root = Path(__file__).parent.parent
src_path = os.path.join(project_root, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from comment_scraper.config import AppConfig
from comment_scraper.page.static import StaticPage
from comment_scraper.utils.waiting import Waiter


class HeightSequencePage(StaticPage):
    """
    StaticPage whose content height follows a script.

    The height reported after ``n`` scrolls is ``heights[n]`` (the last value
    repeats once the sequence runs out), or ``heights(n)`` when a callable.
    """

    def __init__(self, heights, html: str = "<html><body></body></html>", fail_after_scrolls: Optional[int] = None):
        super().__init__(html)
        self.heights = heights
        self.fail_after_scrolls = fail_after_scrolls

    def scroll_to_bottom(self) -> None:
        if self.fail_after_scrolls is not None and self.scroll_count >= self.fail_after_scrolls:
            from comment_scraper.exceptions import PageAccessError
            raise PageAccessError("Target page, context or browser has been closed")
        super().scroll_to_bottom()

    def content_height(self) -> int:
        if callable(self.heights):
            return self.heights(self.scroll_count)
        return self.heights[min(self.scroll_count, len(self.heights) - 1)]


class RecordingSleep:
    """Sleep replacement that records requested delays."""

    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def comment_entry(name: str, href: Optional[str], headline: Optional[str] = None, body: Optional[str] = None) -> str:
    """Markup of one comment entry as rendered in the thread."""
    anchor = f'<a class="app-aware-link" href="{href}">' if href is not None else '<a class="app-aware-link">'
    parts = [
        '<article class="comments-comment-entity">',
        f'{anchor}<span class="comments-comment-meta__description-title">{name}</span></a>',
    ]
    if headline:
        parts.append(f'<div class="comments-comment-meta__description-subtitle">{headline}</div>')
    if body:
        parts.append(f'<div class="comments-comment-item__main-content"><p>{body}</p></div>')
    parts.append("</article>")
    return "".join(parts)


def thread_html(entries: Sequence[str], extra: str = "") -> str:
    """Markup of a comment thread holding ``entries``."""
    return (
        "<html><body><main>"
        '<div class="comments-comments-list">'
        + "".join(entries)
        + "</div>"
        + extra
        + "</main></body></html>"
    )


@pytest.fixture
def sleep() -> RecordingSleep:
    """Recording no-op sleep."""
    return RecordingSleep()


@pytest.fixture
def waiter(sleep: RecordingSleep) -> Waiter:
    """Waiter that never actually sleeps."""
    return Waiter(poll_interval=0.25, sleep=sleep)


@pytest.fixture
def make_page() -> Callable[..., StaticPage]:
    """Factory for static pages."""
    def _make(html: str, base_url: Optional[str] = None) -> StaticPage:
        return StaticPage(html, base_url=base_url)
    return _make


@pytest.fixture
def test_config() -> AppConfig:
    """Configuration with the default timings and bounds, independent of the environment."""
    return AppConfig(
        log_file_path=None,
        sort_menu_settle_seconds=1.0,
        sort_apply_settle_seconds=2.0,
        sort_option_index=1,
        load_more_click_settle_seconds=0.5,
        load_settle_seconds=1.5,
        max_scroll_iterations=50,
        max_stagnant_iterations=3,
        wait_poll_interval_seconds=0.25,
        browser="chromium",
        headless=True,
        navigation_timeout_ms=30000,
        storage_state_path=None,
        locators_path=None,
    )


@pytest.fixture
def mock_env_vars(monkeypatch, tmp_path: Path):
    """
    Set up environment variables for testing.

    Args:
        monkeypatch: Pytest monkeypatch fixture
        tmp_path: Temporary directory
    """
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "test.log"))
    monkeypatch.setenv("MAX_SCROLL_ITERATIONS", "10")
    monkeypatch.setenv("MAX_STAGNANT_ITERATIONS", "2")
    monkeypatch.setenv("LOAD_SETTLE_SECONDS", "0.5")
    monkeypatch.setenv("SORT_OPTION_INDEX", "0")
    monkeypatch.setenv("HEADLESS", "false")
    monkeypatch.setenv("BROWSER", "Firefox")
