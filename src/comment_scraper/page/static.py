#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Static Page - PageAccessor over an HTML string parsed with BeautifulSoup.

Used to run the pipeline against saved page snapshots and test fixtures.
Clicks do nothing unless a handler is registered for the clicked element,
which lets fixtures simulate menus opening or comments being inserted.
"""

import re
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag
from bs4.element import Comment, NavigableString

from comment_scraper.page.base import Element, PageAccessor

ClickHandler = Callable[["StaticPage", Tag], None]

# Content of these elements never renders as text
NON_RENDERED_TAGS = {"script", "style", "template", "noscript", "head", "title"}

_DISPLAY_NONE = re.compile(r"display\s*:\s*none", re.IGNORECASE)


class StaticPage(PageAccessor):
    """
    In-memory document.

    Args:
        html: Markup of the page
        base_url: Base used to resolve relative hrefs (None keeps them as written)
        parser: BeautifulSoup parser name
    """

    def __init__(self, html: str, base_url: Optional[str] = None, parser: str = "html.parser"):
        super().__init__()
        self.soup = BeautifulSoup(html, parser)
        self.base_url = base_url
        self.clicks: List[Tag] = []
        self.scroll_count = 0
        self._handlers: List[Tuple[str, ClickHandler]] = []

    @classmethod
    def from_file(cls, path: Union[str, Path], base_url: Optional[str] = None) -> "StaticPage":
        """Load a saved page snapshot."""
        with open(path, "r", encoding="utf-8") as f:
            return cls(f.read(), base_url=base_url)

    @property
    def html(self) -> str:
        """Current markup of the document."""
        return str(self.soup)

    def on_click(self, selector: str, handler: ClickHandler) -> None:
        """Run ``handler`` whenever an element matching ``selector`` is clicked."""
        self._handlers.append((selector, handler))

    def append_html(self, selector: str, html: str) -> None:
        """Append a markup fragment to the first element matching ``selector``."""
        target = self.soup.select_one(selector)
        if target is None:
            raise ValueError(f"No element matches {selector!r}")
        fragment = BeautifulSoup(html, "html.parser")
        for node in list(fragment.contents):
            target.append(node.extract())

    def query_all(self, selector: str, root: Optional[Element] = None) -> List[Element]:
        scope = root if root is not None else self.soup
        return list(scope.select(selector))

    def text(self, element: Element) -> str:
        lines = []
        for node in element.find_all(string=True):
            if isinstance(node, Comment) or not isinstance(node, NavigableString):
                continue
            if any(parent.name in NON_RENDERED_TAGS for parent in node.parents):
                continue
            if not self._displayed(node.parent, stop=element):
                continue
            stripped = node.strip()
            if stripped:
                lines.append(stripped)
        return "\n".join(lines)

    def href(self, element: Element) -> Optional[str]:
        href = element.get("href")
        if not href:
            return None
        if self.base_url:
            return urljoin(self.base_url, href)
        return href

    def is_visible(self, element: Element) -> bool:
        return self._displayed(element)

    def closest(self, element: Element, selector: str) -> Optional[Element]:
        return element.css.closest(selector)

    def click(self, element: Element) -> None:
        self.clicks.append(element)
        # Match first: a handler may remove the clicked element from the tree
        matching = [handler for selector, handler in self._handlers if element.css.match(selector)]
        for handler in matching:
            handler(self, element)

    def scroll_to_bottom(self) -> None:
        self.scroll_count += 1

    def content_height(self) -> int:
        return len(self.soup.find_all(True))

    @staticmethod
    def _displayed(element: Optional[Tag], stop: Optional[Tag] = None) -> bool:
        # Walk up to the document root (or ``stop``) looking for hidden ancestors
        node = element
        while node is not None and isinstance(node, Tag) and node.name != "[document]":
            if node.has_attr("hidden"):
                return False
            if _DISPLAY_NONE.search(node.get("style", "")):
                return False
            if node is stop:
                break
            node = node.parent
        return True
