#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Page Accessor - Narrow interface over the document the pipeline works on.

Every stage reads and writes the page only through this interface, so the
same stage code drives a live browser tab or an in-memory HTML fixture.
"""

import abc
import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from comment_scraper.exceptions import ConcurrentRunError

# Elements are opaque handles owned by the implementation
Element = Any


class PageAccessor(abc.ABC):
    """
    Abstract base class for document accessors.

    An accessor serves at most one pipeline run at a time; ``exclusive()``
    guards a run and rejects a concurrent one.
    """

    def __init__(self) -> None:
        self._run_lock = threading.Lock()

    @contextmanager
    def exclusive(self) -> Iterator["PageAccessor"]:
        """
        Hold the accessor for the duration of a run.

        Raises:
            ConcurrentRunError: If another run already holds the accessor
        """
        if not self._run_lock.acquire(blocking=False):
            raise ConcurrentRunError("A scrape run is already in progress on this page")
        try:
            yield self
        finally:
            self._run_lock.release()

    @property
    def in_use(self) -> bool:
        """Whether a run currently holds the accessor."""
        return self._run_lock.locked()

    @abc.abstractmethod
    def query_all(self, selector: str, root: Optional[Element] = None) -> List[Element]:
        """Return every element matching ``selector`` in document order."""
        pass

    def query(self, selector: str, root: Optional[Element] = None) -> Optional[Element]:
        """Return the first element matching ``selector``, or None."""
        matches = self.query_all(selector, root)
        return matches[0] if matches else None

    @abc.abstractmethod
    def text(self, element: Element) -> str:
        """Rendered text of ``element`` with a line break between blocks."""
        pass

    @abc.abstractmethod
    def href(self, element: Element) -> Optional[str]:
        """Resolved link target of an anchor element."""
        pass

    @abc.abstractmethod
    def is_visible(self, element: Element) -> bool:
        """Whether ``element`` currently takes part in layout."""
        pass

    @abc.abstractmethod
    def closest(self, element: Element, selector: str) -> Optional[Element]:
        """Nearest ancestor of ``element`` (itself included) matching ``selector``."""
        pass

    @abc.abstractmethod
    def click(self, element: Element) -> None:
        """Activate ``element`` with a synthetic click."""
        pass

    @abc.abstractmethod
    def scroll_to_bottom(self) -> None:
        """Scroll the viewport to the end of the document."""
        pass

    @abc.abstractmethod
    def content_height(self) -> int:
        """Current height of the document content."""
        pass
