#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Document accessors: the abstract interface and its static (HTML) backend.

The Playwright backend lives in ``comment_scraper.page.browser`` and is
imported on demand so offline use does not need a browser install.
"""

from comment_scraper.page.base import Element, PageAccessor
from comment_scraper.page.static import StaticPage

__all__ = ["Element", "PageAccessor", "StaticPage"]
