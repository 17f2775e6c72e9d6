#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exceptions raised by the comment scraper.
"""


class ScraperError(Exception):
    """Base class for scraper errors."""
    pass


class PageAccessError(ScraperError):
    """Raised when the document cannot be read or interacted with."""
    pass


class ConcurrentRunError(ScraperError):
    """Raised when a second run is started against a page already in use."""
    pass
