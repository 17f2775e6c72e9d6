#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Comment Author Scraper

Collects the authors of a comment thread by sorting the thread, loading every
lazily rendered comment and extracting de-duplicated participant records.
"""

__version__ = "0.1.0"
