#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Orchestration Package

Sequences the sort, load and extract stages into one scrape run.
"""

from comment_scraper.orchestration.orchestrator import ScrapePipeline

__all__ = ["ScrapePipeline"]
