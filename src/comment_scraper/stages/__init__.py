#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Pipeline stages, run in order: sort, load, extract.
"""

from comment_scraper.stages.sort_selector import SortSelector, OptionChooser, PositionalOptionChooser
from comment_scraper.stages.incremental_loader import IncrementalLoader
from comment_scraper.stages.record_extractor import (
    RecordExtractor,
    ExtractionStrategy,
    ArticleAuthorStrategy,
    CommentMetaStrategy,
    default_strategies,
    deduplicate,
)

__all__ = [
    "SortSelector",
    "OptionChooser",
    "PositionalOptionChooser",
    "IncrementalLoader",
    "RecordExtractor",
    "ExtractionStrategy",
    "ArticleAuthorStrategy",
    "CommentMetaStrategy",
    "default_strategies",
    "deduplicate",
]
