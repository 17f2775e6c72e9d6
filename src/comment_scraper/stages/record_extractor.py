#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Record Extractor - Reads comment authors out of the materialized thread.

Extraction strategies are tried in order; the first one producing any
candidates wins and its candidates are de-duplicated by profile URL, keeping
the earliest record seen.
"""

import abc
from typing import Dict, Iterable, List, Optional, Sequence

from comment_scraper.locators import Locators, DEFAULT_LOCATORS
from comment_scraper.models.participant import ParticipantRecord
from comment_scraper.page.base import PageAccessor
from comment_scraper.utils.logger import get_logger, log_pipeline_event

logger = get_logger(__name__)

STAGE = "extract"


def text_lines(text: Optional[str]) -> List[str]:
    """Split rendered text into stripped, non-blank lines."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def deduplicate(records: Iterable[ParticipantRecord]) -> List[ParticipantRecord]:
    """Drop records whose id was already seen, preserving first-seen order."""
    unique: Dict[str, ParticipantRecord] = {}
    for record in records:
        if record.id not in unique:
            unique[record.id] = record
    return list(unique.values())


class ExtractionStrategy(abc.ABC):
    """Produces candidate records from a page. Candidates may repeat."""

    name: str = "strategy"

    def __init__(self, locators: Locators = DEFAULT_LOCATORS):
        self.locators = locators

    @abc.abstractmethod
    def extract(self, page: PageAccessor) -> List[ParticipantRecord]:
        pass


class ArticleAuthorStrategy(ExtractionStrategy):
    """
    One record per comment entry.

    The author anchor gives the name (first line of its text) and the profile
    URL. The headline is rendered beside the anchor, so it is the second line
    of the whole entry's text.
    """

    name = "article"

    def extract(self, page: PageAccessor) -> List[ParticipantRecord]:
        candidates = []
        entries = page.query_all(self.locators.comment_entry)
        logger.debug(f"Found {len(entries)} comment entries")

        for entry in entries:
            anchor = page.query(self.locators.author_anchor, root=entry)
            if anchor is None:
                continue

            name_lines = text_lines(page.text(anchor))
            profile_url = page.href(anchor)
            if not name_lines or not profile_url:
                continue

            entry_lines = text_lines(page.text(entry))
            headline = entry_lines[1] if len(entry_lines) > 1 else None

            candidates.append(ParticipantRecord.from_profile(name_lines[0], profile_url, headline))

        return candidates


class CommentMetaStrategy(ExtractionStrategy):
    """Author name labels resolved to their enclosing profile link."""

    name = "comment-meta"

    def extract(self, page: PageAccessor) -> List[ParticipantRecord]:
        candidates = []
        labels = page.query_all(self.locators.author_label)
        logger.debug(f"Found {len(labels)} author labels")

        for label in labels:
            name = page.text(label).strip()
            anchor = page.closest(label, "a")
            profile_url = page.href(anchor) if anchor is not None else None
            if not name or not profile_url:
                continue
            candidates.append(ParticipantRecord.from_profile(name, profile_url))

        return candidates


def default_strategies(locators: Locators = DEFAULT_LOCATORS) -> List[ExtractionStrategy]:
    """Primary entry-based extraction followed by the label-based fallback."""
    return [ArticleAuthorStrategy(locators), CommentMetaStrategy(locators)]


class RecordExtractor:
    """
    Extracts de-duplicated participant records from the page.

    Page errors are not handled here; a document that cannot be read fails
    the whole run.
    """

    def __init__(
        self,
        page: PageAccessor,
        locators: Locators = DEFAULT_LOCATORS,
        strategies: Optional[Sequence[ExtractionStrategy]] = None,
    ):
        self.page = page
        self.strategies = list(strategies) if strategies is not None else default_strategies(locators)

    def extract(self) -> List[ParticipantRecord]:
        """
        Run the strategies in order and keep the first non-empty result.

        Returns:
            List[ParticipantRecord]: Unique records in first-seen order
        """
        log_pipeline_event(STAGE, "start", "Extracting authors")

        for strategy in self.strategies:
            candidates = strategy.extract(self.page)
            if candidates:
                records = deduplicate(candidates)
                log_pipeline_event(
                    STAGE, "complete",
                    f"Found {len(records)} authors with the {strategy.name} strategy "
                    f"({len(candidates) - len(records)} duplicates dropped)",
                )
                return records
            logger.info(f"Strategy {strategy.name} found no authors")

        log_pipeline_event(STAGE, "complete", "Found 0 authors")
        return []
