#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Scrape Orchestrator

Runs the stages against one page in fixed order:
sort selection, incremental loading, record extraction.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from comment_scraper.config import AppConfig, config as default_config
from comment_scraper.locators import Locators, load_locators
from comment_scraper.models.participant import ParticipantRecord
from comment_scraper.page.base import PageAccessor
from comment_scraper.stages.incremental_loader import IncrementalLoader
from comment_scraper.stages.record_extractor import ExtractionStrategy, RecordExtractor
from comment_scraper.stages.sort_selector import OptionChooser, PositionalOptionChooser, SortSelector
from comment_scraper.utils.logger import log_pipeline_event
from comment_scraper.utils.waiting import Waiter

STAGE = "pipeline"


class ScrapePipeline:
    """
    One scrape of a comment thread.

    Sort and load failures degrade inside their stages. Anything else raised
    by a stage, including extraction errors, propagates to the caller. There
    is no retry.
    """

    def __init__(
        self,
        page: PageAccessor,
        app_config: Optional[AppConfig] = None,
        waiter: Optional[Waiter] = None,
        locators: Optional[Locators] = None,
        chooser: Optional[OptionChooser] = None,
        strategies: Optional[Sequence[ExtractionStrategy]] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            page: Accessor over the document holding the thread
            app_config: Application configuration (or None to use default)
            waiter: Condition waiter (or None for one polling at the configured interval)
            locators: Page locators (or None to load them from the configuration)
            chooser: Sort option strategy (or None for the configured position)
            strategies: Extraction strategies in priority order (or None for the defaults)
        """
        self.page = page
        self.config = app_config or default_config
        self.waiter = waiter or Waiter(poll_interval=self.config.wait_poll_interval_seconds)
        self.locators = locators or load_locators(self.config.locators_path)

        self.sort_selector = SortSelector(
            page,
            self.waiter,
            locators=self.locators,
            chooser=chooser or PositionalOptionChooser(self.config.sort_option_index),
            menu_settle_seconds=self.config.sort_menu_settle_seconds,
            apply_settle_seconds=self.config.sort_apply_settle_seconds,
        )
        self.loader = IncrementalLoader(
            page,
            self.waiter,
            locators=self.locators,
            max_scroll_iterations=self.config.max_scroll_iterations,
            max_stagnant_iterations=self.config.max_stagnant_iterations,
            click_settle_seconds=self.config.load_more_click_settle_seconds,
            load_settle_seconds=self.config.load_settle_seconds,
        )
        self.extractor = RecordExtractor(page, locators=self.locators, strategies=strategies)

    def run(self) -> List[ParticipantRecord]:
        """
        Sort, load and extract.

        Returns:
            List[ParticipantRecord]: Unique authors in first-seen order

        Raises:
            ConcurrentRunError: If another run is using the same page
        """
        start_time = datetime.now()
        log_pipeline_event(STAGE, "start", "Starting scrape run")

        with self.page.exclusive():
            self.sort_selector.select_most_recent_order()
            self.loader.load_all()
            records = self.extractor.extract()

        elapsed = (datetime.now() - start_time).total_seconds()
        log_pipeline_event(STAGE, "complete", f"Scraped {len(records)} authors in {elapsed:.2f}s")
        return records
