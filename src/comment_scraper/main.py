#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Main entry point for the Comment Author Scraper.

This module sets up logging and provides the command-line interface:

    comment-scraper scrape https://www.linkedin.com/feed/update/urn:li:activity:1/
    comment-scraper extract saved_post.html --base-url https://www.linkedin.com
"""

import sys
import json
import argparse
import dataclasses
from pathlib import Path
from typing import Any, Dict, List, Optional

from comment_scraper import __version__
from comment_scraper.config import config
from comment_scraper.locators import load_locators
from comment_scraper.messages import ScrapeRequested, ScrapeFailed, handle_scrape_request
from comment_scraper.orchestration.orchestrator import ScrapePipeline
from comment_scraper.page.static import StaticPage
from comment_scraper.stages.record_extractor import RecordExtractor
from comment_scraper.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def setup_argparse() -> argparse.ArgumentParser:
    """
    Set up command-line argument parsing.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="comment-scraper",
        description="Comment Author Scraper",
        epilog="Collects the unique authors of a comment thread as JSON.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    scrape_parser = subparsers.add_parser("scrape", help="Scrape a live comment thread")
    scrape_parser.add_argument("url", type=str, help="Address of the post holding the thread")
    scrape_parser.add_argument("--output", type=str, help="Write records to this file instead of stdout")
    scrape_parser.add_argument("--headful", action="store_true", help="Show the browser window")
    scrape_parser.add_argument(
        "--storage-state",
        type=str,
        help="Playwright storage state file with an authenticated session",
    )

    extract_parser = subparsers.add_parser("extract", help="Extract authors from a saved HTML page")
    extract_parser.add_argument("file", type=str, help="Saved HTML file")
    extract_parser.add_argument("--base-url", type=str, help="Base URL for resolving profile links")
    extract_parser.add_argument("--output", type=str, help="Write records to this file instead of stdout")

    return parser


def write_records(records: List[Dict[str, Any]], output: Optional[str]) -> None:
    """Write records as a JSON array to ``output`` or stdout."""
    payload = json.dumps(records, indent=2, ensure_ascii=False)
    if output:
        Path(output).write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Wrote {len(records)} records to {output}")
    else:
        print(payload)


def run_scrape(args: argparse.Namespace) -> int:
    """Scrape a live thread through a browser session."""
    from comment_scraper.page.browser import BrowserSession

    app_config = dataclasses.replace(
        config,
        headless=config.headless and not args.headful,
        storage_state_path=Path(args.storage_state) if args.storage_state else config.storage_state_path,
    )
    errors = app_config.validate()
    if errors:
        for error in errors:
            print(f"Configuration error: {error}", file=sys.stderr)
        return EXIT_USAGE

    try:
        with BrowserSession(args.url, app_config=app_config) as page:
            response = handle_scrape_request(ScrapeRequested(), ScrapePipeline(page, app_config=app_config))
    except Exception as e:
        logger.exception(f"Browser session failed: {str(e)}")
        response = ScrapeFailed(message=str(e) or e.__class__.__name__)

    if isinstance(response, ScrapeFailed):
        print(f"Scrape failed: {response.message}", file=sys.stderr)
        return EXIT_FAILURE

    write_records(response.to_message()["records"], args.output)
    return EXIT_OK


def run_extract(args: argparse.Namespace) -> int:
    """Extract authors from a saved page snapshot."""
    try:
        locators = load_locators(config.locators_path)
        page = StaticPage.from_file(args.file, base_url=args.base_url)
    except (OSError, ValueError) as e:
        print(f"Could not load {args.file}: {str(e)}", file=sys.stderr)
        return EXIT_USAGE

    records = RecordExtractor(page, locators=locators).extract()
    write_records([record.to_dict() for record in records], args.output)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parser = setup_argparse()
    args = parser.parse_args(argv)

    configure_logging(
        level=args.log_level or config.log_level,
        log_file=str(config.log_file_path) if config.log_file_path else None,
        json_logs=config.json_logs,
    )

    if args.command == "scrape":
        return run_scrape(args)
    return run_extract(args)


if __name__ == "__main__":
    sys.exit(main())
