#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Structural locators the pipeline expects the comment page to provide.

The defaults match the current markup of the comment thread. Any of them can
be overridden from a JSON file, e.g.::

    {"comment_entry": "article.comments-comment-entity"}
"""

import json
import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from comment_scraper.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Locators:
    """CSS selectors consumed from the page."""

    sort_trigger: str = ".comments-sort-order-toggle__trigger"
    sort_options_container: str = ".comments-sort-order-toggle__content"
    sort_options_overlay: str = ".artdeco-dropdown__content"
    sort_option: str = '[role="button"], li, button'
    load_more: Tuple[str, ...] = (
        ".comments-comments-list__load-more-comments-button--cr",
        ".comments-comments-list__load-more-comments-arrows",
    )
    comment_entry: str = "article"
    author_anchor: str = "a[data-test-app-aware-link], a.app-aware-link"
    author_label: str = (
        "a.comments-comment-meta__description-title, "
        "span.comments-comment-meta__description-title"
    )


DEFAULT_LOCATORS = Locators()


def load_locators(path: Optional[Union[str, Path]] = None) -> Locators:
    """
    Load locators, applying overrides from a JSON file.

    Args:
        path: JSON file with a subset of the locator fields (None for defaults)

    Returns:
        Locators: Defaults with the file's overrides applied

    Raises:
        ValueError: If the file cannot be read or names unknown locators
    """
    if path is None:
        return DEFAULT_LOCATORS

    try:
        with open(path, "r", encoding="utf-8") as f:
            overrides = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Could not load locators from {path}: {str(e)}")

    if not isinstance(overrides, dict):
        raise ValueError(f"Locators file {path} must contain a JSON object")

    known = {f.name for f in dataclasses.fields(Locators)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(f"Unknown locators in {path}: {', '.join(unknown)}")

    if "load_more" in overrides:
        load_more = overrides["load_more"]
        if isinstance(load_more, str):
            load_more = [load_more]
        overrides["load_more"] = tuple(load_more)

    logger.info(f"Loaded {len(overrides)} locator overrides from {path}")
    return dataclasses.replace(DEFAULT_LOCATORS, **overrides)
