#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Configuration management for the Comment Author Scraper.

This module loads configuration from environment variables (and an optional
.env file), provides defaults for every timing and bound used by the pipeline,
and validates configuration values.
"""

import os
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Log levels
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_path(name: str) -> Optional[Path]:
    value = os.getenv(name)
    return Path(value) if value else None


@dataclass
class AppConfig:
    """Application configuration."""

    # Logging
    log_level: int = field(
        default_factory=lambda: LOG_LEVELS.get(
            os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO
        )
    )
    log_file_path: Optional[Path] = field(
        default_factory=lambda: _env_path("LOG_FILE_PATH")
    )
    json_logs: bool = field(
        default_factory=lambda: _env_bool("JSON_LOGS", "false")
    )

    # Sort selection
    sort_menu_settle_seconds: float = field(
        default_factory=lambda: float(os.getenv("SORT_MENU_SETTLE_SECONDS", "1.0"))
    )
    sort_apply_settle_seconds: float = field(
        default_factory=lambda: float(os.getenv("SORT_APPLY_SETTLE_SECONDS", "2.0"))
    )
    sort_option_index: int = field(
        default_factory=lambda: int(os.getenv("SORT_OPTION_INDEX", "1"))
    )

    # Incremental loading
    load_more_click_settle_seconds: float = field(
        default_factory=lambda: float(os.getenv("LOAD_MORE_CLICK_SETTLE_SECONDS", "0.5"))
    )
    load_settle_seconds: float = field(
        default_factory=lambda: float(os.getenv("LOAD_SETTLE_SECONDS", "1.5"))
    )
    max_scroll_iterations: int = field(
        default_factory=lambda: int(os.getenv("MAX_SCROLL_ITERATIONS", "50"))
    )
    max_stagnant_iterations: int = field(
        default_factory=lambda: int(os.getenv("MAX_STAGNANT_ITERATIONS", "3"))
    )
    wait_poll_interval_seconds: float = field(
        default_factory=lambda: float(os.getenv("WAIT_POLL_INTERVAL_SECONDS", "0.25"))
    )

    # Browser
    browser: str = field(
        default_factory=lambda: os.getenv("BROWSER", "chromium").lower()
    )
    headless: bool = field(
        default_factory=lambda: _env_bool("HEADLESS", "true")
    )
    navigation_timeout_ms: int = field(
        default_factory=lambda: int(os.getenv("NAVIGATION_TIMEOUT_MS", "30000"))
    )
    storage_state_path: Optional[Path] = field(
        default_factory=lambda: _env_path("STORAGE_STATE_PATH")
    )

    # Locator overrides
    locators_path: Optional[Path] = field(
        default_factory=lambda: _env_path("LOCATORS_PATH")
    )

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List[str]: List of validation errors, empty if valid
        """
        errors = []

        # Check that optional files exist when configured
        for path_name, path in [
            ("Storage state file", self.storage_state_path),
            ("Locators file", self.locators_path),
        ]:
            if path is not None and not path.exists():
                errors.append(f"{path_name} does not exist: {path}")

        if self.log_file_path is not None and not self.log_file_path.parent.exists():
            errors.append(f"Log file path parent does not exist: {self.log_file_path.parent}")

        # Validate numeric values
        if self.max_scroll_iterations <= 0:
            errors.append("MAX_SCROLL_ITERATIONS must be positive")

        if self.max_stagnant_iterations <= 0:
            errors.append("MAX_STAGNANT_ITERATIONS must be positive")

        if self.wait_poll_interval_seconds <= 0:
            errors.append("WAIT_POLL_INTERVAL_SECONDS must be positive")

        for name, value in [
            ("SORT_MENU_SETTLE_SECONDS", self.sort_menu_settle_seconds),
            ("SORT_APPLY_SETTLE_SECONDS", self.sort_apply_settle_seconds),
            ("LOAD_MORE_CLICK_SETTLE_SECONDS", self.load_more_click_settle_seconds),
            ("LOAD_SETTLE_SECONDS", self.load_settle_seconds),
        ]:
            if value < 0:
                errors.append(f"{name} must not be negative")

        if self.sort_option_index < 0:
            errors.append("SORT_OPTION_INDEX must not be negative")

        if self.navigation_timeout_ms <= 0:
            errors.append("NAVIGATION_TIMEOUT_MS must be positive")

        if self.browser not in SUPPORTED_BROWSERS:
            errors.append(
                f"BROWSER must be one of {', '.join(SUPPORTED_BROWSERS)}, got '{self.browser}'"
            )

        return errors


# Create a global config instance
config = AppConfig()
