#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit tests for the configuration module.
"""

import logging
from pathlib import Path

from comment_scraper.config import AppConfig


class TestAppConfig:
    """Tests for the AppConfig class."""

    def test_load_from_env(self, mock_env_vars, tmp_path):
        """Test that config loads values from environment variables."""
        config = AppConfig()

        assert config.log_level == logging.DEBUG
        assert config.log_file_path == tmp_path / "test.log"
        assert config.max_scroll_iterations == 10
        assert config.max_stagnant_iterations == 2
        assert config.load_settle_seconds == 0.5
        assert config.sort_option_index == 0
        assert config.headless is False
        assert config.browser == "firefox"

    def test_defaults(self, monkeypatch):
        """Test the defaults used when nothing is set."""
        for name in ("MAX_SCROLL_ITERATIONS", "MAX_STAGNANT_ITERATIONS", "SORT_OPTION_INDEX",
                     "LOAD_SETTLE_SECONDS", "BROWSER", "HEADLESS", "STORAGE_STATE_PATH"):
            monkeypatch.delenv(name, raising=False)

        config = AppConfig()

        assert config.max_scroll_iterations == 50
        assert config.max_stagnant_iterations == 3
        assert config.sort_option_index == 1
        assert config.load_settle_seconds == 1.5
        assert config.browser == "chromium"
        assert config.headless is True
        assert config.storage_state_path is None

    def test_validate_valid_config(self, test_config):
        """Test validation with valid configuration."""
        assert test_config.validate() == []

    def test_validate_invalid_config(self, test_config):
        """Test validation with invalid configuration."""
        config = test_config
        config.max_scroll_iterations = 0
        config.max_stagnant_iterations = -1
        config.load_settle_seconds = -0.5
        config.wait_poll_interval_seconds = 0
        config.browser = "netscape"
        config.storage_state_path = Path("/non/existent/state.json")
        config.log_file_path = Path("/non/existent/path/log.txt")

        errors = config.validate()

        assert any("MAX_SCROLL_ITERATIONS must be positive" in error for error in errors)
        assert any("MAX_STAGNANT_ITERATIONS must be positive" in error for error in errors)
        assert any("LOAD_SETTLE_SECONDS must not be negative" in error for error in errors)
        assert any("WAIT_POLL_INTERVAL_SECONDS must be positive" in error for error in errors)
        assert any("BROWSER must be one of" in error for error in errors)
        assert any("Storage state file does not exist" in error for error in errors)
        assert any("Log file path parent does not exist" in error for error in errors)
