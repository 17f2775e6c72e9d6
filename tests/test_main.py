#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for the command-line interface.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from comment_scraper import main as cli
from comment_scraper.exceptions import PageAccessError
from comment_scraper.models.participant import ParticipantRecord

from conftest import comment_entry, thread_html


@pytest.fixture
def saved_thread(tmp_path):
    path = tmp_path / "post.html"
    path.write_text(thread_html([
        comment_entry("A", "/in/a", headline="Engineer"),
        comment_entry("B", "/in/b"),
        comment_entry("A", "/in/a", headline="Engineer"),
    ]), encoding="utf-8")
    return path


def test_extract_prints_records(saved_thread, capsys):
    exit_code = cli.main(["extract", str(saved_thread), "--base-url", "https://www.linkedin.com"])

    assert exit_code == cli.EXIT_OK
    records = json.loads(capsys.readouterr().out)
    assert records == [
        {
            "id": "https://www.linkedin.com/in/a",
            "name": "A",
            "profileUrl": "https://www.linkedin.com/in/a",
            "headline": "Engineer",
        },
        {
            "id": "https://www.linkedin.com/in/b",
            "name": "B",
            "profileUrl": "https://www.linkedin.com/in/b",
        },
    ]


def test_extract_writes_output_file(saved_thread, tmp_path):
    output = tmp_path / "authors.json"

    assert cli.main(["extract", str(saved_thread), "--output", str(output)]) == cli.EXIT_OK
    assert [r["id"] for r in json.loads(output.read_text(encoding="utf-8"))] == ["/in/a", "/in/b"]


def test_extract_missing_file(tmp_path, capsys):
    exit_code = cli.main(["extract", str(tmp_path / "missing.html")])

    assert exit_code == cli.EXIT_USAGE
    assert "Could not load" in capsys.readouterr().err


@patch("comment_scraper.main.ScrapePipeline")
@patch("comment_scraper.page.browser.BrowserSession")
def test_scrape_success(mock_session, mock_pipeline, capsys):
    mock_session.return_value.__enter__.return_value = MagicMock()
    mock_pipeline.return_value.run.return_value = [ParticipantRecord.from_profile("A", "/in/a")]

    exit_code = cli.main(["scrape", "https://www.linkedin.com/feed/update/urn:li:activity:1/"])

    assert exit_code == cli.EXIT_OK
    assert json.loads(capsys.readouterr().out) == [{"id": "/in/a", "name": "A", "profileUrl": "/in/a"}]
    assert mock_session.call_args[0][0] == "https://www.linkedin.com/feed/update/urn:li:activity:1/"


@patch("comment_scraper.main.ScrapePipeline")
@patch("comment_scraper.page.browser.BrowserSession")
def test_scrape_failure(mock_session, mock_pipeline, capsys):
    mock_session.return_value.__enter__.return_value = MagicMock()
    mock_pipeline.return_value.run.side_effect = PageAccessError("document unavailable")

    exit_code = cli.main(["scrape", "https://www.linkedin.com/feed/update/urn:li:activity:1/"])

    captured = capsys.readouterr()
    assert exit_code == cli.EXIT_FAILURE
    assert captured.out == ""
    assert "document unavailable" in captured.err


@patch("comment_scraper.page.browser.BrowserSession")
def test_scrape_session_failure(mock_session, capsys):
    mock_session.return_value.__enter__.side_effect = PageAccessError("Could not open page")

    exit_code = cli.main(["scrape", "https://invalid.example"])

    assert exit_code == cli.EXIT_FAILURE
    assert "Could not open page" in capsys.readouterr().err


def test_scrape_invalid_config(tmp_path, capsys):
    exit_code = cli.main(["scrape", "https://example.com", "--storage-state", str(tmp_path / "missing.json")])

    assert exit_code == cli.EXIT_USAGE
    assert "Storage state file does not exist" in capsys.readouterr().err


def test_command_required():
    with pytest.raises(SystemExit):
        cli.main([])
