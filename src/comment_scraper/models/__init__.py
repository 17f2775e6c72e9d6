#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Data models shared by the pipeline stages.
"""

from comment_scraper.models.participant import ParticipantRecord, LoadState

__all__ = ["ParticipantRecord", "LoadState"]
