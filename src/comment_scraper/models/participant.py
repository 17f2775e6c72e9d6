#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Participant Model - Defines the records produced by a scrape run.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class ParticipantRecord:
    """
    One comment author.

    The profile URL is the natural key, so ``id`` and ``profile_url`` always
    hold the same value.
    """

    id: str
    name: str
    profile_url: str
    headline: Optional[str] = None

    @classmethod
    def from_profile(cls, name: str, profile_url: str, headline: Optional[str] = None) -> "ParticipantRecord":
        """Build a record keyed by its profile URL."""
        return cls(id=profile_url, name=name, profile_url=profile_url, headline=headline or None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to its wire representation."""
        data = {
            "id": self.id,
            "name": self.name,
            "profileUrl": self.profile_url,
        }
        if self.headline is not None:
            data["headline"] = self.headline
        return data


@dataclass
class LoadState:
    """Progress of a single incremental loading run."""

    scroll_iterations: int = 0
    last_document_height: int = 0
    stagnant_iteration_count: int = 0
