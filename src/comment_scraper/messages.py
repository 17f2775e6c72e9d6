#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Request/response messages exchanged with the shell that invokes a scrape.

Every ``ScrapeRequested`` gets exactly one response: ``ScrapeSucceeded``
(possibly with no records) or ``ScrapeFailed``.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from comment_scraper.models.participant import ParticipantRecord
from comment_scraper.orchestration.orchestrator import ScrapePipeline
from comment_scraper.utils.logger import get_logger

logger = get_logger(__name__)


class ParticipantMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    profile_url: str = Field(alias="profileUrl")
    headline: Optional[str] = None

    @classmethod
    def from_record(cls, record: ParticipantRecord) -> "ParticipantMessage":
        return cls(
            id=record.id,
            name=record.name,
            profile_url=record.profile_url,
            headline=record.headline,
        )


class ScrapeRequested(BaseModel):
    type: Literal["SCRAPE_REQUEST"] = "SCRAPE_REQUEST"


class ScrapeSucceeded(BaseModel):
    type: Literal["SCRAPE_SUCCESS"] = "SCRAPE_SUCCESS"
    records: List[ParticipantMessage] = Field(default_factory=list)

    def to_message(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ScrapeFailed(BaseModel):
    type: Literal["SCRAPE_ERROR"] = "SCRAPE_ERROR"
    message: str

    def to_message(self) -> Dict[str, Any]:
        return self.model_dump()


ScrapeResponse = Union[ScrapeSucceeded, ScrapeFailed]


def handle_scrape_request(request: ScrapeRequested, pipeline: ScrapePipeline) -> ScrapeResponse:
    """
    Run the pipeline once for a request.

    Args:
        request: The incoming request
        pipeline: Pipeline bound to the page to scrape

    Returns:
        ScrapeResponse: The single response for this request
    """
    logger.info(f"Handling {request.type}")

    try:
        records = pipeline.run()
    except Exception as e:
        logger.exception(f"Scrape failed: {str(e)}")
        return ScrapeFailed(message=str(e) or e.__class__.__name__)

    return ScrapeSucceeded(records=[ParticipantMessage.from_record(r) for r in records])
