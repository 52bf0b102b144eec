"""Orchestration logic for feed ingestion."""

from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence

import httpx

from flapboard.core.config import settings
from flapboard.core.logging import get_logger
from flapboard.schemas.raw import RawFeedMessage
from .base import BaseFeedSource, FeedEndpoint, FetchedFeed
from .gtfs_source import GTFSAlertSource

log = get_logger("ingestion.runner")


class IngestionRunner:
    """Fetches every source concurrently and returns one feed per source, in order.

    A source that fails for any reason (network error, timeout, non-2xx status,
    malformed body) yields an empty feed instead of failing the batch.
    """

    def __init__(
        self,
        sources: Sequence[BaseFeedSource],
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.sources = list(sources)
        self.timeout = settings.FEED_TIMEOUT_SECONDS if timeout is None else timeout
        self.transport = transport

    @classmethod
    def for_endpoints(cls, endpoints: Sequence[FeedEndpoint], **kwargs) -> "IngestionRunner":
        return cls([GTFSAlertSource(endpoint) for endpoint in endpoints], **kwargs)

    async def run(self, api_key: Optional[str] = None) -> List[FetchedFeed]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            outcomes = await asyncio.gather(
                *(source.fetch(client, api_key) for source in self.sources),
                return_exceptions=True,
            )

        fetched: List[FetchedFeed] = []
        for source, outcome in zip(self.sources, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                log.error(f"Error fetching {source.name} feed from {source.endpoint.url}: {outcome!r}")
                fetched.append(FetchedFeed(source.endpoint, RawFeedMessage.empty(), error=str(outcome) or repr(outcome)))
                continue
            fetched.append(FetchedFeed(source.endpoint, outcome))

        failed = sum(1 for f in fetched if not f.ok)
        log.info(
            f"Fetched {len(fetched)} feeds ({failed} failed, "
            f"{sum(len(f.feed.entity) for f in fetched)} entities)"
        )
        return fetched
