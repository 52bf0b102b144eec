"""Abstract feed source interface for ingestion."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal, Optional

import httpx

from flapboard.schemas.raw import RawFeedMessage

EndpointType = Literal["subway", "bus", "lirr", "mnr"]


@dataclass(frozen=True)
class FeedEndpoint:
    """An upstream URL bound to the endpoint type that classifies its entities."""

    url: str
    endpoint_type: EndpointType


@dataclass(frozen=True)
class FetchedFeed:
    """Outcome of one endpoint fetch. ``feed`` is empty when ``error`` is set."""

    endpoint: FeedEndpoint
    feed: RawFeedMessage
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BaseFeedSource(ABC):
    """Abstract base class for upstream alert feeds."""

    def __init__(self, endpoint: FeedEndpoint):
        self.endpoint = endpoint

    @property
    def name(self) -> str:
        return self.endpoint.endpoint_type

    @abstractmethod
    async def fetch(self, client: httpx.AsyncClient, api_key: Optional[str] = None) -> RawFeedMessage:
        """Fetch and parse one feed; raise on any transport or decoding failure."""
