"""MTA GTFS-realtime service alert feeds (JSON encoding)."""

from __future__ import annotations

from typing import Dict, Optional

import httpx

from flapboard.core.logging import get_logger
from flapboard.schemas.raw import RawFeedMessage
from .base import BaseFeedSource, FeedEndpoint

log = get_logger("ingestion.gtfs")

API_KEY_HEADER = "x-api-key"

# Fixed order: subway, bus, lirr, mnr
MTA_ALERT_ENDPOINTS: tuple[FeedEndpoint, ...] = (
    FeedEndpoint(
        url="https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/camsys%2Fsubway-alerts.json",
        endpoint_type="subway",
    ),
    FeedEndpoint(
        url="https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/camsys%2Fbus-alerts.json",
        endpoint_type="bus",
    ),
    FeedEndpoint(
        url="https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/camsys%2Flirr-alerts.json",
        endpoint_type="lirr",
    ),
    FeedEndpoint(
        url="https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/camsys%2Fmnr-alerts.json",
        endpoint_type="mnr",
    ),
)


class GTFSAlertSource(BaseFeedSource):
    """Fetches one GTFS-rt alert feed.

    Non-2xx responses raise ``httpx.HTTPStatusError``, undecodable bodies raise
    ``ValueError`` and bodies of the wrong shape raise ``pydantic.ValidationError``.
    The runner treats all of them as a failed feed. Individual malformed entities
    are dropped during validation and do not fail the feed.
    """

    async def fetch(self, client: httpx.AsyncClient, api_key: Optional[str] = None) -> RawFeedMessage:
        headers: Dict[str, str] = {"Accept": "application/json"}
        if api_key:
            headers[API_KEY_HEADER] = api_key

        resp = await client.get(self.endpoint.url, headers=headers)
        resp.raise_for_status()
        data = resp.json()

        feed = RawFeedMessage.model_validate(data)
        log.debug(f"Fetched {len(feed.entity)} entities from {self.name} feed")
        return feed
