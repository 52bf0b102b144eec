"""End-to-end alert service: fetch every MTA feed, normalize, dedup."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

import httpx

from flapboard.core.config import settings
from flapboard.core.logging import get_logger
from flapboard.ingestion.base import FeedEndpoint
from flapboard.ingestion.gtfs_source import MTA_ALERT_ENDPOINTS
from flapboard.ingestion.runner import IngestionRunner
from flapboard.schemas.api import AlertsResponse
from .transformer import transform_feeds

log = get_logger("alert_service")


class AlertService:
    """Runs one request cycle of the alert pipeline.

    Nothing is cached between calls; every call fetches all endpoints again.
    """

    def __init__(
        self,
        endpoints: Sequence[FeedEndpoint] = MTA_ALERT_ENDPOINTS,
        default_api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoints = tuple(endpoints)
        self.default_api_key = default_api_key if default_api_key is not None else settings.MTA_API_KEY
        self.runner = IngestionRunner.for_endpoints(self.endpoints, timeout=timeout, transport=transport)

    def resolve_api_key(self, api_key: Optional[str] = None) -> Optional[str]:
        """A request credential wins over the process-wide default."""
        return api_key or self.default_api_key or None

    async def get_alerts(self, api_key: Optional[str] = None) -> AlertsResponse:
        fetched = await self.runner.run(self.resolve_api_key(api_key))
        now = datetime.now(timezone.utc)
        alerts = transform_feeds(fetched, now=now)

        log.info(f"Serving {len(alerts)} alerts from {len(fetched)} feeds")
        return AlertsResponse(alerts=alerts, count=len(alerts), timestamp=now)
