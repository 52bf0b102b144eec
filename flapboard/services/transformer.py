"""Batch transformation of fetched feeds into a deduplicated alert list."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from flapboard.core.logging import get_logger
from flapboard.ingestion.base import EndpointType, FeedEndpoint, FetchedFeed
from flapboard.schemas.normalized import Alert
from flapboard.schemas.raw import RawFeedMessage
from .normalizer import normalize_entity

log = get_logger("transformer")


def pair_feeds(
    feeds: Sequence[RawFeedMessage],
    endpoint_types: Sequence[EndpointType],
    urls: Optional[Sequence[str]] = None,
) -> List[FetchedFeed]:
    """Bind parallel feed and endpoint-type sequences into FetchedFeed records.

    Raises ValueError when the sequences differ in length.
    """
    if len(feeds) != len(endpoint_types):
        raise ValueError(f"Got {len(feeds)} feeds for {len(endpoint_types)} endpoint types")
    if urls is not None and len(urls) != len(feeds):
        raise ValueError(f"Got {len(feeds)} feeds for {len(urls)} urls")

    urls = urls if urls is not None else [""] * len(feeds)
    return [
        FetchedFeed(FeedEndpoint(url=url, endpoint_type=endpoint_type), feed)
        for feed, endpoint_type, url in zip(feeds, endpoint_types, urls)
    ]


def dedup_key(alert: Alert) -> str:
    # Unrelated alerts sharing a generic title ("Service Alert") on one line collapse
    return f"{alert.line}-{alert.title}"


def deduplicate(alerts: Iterable[Alert]) -> List[Alert]:
    """Keep the first alert seen for each key, preserving order."""
    unique: Dict[str, Alert] = {}
    for alert in alerts:
        unique.setdefault(dedup_key(alert), alert)
    return list(unique.values())


def transform_feeds(fetched: Sequence[FetchedFeed], now: Optional[datetime] = None) -> List[Alert]:
    """Normalize every entity of every feed (feed order, then entity order), then dedup."""
    now = now or datetime.now(timezone.utc)

    alerts: List[Alert] = []
    for item in fetched:
        endpoint_type = item.endpoint.endpoint_type
        for entity in item.feed.entity:
            alert = normalize_entity(entity, endpoint_type, now=now)
            if alert is not None:
                alerts.append(alert)

    unique = deduplicate(alerts)
    if len(unique) != len(alerts):
        log.debug(f"Deduplicated alerts (input={len(alerts)} output={len(unique)})")
    return unique
