# Services package
from flapboard.services.alert_service import AlertService
from flapboard.services.filters import count_alerts, filter_alerts
from flapboard.services.normalizer import normalize_entity
from flapboard.services.transformer import deduplicate, transform_feeds

__all__ = [
    "AlertService",
    "count_alerts",
    "filter_alerts",
    "normalize_entity",
    "deduplicate",
    "transform_feeds",
]
