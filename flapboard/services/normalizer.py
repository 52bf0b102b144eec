"""Normalization of one raw GTFS-rt entity into an Alert."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from flapboard.core.config import settings
from flapboard.ingestion.base import EndpointType
from flapboard.schemas.normalized import Alert, Severity
from flapboard.schemas.raw import RawEntity, TimeRange
from .extractors import (
    classify_line,
    classify_line_type,
    classify_severity_from_effect,
    extract_display_text,
)

DEFAULT_TITLE = "Service Alert"
DEFAULT_DESCRIPTION = "No description available"


@dataclass(frozen=True)
class SeverityOverride:
    """Description keyword rule.

    Sets ``severity`` when the lower-cased description contains any keyword and the
    current severity is in ``applies_to`` (``None`` means any severity).
    """

    keywords: tuple[str, ...]
    severity: Severity
    applies_to: Optional[frozenset[str]] = None

    def apply(self, current: Severity, description: str) -> Severity:
        if self.applies_to is not None and current not in self.applies_to:
            return current
        if any(keyword in description for keyword in self.keywords):
            return self.severity
        return current


# Applied in order, each rule sees the result of the previous one.
SEVERITY_OVERRIDES: tuple[SeverityOverride, ...] = (
    # Deliberately not a plain "planned wins" step: major is left out of applies_to, so
    # NO_SERVICE with "planned track work" and SIGNIFICANT_DELAYS with "weekend" both
    # stay major. Keep major out of this set.
    SeverityOverride(
        ("planned", "scheduled", "maintenance", "weekend", "track work"),
        "planned",
        applies_to=frozenset({"minor", "moderate", "planned"}),
    ),
    SeverityOverride(("no service", "suspended", "closed"), "major"),
    SeverityOverride(("delay", "running behind"), "moderate", applies_to=frozenset({"minor"})),
)


def apply_severity_overrides(severity: Severity, description: str) -> Severity:
    lowered = description.lower()
    for rule in SEVERITY_OVERRIDES:
        severity = rule.apply(severity, lowered)
    return severity


def format_expected_resolution(periods: Sequence[TimeRange], tz: Optional[tzinfo] = None) -> Optional[str]:
    """Render the end of the first active period that has one, e.g. "Until 3/7/2025 5:30 PM"."""
    end = next((p.end for p in periods if p.end), None)
    if end is None:
        return None

    tz = tz or ZoneInfo(settings.DISPLAY_TIMEZONE)
    try:
        ends_at = datetime.fromtimestamp(end, tz=tz)
    except (ValueError, OverflowError, OSError):
        # Out-of-range end, e.g. milliseconds instead of seconds
        return None
    hour = ends_at.hour % 12 or 12
    meridiem = "AM" if ends_at.hour < 12 else "PM"
    return f"Until {ends_at.month}/{ends_at.day}/{ends_at.year} {hour}:{ends_at.minute:02d} {meridiem}"


def normalize_entity(
    entity: RawEntity,
    endpoint_type: Optional[EndpointType] = None,
    now: Optional[datetime] = None,
) -> Optional[Alert]:
    """Return the normalized Alert for ``entity``, or None when it carries no content."""
    body = entity.alert
    if body is None or entity.is_deleted:
        return None

    header_text = extract_display_text(body.header_text)
    description_text = extract_display_text(body.description_text)
    if not header_text and not description_text:
        return None

    informed = body.informed_entity[0] if body.informed_entity else None
    route_id = informed.route_id if informed else None
    agency_id = informed.agency_id if informed else None

    line, line_color = classify_line(route_id, endpoint_type)
    line_type = classify_line_type(route_id, agency_id, endpoint_type)

    severity = classify_severity_from_effect(body.effect)
    severity = apply_severity_overrides(severity, description_text)

    return Alert(
        id=entity.id,
        line=line,
        line_color=line_color,
        line_type=line_type,
        title=header_text or DEFAULT_TITLE,
        description=description_text or header_text or DEFAULT_DESCRIPTION,
        # Station extraction is not implemented; always empty
        affected_stations=[],
        severity=severity,
        expected_resolution=format_expected_resolution(body.active_period),
        last_updated=now or datetime.now(timezone.utc),
    )
