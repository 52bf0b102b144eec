"""Presentation-side filtering and counts over a normalized alert list.

These mirror what the dashboard does client-side; the HTTP API never filters.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Literal, Union, get_args

from flapboard.schemas.normalized import Alert, LineType, Severity

ALL = "all"
LINE_TYPES: tuple[str, ...] = get_args(LineType)
SEVERITIES: tuple[str, ...] = get_args(Severity)

LineTypeFilter = Union[LineType, Literal["all"]]
SeverityFilter = Union[Severity, Literal["all"]]


def filter_alerts(
    alerts: Iterable[Alert],
    line_type: LineTypeFilter = ALL,
    severity: SeverityFilter = ALL,
) -> List[Alert]:
    return [
        alert
        for alert in alerts
        if (line_type == ALL or alert.line_type == line_type)
        and (severity == ALL or alert.severity == severity)
    ]


def count_alerts(alerts: Iterable[Alert]) -> Dict[str, int]:
    """Counts per line type and per severity, zero-filled."""
    counts = {key: 0 for key in LINE_TYPES + SEVERITIES}
    for alert in alerts:
        counts[alert.line_type] += 1
        counts[alert.severity] += 1
    return counts
