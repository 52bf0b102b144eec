"""Field extractors for raw GTFS-rt alert entities.

Every function here is pure and total: missing or odd input falls back to a
default instead of raising.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from flapboard.ingestion.base import EndpointType
from flapboard.schemas.normalized import LineColor, LineType, Severity
from flapboard.schemas.raw import LocalizedText

RAIL_ENDPOINTS = frozenset({"lirr", "mnr"})
SUBWAY_ENDPOINTS = frozenset({"subway", "bus"})
RAIL_ROUTE_MARKERS = ("LIRR", "MNR", "METRO")


class LineInfo(NamedTuple):
    line: str
    line_color: LineColor


class LineRule(NamedTuple):
    symbols: tuple[str, ...]
    line: str
    line_color: LineColor

    def matches(self, route_id: str) -> bool:
        return any(symbol in route_id for symbol in self.symbols)


# Scanned top to bottom, first match wins. Matching is by substring, so a route id
# holding symbols from several groups resolves to the earliest group: "AB" is A/C/E.
ROUTE_LINE_TABLE: tuple[LineRule, ...] = (
    LineRule(("1", "2", "3"), "1/2/3", "red"),
    LineRule(("4", "5", "6"), "4/5/6", "green"),
    LineRule(("A", "C", "E"), "A/C/E", "blue"),
    LineRule(("B", "D", "F", "M"), "B/D/F/M", "orange"),
    LineRule(("G",), "G", "light-green"),
    LineRule(("J", "Z"), "J/Z", "brown"),
    LineRule(("L",), "L", "gray"),
    LineRule(("N", "Q", "R", "W"), "N/Q/R/W", "yellow"),
    LineRule(("7",), "7", "purple"),
    LineRule(("S",), "S", "dark-gray"),
)

# Only reached when no route table entry matched
RAIL_LINE_TABLE: tuple[LineRule, ...] = (
    LineRule(("LIRR",), "LIRR", "lirr"),
    LineRule(("MNR", "METRO"), "Metro-North", "metro-north"),
)

ENDPOINT_LINES: dict[str, LineInfo] = {
    "lirr": LineInfo("LIRR", "lirr"),
    "mnr": LineInfo("Metro-North", "metro-north"),
}

UNKNOWN_LINE = LineInfo("Unknown", "gray")

# Substring match on the uppercased effect code, first match wins
EFFECT_SEVERITY_RULES: tuple[tuple[tuple[str, ...], Severity], ...] = (
    (("NO_SERVICE", "SIGNIFICANT_DELAYS"), "major"),
    (("REDUCED_SERVICE", "MODERATE_DELAYS"), "moderate"),
    (("DETOUR", "ADDITIONAL_SERVICE"), "moderate"),
    (("OTHER_EFFECT", "UNKNOWN_EFFECT"), "minor"),
)

DEFAULT_SEVERITY: Severity = "minor"


def extract_display_text(text: Optional[LocalizedText]) -> str:
    """Pick the English (or untagged) translation, else the first one, else ""."""
    if text is None or not text.translation:
        return ""

    english = next(
        (t for t in text.translation if not t.language or t.language == "en"),
        None,
    )
    if english is not None and english.text:
        return english.text
    return text.translation[0].text or ""


def classify_line_type(
    route_id: Optional[str] = None,
    agency_id: Optional[str] = None,
    endpoint_type: Optional[EndpointType] = None,
) -> LineType:
    """Endpoint type decides when known; otherwise look for rail markers in the route id.

    ``agency_id`` is accepted for parity with the informed entity but not consulted.
    """
    if endpoint_type in RAIL_ENDPOINTS:
        return "rail"
    if endpoint_type in SUBWAY_ENDPOINTS:
        return "subway"

    if route_id:
        upper = route_id.upper()
        if any(marker in upper for marker in RAIL_ROUTE_MARKERS):
            return "rail"

    return "subway"


def classify_line(route_id: Optional[str] = None, endpoint_type: Optional[EndpointType] = None) -> LineInfo:
    if endpoint_type in ENDPOINT_LINES:
        return ENDPOINT_LINES[endpoint_type]

    if not route_id:
        return UNKNOWN_LINE

    upper = route_id.upper()
    for rule in ROUTE_LINE_TABLE + RAIL_LINE_TABLE:
        if rule.matches(upper):
            return LineInfo(rule.line, rule.line_color)

    return LineInfo(route_id, "gray")


def classify_severity_from_effect(effect: Optional[str] = None) -> Severity:
    if not effect:
        return DEFAULT_SEVERITY

    upper = effect.upper()
    for codes, severity in EFFECT_SEVERITY_RULES:
        if any(code in upper for code in codes):
            return severity

    return DEFAULT_SEVERITY
