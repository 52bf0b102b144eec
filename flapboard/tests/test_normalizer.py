"""Alert normalizer tests"""

from datetime import datetime, timezone

import pytest

from flapboard.schemas.raw import RawEntity, TimeRange
from flapboard.services.normalizer import (
    apply_severity_overrides,
    format_expected_resolution,
    normalize_entity,
)

NOW = datetime(2025, 3, 7, 12, 0, tzinfo=timezone.utc)


class TestRejection:
    """Entities without usable content produce no alert"""

    def test_deleted_entity(self, raw_entity):
        entity = raw_entity(header="Delays", description="Trains are delayed", is_deleted=True)
        assert normalize_entity(entity, "subway") is None

    def test_entity_without_alert(self, raw_entity):
        assert normalize_entity(raw_entity(with_alert=False), "subway") is None

    def test_empty_header_and_description(self, raw_entity):
        assert normalize_entity(raw_entity(header="", description=""), "subway") is None

    def test_missing_texts(self, raw_entity):
        assert normalize_entity(raw_entity(route_id="A"), "subway") is None


class TestNormalizeEntity:
    """Test the accepted path"""

    def test_delay_description_without_header(self, raw_entity):
        entity = raw_entity(
            entity_id="123",
            header="",
            description="Trains are running with delays due to signal problems",
            route_id="A",
        )
        alert = normalize_entity(entity, "subway", now=NOW)

        assert alert.id == "123"
        assert alert.title == "Service Alert"
        assert alert.severity == "moderate"
        assert alert.line == "A/C/E"
        assert alert.line_color == "blue"
        assert alert.line_type == "subway"
        assert alert.last_updated == NOW

    def test_header_used_as_description(self, raw_entity):
        alert = normalize_entity(raw_entity(header="Elevator outage at 14 St"), "subway")
        assert alert.title == "Elevator outage at 14 St"
        assert alert.description == "Elevator outage at 14 St"

    def test_missing_informed_entity_falls_back(self, raw_entity):
        alert = normalize_entity(raw_entity(header="Notice"), None)
        assert alert.line == "Unknown"
        assert alert.line_color == "gray"
        assert alert.line_type == "subway"

    def test_rail_endpoint_overrides_route(self, raw_entity):
        alert = normalize_entity(raw_entity(header="Notice", route_id="G"), "lirr")
        assert alert.line == "LIRR"
        assert alert.line_color == "lirr"
        assert alert.line_type == "rail"

    def test_only_first_informed_entity_is_used(self):
        entity = RawEntity.model_validate(
            {
                "id": "9",
                "alert": {
                    "header_text": {"translation": [{"text": "Notice"}]},
                    "informed_entity": [{"route_id": "L"}, {"route_id": "1"}],
                },
            }
        )
        assert normalize_entity(entity, "subway").line == "L"

    def test_affected_stations_are_empty(self, raw_entity):
        alert = normalize_entity(raw_entity(header="Notice", description="Skipping 23 St"), "subway")
        assert alert.affected_stations == []

    def test_expected_resolution(self, raw_entity):
        alert = normalize_entity(
            raw_entity(header="Notice", active_period=[{"start": 1699990000, "end": 1700000000}]),
            "subway",
        )
        assert alert.expected_resolution.startswith("Until ")

    def test_no_expected_resolution_without_end(self, raw_entity):
        alert = normalize_entity(raw_entity(header="Notice", active_period=[{"start": 1699990000}]), "subway")
        assert alert.expected_resolution is None


class TestSeverity:
    """Effect code plus description overrides"""

    def test_no_service_survives_planned_keywords(self, raw_entity):
        entity = raw_entity(header="Weekend", description="Planned track work this weekend", effect="NO_SERVICE")
        assert normalize_entity(entity, "subway").severity == "major"

    def test_significant_delays_survive_weekend_wording(self, raw_entity):
        entity = raw_entity(header="Delays", description="Weekend service changes in effect", effect="SIGNIFICANT_DELAYS")
        assert normalize_entity(entity, "subway").severity == "major"

    def test_major_keywords_override_planned(self, raw_entity):
        entity = raw_entity(header="Work", description="Scheduled maintenance: station closed")
        assert normalize_entity(entity, "subway").severity == "major"

    def test_planned_keywords_override_effect(self, raw_entity):
        entity = raw_entity(header="Work", description="Scheduled maintenance overnight", effect="REDUCED_SERVICE")
        assert normalize_entity(entity, "subway").severity == "planned"

    def test_header_is_not_scanned(self, raw_entity):
        entity = raw_entity(header="Suspended", description="See mta.info")
        assert normalize_entity(entity, "subway").severity == "minor"

    @pytest.mark.parametrize(
        "severity,description,expected",
        [
            ("minor", "expect delays", "moderate"),
            ("minor", "Trains are Running Behind schedule", "moderate"),
            ("minor", "planned work may cause delays", "planned"),
            ("major", "delays", "major"),
            ("moderate", "delays", "moderate"),
            ("minor", "service suspended, delays", "major"),
            ("moderate", "nothing to see", "moderate"),
            ("moderate", "weekend service changes", "planned"),
            ("major", "planned track work", "major"),
        ],
    )
    def test_override_order(self, severity, description, expected):
        assert apply_severity_overrides(severity, description) == expected


class TestFormatExpectedResolution:
    """Test the "Until ..." rendering"""

    def test_evening(self):
        periods = [TimeRange(start=1699990000, end=1700000000)]
        assert format_expected_resolution(periods, tz=timezone.utc) == "Until 11/14/2023 10:13 PM"

    def test_just_after_midnight(self):
        periods = [TimeRange(end=1700006700)]
        assert format_expected_resolution(periods, tz=timezone.utc) == "Until 11/15/2023 12:05 AM"

    def test_first_period_with_end_is_used(self):
        periods = [TimeRange(start=1), TimeRange(start=2, end=1700000000), TimeRange(end=1700006700)]
        assert format_expected_resolution(periods, tz=timezone.utc) == "Until 11/14/2023 10:13 PM"

    def test_no_periods(self):
        assert format_expected_resolution([]) is None

    @pytest.mark.parametrize("end", [1700000000000, 10**20], ids=["milliseconds", "overflow"])
    def test_out_of_range_end(self, end):
        assert format_expected_resolution([TimeRange(end=end)], tz=timezone.utc) is None

    def test_out_of_range_end_keeps_alert(self, raw_entity):
        alert = normalize_entity(raw_entity(header="Notice", active_period=[{"end": 1700000000000}]), "subway")
        assert alert is not None
        assert alert.expected_resolution is None
