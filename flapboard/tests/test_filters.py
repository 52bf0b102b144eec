"""Presentation filter and count tests"""

from datetime import datetime, timezone

import pytest

from flapboard.schemas.normalized import Alert
from flapboard.services.filters import count_alerts, filter_alerts

NOW = datetime(2025, 3, 7, 12, 0, tzinfo=timezone.utc)


def _alert(alert_id, line_type, severity):
    return Alert(
        id=alert_id,
        line="LIRR" if line_type == "rail" else "A/C/E",
        line_color="lirr" if line_type == "rail" else "blue",
        line_type=line_type,
        title=f"Alert {alert_id}",
        description="Details",
        severity=severity,
        last_updated=NOW,
    )


@pytest.fixture
def alerts():
    return [
        _alert("1", "subway", "major"),
        _alert("2", "subway", "planned"),
        _alert("3", "rail", "major"),
        _alert("4", "rail", "minor"),
    ]


class TestFilterAlerts:
    """Test client-side style filtering"""

    def test_all_is_identity(self, alerts):
        assert filter_alerts(alerts) == alerts

    def test_by_line_type(self, alerts):
        assert [a.id for a in filter_alerts(alerts, line_type="rail")] == ["3", "4"]

    def test_by_severity(self, alerts):
        assert [a.id for a in filter_alerts(alerts, severity="major")] == ["1", "3"]

    def test_combined(self, alerts):
        assert [a.id for a in filter_alerts(alerts, line_type="subway", severity="major")] == ["1"]

    def test_no_match(self, alerts):
        assert filter_alerts(alerts, line_type="rail", severity="planned") == []


class TestCountAlerts:
    """Test per-dimension counts"""

    def test_counts(self, alerts):
        assert count_alerts(alerts) == {
            "subway": 2,
            "rail": 2,
            "minor": 1,
            "moderate": 0,
            "major": 2,
            "planned": 1,
        }

    def test_empty(self):
        assert set(count_alerts([]).values()) == {0}
