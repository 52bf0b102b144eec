"""API dependencies"""

from flapboard.services.alert_service import AlertService


def get_alert_service() -> AlertService:
    """Alert service dependency (one per request; nothing is shared between cycles)"""
    return AlertService()
