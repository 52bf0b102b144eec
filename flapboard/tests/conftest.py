"""Shared fixtures: GTFS-rt JSON payload builders"""

from typing import Any, Dict, List, Optional

import pytest

from flapboard.schemas.raw import RawEntity, RawFeedMessage


def build_entity(
    entity_id: str = "1",
    header: Optional[str] = None,
    description: Optional[str] = None,
    route_id: Optional[str] = None,
    agency_id: Optional[str] = None,
    effect: Optional[str] = None,
    active_period: Optional[List[Dict[str, int]]] = None,
    is_deleted: Optional[bool] = None,
    with_alert: bool = True,
) -> Dict[str, Any]:
    entity: Dict[str, Any] = {"id": entity_id}
    if is_deleted is not None:
        entity["is_deleted"] = is_deleted
    if not with_alert:
        return entity

    alert: Dict[str, Any] = {}
    if header is not None:
        alert["header_text"] = {"translation": [{"text": header, "language": "en"}]}
    if description is not None:
        alert["description_text"] = {"translation": [{"text": description, "language": "en"}]}
    if route_id is not None or agency_id is not None:
        informed: Dict[str, str] = {}
        if route_id is not None:
            informed["route_id"] = route_id
        if agency_id is not None:
            informed["agency_id"] = agency_id
        alert["informed_entity"] = [informed]
    if effect is not None:
        alert["effect"] = effect
    if active_period is not None:
        alert["active_period"] = active_period
    entity["alert"] = alert
    return entity


def build_feed(*entities: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "header": {"gtfs_realtime_version": "2.0", "timestamp": 1700000000},
        "entity": list(entities),
    }


@pytest.fixture
def entity_payload():
    """Factory for one raw entity as upstream JSON"""
    return build_entity


@pytest.fixture
def feed_payload():
    """Factory for one feed message as upstream JSON"""
    return build_feed


@pytest.fixture
def raw_entity():
    """Factory for one parsed RawEntity"""

    def _make(**kwargs) -> RawEntity:
        return RawEntity.model_validate(build_entity(**kwargs))

    return _make


@pytest.fixture
def raw_feed():
    """Factory for one parsed RawFeedMessage"""

    def _make(*entities: Dict[str, Any]) -> RawFeedMessage:
        return RawFeedMessage.model_validate(build_feed(*entities))

    return _make
