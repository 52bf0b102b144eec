"""Raw GTFS-realtime alert feed schemas (JSON encoding).

Only the alert shape is modeled. Every field is optional because the upstream
feeds carry no schema guarantees; unknown keys are ignored.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from flapboard.core.logging import get_logger

log = get_logger("schemas.raw")


class _RawModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class Translation(_RawModel):
    text: str = ""
    language: Optional[str] = None

    @field_validator("text", mode="before")
    @classmethod
    def text_or_empty(cls, value):
        return "" if value is None else value


class LocalizedText(_RawModel):
    """GTFS-rt TranslatedString: a list of (text, language) pairs."""

    translation: list[Translation] = Field(default_factory=list)

    @field_validator("translation", mode="before")
    @classmethod
    def none_to_list(cls, value):
        return [] if value is None else value


class InformedEntity(_RawModel):
    route_id: Optional[str] = None
    agency_id: Optional[str] = None
    stop_id: Optional[str] = None


class TimeRange(_RawModel):
    start: Optional[int] = None
    end: Optional[int] = None


class AlertBody(_RawModel):
    header_text: Optional[LocalizedText] = None
    description_text: Optional[LocalizedText] = None
    url: Optional[LocalizedText] = None
    informed_entity: list[InformedEntity] = Field(default_factory=list)
    effect: Optional[str] = None
    cause: Optional[str] = None
    active_period: list[TimeRange] = Field(default_factory=list)

    @field_validator("informed_entity", "active_period", mode="before")
    @classmethod
    def none_to_list(cls, value):
        return [] if value is None else value


class RawEntity(_RawModel):
    id: str
    is_deleted: Optional[bool] = None
    alert: Optional[AlertBody] = None


class FeedHeader(_RawModel):
    timestamp: Optional[int] = None
    gtfs_realtime_version: Optional[str] = None


class RawFeedMessage(_RawModel):
    """One upstream payload; fetched fresh per request and never stored."""

    header: Optional[FeedHeader] = None
    entity: list[RawEntity] = Field(default_factory=list)

    @field_validator("entity", mode="before")
    @classmethod
    def valid_entities(cls, value):
        """Keep the entities that validate; a malformed one is dropped on its own."""
        if value is None:
            return []
        if not isinstance(value, list):
            return value

        kept = []
        for item in value:
            try:
                kept.append(RawEntity.model_validate(item))
            except ValidationError as exc:
                entity_id = item.get("id") if isinstance(item, dict) else None
                log.debug(f"Skipping malformed entity {entity_id!r}: {exc.error_count()} validation error(s)")
        return kept

    @classmethod
    def empty(cls) -> "RawFeedMessage":
        """Stand-in for a feed that could not be fetched."""
        return cls(entity=[])
