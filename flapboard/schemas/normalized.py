"""Unified normalized alert model"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

LineColor = Literal[
    "red",
    "green",
    "purple",
    "blue",
    "orange",
    "light-green",
    "brown",
    "gray",
    "yellow",
    "dark-gray",
    "metro-north",
    "lirr",
]

LineType = Literal["subway", "rail"]

Severity = Literal["minor", "moderate", "major", "planned"]


class Alert(BaseModel):
    """One normalized service alert; serialized with camelCase keys."""

    id: str
    line: str
    line_color: LineColor
    line_type: LineType
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    affected_stations: list[str] = Field(default_factory=list)
    severity: Severity
    expected_resolution: Optional[str] = None
    last_updated: datetime

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
