from datetime import datetime

from pydantic import BaseModel

from flapboard.schemas.normalized import Alert


class AlertsResponse(BaseModel):
    alerts: list[Alert]
    count: int
    timestamp: datetime


class ErrorResponse(BaseModel):
    error: str
    message: str


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
