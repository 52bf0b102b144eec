"""Alert routes - Normalized MTA service alerts."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from flapboard.api.deps import get_alert_service
from flapboard.core.logging import get_logger
from flapboard.schemas.api import AlertsResponse, ErrorResponse
from flapboard.services.alert_service import AlertService

router = APIRouter(prefix="/api/alerts", tags=["alerts"])
log = get_logger("alert_routes")


@router.get(
    "",
    response_model=AlertsResponse,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
)
async def get_alerts(
    api_key: Optional[str] = Query(None, alias="apiKey", description="MTA API key (overrides MTA_API_KEY)"),
    service: AlertService = Depends(get_alert_service),
):
    """
    Fetch real-time MTA service alerts from all feeds.

    Feeds that cannot be reached are skipped, so a partial outage still answers 200.
    Filtering by line type or severity is left to the client.
    """
    try:
        return await service.get_alerts(api_key)
    except Exception as exc:
        log.exception(f"Error fetching MTA alerts: {exc}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Failed to fetch MTA alerts", message=str(exc) or "Unknown error").model_dump(),
        )
