"""Alerts entrypoint - Run the alert pipeline once from the command line.

Usage:
    python -m flapboard.alerts_entrypoint                  # All alerts
    python -m flapboard.alerts_entrypoint rail             # Rail alerts only
    python -m flapboard.alerts_entrypoint subway major     # Major subway alerts
    python -m flapboard.alerts_entrypoint all planned      # Planned work on any line
"""

import asyncio
import json
import sys

from flapboard.core.logging import get_logger
from flapboard.schemas.api import AlertsResponse
from flapboard.services.alert_service import AlertService
from flapboard.services.filters import ALL, LINE_TYPES, SEVERITIES, count_alerts, filter_alerts

logger = get_logger("alerts_entrypoint")


async def fetch_alerts() -> AlertsResponse:
    """Run one fetch/normalize/dedup cycle with the configured API key."""
    return await AlertService().get_alerts()


def main(argv=None):
    """Main entry point for the one-shot alert run."""
    args = list(sys.argv[1:] if argv is None else argv)
    line_type = args[0] if len(args) > 0 else ALL
    severity = args[1] if len(args) > 1 else ALL

    if line_type not in LINE_TYPES + (ALL,):
        logger.error(f"Invalid line type: {line_type}. Must be one of: {', '.join(LINE_TYPES + (ALL,))}")
        sys.exit(1)
    if severity not in SEVERITIES + (ALL,):
        logger.error(f"Invalid severity: {severity}. Must be one of: {', '.join(SEVERITIES + (ALL,))}")
        sys.exit(1)

    response = asyncio.run(fetch_alerts())
    logger.info(f"Alert counts: {count_alerts(response.alerts)}")

    selected = filter_alerts(response.alerts, line_type=line_type, severity=severity)
    logger.info(f"{len(selected)} of {response.count} alerts match line_type={line_type} severity={severity}")

    payload = [alert.model_dump(mode="json", by_alias=True, exclude_none=True) for alert in selected]
    print(json.dumps(payload, indent=2))
    return selected


if __name__ == "__main__":
    main()
