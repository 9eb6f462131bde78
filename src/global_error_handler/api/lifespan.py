"""Application lifespan management.

Lifespan Responsibilities:
    - Startup:
        1. Log the active alerting channel and registered status mappings
    - Shutdown:
        1. Close the alert sink (releases the Telegram HTTP connection pool)
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan_context(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan (startup and shutdown).

    Expects ``setup_error_handler`` to have stored the alert sink and the
    registry on ``app.state``.
    """
    alert_sink = getattr(app.state, "alert_sink", None)
    registry = getattr(app.state, "exception_registry", None)

    logger.info(
        "LIFESPAN: Starting with alert sink %s",
        type(alert_sink).__name__ if alert_sink is not None else "<none>",
    )
    if registry is not None:
        logger.info("LIFESPAN: %d status mappings registered", len(registry.mappings()))

    try:
        yield
    finally:
        if alert_sink is not None:
            await alert_sink.close()
            logger.info("LIFESPAN: Alert sink closed")
