from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, BackgroundTasks

from app.api.utils import error_response, ok, upstream_detail
from app.core.config import settings
from app.services.hunting import fetch_fim_events
from app.services.notify import select_alert_event, send_fim_alert
from app.services.storage import fetch_history, save_events_safely
from app.services.wazuh import fetch_syscheck_items


_LOGGER = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/fim/{agent_id}")
async def fim_inventory(agent_id: str):
    try:
        items = await fetch_syscheck_items(agent_id)
    except Exception as error:
        _LOGGER.error("wazuh syscheck request failed: %s %s", error, upstream_detail(error))
        return error_response("Failed to fetch FIM data from Wazuh")

    return ok(data=items)


@router.get("/api/events/{agent_id}")
async def fim_events(agent_id: str, background_tasks: BackgroundTasks):
    try:
        rows = await asyncio.to_thread(fetch_fim_events, agent_id)
    except Exception as error:
        _LOGGER.error("fim events search failed: %s %s", error, upstream_detail(error))
        return error_response("Failed to fetch events from the indexer")

    # Persisting must not hold up or fail the response.
    if rows:
        background_tasks.add_task(save_events_safely, rows)

    latest = select_alert_event(rows, settings.alert_min_level)
    if latest is not None:
        await send_fim_alert(latest)

    return ok(data=rows, total_hits=len(rows))


@router.get("/api/db/history")
async def fim_history():
    try:
        rows = await asyncio.to_thread(fetch_history)
    except Exception as error:
        _LOGGER.error("event history query failed: %s", error)
        return error_response("Failed to fetch data from the database")

    return ok(data=rows)
