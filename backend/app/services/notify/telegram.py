from __future__ import annotations

import asyncio
import html
import logging
from typing import Any, Mapping

import httpx

from app.core.config import settings


_LOGGER = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"

_RETRY_STATUS = {429, 500, 502, 503, 504}


def _esc(value: Any) -> str:
    if value is None or value == "":
        return ""
    return html.escape(str(value), quote=True)


def format_fim_alert(event: Mapping[str, Any]) -> str:
    lines = [
        "\U0001f6a8 <b>WAZUH ALERT</b> \U0001f6a8",
        "-------------------------",
        f"<b>Agent:</b> {_esc(event.get('agentName'))}",
        f"<b>User:</b> {_esc(event.get('username'))}",
        f"<b>Path:</b> <code>{_esc(event.get('syscheckPath'))}</code>",
        f"<b>Event:</b> {_esc(event.get('syscheckEvent'))}",
        f"<b>Description:</b> {_esc(event.get('ruleDescription'))}",
        f"<b>Payload:</b> <pre>{_esc(event.get('fileDiff'))}</pre>",
        f"<b>Rule ID:</b> {_esc(event.get('ruleId'))}",
        f"<b>Level:</b> {_esc(event.get('ruleLevel'))}",
    ]
    return "\n".join(lines)


def is_enabled() -> bool:
    return bool(settings.telegram_bot_token and settings.telegram_chat_id)


async def send_message(
    text: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    max_retries: int | None = None,
    backoff: float | None = None,
) -> bool:
    """
    Send an HTML message to the configured chat.

    Transport errors, 429 and 5xx responses are retried with linear backoff.
    Returns False on final failure; never raises.
    """
    if not is_enabled():
        _LOGGER.debug("telegram notifications disabled, message dropped")
        return False

    retries = settings.notify_max_retries if max_retries is None else max_retries
    delay = settings.notify_retry_backoff if backoff is None else backoff
    url = f"{TELEGRAM_API_URL}/bot{settings.telegram_bot_token}/sendMessage"
    payload = {"chat_id": settings.telegram_chat_id, "text": text, "parse_mode": "HTML"}

    attempts = 1 + max(0, retries)
    async with httpx.AsyncClient(timeout=settings.notify_timeout, transport=transport) as http:
        for attempt in range(1, attempts + 1):
            try:
                resp = await http.post(url, json=payload)
            except httpx.TransportError as exc:
                _LOGGER.warning("telegram send attempt %s/%s failed: %s", attempt, attempts, exc)
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                # Decoding / redirect / URL errors do not get better on retry.
                _LOGGER.error("telegram send failed: %s", exc)
                return False
            else:
                if resp.is_success:
                    return True
                if resp.status_code not in _RETRY_STATUS:
                    _LOGGER.error(
                        "telegram rejected message status=%s body=%s",
                        resp.status_code,
                        resp.text[:500],
                    )
                    return False
                _LOGGER.warning(
                    "telegram send attempt %s/%s got status=%s",
                    attempt,
                    attempts,
                    resp.status_code,
                )

            if attempt < attempts and delay > 0:
                await asyncio.sleep(delay * attempt)

    _LOGGER.error("telegram send gave up after %s attempts", attempts)
    return False


async def send_fim_alert(event: Mapping[str, Any], **kwargs: Any) -> bool:
    return await send_message(format_fim_alert(event), **kwargs)


def select_alert_event(rows: list[dict[str, Any]], min_level: int) -> dict[str, Any] | None:
    """Pick the newest row whose rule level reaches ``min_level`` (rows are newest first)."""
    for row in rows:
        try:
            level = float(row.get("ruleLevel"))
        except (TypeError, ValueError):
            continue
        if level >= min_level:
            return row
    return None
