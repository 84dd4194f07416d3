from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse

from app.core.time import format_rfc3339, utc_now


def utc_now_rfc3339() -> str:
    return format_rfc3339(utc_now(), timespec="milliseconds")


def ok(**data: object) -> dict[str, object]:
    return {"success": True, **data}


def err(message: str, **extra: Any) -> dict[str, object]:
    return {"success": False, "message": message, **extra}


def error_response(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=err(message))


def upstream_detail(error: BaseException, limit: int = 500) -> str:
    """Best-effort upstream error body for logs (opensearch-py ``info`` / httpx response text)."""
    detail: Any = getattr(error, "info", None)
    response = getattr(error, "response", None)
    if detail is None and response is not None:
        detail = getattr(response, "text", None)
    if detail is None:
        return ""
    return str(detail)[:limit]
