from __future__ import annotations

from fastapi import APIRouter

from app.api.utils import ok, utc_now_rfc3339
from app.core.config import settings


router = APIRouter()


@router.get("/")
def root():
    return ok(name=settings.app_name, version=settings.app_version)


@router.get("/health")
def health():
    return ok(status="ok", server_time=utc_now_rfc3339())
