from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Request

from app.api.utils import error_response, ok, upstream_detail
from app.schemas.common import ErrorResponse, HuntingPage
from app.services.hunting import FilterSet, search_hunting_events


_LOGGER = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/api/hunting",
    responses={200: {"model": HuntingPage}, 500: {"model": ErrorResponse}},
)
async def hunting_search(request: Request):
    # Parameters stay untyped here; bad values degrade inside the query builder.
    filters = FilterSet.from_params(request.query_params)

    try:
        result = await asyncio.to_thread(search_hunting_events, filters)
    except Exception as error:
        _LOGGER.error("hunting search failed: %s %s", error, upstream_detail(error))
        return error_response("Failed to fetch hunting data from the indexer")

    return ok(**result)
