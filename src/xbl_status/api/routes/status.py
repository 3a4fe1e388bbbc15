"""Xbox LIVE status endpoint."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Query, Request

from xbl_status.config.models import XblStatusConfig
from xbl_status.status.fetcher import StatusFetcher

router = APIRouter(tags=["status"])


def _get_fetcher(request: Request) -> StatusFetcher:
    config: XblStatusConfig = request.app.state.config
    return StatusFetcher(config.fetcher)


@router.get("/status")
async def get_status(
    request: Request,
    timeout_ms: int | None = Query(default=None, gt=0, description="Receive deadline in milliseconds"),
) -> Dict[str, Any]:
    # Always 200: callers branch on "success".
    fetcher = _get_fetcher(request)
    result = await fetcher.fetch_status(timeout_ms=timeout_ms)
    return result.to_dict()
