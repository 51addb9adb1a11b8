"""
holdings_api/routes_analytics.py

Read-only reporting endpoints:
- GET /api/stats      per-resource row counts
- GET /api/analytics  full portfolio aggregation (see analytics.py)

Every collection is queried concurrently (one worker thread and one
connection per query) and awaited jointly; if any query fails the whole
request fails with 500.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from holdings_api.analytics import compute_analytics
from holdings_api.auth_context import AuthContext, require_auth_context
from holdings_api.config import IS_DEV
from holdings_api.db import Database, get_database
from holdings_api.resources import ALL_RESOURCES, ResourceDefinition
from holdings_api.schemas_analytics import AnalyticsResponse, StatsResponse

router = APIRouter(prefix="/api", tags=["analytics"])


def _fetch_rows(database: Database, resource: ResourceDefinition, owner_id: str) -> List[Dict[str, Any]]:
    with database.connect() as conn:
        return resource.repository.list_for_owner(conn, owner_id)


def _count_rows(database: Database, resource: ResourceDefinition, owner_id: str) -> int:
    with database.connect() as conn:
        return resource.repository.count_for_owner(conn, owner_id)


async def fetch_collections(database: Database, owner_id: str) -> Dict[str, List[Dict[str, Any]]]:
    """All of the owner's rows for every resource, keyed by resource key."""
    results = await asyncio.gather(*(
        asyncio.to_thread(_fetch_rows, database, resource, owner_id)
        for resource in ALL_RESOURCES
    ))
    return {resource.key: rows for resource, rows in zip(ALL_RESOURCES, results)}


async def count_collections(database: Database, owner_id: str) -> Dict[str, int]:
    results = await asyncio.gather(*(
        asyncio.to_thread(_count_rows, database, resource, owner_id)
        for resource in ALL_RESOURCES
    ))
    return {resource.key: count for resource, count in zip(ALL_RESOURCES, results)}


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    ctx: AuthContext = Depends(require_auth_context),
    database: Database = Depends(get_database),
) -> StatsResponse:
    try:
        counts = await count_collections(database, ctx.user_id)
    except SQLAlchemyError as e:
        print(f"[ANALYTICS] Stats fetch error: {e}")
        raise HTTPException(status_code=500, detail="Database error")

    if IS_DEV:
        print(f"[ANALYTICS] Stats: user_id={ctx.user_id}, counts={counts}")

    return StatsResponse(**counts)


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    ctx: AuthContext = Depends(require_auth_context),
    database: Database = Depends(get_database),
) -> AnalyticsResponse:
    try:
        collections = await fetch_collections(database, ctx.user_id)
    except SQLAlchemyError as e:
        print(f"[ANALYTICS] Analytics fetch error: {e}")
        raise HTTPException(status_code=500, detail="Database error")

    result = compute_analytics(collections)

    if IS_DEV:
        print(f"[ANALYTICS] Analytics: user_id={ctx.user_id}, "
              f"rows={result.summary.total_resources}, total_value={result.total_value}")

    return result
