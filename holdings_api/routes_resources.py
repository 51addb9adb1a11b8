"""
holdings_api/routes_resources.py

Generic CRUD endpoints, instantiated once per tracked resource.

    GET    /api/<resource>          list the caller's rows (newest first)
    POST   /api/<resource>          create (201)
    PUT    /api/<resource>?id=...   full replace of the validated fields
    DELETE /api/<resource>?id=...   delete

Security guarantees:
- All endpoints require authentication (require_auth_context runs first)
- All queries filtered by the caller's user id from the auth context
- No client-provided ownerId/userId is ever used
- Update/delete of a row owned by someone else answers 404, same as a missing row

Error policy: 401 unauthenticated, 400 validation / missing id / malformed JSON,
404 not found or not owned, 500 database error (details printed server-side only).
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.exc import SQLAlchemyError

from holdings_api.auth_context import AuthContext, require_auth_context
from holdings_api.config import IS_DEV
from holdings_api.db import Database, get_database
from holdings_api.resources import ALL_RESOURCES, ResourceDefinition
from holdings_api.schemas_resources import ValidationResult, validate_payload


async def json_body(request: Request) -> Any:
    """
    Raw JSON request body (None when empty).

    Declared after the auth dependency in every handler so an unauthenticated
    request is rejected before its body is looked at.
    """
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        raise HTTPException(status_code=400, detail=[{"field": "body", "message": "Malformed JSON"}])


def _validated(resource: ResourceDefinition, raw: Any) -> Dict[str, Any]:
    result: ValidationResult = validate_payload(resource.schema, raw)
    if not result.ok:
        if IS_DEV:
            print(f"[RESOURCES] Validation failed on {resource.key}: {[e.field for e in result.errors]}")
        raise HTTPException(status_code=400, detail=[e.to_dict() for e in result.errors])
    return resource.coerce_dates(result.record)


def _require_id(row_id: Optional[str]) -> str:
    if not row_id or not row_id.strip():
        raise HTTPException(status_code=400, detail="ID required")
    return row_id.strip()


def _database_error(resource: ResourceDefinition, action: str, exc: Exception) -> NoReturn:
    # Log error but don't expose internal details
    print(f"[RESOURCES] DB error on {resource.key}.{action}: {exc}")
    raise HTTPException(status_code=500, detail="Database error")


def build_resource_router(resource: ResourceDefinition) -> APIRouter:
    """Create the list/create/update/delete endpoints for one resource."""
    router = APIRouter(prefix=resource.path, tags=[resource.key])
    repo = resource.repository

    @router.get("", name=f"list_{resource.key}")
    def list_rows(
        ctx: AuthContext = Depends(require_auth_context),
        database: Database = Depends(get_database),
    ) -> List[Dict[str, Any]]:
        try:
            with database.connect() as conn:
                rows = repo.list_for_owner(conn, ctx.user_id)
        except SQLAlchemyError as e:
            _database_error(resource, "list", e)

        if IS_DEV:
            print(f"[RESOURCES] List {resource.key}: user_id={ctx.user_id}, results={len(rows)}")

        return [resource.serialize(row) for row in rows]

    @router.post("", status_code=201, name=f"create_{resource.key}")
    def create_row(
        ctx: AuthContext = Depends(require_auth_context),
        raw: Any = Depends(json_body),
        database: Database = Depends(get_database),
    ) -> Dict[str, Any]:
        values = _validated(resource, raw)

        try:
            with database.transaction() as conn:
                row = repo.insert(conn, ctx.user_id, values)
        except SQLAlchemyError as e:
            _database_error(resource, "create", e)

        if IS_DEV:
            print(f"[RESOURCES] Created {resource.key} id={row['id']}, user_id={ctx.user_id}")

        return resource.serialize(row)

    @router.put("", name=f"update_{resource.key}")
    def update_row(
        ctx: AuthContext = Depends(require_auth_context),
        raw: Any = Depends(json_body),
        row_id: Optional[str] = Query(None, alias="id", description="Row ID to update"),
        database: Database = Depends(get_database),
    ) -> Dict[str, Any]:
        row_id = _require_id(row_id)
        values = _validated(resource, raw)

        try:
            with database.transaction() as conn:
                existing = repo.find_owned(conn, row_id, ctx.user_id)
                if existing is None:
                    # 404 whether the row doesn't exist or belongs to another user (no info leak)
                    raise HTTPException(status_code=404, detail="Not found")
                row = repo.update(conn, row_id, ctx.user_id, values)
        except SQLAlchemyError as e:
            _database_error(resource, "update", e)

        if IS_DEV:
            print(f"[RESOURCES] Updated {resource.key} id={row_id}, user_id={ctx.user_id}")

        return resource.serialize(row)

    @router.delete("", name=f"delete_{resource.key}")
    def delete_row(
        ctx: AuthContext = Depends(require_auth_context),
        row_id: Optional[str] = Query(None, alias="id", description="Row ID to delete"),
        database: Database = Depends(get_database),
    ) -> Dict[str, Any]:
        row_id = _require_id(row_id)

        try:
            with database.transaction() as conn:
                existing = repo.find_owned(conn, row_id, ctx.user_id)
                if existing is None:
                    raise HTTPException(status_code=404, detail="Not found")
                repo.delete(conn, row_id, ctx.user_id)
        except SQLAlchemyError as e:
            _database_error(resource, "delete", e)

        if IS_DEV:
            print(f"[RESOURCES] Deleted {resource.key} id={row_id}, user_id={ctx.user_id}")

        return {"success": True}

    return router


routers: List[APIRouter] = [build_resource_router(resource) for resource in ALL_RESOURCES]
