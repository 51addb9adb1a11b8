"""
holdings_api/tenant.py

Owner-scoping guardrails (defense in depth).

Every resource query already filters on owner_id; these helpers double-check
the inputs and outputs of those queries so a missing filter can never leak
another user's rows.

- In DEV: print warnings for unsafe access
- In STAGING/PROD: fail fast with HTTP 500
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from fastapi import HTTPException

from holdings_api import config


def require_owner_id(owner_id: Optional[str]) -> str:
    """
    Guardrail: an owner id is mandatory for every owner-scoped operation.

    Raises:
        HTTPException(500): If owner_id is missing (this is a server bug, never a client error)
    """
    if not owner_id or not str(owner_id).strip():
        print(f"[TENANT] Missing or invalid owner_id: {owner_id!r}")
        raise HTTPException(status_code=500, detail="Owner scope missing - this is a server error")
    return str(owner_id)


def _row_owner(row: Mapping[str, Any]) -> Any:
    try:
        return row["owner_id"]
    except KeyError:
        return None


def assert_rows_scoped(rows: Sequence[Mapping[str, Any]], owner_id: str, label: str = "") -> None:
    """
    Guardrail: every returned row must belong to owner_id.

    Raises:
        HTTPException(500): On mismatch outside DEV
    """
    mismatches = [
        {"index": i, "found": _row_owner(row)}
        for i, row in enumerate(rows)
        if _row_owner(row) != owner_id
    ]
    if not mismatches:
        return

    error_msg = f"[TENANT] Owner isolation violation{f' in {label}' if label else ''}"
    detail_msg = f"Found {len(mismatches)} row(s) with mismatched owner_id"

    if config.IS_DEV:
        print(f"{error_msg}: {detail_msg}")
        print(f"[TENANT][DEV] Expected owner_id={owner_id}, found mismatches: {mismatches[:3]}")
    else:
        print(f"{error_msg}: {detail_msg} (PRODUCTION - failing fast)")
        raise HTTPException(
            status_code=500,
            detail="Owner isolation violation detected - this is a server error",
        )


def assert_row_scoped(row: Optional[Mapping[str, Any]], owner_id: str, label: str = "") -> None:
    """Single-row variant of assert_rows_scoped (None is fine, e.g. the 404 case)."""
    if row is None:
        return
    assert_rows_scoped([row], owner_id, label=label)
