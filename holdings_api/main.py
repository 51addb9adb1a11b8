# ---------------------------------------------------------
# holdings_api/main.py
# Holdings Tracker - resource tracking + portfolio analytics backend
#
# Run: uvicorn holdings_api.main:app --reload (from repo root)
#
# - FastAPI + SQLAlchemy (SQLite locally, Postgres via DATABASE_URL)
# - /api/land, /api/labour, /api/capital, /api/technology,
#   /api/information, /api/businesses, /api/content : owner-scoped CRUD
# - /api/stats     : per-resource counts
# - /api/analytics : portfolio aggregation
# ---------------------------------------------------------

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from holdings_api.config import CORS_ORIGINS, IS_PROD
from holdings_api.db import create_database
from holdings_api.migrate import run_migrations
from holdings_api.routes_analytics import router as analytics_router
from holdings_api.routes_auth import router as auth_router
from holdings_api.routes_resources import routers as resource_routers


@asynccontextmanager
async def lifespan(app: FastAPI):
    run_migrations(app.state.database)
    yield
    app.state.database.dispose()


# ---------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------
app = FastAPI(title="Holdings Tracker API", version="0.1", lifespan=lifespan)

# Shared persistence client, handed to handlers through get_database
app.state.database = create_database()

# CORS configuration from config module
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS if IS_PROD else ["*"],  # Restrict origins in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------
# Error handlers
# ---------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Framework-level validation (query params, dev-token body) reports 400 like ours
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        errors.append({"field": ".".join(loc) or "body", "message": error.get("msg", "Invalid value")})
    return JSONResponse(status_code=400, content={"detail": errors})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Never leak internals to the caller
    print(f"[API] Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ---------------------------------------------------------
# Routes
# ---------------------------------------------------------
@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


app.include_router(auth_router)
for resource_router in resource_routers:
    app.include_router(resource_router)
app.include_router(analytics_router)
