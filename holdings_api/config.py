# holdings_api/config.py
# Environment-aware configuration for the Holdings Tracker API

import os
from typing import Literal

# Environment detection
ENV: Literal["dev", "staging", "prod"] = os.environ.get("ENV", "dev")  # type: ignore
IS_DEV = (ENV == "dev")
IS_STAGING = (ENV == "staging")
IS_PROD = (ENV == "prod")

# JWT configuration (tokens are issued by the identity provider with this shared secret)
SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-me")
ALGORITHM = os.environ.get("ALGORITHM", "HS256")

# Lifetime of tokens minted by the dev-only token endpoint
ACCESS_TOKEN_MINUTES = int(os.environ.get("ACCESS_TOKEN_MINUTES", "60"))

# Database configuration
# DATABASE_URL takes precedence (any SQLAlchemy URL, e.g. managed Postgres)
# Falls back to a SQLite file for local development
DATABASE_PATH = os.environ.get("DATABASE_PATH", "holdings.db")
DATABASE_URL = os.environ.get("DATABASE_URL", "").strip() or f"sqlite:///{DATABASE_PATH}"

# CORS origins (expand for staging/prod)
CORS_ORIGINS = [
    "http://localhost:8501",  # Streamlit default
    "http://127.0.0.1:8501",
]

if IS_STAGING or IS_PROD:
    extra_origins = os.environ.get("CORS_ORIGINS", "")
    if extra_origins:
        CORS_ORIGINS.extend(o.strip() for o in extra_origins.split(",") if o.strip())

# Database type detection
IS_POSTGRES = DATABASE_URL.startswith(("postgres://", "postgresql://", "postgresql+"))
IS_SQLITE = DATABASE_URL.startswith("sqlite")

print(f"[CONFIG] Environment: {ENV}")
print(f"[CONFIG] Database: {'PostgreSQL' if IS_POSTGRES else 'SQLite (local dev)' if IS_SQLITE else 'custom'}")
print(f"[CONFIG] Dev token lifetime: {ACCESS_TOKEN_MINUTES} minutes")
