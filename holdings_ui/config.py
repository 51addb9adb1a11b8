# holdings_ui/config.py
# Environment-aware configuration for the Holdings Tracker dashboard

import os
from typing import Literal
from urllib.parse import urlparse

# Environment detection - normalize to lowercase
_raw_env = os.environ.get("ENV", "local").lower()
ENV: Literal["local", "staging", "production"] = _raw_env if _raw_env in ("local", "staging", "production") else "production"  # type: ignore

IS_LOCAL = (ENV == "local")
IS_STAGING = (ENV == "staging")
IS_PROD = (ENV == "production")

# Dev token minting and debug output only make sense against a local backend
IS_DEV = IS_LOCAL

LOCAL_API_URL = "http://127.0.0.1:8000"
LOOPBACK_HOSTS = ("localhost", "127.0.0.1", "0.0.0.0")


def validate_api_url(url: str, env: str) -> None:
    """
    Reject backend URLs that are unsafe for the environment.

    Outside local the dashboard must talk HTTPS to a non-loopback host.

    Raises:
        ValueError: On an empty or unsafe URL
    """
    if not url:
        raise ValueError("API base URL cannot be empty")
    if env == "local":
        return

    parsed = urlparse(url)
    if parsed.scheme != "https":
        raise ValueError(f"{env} requires an https:// backend URL. Got: {url}")
    if parsed.hostname in LOOPBACK_HOSTS:
        raise ValueError(f"{env} cannot use a localhost backend URL. Got: {url}")


def get_api_base_url(env: str = ENV) -> str:
    """
    Get API base URL with strict priority and validation.

    Priority:
    1. BACKEND_URL environment variable
    2. API_BASE_URL environment variable
    3. Local default (http://127.0.0.1:8000) ONLY when env == "local"

    Raises:
        RuntimeError: If staging/production has no configured URL
    """
    for var in ("BACKEND_URL", "API_BASE_URL"):
        configured = os.environ.get(var, "").strip()
        if configured:
            url = configured.rstrip("/")
            validate_api_url(url, env)
            return url

    if env == "local":
        return LOCAL_API_URL

    raise RuntimeError(
        f"Backend URL not configured for {env.upper()} environment. "
        f"Set BACKEND_URL to the Holdings Tracker API (HTTPS only outside local)."
    )


try:
    BACKEND_URL = get_api_base_url()
except (RuntimeError, ValueError) as e:
    # API calls will surface the configuration error to the user
    print(f"[CONFIG] CRITICAL: {e}")
    BACKEND_URL = ""

REQUEST_TIMEOUT_SECONDS = int(os.environ.get("REQUEST_TIMEOUT_SECONDS", "20"))

print(f"[CONFIG] Environment: {ENV}")
print(f"[CONFIG] Backend URL: {BACKEND_URL or 'NOT CONFIGURED'}")
