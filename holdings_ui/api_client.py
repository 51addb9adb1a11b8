"""
holdings_ui/api_client.py
Centralized API client for all backend requests.

This module ensures:
1. Protected calls always carry the Authorization header
2. A 401 clears the session and sends the user back to Sign in
3. Connection errors and timeouts surface as user-facing messages, never tracebacks
4. No duplicate request logic scattered across pages
"""

from typing import Any, Dict, List, Literal, Optional, Union

import requests
import streamlit as st

try:
    from holdings_ui.auth import clear_auth, get_auth_header
    from holdings_ui.config import IS_DEV, REQUEST_TIMEOUT_SECONDS, get_api_base_url
except ModuleNotFoundError:
    from auth import clear_auth, get_auth_header
    from config import IS_DEV, REQUEST_TIMEOUT_SECONDS, get_api_base_url

__all__ = ["api_request", "error_messages", "is_public_endpoint"]

PUBLIC_PATHS = ("/health", "/auth/dev-token")


def is_public_endpoint(path: str) -> bool:
    """Public endpoints are called without a bearer token."""
    return path in PUBLIC_PATHS


def error_messages(payload: Any) -> List[str]:
    """
    Flatten an API error body into display lines.

    Handles {"detail": "text"} as well as the validation shape
    {"detail": [{"field": ..., "message": ...}, ...]}.
    """
    if not isinstance(payload, dict):
        return ["Unexpected response from server"]

    detail = payload.get("detail")
    if isinstance(detail, str):
        return [detail]
    if isinstance(detail, list):
        lines = []
        for item in detail:
            if isinstance(item, dict):
                field = item.get("field") or "body"
                lines.append(f"{field}: {item.get('message', 'invalid value')}")
            else:
                lines.append(str(item))
        return lines or ["Request rejected"]
    return ["Request failed"]


def api_request(
    method: Literal["GET", "POST", "PUT", "DELETE"],
    path: str,
    json: Optional[Union[Dict[str, Any], List[Any]]] = None,
    params: Optional[Dict[str, Any]] = None,
    timeout: int = REQUEST_TIMEOUT_SECONDS,
) -> Optional[requests.Response]:
    """
    Make an API request with automatic auth header attachment and error handling.

    This is the ONLY function that should make backend API calls.

    Returns:
        Response object for any HTTP status other than 401, None on
        configuration/connection errors or after a 401 (session cleared)

    Security:
        Never logs or prints tokens/auth headers.
    """
    try:
        base_url = get_api_base_url()
    except (RuntimeError, ValueError) as e:
        st.error(f"Configuration error: {e}")
        return None

    url = f"{base_url}{path}"
    headers = {"Accept": "application/json"}
    if not is_public_endpoint(path):
        headers.update(get_auth_header())

    try:
        resp = requests.request(method, url, json=json, params=params, headers=headers, timeout=timeout)
    except requests.exceptions.Timeout:
        if IS_DEV:
            print(f"[API] Timeout on {method} {path}")
        st.error(f"Request timed out after {timeout}s. Please try again.")
        return None
    except requests.exceptions.ConnectionError:
        if IS_DEV:
            print(f"[API] Connection error on {method} {path}")
        st.error(f"Cannot connect to backend at {base_url}. Is the API running?")
        return None
    except requests.exceptions.RequestException as e:
        print(f"[API] Request error on {method} {path}: {type(e).__name__}")
        st.error("Unexpected error talking to the backend.")
        return None

    if resp.status_code == 401 and not is_public_endpoint(path):
        if IS_DEV:
            print(f"[API] 401 on {path}, clearing session")
        clear_auth()
        st.warning("Your session has expired or the token is invalid. Please sign in again.")
        return None

    if IS_DEV:
        print(f"[API] {method} {path} -> {resp.status_code}")

    return resp
