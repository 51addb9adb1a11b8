"""
holdings_ui/auth.py
Session-state authentication helpers for the Holdings Tracker dashboard.

Streamlit reruns the whole script on every interaction, so auth state lives
in st.session_state and is initialized at the top of every run:
- init_auth_state(): MUST be called at the top of main()
- set_auth(): stores the bearer token and caller identity after sign-in
- clear_auth(): wipes auth state on sign-out or 401
- get_auth_header(): Authorization header dict for every API call
- require_auth(): guard for pages that need a signed-in user
"""

from typing import Any, Dict, Optional

import streamlit as st

AUTH_KEYS = ("auth_token", "current_user")


def init_auth_state() -> None:
    """Ensure auth keys exist (idempotent, safe on every rerun)."""
    ss = st.session_state
    ss.setdefault("auth_token", None)
    ss.setdefault("current_user", None)


def set_auth(auth_token: str, current_user: Optional[Dict[str, Any]] = None) -> None:
    """
    Store the bearer token after a successful sign-in.

    Args:
        auth_token: JWT issued by the identity provider (or the local dev endpoint)
        current_user: {"userId": ..., "email": ...} as returned by /auth/me
    """
    ss = st.session_state
    ss["auth_token"] = auth_token.strip()
    ss["current_user"] = current_user


def clear_auth() -> None:
    ss = st.session_state
    for key in AUTH_KEYS:
        ss[key] = None


def is_authenticated() -> bool:
    return bool(st.session_state.get("auth_token"))


def get_current_user() -> Optional[Dict[str, Any]]:
    return st.session_state.get("current_user")


def bearer_header(token: Optional[str]) -> Dict[str, str]:
    """{"Authorization": "Bearer <token>"} for a non-empty token, {} otherwise."""
    if token and token.strip():
        return {"Authorization": f"Bearer {token.strip()}"}
    return {}


def get_auth_header() -> Dict[str, str]:
    """Authorization header for the current session (used by ALL protected API calls)."""
    return bearer_header(st.session_state.get("auth_token"))


def require_auth() -> bool:
    """
    Guard for protected pages.

    Usage at top of page render functions:
        if not require_auth():
            return
    """
    if not is_authenticated():
        st.warning("You must be signed in to view this page.")
        if st.button("Go to Sign in", type="primary"):
            st.session_state["nav_page"] = "Sign in"
            st.rerun()
        return False
    return True
