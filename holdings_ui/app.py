# holdings_ui/app.py
# Holdings Tracker - resource ledger + portfolio analytics dashboard
#
# Run from repo root: streamlit run holdings_ui/app.py
# Or from holdings_ui folder: streamlit run app.py

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import requests
import streamlit as st

try:
    from holdings_ui.api_client import api_request, error_messages
    from holdings_ui.auth import (
        clear_auth, get_current_user, init_auth_state, is_authenticated, require_auth, set_auth,
    )
    from holdings_ui.config import BACKEND_URL, ENV, IS_DEV
    from holdings_ui.forms import (
        CHECKBOX, DATE, DATETIME, INTEGER, NUMBER, PAGES_BY_TITLE, RESOURCE_PAGES, SELECT, TEXTAREA,
        FormField, ResourcePage, build_payload, form_values, missing_required, split_datetime,
    )
    from holdings_ui.frames import (
        capital_frame, distribution_frame, format_money, format_pct, labour_frame,
        performance_frame, rows_frame, stats_tiles, technology_frame, trends_frame,
    )
except ModuleNotFoundError:
    from api_client import api_request, error_messages
    from auth import clear_auth, get_current_user, init_auth_state, is_authenticated, require_auth, set_auth
    from config import BACKEND_URL, ENV, IS_DEV
    from forms import (
        CHECKBOX, DATE, DATETIME, INTEGER, NUMBER, PAGES_BY_TITLE, RESOURCE_PAGES, SELECT, TEXTAREA,
        FormField, ResourcePage, build_payload, form_values, missing_required, split_datetime,
    )
    from frames import (
        capital_frame, distribution_frame, format_money, format_pct, labour_frame,
        performance_frame, rows_frame, stats_tiles, technology_frame, trends_frame,
    )

st.set_page_config(page_title="Holdings Tracker", layout="wide")

ss = st.session_state

SIGN_IN = "Sign in"
DASHBOARD = "Dashboard"
ANALYTICS = "Analytics"
NAV_PAGES = [DASHBOARD, *[page.title for page in RESOURCE_PAGES], ANALYTICS]


def init_state() -> None:
    ss.setdefault("nav_page", None)
    # Row id being edited, per resource path
    ss.setdefault("editing", {})


def go_to(page: str) -> None:
    ss["nav_page"] = page
    st.rerun()


def handle_api_error(resp: requests.Response, operation: str = "operation") -> None:
    """Show the API's error detail (validation errors one per line)."""
    try:
        lines = error_messages(resp.json())
    except ValueError:
        lines = [resp.text[:200] or "No response body"]

    if resp.status_code == 400:
        st.error(f"Please fix the following ({operation}):\n\n" + "\n".join(f"- {line}" for line in lines))
    elif resp.status_code == 404:
        st.error("That item no longer exists. Refresh the list.")
    else:
        st.error(f"Backend error {resp.status_code} on {operation}: {'; '.join(lines)}")


def fetch_json(path: str, operation: str) -> Optional[Any]:
    resp = api_request("GET", path)
    if resp is None:
        return None
    if resp.status_code != 200:
        handle_api_error(resp, operation)
        return None
    return resp.json()


# --------------------------------------------------------------------
# Sign in
# --------------------------------------------------------------------
def complete_sign_in(token: str) -> bool:
    """Store the token and confirm it against /auth/me."""
    set_auth(token)
    resp = api_request("GET", "/auth/me")
    if resp is None:
        return False
    if resp.status_code != 200:
        handle_api_error(resp, "sign in")
        clear_auth()
        return False
    set_auth(token, resp.json())
    return True


def render_sign_in() -> None:
    st.header("Sign in")
    st.caption("Paste the access token issued by your identity provider.")

    with st.form("token_form"):
        token = st.text_input("Access token", type="password")
        submitted = st.form_submit_button("Sign in", type="primary")
    if submitted:
        if not token.strip():
            st.error("Token is required.")
        elif complete_sign_in(token):
            go_to(DASHBOARD)

    if IS_DEV:
        st.divider()
        st.subheader("Local development")
        with st.form("dev_token_form"):
            user_id = st.text_input("User id", value="local-user")
            email = st.text_input("Email (optional)")
            dev_submitted = st.form_submit_button("Get dev token")
        if dev_submitted:
            body: Dict[str, Any] = {"userId": user_id.strip()}
            if email.strip():
                body["email"] = email.strip()
            resp = api_request("POST", "/auth/dev-token", json=body)
            if resp is not None:
                if resp.status_code == 200 and complete_sign_in(resp.json()["access_token"]):
                    go_to(DASHBOARD)
                elif resp.status_code != 200:
                    handle_api_error(resp, "dev token")


# --------------------------------------------------------------------
# Sidebar
# --------------------------------------------------------------------
def render_sidebar() -> None:
    with st.sidebar:
        st.title("Holdings Tracker")

        if not is_authenticated():
            st.info("Not signed in")
            return

        user = get_current_user() or {}
        st.caption(f"Signed in as {user.get('email') or user.get('userId', 'unknown')}")

        current = ss.get("nav_page") if ss.get("nav_page") in NAV_PAGES else DASHBOARD
        choice = st.radio("Go to", NAV_PAGES, index=NAV_PAGES.index(current), key="_nav_radio")
        if ss.get("nav_page") != choice:
            ss["nav_page"] = choice

        if st.button("Sign out"):
            clear_auth()
            ss["editing"] = {}
            go_to(SIGN_IN)

        if IS_DEV:
            st.caption(f"ENV={ENV} | API={BACKEND_URL}")


# --------------------------------------------------------------------
# Dashboard
# --------------------------------------------------------------------
def render_dashboard() -> None:
    if not require_auth():
        return

    st.header("Dashboard")
    stats = fetch_json("/api/stats", "stats")
    if stats is None:
        return

    tiles = stats_tiles(stats, RESOURCE_PAGES)
    for start in range(0, len(tiles), 4):
        cols = st.columns(4)
        for col, tile in zip(cols, tiles[start:start + 4]):
            col.metric(tile["label"], tile["count"])

    if sum(tile["count"] for tile in tiles) == 0:
        st.info("No holdings yet. Pick a category in the sidebar to add your first item.")


# --------------------------------------------------------------------
# Resource pages
# --------------------------------------------------------------------
def render_field(form_field: FormField, initial: Any, form_key: str) -> Any:
    key = f"{form_key}_{form_field.name}"
    label = f"{form_field.label} *" if form_field.required else form_field.label

    if form_field.kind == NUMBER:
        value = float(initial) if initial is not None else None
        return st.number_input(label, value=value, step=1.0, format="%.2f", key=key, help=form_field.help)
    if form_field.kind == INTEGER:
        value = int(initial) if initial is not None else None
        return st.number_input(label, value=value, step=1, key=key, help=form_field.help)
    if form_field.kind == SELECT:
        options = list(form_field.options)
        index = options.index(initial) if initial in options else 0
        return st.selectbox(label, options, index=index, key=key, help=form_field.help)
    if form_field.kind == CHECKBOX:
        return st.checkbox(label, value=bool(initial), key=key, help=form_field.help)
    if form_field.kind == DATE:
        return st.date_input(label, value=initial, key=key, help=form_field.help)
    if form_field.kind == DATETIME:
        day, clock = split_datetime(initial)
        picked_day = st.date_input(f"{label} (UTC date)", value=day, key=f"{key}_date")
        picked_time = st.time_input(f"{form_field.label} (UTC time)", value=clock, key=f"{key}_time")
        return datetime.combine(picked_day, picked_time)
    if form_field.kind == TEXTAREA:
        return st.text_area(label, value=initial or "", key=key, help=form_field.help)
    return st.text_input(label, value=initial or "", key=key, help=form_field.help)


def render_resource_form(page: ResourcePage, row: Optional[Dict[str, Any]] = None) -> None:
    """Add form, or edit form when a stored row is given."""
    editing = row is not None
    form_key = f"{page.path}_{'edit_' + row['id'] if editing else 'add'}"
    initial = form_values(page.fields, row)

    with st.form(form_key, clear_on_submit=not editing):
        submitted_values: Dict[str, Any] = {}
        cols = st.columns(2)
        for index, form_field in enumerate(page.fields):
            with cols[index % 2]:
                submitted_values[form_field.name] = render_field(form_field, initial[form_field.name], form_key)
        submitted = st.form_submit_button("Save changes" if editing else f"Add {page.title}", type="primary")

    if not submitted:
        return

    payload = build_payload(page.fields, submitted_values)
    missing = missing_required(page.fields, payload)
    if missing:
        st.error("Required: " + ", ".join(missing))
        return

    if editing:
        resp = api_request("PUT", page.path, json=payload, params={"id": row["id"]})
    else:
        resp = api_request("POST", page.path, json=payload)
    if resp is None:
        return

    if resp.status_code in (200, 201):
        ss["editing"].pop(page.path, None)
        st.success("Saved.")
        st.rerun()
    else:
        handle_api_error(resp, "save")


def delete_row(page: ResourcePage, row_id: str) -> None:
    resp = api_request("DELETE", page.path, params={"id": row_id})
    if resp is None:
        return
    if resp.status_code == 200:
        if ss["editing"].get(page.path) == row_id:
            ss["editing"].pop(page.path, None)
        st.rerun()
    else:
        handle_api_error(resp, "delete")


def render_resource_page(page: ResourcePage) -> None:
    if not require_auth():
        return

    st.header(page.title)
    rows: Optional[List[Dict[str, Any]]] = fetch_json(page.path, f"load {page.title}")
    if rows is None:
        return

    with st.expander(f"Add {page.title}", expanded=not rows):
        render_resource_form(page)

    if not rows:
        st.info(f"No {page.title.lower()} recorded yet.")
        return

    st.dataframe(rows_frame(page, rows).drop(columns=["id"]), width="stretch", hide_index=True)

    labels = {row["id"]: f"{row.get(page.item_label) or row['id']}" for row in rows}
    selected = st.selectbox("Select an item", list(labels), format_func=labels.get, key=f"{page.path}_selected")

    col_edit, col_delete = st.columns(2)
    with col_edit:
        if st.button("Edit", key=f"{page.path}_edit_btn"):
            ss["editing"][page.path] = selected
    with col_delete:
        if st.button("Delete", key=f"{page.path}_delete_btn"):
            delete_row(page, selected)

    editing_id = ss["editing"].get(page.path)
    editing_row = next((row for row in rows if row["id"] == editing_id), None)
    if editing_row is not None:
        st.subheader(f"Edit: {labels[editing_id]}")
        render_resource_form(page, editing_row)
        if st.button("Cancel edit", key=f"{page.path}_cancel"):
            ss["editing"].pop(page.path, None)
            st.rerun()


# --------------------------------------------------------------------
# Analytics
# --------------------------------------------------------------------
def render_analytics() -> None:
    if not require_auth():
        return

    st.header("Portfolio analytics")
    analytics = fetch_json("/api/analytics", "analytics")
    if analytics is None:
        return

    summary = analytics.get("summary", {})
    k1, k2, k3, k4, k5 = st.columns(5)
    k1.metric("Total value", format_money(analytics.get("totalValue")))
    k2.metric("Items tracked", summary.get("totalResources", 0))
    k3.metric("People", summary.get("totalEmployees", 0))
    k4.metric("Payroll", format_money(summary.get("totalPayroll")))
    k5.metric("Average ROI", format_pct(summary.get("averageROI")))

    left, right = st.columns(2)
    with left:
        st.subheader("Value by category")
        distribution = distribution_frame(analytics)
        if distribution.empty:
            st.caption("No valued holdings yet.")
        else:
            st.dataframe(distribution, width="stretch", hide_index=True)
    with right:
        st.subheader("Capital by type")
        capital = capital_frame(analytics)
        if capital.empty:
            st.caption("No capital recorded.")
        else:
            st.bar_chart(capital)

    st.subheader("Last 6 months")
    trends = trends_frame(analytics)
    st.line_chart(trends[["Land added", "Businesses added"]])
    st.bar_chart(trends[["Capital added"]])

    st.subheader("Business performance")
    performance = performance_frame(analytics)
    if performance.empty:
        st.caption("No businesses recorded.")
    else:
        st.dataframe(performance, width="stretch", hide_index=True)

    left, right = st.columns(2)
    with left:
        st.subheader("People by department")
        labour = labour_frame(analytics)
        if labour.empty:
            st.caption("No people recorded.")
        else:
            st.dataframe(labour, width="stretch", hide_index=True)
    with right:
        st.subheader("Technology status")
        technology = technology_frame(analytics)
        if technology.empty:
            st.caption("No technology recorded.")
        else:
            st.bar_chart(technology)


def main() -> None:
    # Auth keys must exist before any widget reads them
    init_auth_state()
    init_state()

    if not ss.get("nav_page") or (not is_authenticated() and ss["nav_page"] != SIGN_IN):
        ss["nav_page"] = DASHBOARD if is_authenticated() else SIGN_IN

    if IS_DEV:
        print(f"[ROUTING] page={ss['nav_page']} | token_present={is_authenticated()}")

    render_sidebar()

    nav_page = ss.get("nav_page", SIGN_IN)
    if nav_page == SIGN_IN:
        render_sign_in()
    elif nav_page == DASHBOARD:
        render_dashboard()
    elif nav_page == ANALYTICS:
        render_analytics()
    elif nav_page in PAGES_BY_TITLE:
        render_resource_page(PAGES_BY_TITLE[nav_page])
    else:
        ss["nav_page"] = SIGN_IN
        render_sign_in()


if __name__ == "__main__":
    main()
