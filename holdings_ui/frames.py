"""
holdings_ui/frames.py
pandas views over API responses, shared by the resource tables and the
analytics page. Pure functions: dict/list in, DataFrame or text out.
"""

import math
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

try:
    from holdings_ui.forms import ResourcePage
except ModuleNotFoundError:
    from forms import ResourcePage


def format_money(value: Optional[float]) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "n/a"
    return f"${value:,.0f}"


def format_pct(value: Optional[float]) -> str:
    """Percent values arrive as 0-100 (not fractions)."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "n/a"
    return f"{value:.1f}%"


def rows_frame(page: ResourcePage, rows: Sequence[Dict[str, Any]]) -> pd.DataFrame:
    """Table of a resource's rows limited to the page's display columns."""
    columns = ["id", *page.columns]
    df = pd.DataFrame(list(rows))
    for col in columns:
        if col not in df.columns:
            df[col] = pd.NA
    df = df[columns]
    for col in columns:
        if col.endswith("Date"):
            df[col] = pd.to_datetime(df[col], errors="coerce", utc=True).dt.strftime("%Y-%m-%d")
    return df


def distribution_frame(analytics: Dict[str, Any]) -> pd.DataFrame:
    entries = analytics.get("resourceDistribution") or []
    df = pd.DataFrame(entries, columns=["name", "value", "count", "percentage"])
    return df.rename(columns={"name": "Category", "value": "Value", "count": "Items", "percentage": "Share %"})


def capital_frame(analytics: Dict[str, Any]) -> pd.DataFrame:
    """Capital amount per type, indexed by type for st.bar_chart."""
    entries = analytics.get("capitalByType") or []
    df = pd.DataFrame(entries, columns=["type", "amount"])
    return df.rename(columns={"type": "Type", "amount": "Amount"}).set_index("Type")


def trends_frame(analytics: Dict[str, Any]) -> pd.DataFrame:
    """Six-month trend table indexed by YYYY-MM (oldest first)."""
    entries = analytics.get("monthlyTrends") or []
    df = pd.DataFrame(entries, columns=["month", "lands", "capital", "businesses"])
    df = df.rename(columns={
        "month": "Month",
        "lands": "Land added",
        "capital": "Capital added",
        "businesses": "Businesses added",
    })
    return df.set_index("Month")


def performance_frame(analytics: Dict[str, Any]) -> pd.DataFrame:
    entries = analytics.get("businessPerformance") or []
    df = pd.DataFrame(entries, columns=["name", "revenue", "value", "roi"])
    df["roi"] = df["roi"].map(format_pct)
    return df.rename(columns={"name": "Business", "revenue": "Revenue", "value": "Value", "roi": "ROI"})


def labour_frame(analytics: Dict[str, Any]) -> pd.DataFrame:
    entries = analytics.get("labourDistribution") or []
    df = pd.DataFrame(entries, columns=["department", "count", "totalSalary"])
    return df.rename(columns={"department": "Department", "count": "People", "totalSalary": "Payroll"})


def technology_frame(analytics: Dict[str, Any]) -> pd.DataFrame:
    entries = analytics.get("technologyStatus") or []
    df = pd.DataFrame(entries, columns=["status", "count"])
    return df.rename(columns={"status": "Status", "count": "Items"}).set_index("Status")


def stats_tiles(stats: Dict[str, Any], pages: Sequence[ResourcePage]) -> List[Dict[str, Any]]:
    """[{"label": page title, "count": n}, ...] in navigation order."""
    return [{"label": page.title, "count": int(stats.get(page.stats_key, 0) or 0)} for page in pages]
