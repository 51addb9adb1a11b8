# holdings_ui/test_frames.py
# Unit tests for the pandas views used by the dashboard

import math

from holdings_ui.forms import LAND_PAGE, RESOURCE_PAGES
from holdings_ui.frames import (
    capital_frame,
    distribution_frame,
    format_money,
    format_pct,
    performance_frame,
    rows_frame,
    stats_tiles,
    trends_frame,
)

ANALYTICS = {
    "totalValue": 180000,
    "resourceDistribution": [
        {"name": "Land", "value": 150000, "count": 2, "percentage": 83.33},
        {"name": "Capital", "value": 30000, "count": 2, "percentage": 16.67},
    ],
    "capitalByType": [{"type": "cash", "amount": 30000}],
    "monthlyTrends": [
        {"month": "2024-05", "lands": 0, "capital": 0, "businesses": 0},
        {"month": "2024-06", "lands": 2, "capital": 30000, "businesses": 1},
    ],
    "businessPerformance": [
        {"name": "Bakery", "revenue": 8000, "value": 15000, "roi": 50.0},
        {"name": "Gift", "revenue": 0, "value": 100, "roi": None},
    ],
    "labourDistribution": [],
    "technologyStatus": [],
    "summary": {"totalResources": 4, "totalEmployees": 0, "totalPayroll": 0, "averageROI": 50.0},
}


def test_format_helpers():
    assert format_money(180000) == "$180,000"
    assert format_money(None) == "n/a"
    assert format_pct(83.333) == "83.3%"
    assert format_pct(math.nan) == "n/a"


def test_distribution_frame():
    df = distribution_frame(ANALYTICS)
    assert list(df.columns) == ["Category", "Value", "Items", "Share %"]
    assert df["Value"].sum() == 180000


def test_capital_frame_indexed_by_type():
    df = capital_frame(ANALYTICS)
    assert df.loc["cash", "Amount"] == 30000


def test_trends_frame_keeps_month_order():
    df = trends_frame(ANALYTICS)
    assert list(df.index) == ["2024-05", "2024-06"]
    assert df.loc["2024-06", "Land added"] == 2


def test_performance_frame_formats_undefined_roi():
    df = performance_frame(ANALYTICS)
    assert list(df["ROI"]) == ["50.0%", "n/a"]


def test_empty_sections_give_empty_frames():
    assert capital_frame({}).empty
    assert performance_frame({"businessPerformance": []}).empty


def test_rows_frame_limits_and_formats_columns():
    rows = [{
        "id": "abc",
        "ownerId": "user-a",
        "name": "North Farm",
        "location": "Iowa",
        "area": 120.0,
        "areaUnit": "acres",
        "value": 100000.0,
        "status": "active",
        "acquisitionDate": "2024-01-15T00:00:00Z",
    }]

    df = rows_frame(LAND_PAGE, rows)

    assert list(df.columns) == ["id", *LAND_PAGE.columns]
    assert "ownerId" not in df.columns
    assert df.loc[0, "acquisitionDate"] == "2024-01-15"


def test_stats_tiles_in_navigation_order():
    stats = {"lands": 2, "labours": 1, "capitals": 0, "technologies": 3, "data": 0, "businesses": 1, "contents": 5}

    tiles = stats_tiles(stats, RESOURCE_PAGES)

    assert [t["label"] for t in tiles][:2] == ["Land", "People & Teams"]
    assert sum(t["count"] for t in tiles) == 12
