"""
holdings_api/analytics.py

Portfolio analytics over one user's collections.

Pure read-then-compute: takes the already-fetched rows (snake_case dicts as
stored) and returns the composed AnalyticsResponse. No caching, no writes.

Metrics:
- totalValue: land value + capital amount + technology purchase price + business current value
- resourceDistribution: value/count per category, zero-value categories dropped
- capitalByType: capital amount summed per type
- businessPerformance: revenue, value and ROI per business
- labourDistribution: headcount and payroll per department
- technologyStatus: row count per status
- monthlyTrends: last 6 calendar months (current included), oldest first
- summary: total rows, headcount, payroll, average ROI
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from holdings_api.dates import month_key
from holdings_api.schemas_analytics import (
    AnalyticsResponse,
    AnalyticsSummary,
    BusinessPerformanceEntry,
    CapitalTypeEntry,
    DistributionEntry,
    LabourDepartmentEntry,
    MonthlyTrendEntry,
    TechnologyStatusEntry,
)

Row = Mapping[str, Any]

TREND_MONTHS = 6


def _num(value: Any) -> float:
    return float(value) if value is not None else 0.0


def _sum(rows: Iterable[Row], column: str) -> float:
    return sum(_num(row.get(column)) for row in rows)


def business_roi(investment_amount: float, current_value: float) -> Optional[float]:
    """
    ROI in percent: (current - investment) / investment * 100.

    - current value <= 0 -> 0
    - investment == 0 with a positive current value -> None (undefined, sent as null)
    """
    if current_value <= 0:
        return 0.0
    if investment_amount == 0:
        return None
    return (current_value - investment_amount) / investment_amount * 100


def recent_month_keys(today: date, count: int = TREND_MONTHS) -> List[str]:
    """YYYY-MM keys for the last `count` calendar months ending with today's month."""
    keys = []
    current = today.year * 12 + (today.month - 1)
    for offset in range(count - 1, -1, -1):
        index = current - offset
        keys.append(f"{index // 12}-{index % 12 + 1:02d}")
    return keys


def resource_distribution(collections: Mapping[str, Sequence[Row]], total_value: float) -> List[DistributionEntry]:
    categories = [
        ("Land", collections.get("lands", []), "value"),
        ("Capital", collections.get("capitals", []), "amount"),
        ("Technology", collections.get("technologies", []), "purchase_price"),
        ("Businesses", collections.get("businesses", []), "current_value"),
    ]
    entries = []
    for name, rows, column in categories:
        value = _sum(rows, column)
        if value <= 0:
            continue
        percentage = round(value / total_value * 100, 2) if total_value else 0.0
        entries.append(DistributionEntry(name=name, value=value, count=len(rows), percentage=percentage))
    return entries


def capital_by_type(capitals: Sequence[Row]) -> List[CapitalTypeEntry]:
    totals: Dict[str, float] = {}
    for row in capitals:
        totals[row["type"]] = totals.get(row["type"], 0.0) + _num(row.get("amount"))
    return [CapitalTypeEntry(type=t, amount=amount) for t, amount in totals.items()]


def business_performance(businesses: Sequence[Row]) -> List[BusinessPerformanceEntry]:
    return [
        BusinessPerformanceEntry(
            name=row["name"],
            revenue=_num(row.get("annual_revenue")),
            value=_num(row.get("current_value")),
            roi=business_roi(_num(row.get("investment_amount")), _num(row.get("current_value"))),
        )
        for row in businesses
    ]


def labour_distribution(labours: Sequence[Row]) -> List[LabourDepartmentEntry]:
    groups: Dict[str, Dict[str, float]] = {}
    for row in labours:
        group = groups.setdefault(row["department"], {"count": 0, "total_salary": 0.0})
        group["count"] += 1
        group["total_salary"] += _num(row.get("salary"))
    return [
        LabourDepartmentEntry(department=dept, count=int(g["count"]), total_salary=g["total_salary"])
        for dept, g in groups.items()
    ]


def technology_status(technologies: Sequence[Row]) -> List[TechnologyStatusEntry]:
    counts: Dict[str, int] = {}
    for row in technologies:
        counts[row["status"]] = counts.get(row["status"], 0) + 1
    return [TechnologyStatusEntry(status=status, count=count) for status, count in counts.items()]


def monthly_trends(collections: Mapping[str, Sequence[Row]], today: date) -> List[MonthlyTrendEntry]:
    lands = [month_key(row["created_at"]) for row in collections.get("lands", [])]
    businesses = [month_key(row["created_at"]) for row in collections.get("businesses", [])]
    capitals = [(month_key(row["created_at"]), _num(row.get("amount"))) for row in collections.get("capitals", [])]

    trends = []
    for month in recent_month_keys(today):
        trends.append(MonthlyTrendEntry(
            month=month,
            lands=lands.count(month),
            capital=sum(amount for key, amount in capitals if key == month),
            businesses=businesses.count(month),
        ))
    return trends


def compute_analytics(collections: Mapping[str, Sequence[Row]], today: Optional[date] = None) -> AnalyticsResponse:
    """
    Compose the full analytics payload.

    Args:
        collections: rows keyed by resource key (lands, labours, capitals,
            technologies, data, businesses, contents); missing keys count as empty
        today: server-local date anchoring the monthly trend window
    """
    today = today or date.today()

    lands = collections.get("lands", [])
    labours = collections.get("labours", [])
    capitals = collections.get("capitals", [])
    technologies = collections.get("technologies", [])
    businesses = collections.get("businesses", [])

    total_value = (
        _sum(lands, "value")
        + _sum(capitals, "amount")
        + _sum(technologies, "purchase_price")
        + _sum(businesses, "current_value")
    )

    performance = business_performance(businesses)
    rois = [entry.roi for entry in performance if entry.roi is not None]

    summary = AnalyticsSummary(
        total_resources=sum(len(rows) for rows in collections.values()),
        total_employees=len(labours),
        total_payroll=_sum(labours, "salary"),
        average_roi=sum(rois) / len(rois) if rois else 0.0,
    )

    return AnalyticsResponse(
        total_value=total_value,
        resource_distribution=resource_distribution(collections, total_value),
        capital_by_type=capital_by_type(capitals),
        monthly_trends=monthly_trends(collections, today),
        business_performance=performance,
        labour_distribution=labour_distribution(labours),
        technology_status=technology_status(technologies),
        summary=summary,
    )
