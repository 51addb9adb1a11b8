"""
holdings_api/schemas_analytics.py

Response schemas for /api/stats and /api/analytics.
Serialized with camelCase keys (FastAPI dumps response models by alias).
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatsResponse(CamelModel):
    """Per-resource row counts for the caller."""
    lands: int = 0
    labours: int = 0
    capitals: int = 0
    technologies: int = 0
    data: int = 0
    businesses: int = 0
    contents: int = 0


class DistributionEntry(CamelModel):
    name: str
    value: float
    count: int
    percentage: float = Field(0.0, description="Share of total portfolio value (0-100)")


class CapitalTypeEntry(CamelModel):
    type: str
    amount: float


class MonthlyTrendEntry(CamelModel):
    month: str = Field(..., description="YYYY-MM")
    lands: int = 0
    capital: float = 0.0
    businesses: int = 0


class BusinessPerformanceEntry(CamelModel):
    name: str
    revenue: float
    value: float
    roi: Optional[float] = Field(None, description="Percent; null when investment is zero")


class LabourDepartmentEntry(CamelModel):
    department: str
    count: int
    total_salary: float


class TechnologyStatusEntry(CamelModel):
    status: str
    count: int


class AnalyticsSummary(CamelModel):
    total_resources: int
    total_employees: int
    total_payroll: float
    average_roi: float = Field(..., alias="averageROI")


class AnalyticsResponse(CamelModel):
    total_value: float
    resource_distribution: List[DistributionEntry] = Field(default_factory=list)
    capital_by_type: List[CapitalTypeEntry] = Field(default_factory=list)
    monthly_trends: List[MonthlyTrendEntry] = Field(default_factory=list)
    business_performance: List[BusinessPerformanceEntry] = Field(default_factory=list)
    labour_distribution: List[LabourDepartmentEntry] = Field(default_factory=list)
    technology_status: List[TechnologyStatusEntry] = Field(default_factory=list)
    summary: AnalyticsSummary
