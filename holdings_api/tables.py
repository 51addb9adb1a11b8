"""
holdings_api/tables.py

SQLAlchemy Core table definitions, one table per tracked resource.

Every table carries the same ownership columns:
- id: opaque identifier (uuid4 hex)
- owner_id: identity-provider user id of the owner (indexed; every query filters on it)
- created_at / updated_at: naive UTC timestamps

Column names match the snake_case field names of the request schemas in
schemas_resources.py so validated records can be inserted directly.
"""

from __future__ import annotations

from typing import List

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, MetaData, String, Table, Text

metadata = MetaData()


def _ownership_columns() -> List[Column]:
    return [
        Column("id", String(32), primary_key=True),
        Column("owner_id", String(255), nullable=False, index=True),
        Column("created_at", DateTime, nullable=False, index=True),
        Column("updated_at", DateTime, nullable=False),
    ]


lands = Table(
    "lands",
    metadata,
    *_ownership_columns(),
    Column("name", String(255), nullable=False),
    Column("location", String(255), nullable=False),
    Column("area", Float, nullable=False),
    Column("area_unit", String(16), nullable=False, default="acres"),
    Column("value", Float, nullable=False),
    Column("acquisition_date", DateTime, nullable=False),
    Column("status", String(32), nullable=False, default="active"),
    Column("description", Text),
)

labours = Table(
    "labours",
    metadata,
    *_ownership_columns(),
    Column("employee_name", String(255), nullable=False),
    Column("position", String(255), nullable=False),
    Column("department", String(255), nullable=False),
    Column("employee_type", String(32), nullable=False, default="full-time"),
    Column("salary", Float, nullable=False),
    Column("hire_date", DateTime, nullable=False),
    Column("status", String(32), nullable=False, default="active"),
    Column("skills", Text),
    Column("contact_info", Text),
    # Team impact / network value
    Column("collaboration_type", String(255)),
    Column("contribution_area", String(255)),
    Column("network_value", Float),
    Column("projects_led", Integer),
    Column("team_impact", Text),
    Column("mentorship_role", String(255)),
    Column("is_outsourced", Boolean),
    Column("team_size", Integer),
    Column("impact_multiplier", Float),
    Column("collective_achievements", Text),
)

capitals = Table(
    "capitals",
    metadata,
    *_ownership_columns(),
    Column("name", String(255), nullable=False),
    Column("type", String(64), nullable=False),
    Column("category", String(255), nullable=False),
    Column("amount", Float, nullable=False),
    Column("currency", String(8), nullable=False, default="USD"),
    Column("acquisition_date", DateTime, nullable=False),
    Column("maturity_date", DateTime),
    Column("status", String(32), nullable=False, default="active"),
    Column("description", Text),
    Column("returns", Float),
    # Strategic finance
    Column("burn_rate", Float),
    Column("runway_months", Float),
    Column("leverage_ratio", Float),
)

technologies = Table(
    "technologies",
    metadata,
    *_ownership_columns(),
    Column("name", String(255), nullable=False),
    Column("type", String(64), nullable=False),
    Column("category", String(255), nullable=False),
    Column("manufacturer", String(255)),
    Column("model", String(255)),
    Column("serial_number", String(255)),
    Column("purchase_date", DateTime, nullable=False),
    Column("purchase_price", Float, nullable=False),
    Column("maintenance_cost", Float, nullable=False, default=0),
    Column("status", String(32), nullable=False, default="operational"),
    Column("location", String(255)),
    Column("specifications", Text),
    # Automation / AI metrics
    Column("automation_level", String(16), nullable=False, default="none"),
    Column("is_ai_powered", Boolean, nullable=False, default=False),
    Column("tasks_automated", Text),
    Column("productivity_gain", Float),
    Column("scalability_score", Float),
    Column("integrations", Text),
    Column("users_supported", Integer),
    Column("time_saved", Float),
)

data_assets = Table(
    "data_assets",
    metadata,
    *_ownership_columns(),
    Column("title", String(255), nullable=False),
    Column("category", String(64), nullable=False),
    Column("type", String(64), nullable=False),
    Column("source", String(255)),
    Column("acquisition_date", DateTime, nullable=False),
    Column("confidentiality", String(32), nullable=False, default="internal"),
    Column("value", Text),
    Column("file_url", Text),
    Column("summary", Text),
    Column("tags", Text),
)

businesses = Table(
    "businesses",
    metadata,
    *_ownership_columns(),
    Column("name", String(255), nullable=False),
    Column("industry", String(255), nullable=False),
    Column("registration_number", String(255)),
    Column("established_date", DateTime, nullable=False),
    Column("ownership_percentage", Float, nullable=False),
    Column("investment_amount", Float, nullable=False),
    Column("current_value", Float, nullable=False),
    Column("status", String(32), nullable=False, default="active"),
    Column("location", String(255)),
    Column("employees", Integer, nullable=False, default=0),
    Column("annual_revenue", Float),
    Column("description", Text),
    Column("website", Text),
)

contents = Table(
    "contents",
    metadata,
    *_ownership_columns(),
    Column("title", String(255), nullable=False),
    Column("content_type", String(64), nullable=False),
    Column("platform", String(255), nullable=False),
    Column("publication_date", DateTime, nullable=False),
    Column("audience_reach", Float, nullable=False, default=0),
    Column("view_count", Float, nullable=False, default=0),
    Column("engagement_rate", Float, nullable=False, default=0),
    Column("is_repeatable", Boolean, nullable=False, default=True),
    Column("distribution_channels", Text, nullable=False, default=""),
    Column("production_cost", Float, nullable=False, default=0),
    Column("revenue_generated", Float, nullable=False, default=0),
    Column("content_url", Text),
    Column("status", String(32), nullable=False, default="published"),
    Column("description", Text),
)
