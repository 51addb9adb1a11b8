"""
holdings_api/resources.py

Registry of the seven tracked resources.

Each ResourceDefinition bundles what the generic CRUD router needs:
request schema, table accessor, and the date fields to convert to timestamps.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Tuple, Type

from holdings_api import tables
from holdings_api.dates import parse_iso_datetime, to_iso_z
from holdings_api.repository import ResourceRepository
from holdings_api.schemas_resources import (
    BusinessCreateRequest,
    CapitalCreateRequest,
    ContentCreateRequest,
    InformationCreateRequest,
    LabourCreateRequest,
    LandCreateRequest,
    ResourcePayload,
    TechnologyCreateRequest,
    wire_names,
)

# Ownership columns and their wire names
COMMON_WIRE_NAMES = {
    "id": "id",
    "owner_id": "ownerId",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}


@dataclass(frozen=True)
class ResourceDefinition:
    key: str
    path: str
    label: str
    schema: Type[ResourcePayload]
    repository: ResourceRepository
    date_fields: Tuple[str, ...] = ()

    @property
    def wire_map(self) -> Dict[str, str]:
        mapping = dict(COMMON_WIRE_NAMES)
        mapping.update(wire_names(self.schema))
        return mapping

    def coerce_dates(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Convert validated ISO date strings to the timestamps the store expects."""
        values = dict(record)
        for name in self.date_fields:
            raw = values.get(name)
            values[name] = parse_iso_datetime(raw) if raw else None
        return values

    def serialize(self, row: Mapping[str, Any]) -> Dict[str, Any]:
        """Stored row -> camelCase JSON-ready dict."""
        wire_map = self.wire_map
        payload: Dict[str, Any] = {}
        for column, value in row.items():
            if isinstance(value, datetime):
                value = to_iso_z(value)
            payload[wire_map.get(column, column)] = value
        return payload


LAND = ResourceDefinition(
    key="lands",
    path="/api/land",
    label="Land",
    schema=LandCreateRequest,
    repository=ResourceRepository(tables.lands),
    date_fields=("acquisition_date",),
)

LABOUR = ResourceDefinition(
    key="labours",
    path="/api/labour",
    label="Labour",
    schema=LabourCreateRequest,
    repository=ResourceRepository(tables.labours),
    date_fields=("hire_date",),
)

CAPITAL = ResourceDefinition(
    key="capitals",
    path="/api/capital",
    label="Capital",
    schema=CapitalCreateRequest,
    repository=ResourceRepository(tables.capitals),
    date_fields=("acquisition_date", "maturity_date"),
)

TECHNOLOGY = ResourceDefinition(
    key="technologies",
    path="/api/technology",
    label="Technology",
    schema=TechnologyCreateRequest,
    repository=ResourceRepository(tables.technologies),
    date_fields=("purchase_date",),
)

INFORMATION = ResourceDefinition(
    key="data",
    path="/api/information",
    label="Information",
    schema=InformationCreateRequest,
    repository=ResourceRepository(tables.data_assets),
    date_fields=("acquisition_date",),
)

BUSINESS = ResourceDefinition(
    key="businesses",
    path="/api/businesses",
    label="Business",
    schema=BusinessCreateRequest,
    repository=ResourceRepository(tables.businesses),
    date_fields=("established_date",),
)

CONTENT = ResourceDefinition(
    key="contents",
    path="/api/content",
    label="Content",
    schema=ContentCreateRequest,
    repository=ResourceRepository(tables.contents),
    date_fields=("publication_date",),
)

ALL_RESOURCES: Tuple[ResourceDefinition, ...] = (
    LAND,
    LABOUR,
    CAPITAL,
    TECHNOLOGY,
    INFORMATION,
    BUSINESS,
    CONTENT,
)
