"""
holdings_api/schemas_resources.py

Pydantic request schemas for the seven tracked resources.

Validation rules:
- Required strings are trimmed and must be non-empty
- Numbers must be real JSON numbers (strings and booleans are rejected)
- Integers must be integral; booleans must be true/false
- Enumerated strings reject unknown values and default when absent
- Date fields must be ISO dates (or date-times) and stay strings here;
  the resource handlers convert them to timestamps before storage
- Unknown fields (including any client-supplied ownerId/userId/id) are ignored

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Type

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from holdings_api.dates import has_time_component, parse_iso_datetime


# ========================================================================
# FIELD TYPES
# ========================================================================

# Integer columns are 32-bit on Postgres
INTEGER_MIN = -(2**31)
INTEGER_MAX = 2**31 - 1


def _require_string(value: Any) -> Any:
    if not isinstance(value, str):
        raise ValueError("Expected string")
    return value


def _require_number(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("Expected number")
    try:
        finite = math.isfinite(value)
    except OverflowError:
        finite = False
    if not finite:
        raise ValueError("Expected a finite number")
    return value


def _require_integer(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("Expected integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("Expected integer")
        value = int(value)
    if not INTEGER_MIN <= value <= INTEGER_MAX:
        raise ValueError("Integer out of range")
    return value


def _require_bool(value: Any) -> Any:
    if not isinstance(value, bool):
        raise ValueError("Expected boolean")
    return value


def _require_iso_date(value: Any) -> Any:
    _require_string(value)
    parse_iso_datetime(value)
    return value.strip()


def _require_iso_datetime(value: Any) -> Any:
    _require_iso_date(value)
    if not has_time_component(value):
        raise ValueError("Expected ISO date-time (e.g. 2024-03-01T09:30:00Z)")
    return value.strip()


Text = Annotated[str, BeforeValidator(_require_string)]
Number = Annotated[float, BeforeValidator(_require_number)]
Integer = Annotated[int, BeforeValidator(_require_integer)]
Flag = Annotated[bool, BeforeValidator(_require_bool)]
IsoDate = Annotated[str, BeforeValidator(_require_iso_date)]
IsoDateTime = Annotated[str, BeforeValidator(_require_iso_datetime)]


# ========================================================================
# ENUMERATIONS
# ========================================================================

class AreaUnit(str, Enum):
    acres = "acres"
    hectares = "hectares"
    sqft = "sqft"
    sqm = "sqm"


class LandStatus(str, Enum):
    active = "active"
    sold = "sold"
    leased = "leased"


class EmployeeType(str, Enum):
    full_time = "full-time"
    part_time = "part-time"
    contract = "contract"


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"


class CapitalStatus(str, Enum):
    active = "active"
    liquidated = "liquidated"
    matured = "matured"


class TechnologyStatus(str, Enum):
    operational = "operational"
    maintenance = "maintenance"
    retired = "retired"


class AutomationLevel(str, Enum):
    none = "none"
    partial = "partial"
    full = "full"


class Confidentiality(str, Enum):
    public = "public"
    internal = "internal"
    confidential = "confidential"
    secret = "secret"


class BusinessStatus(str, Enum):
    active = "active"
    acquired = "acquired"
    closed = "closed"
    dormant = "dormant"


class ContentStatus(str, Enum):
    published = "published"
    draft = "draft"
    archived = "archived"


# ========================================================================
# RESOURCE SCHEMAS
# ========================================================================

class ResourcePayload(BaseModel):
    """Base for all resource request bodies (camelCase aliases, unknown keys ignored)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


class LandCreateRequest(ResourcePayload):
    name: Text = Field(..., min_length=1, max_length=255)
    location: Text = Field(..., min_length=1, max_length=255)
    area: Number = Field(..., gt=0)
    area_unit: AreaUnit = AreaUnit.acres
    value: Number = Field(..., gt=0)
    acquisition_date: IsoDate
    status: LandStatus = LandStatus.active
    description: Optional[Text] = None


class LabourCreateRequest(ResourcePayload):
    employee_name: Text = Field(..., min_length=1, max_length=255)
    position: Text = Field(..., min_length=1, max_length=255)
    department: Text = Field(..., min_length=1, max_length=255)
    employee_type: EmployeeType = EmployeeType.full_time
    salary: Number = Field(..., gt=0)
    hire_date: IsoDate
    status: Text = "active"
    skills: Optional[Text] = None
    contact_info: Optional[Text] = None
    # Team impact / network value
    collaboration_type: Optional[Text] = None
    contribution_area: Optional[Text] = None
    network_value: Optional[Number] = None
    projects_led: Optional[Integer] = None
    team_impact: Optional[Text] = None
    mentorship_role: Optional[Text] = None
    is_outsourced: Optional[Flag] = None
    team_size: Optional[Integer] = None
    impact_multiplier: Optional[Number] = None
    collective_achievements: Optional[Text] = None


class CapitalCreateRequest(ResourcePayload):
    name: Text = Field(..., min_length=1, max_length=255)
    type: Text = Field(..., min_length=1, max_length=64)
    category: Text = Field(..., min_length=1, max_length=255)
    amount: Number
    currency: Currency = Currency.USD
    acquisition_date: IsoDate
    maturity_date: Optional[IsoDate] = None
    status: CapitalStatus = CapitalStatus.active
    description: Optional[Text] = None
    returns: Optional[Number] = None
    # Strategic finance
    burn_rate: Optional[Number] = Field(None, ge=0)
    runway_months: Optional[Number] = Field(None, ge=0)
    leverage_ratio: Optional[Number] = Field(None, ge=0)


class TechnologyCreateRequest(ResourcePayload):
    name: Text = Field(..., min_length=1, max_length=255)
    type: Text = Field(..., min_length=1, max_length=64)
    category: Text = Field(..., min_length=1, max_length=255)
    manufacturer: Optional[Text] = None
    model: Optional[Text] = None
    serial_number: Optional[Text] = None
    purchase_date: IsoDate
    purchase_price: Number = Field(..., gt=0)
    maintenance_cost: Number = 0
    status: TechnologyStatus = TechnologyStatus.operational
    location: Optional[Text] = None
    specifications: Optional[Text] = None
    # Automation / AI metrics
    automation_level: AutomationLevel = AutomationLevel.none
    is_ai_powered: Flag = Field(False, alias="isAIPowered")
    tasks_automated: Optional[Text] = None
    productivity_gain: Optional[Number] = None
    scalability_score: Optional[Number] = Field(None, ge=1, le=10)
    integrations: Optional[Text] = None
    users_supported: Optional[Integer] = Field(None, ge=0)
    time_saved: Optional[Number] = Field(None, ge=0)


class InformationCreateRequest(ResourcePayload):
    title: Text = Field(..., min_length=1, max_length=255)
    category: Text = Field(..., min_length=1, max_length=64)
    type: Text = Field(..., min_length=1, max_length=64)
    source: Optional[Text] = None
    acquisition_date: IsoDate
    confidentiality: Confidentiality = Confidentiality.internal
    value: Optional[Text] = None
    file_url: Optional[Text] = None
    summary: Optional[Text] = None
    tags: Optional[Text] = None


class BusinessCreateRequest(ResourcePayload):
    name: Text = Field(..., min_length=1, max_length=255)
    industry: Text = Field(..., min_length=1, max_length=255)
    registration_number: Optional[Text] = None
    established_date: IsoDate
    ownership_percentage: Number = Field(..., ge=0, le=100)
    investment_amount: Number
    current_value: Number
    status: BusinessStatus = BusinessStatus.active
    location: Optional[Text] = None
    employees: Integer = Field(0, ge=0)
    annual_revenue: Optional[Number] = None
    description: Optional[Text] = None
    website: Optional[Text] = None


class ContentCreateRequest(ResourcePayload):
    title: Text = Field(..., min_length=1, max_length=255)
    content_type: Text = Field(..., min_length=1, max_length=64)
    platform: Text = Field(..., min_length=1, max_length=255)
    publication_date: IsoDateTime
    audience_reach: Number = Field(0, ge=0)
    view_count: Number = Field(0, ge=0)
    engagement_rate: Number = Field(0, ge=0)
    is_repeatable: Flag = True
    distribution_channels: Text = ""
    production_cost: Number = Field(0, ge=0)
    revenue_generated: Number = Field(0, ge=0)
    content_url: Optional[Text] = None
    status: ContentStatus = ContentStatus.published
    description: Optional[Text] = None


# ========================================================================
# VALIDATION RESULT
# ========================================================================

@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationResult:
    """Either a normalized record (snake_case keys) or the list of field errors."""
    record: Optional[Dict[str, Any]] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _error_message(error: Dict[str, Any]) -> str:
    message = error.get("msg", "Invalid value")
    # Errors raised from our BeforeValidators arrive as "Value error, <text>"
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return message


def field_errors_from(exc: ValidationError) -> List[FieldError]:
    errors: List[FieldError] = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        name = ".".join(str(part) for part in loc) if loc else "body"
        errors.append(FieldError(field=name, message=_error_message(error)))
    return errors


def validate_payload(schema: Type[ResourcePayload], raw: Any) -> ValidationResult:
    """
    Validate an untyped request body against a resource schema.

    Never raises for bad input: returns a ValidationResult carrying either the
    normalized record or every field that violated its rule.
    """
    if not isinstance(raw, dict):
        return ValidationResult(errors=[FieldError(field="body", message="Expected a JSON object")])

    try:
        model = schema.model_validate(raw)
    except ValidationError as exc:
        return ValidationResult(errors=field_errors_from(exc))

    return ValidationResult(record=model.model_dump(mode="json"))


def wire_names(schema: Type[ResourcePayload]) -> Dict[str, str]:
    """Map snake_case field names to their camelCase wire names."""
    return {name: (info.alias or name) for name, info in schema.model_fields.items()}
