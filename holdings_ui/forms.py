"""
holdings_ui/forms.py
Form definitions for the seven resource pages, plus the pure helpers that
turn widget values into API payloads and stored rows back into widget values.

Nothing here touches Streamlit, so it is unit-testable with plain dicts.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

# Widget kinds understood by the page renderer
TEXT = "text"
TEXTAREA = "textarea"
NUMBER = "number"
INTEGER = "integer"
SELECT = "select"
DATE = "date"
DATETIME = "datetime"
CHECKBOX = "checkbox"


@dataclass(frozen=True)
class FormField:
    name: str  # camelCase wire name
    label: str
    kind: str = TEXT
    required: bool = False
    options: Tuple[str, ...] = ()
    default: Any = None
    help: Optional[str] = None


@dataclass(frozen=True)
class ResourcePage:
    title: str
    path: str
    stats_key: str
    fields: Tuple[FormField, ...]
    columns: Tuple[str, ...] = ()
    item_label: str = "name"


# ---------------------------------------------------------
# Resource page definitions
# ---------------------------------------------------------
LAND_PAGE = ResourcePage(
    title="Land",
    path="/api/land",
    stats_key="lands",
    fields=(
        FormField("name", "Name", required=True),
        FormField("location", "Location", required=True),
        FormField("area", "Area", NUMBER, required=True),
        FormField("areaUnit", "Area unit", SELECT, options=("acres", "hectares", "sqft", "sqm"), default="acres"),
        FormField("value", "Value", NUMBER, required=True),
        FormField("acquisitionDate", "Acquisition date", DATE, required=True),
        FormField("status", "Status", SELECT, options=("active", "sold", "leased"), default="active"),
        FormField("description", "Description", TEXTAREA),
    ),
    columns=("name", "location", "area", "areaUnit", "value", "status", "acquisitionDate"),
)

LABOUR_PAGE = ResourcePage(
    title="People & Teams",
    path="/api/labour",
    stats_key="labours",
    item_label="employeeName",
    fields=(
        FormField("employeeName", "Name", required=True),
        FormField("position", "Position", required=True),
        FormField("department", "Department", required=True),
        FormField("employeeType", "Employment type", SELECT,
                  options=("full-time", "part-time", "contract"), default="full-time"),
        FormField("salary", "Salary", NUMBER, required=True),
        FormField("hireDate", "Hire date", DATE, required=True),
        FormField("status", "Status", default="active"),
        FormField("skills", "Skills", TEXTAREA),
        FormField("contactInfo", "Contact info"),
        FormField("collaborationType", "Collaboration type"),
        FormField("contributionArea", "Contribution area"),
        FormField("networkValue", "Network value", NUMBER),
        FormField("projectsLed", "Projects led", INTEGER),
        FormField("teamImpact", "Team impact", TEXTAREA),
        FormField("mentorshipRole", "Mentorship role"),
        FormField("isOutsourced", "Outsourced", CHECKBOX, default=False),
        FormField("teamSize", "Team size", INTEGER),
        FormField("impactMultiplier", "Impact multiplier", NUMBER),
        FormField("collectiveAchievements", "Collective achievements", TEXTAREA),
    ),
    columns=("employeeName", "position", "department", "employeeType", "salary", "status"),
)

CAPITAL_PAGE = ResourcePage(
    title="Capital",
    path="/api/capital",
    stats_key="capitals",
    fields=(
        FormField("name", "Name", required=True),
        FormField("type", "Type", required=True, help="e.g. cash, equity, debt, investment"),
        FormField("category", "Category", required=True),
        FormField("amount", "Amount", NUMBER, required=True),
        FormField("currency", "Currency", SELECT, options=("USD", "EUR", "GBP", "JPY"), default="USD"),
        FormField("acquisitionDate", "Acquisition date", DATE, required=True),
        FormField("maturityDate", "Maturity date", DATE),
        FormField("status", "Status", SELECT, options=("active", "liquidated", "matured"), default="active"),
        FormField("description", "Description", TEXTAREA),
        FormField("returns", "Returns", NUMBER),
        FormField("burnRate", "Monthly burn rate", NUMBER),
        FormField("runwayMonths", "Runway (months)", NUMBER),
        FormField("leverageRatio", "Leverage ratio", NUMBER),
    ),
    columns=("name", "type", "category", "amount", "currency", "status", "acquisitionDate"),
)

TECHNOLOGY_PAGE = ResourcePage(
    title="Technology",
    path="/api/technology",
    stats_key="technologies",
    fields=(
        FormField("name", "Name", required=True),
        FormField("type", "Type", required=True),
        FormField("category", "Category", required=True),
        FormField("manufacturer", "Manufacturer"),
        FormField("model", "Model"),
        FormField("serialNumber", "Serial number"),
        FormField("purchaseDate", "Purchase date", DATE, required=True),
        FormField("purchasePrice", "Purchase price", NUMBER, required=True),
        FormField("maintenanceCost", "Maintenance cost", NUMBER, default=0.0),
        FormField("status", "Status", SELECT, options=("operational", "maintenance", "retired"), default="operational"),
        FormField("location", "Location"),
        FormField("specifications", "Specifications", TEXTAREA),
        FormField("automationLevel", "Automation level", SELECT, options=("none", "partial", "full"), default="none"),
        FormField("isAIPowered", "AI powered", CHECKBOX, default=False),
        FormField("tasksAutomated", "Tasks automated", TEXTAREA),
        FormField("productivityGain", "Productivity gain (%)", NUMBER),
        FormField("scalabilityScore", "Scalability score (1-10)", NUMBER),
        FormField("integrations", "Integrations"),
        FormField("usersSupported", "Users supported", INTEGER),
        FormField("timeSaved", "Time saved (hours/week)", NUMBER),
    ),
    columns=("name", "type", "category", "purchasePrice", "status", "automationLevel", "isAIPowered"),
)

INFORMATION_PAGE = ResourcePage(
    title="Data",
    path="/api/information",
    stats_key="data",
    item_label="title",
    fields=(
        FormField("title", "Title", required=True),
        FormField("category", "Category", required=True, help="e.g. market-research, customer-data"),
        FormField("type", "Type", required=True, help="e.g. report, dataset, analysis"),
        FormField("source", "Source"),
        FormField("acquisitionDate", "Acquisition date", DATE, required=True),
        FormField("confidentiality", "Confidentiality", SELECT,
                  options=("public", "internal", "confidential", "secret"), default="internal"),
        FormField("value", "Value"),
        FormField("fileUrl", "File URL"),
        FormField("summary", "Summary", TEXTAREA),
        FormField("tags", "Tags", help="Comma separated"),
    ),
    columns=("title", "category", "type", "confidentiality", "source", "acquisitionDate"),
)

BUSINESS_PAGE = ResourcePage(
    title="Businesses",
    path="/api/businesses",
    stats_key="businesses",
    fields=(
        FormField("name", "Name", required=True),
        FormField("industry", "Industry", required=True),
        FormField("registrationNumber", "Registration number"),
        FormField("establishedDate", "Established date", DATE, required=True),
        FormField("ownershipPercentage", "Ownership (%)", NUMBER, required=True),
        FormField("investmentAmount", "Investment amount", NUMBER, required=True),
        FormField("currentValue", "Current value", NUMBER, required=True),
        FormField("status", "Status", SELECT, options=("active", "acquired", "closed", "dormant"), default="active"),
        FormField("location", "Location"),
        FormField("employees", "Employees", INTEGER, default=0),
        FormField("annualRevenue", "Annual revenue", NUMBER),
        FormField("description", "Description", TEXTAREA),
        FormField("website", "Website"),
    ),
    columns=("name", "industry", "ownershipPercentage", "investmentAmount", "currentValue", "status"),
)

CONTENT_PAGE = ResourcePage(
    title="Content & Audience",
    path="/api/content",
    stats_key="contents",
    item_label="title",
    fields=(
        FormField("title", "Title", required=True),
        FormField("contentType", "Content type", required=True, help="e.g. video, article, podcast"),
        FormField("platform", "Platform", required=True),
        FormField("publicationDate", "Publication date", DATETIME, required=True),
        FormField("audienceReach", "Audience reach", NUMBER, default=0.0),
        FormField("viewCount", "View count", NUMBER, default=0.0),
        FormField("engagementRate", "Engagement rate (%)", NUMBER, default=0.0),
        FormField("isRepeatable", "Repeatable", CHECKBOX, default=True),
        FormField("distributionChannels", "Distribution channels", default=""),
        FormField("productionCost", "Production cost", NUMBER, default=0.0),
        FormField("revenueGenerated", "Revenue generated", NUMBER, default=0.0),
        FormField("contentUrl", "Content URL"),
        FormField("status", "Status", SELECT, options=("published", "draft", "archived"), default="published"),
        FormField("description", "Description", TEXTAREA),
    ),
    columns=("title", "contentType", "platform", "viewCount", "engagementRate", "status", "publicationDate"),
)

RESOURCE_PAGES: Tuple[ResourcePage, ...] = (
    LAND_PAGE,
    LABOUR_PAGE,
    CAPITAL_PAGE,
    TECHNOLOGY_PAGE,
    INFORMATION_PAGE,
    BUSINESS_PAGE,
    CONTENT_PAGE,
)

PAGES_BY_TITLE: Dict[str, ResourcePage] = {page.title: page for page in RESOURCE_PAGES}


# ---------------------------------------------------------
# Value conversion
# ---------------------------------------------------------
def parse_api_datetime(value: Optional[str]) -> Optional[datetime]:
    """'2024-01-15T00:00:00Z' -> naive UTC datetime (None for empty/invalid)."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _to_wire(form_field: FormField, value: Any) -> Any:
    """Widget value -> JSON value, or None to leave the field out."""
    if value is None:
        return None
    kind = form_field.kind
    if kind in (TEXT, TEXTAREA):
        text = str(value).strip()
        if text:
            return text
        # Fields with an explicit "" default keep it; others are omitted
        return "" if form_field.default == "" else None
    if kind == NUMBER:
        return float(value)
    if kind == INTEGER:
        return int(value)
    if kind == CHECKBOX:
        return bool(value)
    if kind == DATE:
        return value.isoformat() if isinstance(value, date) else str(value)
    if kind == DATETIME:
        if isinstance(value, datetime):
            return value.replace(tzinfo=None).isoformat(timespec="seconds") + "Z"
        return str(value)
    return value


def build_payload(fields: Sequence[FormField], values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Turn submitted widget values into a request body.

    Empty optional inputs are left out so the API applies its own defaults;
    empty required inputs are left out too, and the API reports them.
    """
    payload: Dict[str, Any] = {}
    for form_field in fields:
        wire_value = _to_wire(form_field, values.get(form_field.name))
        if wire_value is not None:
            payload[form_field.name] = wire_value
    return payload


def form_values(fields: Sequence[FormField], row: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Initial widget values: the stored row when editing, field defaults otherwise."""
    values: Dict[str, Any] = {}
    for form_field in fields:
        raw = row.get(form_field.name) if row else None
        if raw is None:
            values[form_field.name] = form_field.default
            continue
        if form_field.kind == DATE:
            parsed = parse_api_datetime(raw)
            values[form_field.name] = parsed.date() if parsed else None
        elif form_field.kind == DATETIME:
            values[form_field.name] = parse_api_datetime(raw)
        else:
            values[form_field.name] = raw
    return values


def split_datetime(value: Optional[datetime]) -> Tuple[date, time]:
    """Date and time parts for the two widgets a DATETIME field renders as."""
    if value is None:
        now = datetime.now(timezone.utc).replace(tzinfo=None, second=0, microsecond=0)
        return now.date(), now.time()
    return value.date(), value.time()


def missing_required(fields: Sequence[FormField], payload: Dict[str, Any]) -> List[str]:
    """Labels of required fields absent from a payload (checked before submitting)."""
    return [f.label for f in fields if f.required and f.name not in payload]
