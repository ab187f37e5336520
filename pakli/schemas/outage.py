from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, Literal, List

ServiceType = Literal["water", "electricity", "heating"]
Severity = Literal["low", "medium", "high"]

SERVICE_TYPES = ("water", "electricity", "heating")
SEVERITIES = ("low", "medium", "high")


class CamelModel(BaseModel):
    """Wire format is camelCase; Python side stays snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Outage(CamelModel):
    id: str
    source: str = ""
    area: str
    type: str
    category: str = ""
    description: str = ""
    start: str = ""
    end: str = ""
    timestamp: str = ""
    service_type: ServiceType = "water"
    district: str
    severity: Severity = "medium"


class OutageFilters(CamelModel):
    search_query: str = ""
    selected_service: str = "all"
    selected_category: str = "all"
    selected_type: str = "all"
    show_only_user_district: bool = True


class OutageStatistics(BaseModel):
    total: int = 0
    emergency: int = 0
    scheduled: int = 0
    water: int = 0
    electricity: int = 0
    heating: int = 0


class OutagesResponse(BaseModel):
    success: bool = True
    data: List[Outage]
    total: int
    timestamp: str
    warning: Optional[str] = None


class OutageFeedOut(BaseModel):
    data: List[Outage]
    notifications: List[Outage] = Field(default_factory=list)
    statistics: OutageStatistics
    total: int


class OutageMarker(CamelModel):
    id: str
    lat: float
    lng: float
    district: str
    area: str
    service_type: ServiceType
    service_name: str
    service_color: str
    service_icon: str
    severity: Severity
    severity_name: str
    type_name: str
    start: str
    end: str
