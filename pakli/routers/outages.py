# File: pakli/routers/outages.py
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from pakli.core.config import settings
from pakli.core.ratelimit import limiter
from pakli.core.security import get_optional_user
from pakli.db.session import get_db
from pakli.schemas.outage import (
    Outage,
    OutageFeedOut,
    OutageFilters,
    OutageMarker,
    OutageStatistics,
    OutagesResponse,
)
from pakli.services.districts import district_names
from pakli.services.outage_source import OutageSourceError, fallback_outages, load_outages
from pakli.services.outages import (
    apply_query_filters,
    dedupe_outages,
    filter_outages,
    get_outage_statistics,
    sort_by_timestamp,
    to_marker,
    transform_json_data,
)
from pakli.services.profiles import current_subscription, to_user_out

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["outages"])


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _load_normalized(db: Session) -> list[Outage]:
    return transform_json_data(load_outages(db))


def _collect(
    db: Session,
    category: Optional[str] = None,
    area: Optional[str] = None,
    outage_type: Optional[str] = None,
    service_type: Optional[str] = None,
) -> tuple[list[Outage], Optional[str]]:
    """Query-filtered, deduplicated, newest-first outages; fallback data when the source fails."""
    try:
        outages = _load_normalized(db)
    except OutageSourceError as e:
        logger.error(f"Error in outages API: {e}")
        return fallback_outages(), f"Using fallback data due to error: {e}"
    outages = apply_query_filters(outages, category, area, outage_type, service_type)
    return sort_by_timestamp(dedupe_outages(outages)), None


@router.get("/outages", response_model=OutagesResponse, response_model_exclude_none=True)
@limiter.limit(settings.rate_limit_outages)
def list_outages(
    request: Request,
    category: Optional[str] = Query(default=None),
    area: Optional[str] = Query(default=None),
    type: Optional[str] = Query(default=None),
    service_type: Optional[str] = Query(default=None, alias="serviceType"),
    db: Session = Depends(get_db),
):
    outages, warning = _collect(db, category, area, type, service_type)
    return OutagesResponse(
        success=True,
        data=outages,
        total=len(outages),
        timestamp=_now_iso(),
        warning=warning,
    )


@router.get("/outages/stats", response_model=OutageStatistics)
@limiter.limit(settings.rate_limit_outages)
def outage_stats(
    request: Request,
    category: Optional[str] = Query(default=None),
    area: Optional[str] = Query(default=None),
    type: Optional[str] = Query(default=None),
    service_type: Optional[str] = Query(default=None, alias="serviceType"),
    db: Session = Depends(get_db),
):
    outages, _ = _collect(db, category, area, type, service_type)
    return get_outage_statistics(outages)


@router.get("/outages/feed", response_model=OutageFeedOut)
@limiter.limit(settings.rate_limit_outages)
def outage_feed(
    request: Request,
    search_query: str = Query(default="", alias="searchQuery"),
    selected_service: str = Query(default="all", alias="selectedService"),
    selected_category: str = Query(default="all", alias="selectedCategory"),
    selected_type: str = Query(default="all", alias="selectedType"),
    show_only_user_district: bool = Query(default=True, alias="showOnlyUserDistrict"),
    db: Session = Depends(get_db),
    auth=Depends(get_optional_user),
):
    outages, _ = _collect(db)
    filters = OutageFilters(
        search_query=search_query,
        selected_service=selected_service,
        selected_category=selected_category,
        selected_type=selected_type,
        show_only_user_district=show_only_user_district,
    )
    user = to_user_out(auth) if auth else None
    subscription = current_subscription(auth) if auth else None
    filtered, notifications = filter_outages(outages, user, filters, subscription)
    return OutageFeedOut(
        data=filtered,
        notifications=notifications,
        statistics=get_outage_statistics(filtered),
        total=len(filtered),
    )


@router.get("/outages/map", response_model=list[OutageMarker])
@limiter.limit(settings.rate_limit_outages)
def outage_markers(
    request: Request,
    category: Optional[str] = Query(default=None),
    area: Optional[str] = Query(default=None),
    type: Optional[str] = Query(default=None),
    service_type: Optional[str] = Query(default=None, alias="serviceType"),
    db: Session = Depends(get_db),
):
    outages, _ = _collect(db, category, area, type, service_type)
    return [to_marker(o) for o in outages]


@router.get("/outages/{outage_id}", response_model=Outage)
def get_outage(outage_id: str, db: Session = Depends(get_db)):
    try:
        outages = _load_normalized(db)
    except OutageSourceError as e:
        logger.error(f"Error loading outage {outage_id}: {e}")
        outages = fallback_outages()
    for o in outages:
        if o.id == outage_id:
            return o
    raise HTTPException(status_code=404, detail="Прекъсването не е намерено")


@router.get("/districts")
def list_districts():
    return district_names()
