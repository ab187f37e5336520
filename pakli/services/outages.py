# File: pakli/services/outages.py
"""
Outage normalization, filtering and statistics.

Everything here is a pure function over plain dicts and `Outage` models so the
router, the store and the tests share exactly one implementation.
"""
import hashlib
import random
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from pakli.schemas.outage import (
    SERVICE_TYPES,
    SEVERITIES,
    Outage,
    OutageFilters,
    OutageMarker,
    OutageStatistics,
)
from pakli.services.districts import SOFIA_CENTER, SOFIA_DISTRICTS

UNKNOWN_AREA = "Неизвестна зона"
UNKNOWN_DISTRICT = "Неизвестен"
EMERGENCY_TYPE = "Аварийно спиране"
SCHEDULED_TYPE = "Планирано спиране"
EMERGENCY_MARKER = "аварийно"
SCHEDULED_MARKER = "планирано"

BG_MONTHS = (
    "януари", "февруари", "март", "април", "май", "юни",
    "юли", "август", "септември", "октомври", "ноември", "декември",
)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _first(*values: Any) -> str:
    for v in values:
        s = _text(v)
        if s:
            return s
    return ""


def is_emergency(outage_type: Optional[str]) -> bool:
    return EMERGENCY_MARKER in (outage_type or "").lower()


def is_scheduled(outage_type: Optional[str]) -> bool:
    return SCHEDULED_MARKER in (outage_type or "").lower()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_date(value: Optional[str]) -> str:
    """ISO timestamp -> "15 януари 2025 г., 10:00 ч."; anything else is returned as is."""
    if not value:
        return ""
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(raw)
    except ValueError:
        return value
    return f"{dt.day} {BG_MONTHS[dt.month - 1]} {dt.year} г., {dt:%H:%M} ч."


def _stable_id(*parts: str) -> str:
    digest = hashlib.sha1("|".join(parts).encode("utf-8")).hexdigest()
    return f"outage-{digest[:12]}"


def transform_api_to_outage(api_data: Any) -> Outage:
    """
    Map one upstream record onto the canonical Outage.

    Upstream shapes differ between scraper versions (affectedArea vs
    location.address vs area, serviceType vs service_type vs type, severity vs
    priority). Never raises: missing or malformed fields fall back to
    placeholders and defaults.
    """
    raw: Mapping[str, Any] = api_data if isinstance(api_data, Mapping) else {}
    location = raw.get("location")
    if not isinstance(location, Mapping):
        location = {}

    area = _first(raw.get("affectedArea"), location.get("address"), raw.get("area")) or UNKNOWN_AREA
    district = _first(location.get("district"), raw.get("district")) or UNKNOWN_DISTRICT

    raw_service = _first(raw.get("serviceType"), raw.get("service_type"), raw.get("type")).lower()
    service_type = raw_service if raw_service in SERVICE_TYPES else "water"

    severity = _text(raw.get("severity")).lower()
    if severity not in SEVERITIES:
        severity = _text(raw.get("priority")).lower()
    if severity not in SEVERITIES:
        severity = "medium"

    raw_type = _text(raw.get("type"))
    localized_type = raw_type if raw_type.lower() not in SERVICE_TYPES else ""
    category = _text(raw.get("category"))
    if category:
        outage_type = EMERGENCY_TYPE if category == "emergency" else SCHEDULED_TYPE
    elif localized_type:
        outage_type = localized_type
        category = "emergency" if is_emergency(localized_type) else "scheduled"
    else:
        outage_type = SCHEDULED_TYPE
        category = "scheduled"

    start_raw = _first(raw.get("startTime"), raw.get("start_time"), raw.get("start"))
    end_raw = _first(raw.get("endTime"), raw.get("end_time"), raw.get("end"))
    timestamp = _first(raw.get("startTime"), raw.get("start_time"), raw.get("timestamp"))

    source = _text(raw.get("source"))
    description = _text(raw.get("description"))
    outage_id = _text(raw.get("id")) or _stable_id(source, area, start_raw, description)

    return Outage(
        id=outage_id,
        source=source,
        area=area,
        type=outage_type,
        category=category,
        description=description,
        start=format_date(start_raw),
        end=format_date(end_raw),
        timestamp=timestamp,
        service_type=service_type,
        district=district,
        severity=severity,
    )


def transform_json_data(items: Iterable[Any]) -> list[Outage]:
    return [transform_api_to_outage(item) for item in items]


def subscription_is_active(subscription: Any, now: Optional[datetime] = None) -> bool:
    if subscription is None:
        return False
    checker = getattr(subscription, "is_current", None)
    if callable(checker):
        return bool(checker(now))
    if not getattr(subscription, "active", False):
        return False
    expires_at = getattr(subscription, "expires_at", None)
    if isinstance(expires_at, str):
        expires_at = parse_timestamp(expires_at)
    if expires_at is None:
        return True
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at > (now or datetime.now(timezone.utc))


def _same_district(outage: Outage, district: Optional[str]) -> bool:
    return outage.district.lower() == (district or "").lower()


def filter_outages(outages, user, filters: OutageFilters, subscription=None):
    """
    Apply the UI filters to the full outage list.

    Returns (filtered, notifications). Order of the input is preserved;
    notifications are high-severity outages in the user's district and are
    only produced while the subscription is active.
    """
    query = filters.search_query.strip().lower()
    user_district = getattr(user, "district", None) if user is not None else None

    filtered = []
    for outage in outages:
        if user is not None and filters.show_only_user_district and not _same_district(outage, user_district):
            continue
        if query and not (
            query in outage.area.lower()
            or query in outage.description.lower()
            or query in outage.district.lower()
        ):
            continue
        if filters.selected_service not in ("", "all") and outage.service_type != filters.selected_service:
            continue
        if filters.selected_category not in ("", "all") and outage.category != filters.selected_category:
            continue
        emergency = is_emergency(outage.type)
        if filters.selected_type == "emergency" and not emergency:
            continue
        if filters.selected_type == "scheduled" and emergency:
            continue
        filtered.append(outage)

    notifications = []
    if user is not None and subscription_is_active(subscription):
        notifications = [
            o for o in filtered
            if _same_district(o, user_district) and o.severity == "high"
        ]
    return filtered, notifications


def apply_query_filters(
    outages: list[Outage],
    category: Optional[str] = None,
    area: Optional[str] = None,
    outage_type: Optional[str] = None,
    service_type: Optional[str] = None,
) -> list[Outage]:
    result = list(outages)
    if category and category != "all":
        result = [o for o in result if o.category == category]
    if area:
        needle = area.lower()
        result = [o for o in result if needle in o.area.lower()]
    if outage_type == "emergency":
        result = [o for o in result if is_emergency(o.type)]
    elif outage_type == "scheduled":
        result = [o for o in result if not is_emergency(o.type)]
    if service_type and service_type != "all":
        result = [o for o in result if o.service_type == service_type]
    return result


def dedupe_outages(outages: list[Outage]) -> list[Outage]:
    seen = set()
    unique = []
    for o in outages:
        key = (o.area, o.start, o.end, o.description)
        if key in seen:
            continue
        seen.add(key)
        unique.append(o)
    return unique


def sort_by_timestamp(outages: list[Outage]) -> list[Outage]:
    """Newest first; records with unparsable timestamps keep their order at the end."""
    dated = []
    undated = []
    for o in outages:
        ts = parse_timestamp(o.timestamp)
        if ts is None:
            undated.append(o)
        else:
            dated.append((ts, o))
    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [o for _, o in dated] + undated


def get_outage_statistics(outages: list[Outage]) -> OutageStatistics:
    stats = OutageStatistics(total=len(outages))
    for o in outages:
        if is_emergency(o.type):
            stats.emergency += 1
        if is_scheduled(o.type):
            stats.scheduled += 1
        if o.service_type == "water":
            stats.water += 1
        elif o.service_type == "electricity":
            stats.electricity += 1
        elif o.service_type == "heating":
            stats.heating += 1
    return stats


def get_service_icon_name(service_type: str) -> str:
    return {"water": "droplets", "electricity": "zap", "heating": "thermometer"}.get(service_type, "activity")


def get_service_name(service_type: str) -> str:
    return {"water": "Вода", "electricity": "Ток", "heating": "Топлофикация"}.get(service_type, "Неизвестно")


def get_service_color(service_type: str) -> str:
    return {"water": "blue", "electricity": "yellow", "heating": "red"}.get(service_type, "gray")


def get_severity_name(severity: str) -> str:
    return {"high": "Висок", "medium": "Среден", "low": "Нисък"}.get(severity, "Неизвестен")


def get_outage_type_name(outage_type: str) -> str:
    if is_emergency(outage_type):
        return "Авария"
    if is_scheduled(outage_type):
        return "Планирано"
    return "В ход"


def get_outage_coordinates(outage: Outage, rng: Optional[random.Random] = None) -> dict:
    """Approximate map position: the matched district centre plus a small jitter."""
    rng = rng or random.Random()
    area = outage.area.lower()
    district = outage.district.lower()
    for name, coords in SOFIA_DISTRICTS.items():
        needle = name.lower()
        if needle in district or needle in area:
            return {
                "lat": coords["lat"] + (rng.random() - 0.5) * 0.01,
                "lng": coords["lng"] + (rng.random() - 0.5) * 0.01,
                "district": name,
            }
    return {
        "lat": SOFIA_CENTER["lat"] + (rng.random() - 0.5) * 0.02,
        "lng": SOFIA_CENTER["lng"] + (rng.random() - 0.5) * 0.02,
        "district": "София",
    }


def to_marker(outage: Outage, rng: Optional[random.Random] = None) -> OutageMarker:
    """Map pin for an outage, with labels already resolved for display."""
    coords = get_outage_coordinates(outage, rng)
    return OutageMarker(
        id=outage.id,
        lat=coords["lat"],
        lng=coords["lng"],
        district=outage.district or coords["district"],
        area=outage.area,
        service_type=outage.service_type,
        service_name=get_service_name(outage.service_type),
        service_color=get_service_color(outage.service_type),
        service_icon=get_service_icon_name(outage.service_type),
        severity=outage.severity,
        severity_name=get_severity_name(outage.severity),
        type_name=get_outage_type_name(outage.type),
        start=outage.start,
        end=outage.end,
    )
