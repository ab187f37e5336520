#pakli/services/outage_source.py
import json
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pakli.core.config import outages_data_file, settings
from pakli.models.outage import OutageRecord
from pakli.schemas.outage import Outage

logger = logging.getLogger(__name__)


class OutageSourceError(Exception):
    pass


def _load_from_file() -> list:
    path = outages_data_file()
    try:
        with path.open(encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, ValueError) as e:
        raise OutageSourceError(f"Cannot read {path}: {e}") from e
    # scraper dumps are either a bare list or {"data": [...]}
    if isinstance(payload, dict):
        payload = payload.get("data") or payload.get("outages") or []
    if not isinstance(payload, list):
        raise OutageSourceError(f"Unexpected JSON shape in {path}")
    return payload


def _load_from_db(db: Session) -> list:
    try:
        rows = db.query(OutageRecord).order_by(OutageRecord.created_at.desc()).all()
    except SQLAlchemyError as e:
        db.rollback()
        raise OutageSourceError(f"Cannot query outages table: {e}") from e
    return [r.to_raw() for r in rows]


def load_outages(db: Optional[Session] = None) -> list:
    """Raw upstream records from the configured source. Empty counts as a failure."""
    if settings.outages_source == "db":
        if db is None:
            raise OutageSourceError("Database session required for OUTAGES_SOURCE=db")
        records = _load_from_db(db)
    else:
        records = _load_from_file()
    if not records:
        raise OutageSourceError("No data found in outage source")
    logger.debug("Loaded %s raw outages from %s", len(records), settings.outages_source)
    return records


def fallback_outages() -> list[Outage]:
    return [
        Outage(
            id="fallback-1",
            source="Софийска вода",
            area="кв. Център - тестова зона",
            type="Аварийно спиране",
            category="emergency",
            description="Тестово аварийно прекъсване",
            start="Днес, 10:00 ч.",
            end="Днес, 16:00 ч.",
            timestamp=datetime.now(timezone.utc).isoformat(),
            service_type="water",
            district="Център",
            severity="high",
        )
    ]
