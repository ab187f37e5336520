# File: pakli/models/outage.py

from __future__ import annotations
from datetime import datetime
from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from pakli.db.base import Base

class OutageRecord(Base):
    """Raw outage as written by the scraper; normalized on read."""
    __tablename__ = "outages"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    source: Mapped[str | None] = mapped_column(String(120), nullable=True)
    affected_area: Mapped[str | None] = mapped_column(String(500), nullable=True)
    address: Mapped[str | None] = mapped_column(String(300), nullable=True)
    district: Mapped[str | None] = mapped_column(String(120), index=True, nullable=True)
    service_type: Mapped[str | None] = mapped_column(String(20), index=True, nullable=True)
    category: Mapped[str | None] = mapped_column(String(40), index=True, nullable=True)
    description: Mapped[str | None] = mapped_column(String(4000), nullable=True)
    severity: Mapped[str | None] = mapped_column(String(10), nullable=True)
    start_time: Mapped[str | None] = mapped_column(String(40), nullable=True)
    end_time: Mapped[str | None] = mapped_column(String(40), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)

    def to_raw(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "affectedArea": self.affected_area,
            "location": {"address": self.address, "district": self.district},
            "serviceType": self.service_type,
            "category": self.category,
            "description": self.description,
            "severity": self.severity,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }
