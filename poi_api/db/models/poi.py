from sqlalchemy import Column, String, DateTime, Enum, func
from sqlalchemy.orm import relationship

from poi_api.db.base import Base, new_id, utcnow
from poi_api.domain.poi import PoiStatus


class PoiRecord(Base):
    __tablename__ = "pois"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    status = Column(Enum(PoiStatus, name="poi_status"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    # Children are removed by ON DELETE CASCADE in the store, never one by one.
    address = relationship(
        "AddressRecord",
        back_populates="poi",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    opening_hours = relationship(
        "OpeningHoursRecord",
        back_populates="poi",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OpeningHoursRecord.position",
    )
    pumps = relationship(
        "PumpRecord",
        back_populates="poi",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PumpRecord.name",
    )
