from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, Enum
from sqlalchemy.orm import relationship

from poi_api.db.base import Base, new_id
from poi_api.domain.poi import DayOfWeek


class OpeningHoursRecord(Base):
    __tablename__ = "opening_hours"

    id = Column(String(36), primary_key=True, default=new_id)
    poi_id = Column(
        String(36),
        ForeignKey("pois.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    day_of_week = Column(Enum(DayOfWeek, name="day_of_week"), nullable=False)
    open_time = Column(String(5), nullable=False, comment="HH:MM, 24h")
    close_time = Column(String(5), nullable=False, comment="HH:MM, 24h")
    is_closed = Column(Boolean, nullable=False, default=False)
    position = Column(Integer, nullable=False, default=0, comment="Order of the entry in the submitted schedule")

    poi = relationship("PoiRecord", back_populates="opening_hours")
