from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from poi_api.db.base import Base, new_id


class AddressRecord(Base):
    __tablename__ = "addresses"

    id = Column(String(36), primary_key=True, default=new_id)
    # unique: at most one address per POI
    poi_id = Column(
        String(36),
        ForeignKey("pois.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    country = Column(String(100), nullable=False)
    zip_code = Column(String(20), nullable=False)
    city = Column(String(255), nullable=False)
    street = Column(String(255), nullable=False)
    house_number = Column(String(20), nullable=False)

    poi = relationship("PoiRecord", back_populates="address")
