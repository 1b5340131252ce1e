from sqlalchemy import Column, String, Float, ForeignKey
from sqlalchemy.orm import relationship

from poi_api.db.base import Base, new_id


class PumpRecord(Base):
    __tablename__ = "pumps"

    id = Column(String(36), primary_key=True, default=new_id)
    poi_id = Column(
        String(36),
        ForeignKey("pois.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)

    poi = relationship("PoiRecord", back_populates="pumps")
    fuel_products = relationship(
        "FuelProductRecord",
        back_populates="pump",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="FuelProductRecord.name",
    )


class FuelProductRecord(Base):
    __tablename__ = "fuel_products"

    id = Column(String(36), primary_key=True, default=new_id)
    pump_id = Column(
        String(36),
        ForeignKey("pumps.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)

    pump = relationship("PumpRecord", back_populates="fuel_products")
    prices = relationship(
        "PriceRecord",
        back_populates="fuel_product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PriceRecord.id",
    )


class PriceRecord(Base):
    __tablename__ = "prices"

    id = Column(String(36), primary_key=True, default=new_id)
    fuel_product_id = Column(
        String(36),
        ForeignKey("fuel_products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount = Column(Float, nullable=False)
    currency = Column(String(3), nullable=False, comment="ISO-4217 currency code")

    fuel_product = relationship("FuelProductRecord", back_populates="prices")
