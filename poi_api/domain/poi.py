"""Immutable POI aggregate and the pure functions that transform it.

Entities are frozen pydantic models built from ORM rows with
``from_attributes``. Child collections are tuples; ``None`` means the
collection was never initialised, which the ``add_*`` helpers handle lazily.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PoiStatus(str, enum.Enum):
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"
    MAINTENANCE = "MAINTENANCE"


class DayOfWeek(str, enum.Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"


class Entity(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Address(Entity):
    id: str
    country: str
    zip_code: str
    city: str
    street: str
    house_number: str
    poi_id: str


class OpeningHours(Entity):
    id: str
    day_of_week: DayOfWeek
    open_time: str
    close_time: str
    is_closed: bool
    poi_id: str


class Price(Entity):
    id: str
    amount: float = Field(..., ge=0)
    currency: str
    fuel_product_id: str


class FuelProduct(Entity):
    id: str
    name: str
    pump_id: str
    prices: Optional[tuple[Price, ...]] = None


class Pump(Entity):
    id: str
    name: str
    poi_id: str
    fuel_products: Optional[tuple[FuelProduct, ...]] = None


class POI(Entity):
    id: str
    name: str
    status: PoiStatus
    created_at: datetime
    updated_at: datetime
    address: Optional[Address] = None
    opening_hours: Optional[tuple[OpeningHours, ...]] = None
    pumps: Optional[tuple[Pump, ...]] = None


# Status transitions are unconstrained: every status is reachable from every other.

def with_status(poi: POI, status: PoiStatus) -> POI:
    return poi.model_copy(update={"status": status})


def open_poi(poi: POI) -> POI:
    return with_status(poi, PoiStatus.ONLINE)


def close_poi(poi: POI) -> POI:
    return with_status(poi, PoiStatus.OFFLINE)


def start_maintenance(poi: POI) -> POI:
    return with_status(poi, PoiStatus.MAINTENANCE)


def add_pump(poi: POI, pump: Pump) -> POI:
    return poi.model_copy(update={"pumps": (poi.pumps or ()) + (pump,)})


def remove_pump(poi: POI, pump_id: str) -> POI:
    """Drop the pump with ``pump_id``; unknown ids leave the POI unchanged."""
    if poi.pumps is None:
        return poi
    return poi.model_copy(
        update={"pumps": tuple(p for p in poi.pumps if p.id != pump_id)}
    )


def add_fuel_product(pump: Pump, product: FuelProduct) -> Pump:
    return pump.model_copy(
        update={"fuel_products": (pump.fuel_products or ()) + (product,)}
    )


def remove_fuel_product(pump: Pump, product_id: str) -> Pump:
    if pump.fuel_products is None:
        return pump
    return pump.model_copy(
        update={
            "fuel_products": tuple(
                fp for fp in pump.fuel_products if fp.id != product_id
            )
        }
    )


def add_price(product: FuelProduct, price: Price) -> FuelProduct:
    return product.model_copy(update={"prices": (product.prices or ()) + (price,)})


def remove_price(product: FuelProduct, price_id: str) -> FuelProduct:
    if product.prices is None:
        return product
    return product.model_copy(
        update={"prices": tuple(p for p in product.prices if p.id != price_id)}
    )
