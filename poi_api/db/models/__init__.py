# Database models package.
# Every model is imported here so that Alembic and create_all see all tables.
from .poi import PoiRecord
from .address import AddressRecord
from .opening_hours import OpeningHoursRecord
from .pump import PumpRecord, FuelProductRecord, PriceRecord
