import os
import tempfile

# Settings are read at import time: point the app at SQLite before importing it
_TMP_DIR = tempfile.mkdtemp(prefix="poi-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TMP_DIR}/app.db")
os.environ.setdefault("LOG_DIR", os.path.join(_TMP_DIR, "logs"))

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from poi_api.api.deps import get_db_session, get_poi_repository
from poi_api.db import models  # noqa: F401
from poi_api.db.base import Base
from poi_api.db.models import FuelProductRecord, PriceRecord, PumpRecord
from poi_api.db.session import create_engine_for, create_session_factory
from poi_api.main import app
from poi_api.repositories.poi import PoiRepository
from poi_api.services.poi import PoiService


@pytest.fixture
async def engine(tmp_path):
    engine = create_engine_for(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def repository(session_factory):
    return PoiRepository(session_factory)


@pytest.fixture
def service(repository):
    return PoiService(repository)


@pytest.fixture
async def client(session_factory):
    async def override_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_poi_repository] = lambda: PoiRepository(session_factory)
    app.dependency_overrides[get_db_session] = override_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def count_rows(session_factory):
    """``await count_rows(Model, poi_id=...)`` -> number of matching rows."""

    async def _count(model, **filters):
        stmt = select(func.count()).select_from(model)
        for column, value in filters.items():
            stmt = stmt.where(getattr(model, column) == value)
        async with session_factory() as session:
            return (await session.execute(stmt)).scalar_one()

    return _count


@pytest.fixture
def seed_pumps(session_factory):
    """Attach two pumps with fuel products and prices to a POI, straight through the ORM."""

    async def _seed(poi_id):
        async with session_factory() as session:
            async with session.begin():
                for pump_name in ("Pump 1", "Pump 2"):
                    pump = PumpRecord(poi_id=poi_id, name=pump_name)
                    pump.fuel_products = [
                        FuelProductRecord(
                            name="Diesel",
                            prices=[PriceRecord(amount=1.659, currency="EUR")],
                        ),
                        FuelProductRecord(
                            name="Super E10",
                            prices=[
                                PriceRecord(amount=1.789, currency="EUR"),
                                PriceRecord(amount=1.95, currency="CHF"),
                            ],
                        ),
                    ]
                    session.add(pump)

    return _seed


@pytest.fixture
def address_payload():
    return {
        "country": "Germany",
        "zipCode": "10115",
        "city": "Berlin",
        "street": "Invalidenstrasse",
        "houseNumber": "42a",
    }


@pytest.fixture
def opening_hours_payload():
    return [
        {"dayOfWeek": "MONDAY", "openTime": "06:00", "closeTime": "22:00", "isClosed": False},
        {"dayOfWeek": "SATURDAY", "openTime": "08:00", "closeTime": "20:30", "isClosed": False},
        {"dayOfWeek": "SUNDAY", "openTime": "00:00", "closeTime": "00:00", "isClosed": True},
    ]


@pytest.fixture
def poi_payload(address_payload, opening_hours_payload):
    return {
        "name": "Aral Invalidenstrasse",
        "status": "ONLINE",
        "address": address_payload,
        "openingHours": opening_hours_payload,
    }
