"""Transactional access to the POI aggregate.

Every mutation runs as an explicit transaction script inside one
``session.begin()`` block: ordered statements, flushed step by step, rolled
back as a whole when any step fails. Cascading deletes are left to the
``ON DELETE CASCADE`` foreign keys of the store.
"""

from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from poi_api.db.base import utcnow
from poi_api.db.models.address import AddressRecord
from poi_api.db.models.opening_hours import OpeningHoursRecord
from poi_api.db.models.poi import PoiRecord
from poi_api.db.models.pump import PumpRecord, FuelProductRecord
from poi_api.domain.poi import POI, PoiStatus
from poi_api.exceptions import NotFoundError, PersistenceError
from poi_api.schemas.poi import AddressIn, OpeningHoursIn, PoiCreate, PoiUpdate

ENTITY = "POI"


def _hydrate_options():
    return (
        selectinload(PoiRecord.address),
        selectinload(PoiRecord.opening_hours),
        selectinload(PoiRecord.pumps)
        .selectinload(PumpRecord.fuel_products)
        .selectinload(FuelProductRecord.prices),
    )


def _summary(record: PoiRecord) -> POI:
    return POI(
        id=record.id,
        name=record.name,
        status=record.status,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class PoiRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create_poi(self, data: PoiCreate) -> POI:
        """
        Insert the POI, then its address and opening hours, all in one
        transaction. Only the scalar POI fields are returned.
        """
        async with self._session_factory() as session:
            async with session.begin():
                record = PoiRecord(name=data.name, status=data.status)
                session.add(record)
                await session.flush()

                if data.address is not None:
                    session.add(self._build_address(record.id, data.address))
                    await session.flush()

                if data.opening_hours:
                    session.add_all(self._build_opening_hours(record.id, data.opening_hours))
                    await session.flush()

                created = _summary(record)
        return created

    async def get_poi(self, poi_id: str) -> POI:
        async with self._session_factory() as session:
            return await self._load(session, poi_id)

    async def list_pois(self, page: int, limit: int) -> tuple[list[POI], int]:
        """One page of hydrated POIs plus the total row count."""
        offset = (page - 1) * limit
        async with self._session_factory() as session:
            total = (
                await session.execute(select(func.count()).select_from(PoiRecord))
            ).scalar_one()
            # Pages past the end are empty; huge offsets would also overflow the driver
            if offset >= total:
                return [], total
            stmt = (
                select(PoiRecord)
                .options(*_hydrate_options())
                .order_by(PoiRecord.created_at, PoiRecord.id)
                .limit(limit)
                .offset(offset)
            )
            records = (await session.execute(stmt)).scalars().all()
            return [POI.model_validate(r) for r in records], total

    async def update_poi(self, poi_id: str, data: PoiUpdate) -> POI:
        sent = data.model_fields_set
        async with self._session_factory() as session:
            async with session.begin():
                await self._ensure_exists(session, poi_id)

                scalars = {k: getattr(data, k) for k in ("name", "status") if k in sent}
                if scalars:
                    await self._update_scalars(session, poi_id, scalars)

                if data.address is not None:
                    await self._upsert_address(session, poi_id, data.address)

                # An empty list leaves the stored schedule untouched.
                if data.opening_hours:
                    await self._replace_opening_hours(session, poi_id, data.opening_hours)

                updated = await self._load(session, poi_id)
        return updated

    async def update_poi_status(self, poi_id: str, status: PoiStatus) -> POI:
        async with self._session_factory() as session:
            async with session.begin():
                await self._ensure_exists(session, poi_id)
                await self._update_scalars(session, poi_id, {"status": status})
                updated = await self._load(session, poi_id)
        return updated

    async def delete_poi(self, poi_id: str) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                await self._ensure_exists(session, poi_id)
                result = await session.execute(delete(PoiRecord).where(PoiRecord.id == poi_id))
                if result.rowcount == 0:
                    raise PersistenceError(f"POI {poi_id} was deleted concurrently")

    # --- transaction steps ---

    async def _ensure_exists(self, session: AsyncSession, poi_id: str) -> None:
        found = (
            await session.execute(select(PoiRecord.id).where(PoiRecord.id == poi_id))
        ).scalar_one_or_none()
        if found is None:
            raise NotFoundError(ENTITY, poi_id)

    async def _load(self, session: AsyncSession, poi_id: str) -> POI:
        stmt = (
            select(PoiRecord)
            .options(*_hydrate_options())
            .where(PoiRecord.id == poi_id)
            .execution_options(populate_existing=True)
        )
        record = (await session.execute(stmt)).scalars().first()
        if record is None:
            raise NotFoundError(ENTITY, poi_id)
        return POI.model_validate(record)

    async def _update_scalars(self, session: AsyncSession, poi_id: str, values: dict) -> None:
        result = await session.execute(
            update(PoiRecord)
            .where(PoiRecord.id == poi_id)
            .values(**values, updated_at=utcnow())
        )
        # The row vanished between the existence check and the write
        if result.rowcount == 0:
            raise PersistenceError(f"POI {poi_id} was deleted concurrently")

    async def _upsert_address(self, session: AsyncSession, poi_id: str, address: AddressIn) -> None:
        existing = (
            await session.execute(select(AddressRecord).where(AddressRecord.poi_id == poi_id))
        ).scalars().first()
        if existing is None:
            session.add(self._build_address(poi_id, address))
        else:
            for k, v in address.model_dump().items():
                setattr(existing, k, v)
        await session.flush()

    async def _replace_opening_hours(
        self, session: AsyncSession, poi_id: str, hours: list[OpeningHoursIn]
    ) -> None:
        await session.execute(
            delete(OpeningHoursRecord).where(OpeningHoursRecord.poi_id == poi_id)
        )
        session.add_all(self._build_opening_hours(poi_id, hours))
        await session.flush()

    def _build_address(self, poi_id: str, address: AddressIn) -> AddressRecord:
        return AddressRecord(poi_id=poi_id, **address.model_dump())

    def _build_opening_hours(
        self, poi_id: str, hours: list[OpeningHoursIn]
    ) -> list[OpeningHoursRecord]:
        return [
            OpeningHoursRecord(poi_id=poi_id, position=i, **entry.model_dump())
            for i, entry in enumerate(hours)
        ]
