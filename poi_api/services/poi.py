import logging
import math
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from poi_api.domain.poi import POI
from poi_api.exceptions import PersistenceError, ValidationFailedError
from poi_api.repositories.poi import PoiRepository
from poi_api.schemas.poi import (
    Pagination,
    PoiCreate,
    PoiPage,
    PoiStatusUpdate,
    PoiUpdate,
)
from poi_api.services.validation import validate_payload

logger = logging.getLogger(__name__)


class PoiService:
    """
    Validates raw payloads, delegates to the repository and normalizes
    failures into NotFoundError, ValidationFailedError or PersistenceError.
    """

    def __init__(self, repository: PoiRepository):
        self.repository = repository

    async def create_poi(self, payload: Any) -> POI:
        data = validate_payload(PoiCreate, payload)
        try:
            poi = await self.repository.create_poi(data)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to create POI {data.name!r}")
            # Cause stays in the log, never in the response
            raise PersistenceError("Failed to create POI", cause=e) from e
        logger.info(f"Created POI {poi.id} ({poi.name})")
        return poi

    async def get_poi(self, poi_id: str) -> POI:
        try:
            return await self.repository.get_poi(poi_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to retrieve POI {poi_id}")
            raise PersistenceError("Failed to retrieve POI", cause=e) from e

    async def list_pois(self, page: int = 1, limit: int = 10) -> PoiPage:
        bad = [
            {"field": name, "message": "Must be a positive integer"}
            for name, value in (("page", page), ("limit", limit))
            if value < 1
        ]
        if bad:
            raise ValidationFailedError(bad)
        try:
            items, total = await self.repository.list_pois(page, limit)
        except SQLAlchemyError as e:
            logger.exception("Failed to list POIs")
            raise PersistenceError("Failed to retrieve POIs", cause=e) from e
        return PoiPage(
            data=items,
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                pages=math.ceil(total / limit),
            ),
        )

    async def update_poi(self, poi_id: str, payload: Any) -> POI:
        data = validate_payload(PoiUpdate, payload)
        try:
            poi = await self.repository.update_poi(poi_id, data)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to update POI {poi_id}")
            raise PersistenceError("Failed to update POI", cause=e) from e
        logger.info(f"Updated POI {poi_id}: {sorted(data.model_fields_set)}")
        return poi

    async def update_poi_status(self, poi_id: str, payload: Any) -> POI:
        data = validate_payload(PoiStatusUpdate, payload)
        try:
            poi = await self.repository.update_poi_status(poi_id, data.status)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to update status of POI {poi_id}")
            raise PersistenceError("Failed to update POI status", cause=e) from e
        logger.info(f"POI {poi_id} status -> {poi.status.value}")
        return poi

    async def delete_poi(self, poi_id: str) -> None:
        try:
            await self.repository.delete_poi(poi_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to delete POI {poi_id}")
            raise PersistenceError("Failed to delete POI", cause=e) from e
        logger.info(f"Deleted POI {poi_id}")
