"""Saved locations stored in the database"""
import logging

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from airalert.core.errors import EnumerationFailure
from airalert.core.models import Coordinates, SavedLocation
from airalert.db.models import SavedLocationRecord

logger = logging.getLogger(__name__)


def _to_location(record: SavedLocationRecord) -> SavedLocation:
    return SavedLocation(
        label=record.label,
        coordinates=Coordinates(record.latitude, record.longitude),
        id=record.id,
    )


class SavedLocationRepository:
    """Saved location list provider"""

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def saved_locations(self) -> list[SavedLocation]:
        """
        List saved locations in insertion order

        Raises:
            EnumerationFailure: If the database can't be queried
        """
        try:
            async with self._session_factory() as db:
                result = await db.execute(
                    select(SavedLocationRecord).order_by(SavedLocationRecord.id)
                )
                records = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Error listing saved locations: {e}", exc_info=True)
            raise EnumerationFailure(str(e)) from e

        return [_to_location(record) for record in records]

    async def add_location(self, label: str, latitude: float, longitude: float) -> SavedLocation:
        """
        Save a new location

        Args:
            label: User-defined name
            latitude: Location latitude
            longitude: Location longitude

        Returns:
            The stored location with its id
        """
        async with self._session_factory() as db:
            record = SavedLocationRecord(label=label, latitude=latitude, longitude=longitude)
            db.add(record)
            await db.commit()
            await db.refresh(record)

        logger.info(f"Saved location {record.id} ({label})")
        return _to_location(record)

    async def remove_location(self, location_id: int) -> bool:
        """
        Delete a saved location

        Returns:
            True if a location was deleted
        """
        async with self._session_factory() as db:
            result = await db.execute(
                delete(SavedLocationRecord).where(SavedLocationRecord.id == location_id)
            )
            await db.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Removed saved location {location_id}")
        return deleted
