import asyncio

import pytest
from sqlalchemy.pool import StaticPool

from airalert.core.errors import EnumerationFailure
from airalert.core.models import Coordinates, SavedLocation
from airalert.db.database import create_session_factory, init_db
from airalert.services.saved_locations import SavedLocationRepository

DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def _run(scenario, create_tables=True):
    """Run scenario(repository) against a fresh in-memory database"""

    async def main():
        engine, session_factory = create_session_factory(DATABASE_URL, poolclass=StaticPool)
        try:
            if create_tables:
                await init_db(engine)
            return await scenario(SavedLocationRepository(session_factory))
        finally:
            await engine.dispose()

    return asyncio.run(main())


def test_empty_list():
    async def scenario(repository):
        return await repository.saved_locations()

    assert _run(scenario) == []


def test_locations_listed_in_insertion_order():
    async def scenario(repository):
        home = await repository.add_location("Home", 43.238, 76.945)
        office = await repository.add_location("Office", 43.256, 76.928)
        return home, office, await repository.saved_locations()

    home, office, locations = _run(scenario)

    assert home.id is not None
    assert office.id > home.id
    assert locations == [
        SavedLocation(label="Home", coordinates=Coordinates(43.238, 76.945), id=home.id),
        SavedLocation(label="Office", coordinates=Coordinates(43.256, 76.928), id=office.id),
    ]


def test_remove_location():
    async def scenario(repository):
        home = await repository.add_location("Home", 43.238, 76.945)
        await repository.add_location("Office", 43.256, 76.928)
        removed = await repository.remove_location(home.id)
        removed_again = await repository.remove_location(home.id)
        return removed, removed_again, await repository.saved_locations()

    removed, removed_again, locations = _run(scenario)

    assert removed is True
    assert removed_again is False
    assert [location.label for location in locations] == ["Office"]


def test_database_errors_become_enumeration_failures():
    async def scenario(repository):
        return await repository.saved_locations()

    with pytest.raises(EnumerationFailure):
        _run(scenario, create_tables=False)
