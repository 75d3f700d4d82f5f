"""Async SQLAlchemy engine and session factory"""
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def create_session_factory(database_url: str, **engine_kwargs) -> tuple[AsyncEngine, async_sessionmaker]:
    """
    Create engine and session factory

    Args:
        database_url: SQLAlchemy async URL (postgresql+asyncpg://..., sqlite+aiosqlite://...)
        **engine_kwargs: Extra create_async_engine arguments

    Returns:
        Tuple of (engine, session factory)
    """
    engine = create_async_engine(database_url, **engine_kwargs)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    return engine, session_factory


async def init_db(engine: AsyncEngine):
    """Create tables if they don't exist"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
