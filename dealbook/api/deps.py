"""FastAPI dependency injection."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker

from dealbook.config import settings
from dealbook.data.property_repo import PropertyRepository
from dealbook.data.static_deals import load_static_deals
from dealbook.models.db import Base

engine = create_async_engine(settings.database_url, echo=settings.debug)
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def init_db(bind: AsyncEngine = engine) -> None:
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncSession:
    async with async_session() as session:
        yield session


def get_repository(session: AsyncSession = Depends(get_db)) -> PropertyRepository:
    static = load_static_deals() if settings.static_deals_enabled else []
    return PropertyRepository(session, static)
