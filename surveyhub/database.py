# surveyhub/database.py
import logging
from typing import AsyncIterator, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from .core.config import settings

logger = logging.getLogger(__name__)


def make_engine(database_url: str, echo: bool = False, **engine_kwargs) -> AsyncEngine:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
        # One shared connection so every session sees the same in-memory database
        return create_async_engine(
            database_url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(database_url, echo=echo, **engine_kwargs)


logger.debug("Using DATABASE_URL: %s", settings.database_url)

engine = make_engine(settings.database_url, echo=settings.database_echo)

AsyncSessionFactory = async_sessionmaker(
    bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False
)

Base = declarative_base()


async def get_db_session() -> AsyncIterator[AsyncSession]:
    async with AsyncSessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_db_and_tables(bind: Optional[AsyncEngine] = None) -> None:
    """Create every table registered on ``Base`` that does not exist yet."""
    from .models import statistic, survey, survey_result  # noqa: F401

    bind = bind or engine
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured on %s", bind.url)
