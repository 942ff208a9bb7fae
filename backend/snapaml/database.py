"""Database engine, session factory, and declarative base.

All onboarding tables live in a single schema. Row-level scoping by user
is done in the service layer: every query filters on the authenticated
user id taken from the JWT.

Session dependency for FastAPI:
  - get_db()  → one transaction per request (commit on success, rollback on error)
"""

from datetime import datetime, timezone
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.orm import DeclarativeBase

from snapaml.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_size=20,
    max_overflow=10,
)

async_session = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session; the whole request runs in one transaction."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
