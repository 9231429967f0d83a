from typing import Optional
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from chatroom.core.config import settings

# Base class for ORM models
Base = declarative_base()


def build_engine(url: Optional[str] = None) -> AsyncEngine:
    return create_async_engine(url or settings.DATABASE_URL, echo=settings.DATABASE_ECHO)


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
