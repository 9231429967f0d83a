from sqlalchemy.ext.asyncio import AsyncEngine
from pathlib import Path
from chatroom.core.database import Base

# Import models so they are registered in the metadata before create_all
from chatroom.models import user  # noqa: F401
from chatroom.models import message  # noqa: F401
from chatroom.models import theme  # noqa: F401

async def init_db(engine: AsyncEngine) -> None:
    """Create the chat tables if they are missing."""
    # SQLite needs the directory of the database file to exist
    url = engine.url
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
