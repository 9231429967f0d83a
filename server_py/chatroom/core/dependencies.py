from fastapi import Request
from chatroom.core.config import Settings
from chatroom.core.database import build_engine
from chatroom.services.database_storage import DatabaseStorage
from chatroom.services.memory_storage import MemoryStorage
from chatroom.services.persistence import JsonFilePersister
from chatroom.services.storage import ChatStorage

def build_storage(config: Settings) -> ChatStorage:
    """Pick the storage implementation once, at startup."""
    limits = {
        "avatar_max_bytes": config.AVATAR_MAX_BYTES,
        "activity_window_minutes": config.ACTIVITY_WINDOW_MINUTES,
    }
    if config.STORAGE_BACKEND == "database":
        return DatabaseStorage(build_engine(config.DATABASE_URL), **limits)
    return MemoryStorage(JsonFilePersister(config.DATA_FILE), **limits)

def get_storage(request: Request) -> ChatStorage:
    """
    Dependency returning the storage created by the application lifespan.
    """
    return request.app.state.storage
