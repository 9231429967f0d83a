from pydantic_settings import BaseSettings
from pathlib import Path
from typing import Literal

class Settings(BaseSettings):
    # Project
    PROJECT_NAME: str = "Chatroom API"
    VERSION: str = "1.0.0"
    API_STR: str = "/api"
    API_V1_STR: str = "/api/v1"

    # Paths
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"

    # Server
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    # Storage: "memory" keeps everything in-process and mirrors it to DATA_FILE,
    # "database" goes through SQLAlchemy
    STORAGE_BACKEND: Literal["memory", "database"] = "memory"
    DATA_FILE: Path = DATA_DIR / "chat-data.json"
    DATABASE_URL: str = f"sqlite+aiosqlite:///{DATA_DIR}/chat.db"
    DATABASE_ECHO: bool = False

    # Chat limits
    AVATAR_MAX_BYTES: int = 1024 * 1024
    ACTIVITY_WINDOW_MINUTES: int = 5
    MESSAGE_MAX_LENGTH: int = 500
    MESSAGES_PAGE_SIZE: int = 50
    ATTACHMENT_PREVIEW_CHARS: int = 1000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

# Shared settings instance
settings = Settings()
