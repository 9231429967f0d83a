import sys
import logging
from pathlib import Path

# Make the chatroom package importable when run from a checkout
sys.path.append(str(Path(__file__).resolve().parent))

import uvicorn
from chatroom.core.config import settings

if __name__ == "__main__":
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not settings.DATABASE_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    # Tables, theme seed and the data file are handled by the app lifespan
    uvicorn.run(
        "chatroom.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=False
    )
