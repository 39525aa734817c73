"""
ASGI entrypoint: ``uvicorn todo_service.main:app``
"""

import sys
from pathlib import Path

# Allow running ``python todo_service/main.py`` from a checkout
sys.path.append(str(Path(__file__).resolve().parent.parent))

from todo_service.config import get_settings
from todo_service.observability.logging_config import setup_logging
from todo_service.server import create_app

settings = get_settings()

# Logging is configured at import time so startup errors are structured too
setup_logging(env=settings.ENV, level=settings.LOG_LEVEL)

# ConfigError propagates from here: the process refuses to start
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("todo_service.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
