# tabstate/main.py

import uvicorn

from tabstate.config import get_settings
from tabstate.observability.logger import configure_logging
from tabstate.utils.logger import log_info


def main():
    settings = get_settings()
    configure_logging(settings)

    log_info(f"Starting tabstate on http://{settings.HOST}:{settings.PORT} "
             f"(storage={settings.STORAGE_BACKEND})")
    # uvicorn handles SIGINT/SIGTERM and drains in-flight requests
    uvicorn.run(
        "tabstate.main_fastapi:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
