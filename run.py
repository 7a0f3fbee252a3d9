import logging

import uvicorn
from photostrip.main import app
from photostrip.config import settings, configure_logging

logger = logging.getLogger("photostrip")

if __name__ == "__main__":
    configure_logging()
    logger.info("Starting %s", settings.app_name)
    logger.info("API available at: http://%s:%s/api", settings.host, settings.port)
    logger.info("Square crops: %dx%d, photo counts: %s",
                settings.square_size, settings.square_size, settings.photo_count_choices)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
