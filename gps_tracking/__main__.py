import logging

import uvicorn

from gps_tracking.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger(__name__).info("Starting GPS Tracking API on %s:%d", settings.host, settings.port)
    uvicorn.run("gps_tracking.main:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
