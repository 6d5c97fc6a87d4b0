"""Run the API with uvicorn: ``python -m course_api``."""

import uvicorn

from course_api.core.config import get_settings
from course_api.core.logging_safety import configure_logging
from course_api.main import create_app


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
