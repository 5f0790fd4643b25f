#!/usr/bin/env python3
"""Start the rating API, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from stars.config import Settings
from stars.util.logging import setup_logging
from stars.util.observability import configure_logfire


def main() -> int:
    """Serve the rating API with uvicorn."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting rating API",
            host=settings.server.host,
            port=settings.server.port,
            rateable_types=sorted(settings.rating.rateable_types),
        )
        uvicorn.run(
            "stars.interface.api.app:create_app",
            factory=True,
            host=settings.server.host,
            port=settings.server.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "Rating API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
