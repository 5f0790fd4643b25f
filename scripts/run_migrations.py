#!/usr/bin/env python3
"""Apply rating schema migrations, reporting failures to Logfire."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from stars.config import Settings
from stars.util.logging import setup_logging
from stars.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the schema to the given revision (``head`` by default)."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)
    revision = argv[0] if argv else "head"

    try:
        with logfire.span("migrations.upgrade", revision=revision):
            command.upgrade(Config("alembic.ini"), revision)
        logfire.info("Rating schema is up to date", revision=revision)
        return 0

    except Exception as e:
        logfire.error(
            "Rating schema migration failed",
            revision=revision,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
