"""Entry point for running the libraryd daemon.

This module provides the CLI entry point for starting the daemon.
"""

import logging
import sys

import uvicorn

from library_core.config.loader import load_config

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the libraryd daemon.

    Loads configuration and starts the uvicorn server.
    """
    try:
        config = load_config()

        uvicorn.run(
            "libraryd.main:create_app",
            factory=True,
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
            workers=config.workers,
        )

    except KeyboardInterrupt:
        logger.info("Received interrupt, shutting down")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Failed to start daemon: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
