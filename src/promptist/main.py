"""Main module for promptist."""

import logging
import os
import sys

from promptist.cli import run
from promptist.config import settings
from promptist.config.paths import get_paths


def setup_logging() -> None:
    """Configure logging to file for debugging."""
    paths = get_paths()
    paths.state_dir.mkdir(parents=True, exist_ok=True)
    log_file = paths.debug_log

    # Set level from env var, default to INFO
    level = os.environ.get("PROMPTIST_LOG_LEVEL", "INFO").upper()

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_file, mode="a", encoding="utf-8"),
        ],
    )
    logging.info("Promptist starting, logging to %s", log_file)
    logging.info("Data directory: %s", settings.data_directory)


def main() -> None:
    """Entry point for the Promptist application."""
    sys.exit(run(configure_logging=setup_logging))


if __name__ == "__main__":
    main()
