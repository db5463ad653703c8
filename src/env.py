"""Environment configuration loading.

Settings come from environment variables. A .env file is looked up by
walking up from the working directory, then from this package's directory;
values already present in the environment win.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_FILENAME = ".env"


def find_env_file(start: Path | None = None) -> Path | None:
    """Find the nearest .env file at or above start (default: cwd)."""
    directory = (start or Path.cwd()).resolve()
    for candidate in (directory, *directory.parents):
        env_path = candidate / ENV_FILENAME
        if env_path.is_file():
            return env_path
    return None


def load_environment(start: Path | None = None) -> Path | None:
    """Load the nearest .env file, if any. Returns the loaded path."""
    env_path = find_env_file(start) or find_env_file(Path(__file__).parent)
    if env_path is None:
        logger.debug("No .env file found; using process environment only")
        return None

    load_dotenv(env_path, override=False)
    logger.info(f"Loaded environment from {env_path}")
    return env_path
