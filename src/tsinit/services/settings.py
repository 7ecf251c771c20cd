"""Environment-driven settings."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

NPM_ENV = "TSINIT_NPM"
COMMAND_TIMEOUT_ENV = "TSINIT_COMMAND_TIMEOUT"
TEMPLATE_DIR_ENV = "TSINIT_TEMPLATE_DIR"
LOG_FILE_ENV = "TSINIT_LOG_FILE"
LOG_LEVEL_ENV = "TSINIT_LOG_LEVEL"

DEFAULT_NPM = "npm"
DEFAULT_COMMAND_TIMEOUT = 600.0
DEFAULT_LOG_LEVEL = "INFO"


def get_npm_executable() -> str:
    """Package manager executable, ``npm`` unless TSINIT_NPM is set."""
    return os.getenv(NPM_ENV) or DEFAULT_NPM


def get_command_timeout() -> float:
    """
    Seconds to wait for an external command.

    Uses TSINIT_COMMAND_TIMEOUT if it holds a positive number, otherwise the default.
    """
    raw = os.getenv(COMMAND_TIMEOUT_ENV)
    if not raw:
        return DEFAULT_COMMAND_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r", COMMAND_TIMEOUT_ENV, raw)
        return DEFAULT_COMMAND_TIMEOUT
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r", COMMAND_TIMEOUT_ENV, raw)
        return DEFAULT_COMMAND_TIMEOUT
    return value


def get_template_dir() -> Path | None:
    """Directory overriding the bundled templates, if TSINIT_TEMPLATE_DIR is set."""
    env_value = os.getenv(TEMPLATE_DIR_ENV)
    if not env_value:
        return None
    return Path(env_value).expanduser()


def get_log_file() -> Path | None:
    env_value = os.getenv(LOG_FILE_ENV)
    if not env_value:
        return None
    return Path(env_value).expanduser()


def get_log_level() -> int:
    name = (os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.INFO
    return level
