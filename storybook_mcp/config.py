"""Process configuration, read once from the environment."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

STORYBOOK_URL_ENV = "STORYBOOK_URL"
CUSTOM_TOOLS_ENV = "CUSTOM_TOOLS"

SELECTOR_TIMEOUT_ENV = "STORYBOOK_MCP_SELECTOR_TIMEOUT"
SETTLE_DELAY_ENV = "STORYBOOK_MCP_SETTLE_DELAY"
OPERATION_TIMEOUT_ENV = "STORYBOOK_MCP_OPERATION_TIMEOUT"
HEADLESS_ENV = "STORYBOOK_MCP_HEADLESS"

# Milliseconds
DEFAULT_SELECTOR_TIMEOUT = 10000
DEFAULT_SETTLE_DELAY = 2000
DEFAULT_OPERATION_TIMEOUT = 60000


def _int_setting(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid {key}={raw!r}, using default {default}")
        return default
    if value <= 0:
        logger.warning(f"{key} must be positive, using default {default}")
        return default
    return value


def _bool_setting(environ: Mapping[str, str], key: str, default: bool) -> bool:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


@dataclass(frozen=True)
class ServerConfig:
    """Immutable server settings.

    Attributes:
        storybook_url: Absolute URL of the Storybook index document
        custom_tools_json: Raw CUSTOM_TOOLS value, parsed by the registry
        selector_timeout: Props table wait, in milliseconds
        settle_delay: Pause before a custom tool handler runs, in milliseconds
        operation_timeout: Bound on one whole page operation, in milliseconds
        headless: Launch Chromium headless
    """

    storybook_url: str
    custom_tools_json: Optional[str] = None
    selector_timeout: int = DEFAULT_SELECTOR_TIMEOUT
    settle_delay: int = DEFAULT_SETTLE_DELAY
    operation_timeout: int = DEFAULT_OPERATION_TIMEOUT
    headless: bool = True

    def __post_init__(self):
        if not self.storybook_url or not self.storybook_url.strip():
            raise ConfigurationError(f"{STORYBOOK_URL_ENV} environment variable is required")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """Build the configuration from environment variables.

        Raises:
            ConfigurationError: If STORYBOOK_URL is missing or blank
        """
        environ = os.environ if environ is None else environ

        storybook_url = (environ.get(STORYBOOK_URL_ENV) or "").strip()
        if not storybook_url:
            raise ConfigurationError(f"{STORYBOOK_URL_ENV} environment variable is required")

        return cls(
            storybook_url=storybook_url,
            custom_tools_json=environ.get(CUSTOM_TOOLS_ENV),
            selector_timeout=_int_setting(environ, SELECTOR_TIMEOUT_ENV, DEFAULT_SELECTOR_TIMEOUT),
            settle_delay=_int_setting(environ, SETTLE_DELAY_ENV, DEFAULT_SETTLE_DELAY),
            operation_timeout=_int_setting(environ, OPERATION_TIMEOUT_ENV, DEFAULT_OPERATION_TIMEOUT),
            headless=_bool_setting(environ, HEADLESS_ENV, True),
        )
