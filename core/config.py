# =============================================================================
# core/config.py  -  Graylog Connection Settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the Graylog connection parameters from the environment and
#   returns them as one immutable GraylogConfig value.
#
# REQUIRED VARIABLES:
#   GRAYLOG_BASE_URL   e.g. "https://graylog.example.com" (a trailing "/" is added)
#   GRAYLOG_USERNAME   user name or API token
#   GRAYLOG_PASSWORD   password, or the literal "token" for API tokens
#
# OPTIONAL VARIABLES:
#   GRAYLOG_TIMEOUT     request timeout in seconds (default 30)
#   GRAYLOG_VERIFY_SSL  "false" to accept self-signed certificates (default true)
#
# RESOLVED ONCE:
#   main.py calls load_config() at startup and passes the result into the
#   server.  Handlers never touch os.environ.  A missing variable stops the
#   process before the MCP transport is opened.
# =============================================================================

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from core.errors import ConfigurationError

REQUIRED_VARIABLES = ("GRAYLOG_BASE_URL", "GRAYLOG_USERNAME", "GRAYLOG_PASSWORD")

DEFAULT_TIMEOUT_SECONDS = 30.0

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class GraylogConfig:
    """Everything the HTTP client needs to talk to one Graylog instance."""

    base_url: str                      # Always ends with "/"
    username: str
    password: str = field(repr=False)  # Excluded from repr()
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    verify_ssl: bool = True


def load_config(environ: Optional[Mapping[str, str]] = None) -> GraylogConfig:
    """Resolve a GraylogConfig from environment variables.

    Args:
        environ: Mapping to read from.  Defaults to os.environ.

    Returns:
        A GraylogConfig whose base_url ends with "/".

    Raises:
        ConfigurationError: if any required variable is missing or empty
            (the message names each missing one), or an optional variable
            cannot be parsed.
    """
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_VARIABLES if not env.get(name)]
    if missing:
        raise ConfigurationError(
            f"Missing Graylog configuration: {', '.join(missing)}. "
            "Please set GRAYLOG_BASE_URL, GRAYLOG_USERNAME, and GRAYLOG_PASSWORD "
            "environment variables."
        )

    base_url = env["GRAYLOG_BASE_URL"]
    if not base_url.endswith("/"):
        base_url = f"{base_url}/"

    return GraylogConfig(
        base_url=base_url,
        username=env["GRAYLOG_USERNAME"],
        password=env["GRAYLOG_PASSWORD"],
        timeout=_parse_timeout(env.get("GRAYLOG_TIMEOUT")),
        verify_ssl=_parse_bool("GRAYLOG_VERIFY_SSL", env.get("GRAYLOG_VERIFY_SSL"), default=True),
    )


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"GRAYLOG_TIMEOUT must be a number of seconds, got {raw!r}.") from None
    if timeout <= 0:
        raise ConfigurationError(f"GRAYLOG_TIMEOUT must be greater than zero, got {raw!r}.")
    return timeout


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be one of true/false/yes/no/on/off/1/0, got {raw!r}.")
