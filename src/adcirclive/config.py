"""
ClientConfig: Immutable client configuration.

Credentials and endpoint settings are read once at startup from the ASGS
global configuration file (INI format, section [adcirclive]) and can be
overridden from the environment.

Priority: Environment variables > Config file > Defaults
"""

import configparser
import os
from dataclasses import dataclass

from adcirclive.errors import ConfigurationError
from adcirclive.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://tools.adcirc.live"
DEFAULT_API_VERSION = "1.0"
CONFIG_SECTION = "adcirclive"


def default_config_path() -> str:
    """Default location of the ASGS global configuration file."""
    return os.path.join(os.path.expanduser("~"), "asgs-global.conf")


@dataclass(frozen=True)
class Credentials:
    """API key/secret pair shared with the service."""
    api_key: str
    api_secret: str

    def __repr__(self) -> str:
        return f"Credentials(api_key={self.api_key!r}, api_secret='***')"


@dataclass(frozen=True)
class ClientConfig:
    """
    Complete immutable client configuration.

    Create once at startup and pass to the command handlers.
    """
    credentials: Credentials | None = None
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    timeout: float | None = None
    config_path: str | None = None

    def require_credentials(self) -> Credentials:
        """Return the credentials, failing if key or secret is missing."""
        if self.credentials is None:
            where = self.config_path or default_config_path()
            raise ConfigurationError(
                f"no API credentials: set apikey/apisecret under [{CONFIG_SECTION}] "
                f"in {where} or ADCIRCLIVE_API_KEY/ADCIRCLIVE_API_SECRET"
            )
        return self.credentials


def load_config(config_path: str | None = None) -> ClientConfig:
    """
    Load configuration from the INI file and environment variables.

    Args:
        config_path: Path to INI config file. If None, uses ADCIRCLIVE_CONFIG
            or $HOME/asgs-global.conf.

    Returns:
        Immutable ClientConfig instance.

    Raises:
        ConfigurationError: If the file exists but cannot be parsed, or the
            timeout value is not a number.
    """
    if config_path is None:
        config_path = os.environ.get("ADCIRCLIVE_CONFIG") or default_config_path()

    section: dict[str, str] = {}
    if os.path.exists(config_path):
        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read(config_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigurationError(f"cannot parse {config_path}: {e}") from e
        if parser.has_section(CONFIG_SECTION):
            section = dict(parser.items(CONFIG_SECTION))
        else:
            logger.debug("No [%s] section in %s", CONFIG_SECTION, config_path)
    else:
        logger.debug("Config file %s not found, using environment only", config_path)

    api_key = _env_or("ADCIRCLIVE_API_KEY", section.get("apikey", ""))
    api_secret = _env_or("ADCIRCLIVE_API_SECRET", section.get("apisecret", ""))
    credentials = Credentials(api_key, api_secret) if api_key and api_secret else None

    base_url = _env_or("ADCIRCLIVE_BASE_URL", section.get("baseurl", "")) or DEFAULT_BASE_URL

    timeout = None
    raw_timeout = section.get("timeout", "").strip()
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise ConfigurationError(
                f"invalid timeout '{raw_timeout}' in {config_path}"
            ) from e

    return ClientConfig(
        credentials=credentials,
        base_url=base_url.rstrip("/"),
        timeout=timeout,
        config_path=config_path,
    )


def _env_or(key: str, fallback: str) -> str:
    """Environment value when set and non-empty, otherwise the fallback."""
    value = os.environ.get(key)
    if value:
        return value
    return fallback
