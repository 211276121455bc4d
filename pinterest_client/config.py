"""
Client configuration
Holds the browser header bundle and transport options as one immutable value
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://www.pinterest.com"
DEFAULT_USER_AGENT = 'Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
DEFAULT_APP_VERSION = "04cf8cc"
TIMEOUT_SECONDS = 10


def _getenv_bool(name, default):
    v = os.getenv(name, str(default)).strip().lower()
    return v in ("1", "true", "yes", "y", "on")


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT

    # resource calls ask for JSON, public pin pages for HTML
    accept: str = 'application/json, text/javascript, */*; q=0.01'
    page_accept: str = 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8'
    accept_language: str = 'en-US,en;q=0.5'
    app_version: str = DEFAULT_APP_VERSION

    timeout: float = TIMEOUT_SECONDS
    # Off only for debugging proxies; the transport warns every time it is built this way
    verify_tls: bool = True

    def resource_url(self, name, verb):
        """Endpoint of a resource call, e.g. ("PinResource", "create")"""
        return f"{self.base_url}/resource/{name}/{verb}/"

    def page_url(self, path=""):
        return f"{self.base_url}/{path.lstrip('/')}"


def load_config(env_file=None):
    """
    Build a ClientConfig from the environment.

    Reads a .env file first (the given one, or the nearest one python-dotenv
    finds), then the PINTEREST_* variables. Unset variables keep their defaults.

    Raises:
        ValueError: if PINTEREST_TIMEOUT is not a number
    """
    if env_file and Path(env_file).exists():
        load_dotenv(dotenv_path=env_file)
    else:
        load_dotenv()

    timeout_raw = os.getenv("PINTEREST_TIMEOUT", str(TIMEOUT_SECONDS)).strip()
    try:
        timeout = float(timeout_raw)
    except ValueError:
        raise ValueError(f"PINTEREST_TIMEOUT must be a number, got {timeout_raw!r}")

    return ClientConfig(
        base_url=os.getenv("PINTEREST_BASE_URL", DEFAULT_BASE_URL).strip().rstrip("/"),
        user_agent=os.getenv("PINTEREST_USER_AGENT", DEFAULT_USER_AGENT).strip(),
        app_version=os.getenv("PINTEREST_APP_VERSION", DEFAULT_APP_VERSION).strip(),
        timeout=timeout,
        verify_tls=_getenv_bool("PINTEREST_VERIFY_TLS", True),
    )
