"""Runtime environment helpers: logging setup and host parsing."""

import logging
import os
from urllib.parse import urlparse
from typing import Optional

_DEFAULT_LOG_LEVEL = "INFO"


def resolve_log_level(value: Optional[str] = None) -> int:
    """Return the numeric level for LOG_LEVEL (or ``value``), INFO when unknown."""
    name = (value if value is not None else os.getenv("LOG_LEVEL", _DEFAULT_LOG_LEVEL)).upper()
    level = getattr(logging, name, None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[str] = None) -> int:
    """Configure root logging from LOG_LEVEL the way the service entrypoint does.

    Returns the applied numeric level.
    """
    log_level = resolve_log_level(level)
    logging.basicConfig(level=log_level)
    logging.getLogger("refix").setLevel(log_level)
    return log_level


def extract_hostname(url_value: str) -> Optional[str]:
    """Return hostname from a URL or bare host string."""
    if not url_value:
        return None
    url_value = url_value.strip()
    if not url_value:
        return None
    candidate = url_value if "://" in url_value else f"http://{url_value}"
    parsed = urlparse(candidate)
    return parsed.hostname
