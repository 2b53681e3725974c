"""Proxy pool loading.

The pool is an ordered tuple of proxy base URLs. Each base URL is expected to
accept the full target URL appended verbatim (e.g. ``https://proxy/fetch/`` or
``https://proxy/raw?url=``).
"""

from __future__ import annotations

import json
import logging

logger = logging.getLogger(__name__)

# Built-in pool used when no usable configuration is supplied. Public CORS
# proxies come and go; override with the PROXIES environment variable.
DEFAULT_PROXIES: tuple[str, ...] = (
    "https://cors.bridged.cc/",
    "https://api.allorigins.win/raw?url=",
    "https://api.allorigins.cf/raw?url=",
    "https://thingproxy.freeboard.io/fetch/",
    "https://api.codetabs.cn/proxy?quest=",
    "https://cors-anywhere.herokuapp.com/",
    "https://proxy.cors.sh/",
    "https://yacdn.org/proxy/",
)


def parse_proxy_list(raw: str | None) -> tuple[str, ...]:
    """Build the proxy pool from a raw configuration value.

    The value is read as a JSON array of strings first and as a
    comma-separated list otherwise. A missing value, or one that yields no
    entries, returns ``DEFAULT_PROXIES``.
    """
    if raw is None or not raw.strip():
        return DEFAULT_PROXIES

    entries: list[str]
    try:
        decoded = json.loads(raw)
    except ValueError:
        decoded = None

    if isinstance(decoded, list):
        entries = [item.strip() for item in decoded if isinstance(item, str) and item.strip()]
    else:
        entries = [item.strip() for item in raw.split(",") if item.strip()]

    if not entries:
        logger.warning("Proxy configuration yielded no entries, using built-in defaults")
        return DEFAULT_PROXIES

    return tuple(entries)
