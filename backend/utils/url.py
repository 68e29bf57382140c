"""URL handling utilities."""

from typing import Iterable
from urllib.parse import urlparse

from config import logger


def extract_host(url: str) -> str:
    """
    Extract the host name from a URL.
    Returns:
        The lower-cased host without a 'www.' prefix, or "" if extraction fails.
    """
    try:
        host = (urlparse(url).hostname or "").lower()
    except ValueError:
        logger.warning(f"Could not get host from url {url}")
        return ""
    if host.startswith("www."):
        host = host[4:]
    return host


def host_matches(host: str, domains: Iterable[str]) -> bool:
    """True when host equals one of the domains or is a subdomain of one."""
    host = host.lower()
    return any(host == d or host.endswith("." + d) for d in domains)
