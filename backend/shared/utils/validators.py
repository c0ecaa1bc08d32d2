"""
Shared validators for input sanitization and security.
"""

import re
from urllib.parse import urlparse
from typing import Optional

from shared.config.constants import Limits

# Internal domains/IPs that should never be fetched on a user's behalf (SSRF prevention)
BLOCKED_HOSTS = [
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "10.",
    "172.16.",
    "172.17.",
    "172.18.",
    "172.19.",
    "172.20.",
    "172.21.",
    "172.22.",
    "172.23.",
    "172.24.",
    "172.25.",
    "172.26.",
    "172.27.",
    "172.28.",
    "172.29.",
    "172.30.",
    "172.31.",
    "192.168.",
    "169.254.",  # Link-local, cloud metadata
    "[::1]",
    "metadata.google",
]

BLOCKED_SCHEMES = {"javascript", "data", "file", "ftp", "mailto", "tel"}


def validate_image_url(url: Optional[str]) -> Optional[str]:
    """
    Validate and sanitize an image URL supplied by a client.

    Returns:
        The validated URL or None if empty

    Raises:
        ValueError: If the URL is invalid or points at an internal host
    """
    if url is None:
        return None

    url = url.strip()
    if not url:
        return None

    if len(url) > Limits.MAX_URL_LENGTH:
        raise ValueError(f"URL too long (max {Limits.MAX_URL_LENGTH} characters)")

    parsed = urlparse(url)

    scheme = parsed.scheme.lower()
    if scheme in BLOCKED_SCHEMES:
        raise ValueError(f"URL scheme not allowed: {scheme}")

    if scheme not in ("http", "https"):
        raise ValueError("Only HTTP/HTTPS URLs are allowed")

    host = parsed.netloc.lower()
    if not host:
        raise ValueError("URL has no host")

    # Drop credentials before matching
    host = host.rsplit("@", 1)[-1]
    for blocked in BLOCKED_HOSTS:
        if host.startswith(blocked) or host == blocked.rstrip("."):
            raise ValueError("Internal URLs are not allowed")

    return url


def sanitize_text(value: Optional[str], max_length: int = Limits.MAX_DESCRIPTION_LENGTH) -> str:
    """
    Trim a free-text value and strip control characters.

    Line breaks and tabs are kept since menu descriptions use them.
    """
    if not value:
        return ""

    value = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", value).strip()
    return value[:max_length]


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()
