"""Gravatar avatar URLs."""

import hashlib
from urllib.parse import urlencode

from domain.entities.user import normalize_email

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar"


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """Build the avatar URL for an email address (mystery-man fallback)."""
    digest = hashlib.md5(normalize_email(email).encode("utf-8")).hexdigest()
    query = urlencode({"s": str(size), "r": rating, "d": default})
    return f"{GRAVATAR_BASE_URL}/{digest}?{query}"
