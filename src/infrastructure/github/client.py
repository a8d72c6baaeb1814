"""GitHub repository lookup for profile pages.

Best-effort: any upstream failure surfaces as a 404 to the caller.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from core.config import settings
from core.exceptions import GitHubProfileNotFoundError

logger = logging.getLogger(__name__)


class GitHubClient:
    """Fetches a user's most recent public repositories."""

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        token: str = settings.github_token,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "devconnect-api",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def get_repositories(self, username: str, limit: int = 5) -> list[dict[str, Any]]:
        """
        List a user's repositories, oldest first, capped at ``limit``.

        Raises:
            GitHubProfileNotFoundError: On a non-200 response or transport error
        """
        url = f"{self._base_url}/users/{quote(username, safe='')}/repos"
        params = {"per_page": str(limit), "sort": "created:asc"}

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url, params=params, headers=self._headers())
        except httpx.HTTPError:
            logger.exception("GitHub lookup failed for %s", username)
            raise GitHubProfileNotFoundError(username)

        if response.status_code != 200:
            logger.info(
                "GitHub lookup for %s returned %d", username, response.status_code
            )
            raise GitHubProfileNotFoundError(username)

        repos: list[dict[str, Any]] = response.json()
        return repos
