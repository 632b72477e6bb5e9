"""Forwarding client for a running podlink instance.

When the operating system launches a second process for an opened URL,
that process hands the URL to the running instance's intake endpoint
instead of starting its own UI.
"""

import asyncio
import logging
from typing import TypedDict

import httpx

from podlink.core.types import ValidationResultDict

logger = logging.getLogger(__name__)


class OpenResponseDict(TypedDict):
    """Intake endpoint response."""

    accepted: int


class DeepLinkClient:
    """Async HTTP client for the podlink intake server."""

    def __init__(self, client: httpx.AsyncClient, base_url: str):
        """Initialize deep-link client.

        Args:
            client: httpx AsyncClient
            base_url: Server base URL (e.g., http://127.0.0.1:8765)
        """
        self.client = client
        self.base_url = base_url.rstrip("/")

    async def open_urls(self, urls: list[str]) -> int:
        """Hand opened URLs to the running instance.

        Args:
            urls: Deep-link URLs to open

        Returns:
            Number of URLs the server accepted

        Raises:
            httpx.HTTPError: If request fails
        """
        logger.info(f"Forwarding {len(urls)} URL(s) to {self.base_url}")
        response = await self.client.post(f"{self.base_url}/api/open", json={"urls": urls})

        if response.status_code != 202:
            logger.error(f"Error response: {response.text}")
        response.raise_for_status()

        data: OpenResponseDict = response.json()
        return data["accepted"]

    async def validate(self, url: str) -> ValidationResultDict:
        """Validate a URL with the running instance.

        Raises:
            httpx.HTTPError: If request fails
        """
        response = await self.client.get(
            f"{self.base_url}/api/links/validate",
            params={"url": url},
        )
        response.raise_for_status()
        return response.json()


def forward_urls(base_url: str, urls: list[str], *, timeout: float = 5.0) -> int:
    """Forward URLs to a running instance (blocking).

    Args:
        base_url: Server base URL
        urls: Deep-link URLs to open
        timeout: Request timeout in seconds

    Returns:
        Number of URLs the server accepted

    Raises:
        httpx.HTTPError: If the server is unreachable or rejects the request
    """

    async def _forward() -> int:
        async with httpx.AsyncClient(timeout=timeout) as http_client:
            return await DeepLinkClient(http_client, base_url).open_urls(urls)

    return asyncio.run(_forward())
