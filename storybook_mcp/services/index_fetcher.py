"""Fetches and parses the Storybook index document."""

import json
import logging
from typing import Optional

import httpx

from ..errors import FetchFailedError
from ..models import StorybookIndex, parse_index

logger = logging.getLogger(__name__)


class StorybookIndexFetcher:
    """One HTTP GET per call; nothing is cached between calls."""

    # Timeout configuration (seconds)
    REQUEST_TIMEOUT = 30.0

    def __init__(self, index_url: str, client: Optional[httpx.AsyncClient] = None):
        """Initialize the fetcher.

        Args:
            index_url: Absolute URL of index.json / stories.json
            client: Optional shared AsyncClient (a short-lived one is used per call otherwise)
        """
        self.index_url = index_url
        self._client = client

    async def fetch(self) -> StorybookIndex:
        """Fetch the index and select its schema variant.

        Raises:
            FetchFailedError: On transport failure, non-success status or invalid JSON
            IndexSchemaError: If the document is not a supported index
        """
        logger.debug(f"Fetching Storybook index: {self.index_url}")

        if self._client is not None:
            response = await self._get(self._client)
        else:
            async with httpx.AsyncClient(
                timeout=self.REQUEST_TIMEOUT, follow_redirects=True
            ) as client:
                response = await self._get(client)

        if not response.is_success:
            reason = response.reason_phrase or f"HTTP {response.status_code}"
            raise FetchFailedError(f"Failed to fetch Storybook data: {reason}")

        try:
            document = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FetchFailedError(
                f"Failed to fetch Storybook data: response is not valid JSON ({e})"
            ) from e

        return parse_index(document)

    async def _get(self, client: httpx.AsyncClient) -> httpx.Response:
        try:
            return await client.get(self.index_url)
        except httpx.HTTPError as e:
            raise FetchFailedError(
                f"Failed to fetch Storybook data: {str(e) or type(e).__name__}"
            ) from e
