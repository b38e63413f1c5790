"""
Data Fetcher for the Live Dashboard
Pulls the latest reading from the ingestion server with graceful error handling.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional

import aiohttp

from ecowatch.shared.models import Reading

logger = logging.getLogger(__name__)


class LiveDataFetcher:
    """Fetches the latest reading over HTTP and keeps the newest result.

    Each request is tagged with a generation number. A response only
    replaces the held reading if no newer request has already landed, so
    a slow stale response can't overwrite fresher data.
    """

    def __init__(self, url: str, timeout: float = 5.0, session: Optional[aiohttp.ClientSession] = None):
        self.url = url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.latest: Optional[Reading] = None
        self.last_successful_fetch: Optional[datetime] = None
        self._session = session
        self._owns_session = session is None
        self._generation = 0
        self._applied_generation = 0

    async def __aenter__(self) -> "LiveDataFetcher":
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def fetch(self) -> Optional[Reading]:
        """Request the latest reading.

        Returns:
            The fetched reading, or None if the request failed. Failures
            are logged and leave `latest` untouched.
        """
        if self._session is None:
            raise RuntimeError("LiveDataFetcher used outside of 'async with'")

        self._generation += 1
        generation = self._generation

        try:
            async with self._session.get(self.url, timeout=self.timeout) as response:
                if not response.ok:
                    logger.error(f"Failed to fetch data: HTTP {response.status}")
                    return None
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Error fetching data: {e}")
            return None

        reading = Reading.from_dict(data)
        self._apply(generation, reading)
        return reading

    def _apply(self, generation: int, reading: Reading) -> bool:
        if generation < self._applied_generation:
            logger.debug(f"Dropping stale response #{generation}, already have #{self._applied_generation}")
            return False
        self._applied_generation = generation
        self.latest = reading
        self.last_successful_fetch = datetime.now()
        return True
