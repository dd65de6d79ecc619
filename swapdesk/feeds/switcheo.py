"""Switcheo price feed — one JSON list of dated token prices."""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import FeedConfig
from ..errors import FeedUnavailableError

logger = logging.getLogger(__name__)


class SwitcheoFeed:
    """Fetch raw price records from the Switcheo prices endpoint."""

    def __init__(self, config: FeedConfig) -> None:
        self.url = config.url
        self.timeout = config.timeout_seconds
        self.retries = config.retries
        self.retry_delay = config.retry_delay_seconds

    async def _fetch_once(self) -> list[dict[str, Any]]:
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    self.url, timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status != 200:
                        raise FeedUnavailableError(
                            f"Price feed returned HTTP {response.status}",
                            url=self.url,
                            status=response.status,
                        )
                    data = await response.json(content_type=None)
        except FeedUnavailableError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError, ValueError) as e:
            raise FeedUnavailableError(
                f"Error fetching price feed: {e}", url=self.url
            ) from e

        if not isinstance(data, list):
            raise FeedUnavailableError(
                f"Price feed payload is {type(data).__name__}, expected a list",
                url=self.url,
            )
        return data

    async def fetch_records(self) -> list[dict[str, Any]]:
        """Fetch the raw feed, retrying up to ``retries`` extra times."""
        last_error: FeedUnavailableError | None = None
        for attempt in range(self.retries + 1):
            try:
                records = await self._fetch_once()
                logger.info("Fetched %d price records from %s", len(records), self.url)
                return records
            except FeedUnavailableError as e:
                last_error = e
                logger.warning(
                    "Price feed attempt %d/%d failed: %s",
                    attempt + 1,
                    self.retries + 1,
                    e,
                )
                if attempt < self.retries:
                    await asyncio.sleep(self.retry_delay)

        raise FeedUnavailableError(
            f"All price feed attempts failed. Last error: {last_error}",
            url=self.url,
            status=last_error.status if last_error else None,
        )
