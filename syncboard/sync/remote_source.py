"""
HTTP remote source returning a JSON list of {id, title, body} items.
"""

import asyncio
from typing import Any, Protocol

import httpx
from pydantic import ValidationError as PydanticValidationError

from syncboard.core.errors import SyncError
from syncboard.core.models import RemoteItem
from syncboard.observability import metrics
from syncboard.observability.logger import get_logger

logger = get_logger(__name__)

DEFAULT_REMOTE_URL = "https://jsonplaceholder.typicode.com/posts"


class RemoteSource(Protocol):
    async def fetch_remote_items(self) -> list[RemoteItem]:
        """Fetch all items, raising SyncError on any transport or parse failure."""
        ...


def parse_items(payload: Any) -> tuple[list[RemoteItem], int]:
    """
    Turn a decoded JSON payload into remote items.

    Malformed entries are skipped rather than failing the whole fetch.

    Returns:
        The valid items in payload order and the number skipped

    Raises:
        SyncError: If the payload is not a list
    """
    if not isinstance(payload, list):
        raise SyncError(f"Expected a JSON list of items, got {type(payload).__name__}")

    items = []
    skipped = 0
    for index, raw in enumerate(payload):
        try:
            items.append(RemoteItem.model_validate(raw))
        except PydanticValidationError as e:
            skipped += 1
            logger.warning(
                f"Skipping malformed remote item at index {index}",
                extra={"index": index, "errors": e.error_count()},
            )
    return items, skipped


class HttpRemoteSource:
    """
    Remote source backed by a single HTTP GET.

    Transport errors are retried up to max_retries times with a fixed
    delay; HTTP error statuses and bad payloads are not retried.
    """

    def __init__(
        self,
        url: str = DEFAULT_REMOTE_URL,
        timeout: float = 10.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the remote source.

        Args:
            url: Endpoint returning the item list
            timeout: Request timeout in seconds
            max_retries: Attempts for transport failures (at least 1)
            retry_delay: Seconds between attempts
            client: Shared client; one is created per fetch when omitted
        """
        self.url = url
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self._client = client

    async def _get(self, client: httpx.AsyncClient) -> httpx.Response:
        last_error: httpx.TransportError | None = None
        for attempt in range(1, self.max_retries + 1):
            try:
                return await client.get(self.url, headers={"Accept": "application/json"})
            except httpx.TransportError as e:
                last_error = e
                logger.warning(
                    f"Fetch attempt {attempt}/{self.max_retries} failed: {e}",
                    extra={"url": self.url, "attempt": attempt},
                )
                if attempt < self.max_retries:
                    await asyncio.sleep(self.retry_delay)
        raise SyncError(
            f"Could not reach {self.url} after {self.max_retries} attempts: {last_error}"
        ) from last_error

    async def fetch_remote_items(self) -> list[RemoteItem]:
        """
        Fetch and parse the remote item list.

        Raises:
            SyncError: On transport failure, error status or undecodable body
        """
        if self._client is not None:
            response = await self._get(self._client)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await self._get(client)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SyncError(
                f"Remote source answered {response.status_code} for {self.url}"
            ) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise SyncError(f"Remote source returned invalid JSON: {e}") from e

        items, skipped = parse_items(payload)
        if skipped:
            metrics.increment_counter(metrics.remote_items_skipped_total, value=skipped)
        logger.info(
            f"Fetched {len(items)} remote items",
            extra={"url": self.url, "items": len(items), "skipped": skipped},
        )
        return items
