"""HTTP adapter feeding a streamed httpx response into the event stream reader."""

import logging
from typing import Any

import httpx

from recallkit.application.stream.reader import read_event_stream
from recallkit.domain.stream.models import ChunkCallback, DoneCallback

logger = logging.getLogger(__name__)


async def stream_events(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    on_chunk: ChunkCallback,
    on_done: DoneCallback,
    **request_kwargs: Any,
) -> None:
    """
    Issue a streaming request and dispatch its frames as they arrive.

    Raises:
        httpx.HTTPStatusError: If the response status is not 2xx. No retry is
            attempted and `on_done` is not called.
    """
    async with client.stream(method, url, **request_kwargs) as response:
        if response.is_error:
            await response.aread()
            logger.error(f"Event stream request failed: {response.status_code} {url}")
        response.raise_for_status()

        logger.debug(f"Event stream opened: {method} {url}")
        await read_event_stream(response.aiter_bytes(), on_chunk, on_done)
