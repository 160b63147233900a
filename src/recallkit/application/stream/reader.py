"""
Reader for the blank-line-framed event stream.

Frames look like:

    event: message
    data: first line
    data: second line

and are separated by an empty line. An `event: done` frame ends the stream.
"""

import codecs
import logging
from collections.abc import AsyncIterable, AsyncIterator

from recallkit.domain.constants import DONE_EVENT, FRAME_DELIMITER
from recallkit.domain.stream.models import (
    ChunkCallback,
    DoneCallback,
    ReaderState,
    StreamFrame,
)

logger = logging.getLogger(__name__)


def parse_frame(raw: str) -> StreamFrame:
    """Parse one frame. The last `event:` wins; `data:` lines are joined."""
    event: str | None = None
    data_lines: list[str] = []

    for line in raw.split("\n"):
        if line.startswith("event:"):
            event = line[6:].strip()
            continue
        if line.startswith("data:"):
            value = line[5:]
            data_lines.append(value[1:] if value.startswith(" ") else value)

    return StreamFrame(event=event, data="\n".join(data_lines))


def encode_frame(data: str, event: str | None = None) -> str:
    """Render a frame the way `parse_frame` reads it back."""
    lines = [f"event: {event}"] if event is not None else []
    lines.extend(f"data: {line}" for line in data.split("\n"))
    return "\n".join(lines) + FRAME_DELIMITER


class EventStreamReader:
    """
    Reassembles frames from an async byte source into chunk/done callbacks.

    `on_done` fires exactly once: on the first `done` frame, or when the source
    ends without one. Source errors propagate without firing it. The source is
    closed when the reader stops for any reason, including cancellation.
    """

    def __init__(
        self,
        source: AsyncIterable[bytes],
        on_chunk: ChunkCallback,
        on_done: DoneCallback,
    ):
        self._source = source
        self._on_chunk = on_chunk
        self._on_done = on_done
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._started = False
        self.state = ReaderState.READING

    async def run(self) -> None:
        if self._started:
            raise RuntimeError("EventStreamReader can only be run once")
        self._started = True

        iterator = aiter(self._source)
        try:
            await self._consume(iterator)
        finally:
            await _release(iterator)

    async def _consume(self, iterator: AsyncIterator[bytes]) -> None:
        async for raw in iterator:
            self._buffer += self._decoder.decode(raw)
            *frames, self._buffer = self._buffer.split(FRAME_DELIMITER)

            for chunk in frames:
                frame = parse_frame(chunk)
                if frame.event == DONE_EVENT:
                    self._finish()
                    return
                logger.debug(f"Frame event={frame.event} ({len(frame.data)} chars)")
                self._on_chunk(frame.data)

        logger.warning("Event stream ended without a done frame")
        self._finish()

    def _finish(self) -> None:
        self.state = ReaderState.DONE
        self._on_done()


async def _release(iterator: AsyncIterator[bytes]) -> None:
    aclose = getattr(iterator, "aclose", None)
    if aclose is not None:
        await aclose()


async def read_event_stream(
    source: AsyncIterable[bytes],
    on_chunk: ChunkCallback,
    on_done: DoneCallback,
) -> None:
    """Read `source` to completion, dispatching frames to the callbacks."""
    await EventStreamReader(source, on_chunk, on_done).run()
