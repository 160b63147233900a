"""Domain models for the framed event stream protocol."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class ReaderState(str, Enum):
    READING = "reading"
    DONE = "done"


@dataclass(frozen=True)
class StreamFrame:
    """
    One blank-line-delimited unit of the stream.

    Attributes:
        event: Value of the last `event:` line, or None if the frame had none.
        data: All `data:` values joined with newlines.
    """

    event: str | None
    data: str


ChunkCallback = Callable[[str], None]
DoneCallback = Callable[[], None]
