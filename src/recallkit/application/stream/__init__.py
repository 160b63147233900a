# Application Stream Package
from .reader import EventStreamReader, encode_frame, parse_frame, read_event_stream

__all__ = ["EventStreamReader", "encode_frame", "parse_frame", "read_event_stream"]
