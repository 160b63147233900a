# Infrastructure Adapters Package
from .fsrs_grading import FsrsGradingAdapter
from .http_stream import stream_events

__all__ = ["FsrsGradingAdapter", "stream_events"]
