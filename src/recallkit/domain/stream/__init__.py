# Domain Stream Package
from .models import ChunkCallback, DoneCallback, ReaderState, StreamFrame

__all__ = ["ChunkCallback", "DoneCallback", "ReaderState", "StreamFrame"]
