"""Stub resolution and generation."""

from .adapter import StubAdapter
from .generator import StubGenerator
from .store import StubQueueStore

__all__ = ["StubAdapter", "StubGenerator", "StubQueueStore"]
