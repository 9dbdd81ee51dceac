"""Per-client stub queues."""
from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any, Deque, Dict, Iterable

from ..models.shapes import ApiModel
from ..models.stubs import DataStub, StubEntry
from ..utils.logging import get_logger
from .adapter import StubAdapter
from .generator import StubGenerator


class StubQueueStore:
    """Ordered stub entries per operation, guarded by one lock.

    ``next`` dequeues while more than one entry remains; the last entry is
    returned on every later call. With nothing configured a default stub is
    generated from the operation's output shape.
    """

    def __init__(self, api: ApiModel, adapter: StubAdapter | None = None, logger: logging.Logger | None = None) -> None:
        self.api = api
        self.adapter = adapter or StubAdapter(api)
        self.logger = logger or get_logger("stubflow.stubs")
        self._stubs: Dict[str, Deque[StubEntry]] = {}
        self._lock = threading.Lock()

    def configure(self, operation_name: str, specs: Iterable[Any]) -> None:
        operation = self.api.operation(operation_name)
        with self._lock:
            entries = deque(self.adapter.classify(operation.name, spec) for spec in specs)
            self._stubs[operation.name] = entries
            self.logger.debug("Configured %d stub(s) for %s", len(entries), operation.name)

    def next(self, operation_name: str) -> StubEntry:
        operation = self.api.operation(operation_name)
        with self._lock:
            stubs = self._stubs.get(operation.name)
            if not stubs:
                self.logger.debug("No stubs for %s; generating default", operation.name)
                return DataStub(StubGenerator(operation.output).format({}))
            if len(stubs) == 1:
                return stubs[0]
            return stubs.popleft()

    def pending(self, operation_name: str) -> int:
        operation = self.api.operation(operation_name)
        with self._lock:
            return len(self._stubs.get(operation.name, ()))

    def clear(self, operation_name: str | None = None) -> None:
        with self._lock:
            if operation_name is None:
                self._stubs.clear()
            else:
                self._stubs.pop(self.api.operation(operation_name).name, None)
