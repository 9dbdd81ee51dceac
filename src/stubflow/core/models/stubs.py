"""Resolved stub entries."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .http import HttpResponse


@dataclass(frozen=True)
class DataStub:
    data: Any


@dataclass(frozen=True)
class ErrorStub:
    # Exception instances are raised as-is; classes are instantiated first
    error: Union[BaseException, type]

    def build(self) -> BaseException:
        if isinstance(self.error, type):
            return self.error()
        return self.error


@dataclass(frozen=True)
class HttpStub:
    response: HttpResponse


StubEntry = Union[DataStub, ErrorStub, HttpStub]
