"""SDK-level errors."""
from __future__ import annotations

import re
from typing import Dict, Iterable, Type

from stubflow.core.models.http import HttpResponse


class SdkError(Exception):
    """Base SDK error."""


class ConfigError(SdkError):
    """Configuration resolution error."""


class StubbingDisabledError(ConfigError, RuntimeError):
    """Stubs were registered on a client built without ``stub_responses``."""


class TransportError(SdkError):
    """HTTP communication error."""


class ServiceError(SdkError):
    """An error response returned by the service (or a stub of one)."""

    code: str | None = None

    def __init__(self, message: str = "", code: str | None = None, http_response: HttpResponse | None = None) -> None:
        super().__init__(message or code or self.code or "")
        if code is not None:
            self.code = code
        self.message = message
        self.http_response = http_response


def _class_name(code: str) -> str:
    name = re.sub(r"[^0-9A-Za-z_]", "_", code)
    return name if not name[:1].isdigit() else f"_{name}"


class ServiceErrors:
    """Error classes keyed by error code, created on first use.

    ``client.exceptions.NotFound`` and the error raised for a ``NotFound``
    response are the same class, so ``pytest.raises`` works on either.
    """

    def __init__(self, codes: Iterable[str] = ()) -> None:
        self._classes: Dict[str, Type[ServiceError]] = {}
        for code in codes:
            self.error_class(code)

    def error_class(self, code: str) -> Type[ServiceError]:
        name = _class_name(code)
        cls = self._classes.get(name)
        if cls is None:
            cls = type(name, (ServiceError,), {"code": code})
            self._classes[name] = cls
        return cls

    def from_response(self, code: str, message: str, http_response: HttpResponse | None = None) -> ServiceError:
        return self.error_class(code)(message, code=code, http_response=http_response)

    def __getattr__(self, name: str) -> Type[ServiceError]:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.error_class(name)
