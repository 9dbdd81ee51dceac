"""Classification of raw stub specs into resolved stub entries."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..errors import NoOutputError
from ..models.http import HttpResponse
from ..models.shapes import ApiModel
from ..models.stubs import DataStub, ErrorStub, HttpStub, StubEntry
from ..protocols import WireProtocol, get_protocol
from ..validation import ParamValidator

HTTP_RESPONSE_KEYS = {"status_code", "headers", "body"}


def _is_error(stub: Any) -> bool:
    return isinstance(stub, BaseException) or (isinstance(stub, type) and issubclass(stub, BaseException))


class StubAdapter:
    """Turns what a caller registers into a :class:`StubEntry`.

    - exceptions (instances or classes) are raised as-is
    - strings name a service error and become a synthetic error response
    - a mapping with exactly ``status_code``, ``headers`` and ``body`` is a
      literal HTTP response
    - any other mapping is partial output data, encoded by the protocol
    - ``HttpResponse`` objects pass through; anything else is raw data
    """

    def __init__(self, api: ApiModel) -> None:
        self.api = api

    @property
    def protocol(self) -> WireProtocol:
        return get_protocol(self.api.protocol, self.api.metadata)

    def classify(self, operation_name: str, stub: Any) -> StubEntry:
        if _is_error(stub):
            return ErrorStub(stub)
        if isinstance(stub, str):
            return HttpStub(self.protocol.stub_error(stub))
        if isinstance(stub, Mapping):
            return HttpStub(self._http_response(operation_name, stub))
        if isinstance(stub, HttpResponse):
            return HttpStub(stub)
        return DataStub(stub)

    def _http_response(self, operation_name: str, data: Mapping) -> HttpResponse:
        if set(data.keys()) == HTTP_RESPONSE_KEYS:
            return HttpResponse.from_mapping(data)
        operation = self.api.operation(operation_name)
        protocol = self.protocol
        if operation.output is not None:
            ParamValidator(operation.output, validate_required=False).validate(data)
        elif data:
            raise NoOutputError(
                "unable to stub data for this operation; it does not return data"
            )
        return protocol.stub_data(operation, data)
