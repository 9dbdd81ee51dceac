"""Python client with optional response stubbing."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

from stubflow.core.errors import ParamValidationError
from stubflow.core.models.http import HttpResponse
from stubflow.core.models.shapes import ApiModel, Operation, parse_api
from stubflow.core.models.structures import Structure
from stubflow.core.models.stubs import DataStub, ErrorStub, HttpStub, StubEntry
from stubflow.core.protocols import WireProtocol, get_protocol
from stubflow.core.stubbing import StubQueueStore
from stubflow.core.utils.io import load_structured
from stubflow.core.utils.logging import get_logger
from stubflow.core.validation import ParamValidator
from .config import ClientConfig, load_config, merge_overrides
from .errors import ConfigError, ServiceErrors, StubbingDisabledError
from .transport import Transport


@dataclass
class Response:
    operation_name: str
    data: Any
    http_response: HttpResponse | None = None

    def __getattr__(self, name: str) -> Any:
        # Member access falls through to the response data
        data = self.__dict__.get("data")
        if name.startswith("_") or not isinstance(data, Mapping) or name not in data:
            raise AttributeError(name)
        return data[name]

    def to_dict(self) -> dict:
        data = self.data.to_dict() if isinstance(self.data, Structure) else self.data
        return {"operation": self.operation_name, "data": data}


def _load_api(api: ApiModel | dict | str | Path | None, config: ClientConfig) -> ApiModel:
    if isinstance(api, ApiModel):
        return api
    if isinstance(api, dict):
        return parse_api(api)
    path = api or config.api_model_path
    if path is None:
        raise ConfigError("An API model (or STUBFLOW_API_MODEL) is required")
    return parse_api(load_structured(path))


class Client:
    def __init__(
        self,
        api: ApiModel | dict | str | Path | None = None,
        stub_responses: bool | None = None,
        endpoint_url: str | None = None,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        base_config = config or load_config()
        self.config = merge_overrides(base_config, stub_responses=stub_responses, endpoint=endpoint_url)
        self.api = _load_api(api, self.config)
        self.exceptions = ServiceErrors(code for op in self.api.operations.values() for code in op.errors)
        self.logger = get_logger("stubflow.client")
        self._stubs = StubQueueStore(self.api)
        self._transport = transport

    # --- public methods ---
    def stub_responses(self, operation_name: str, *stubs: Any) -> None:
        """Configure the data and errors returned by ``operation_name``.

        Each stub is one of: a mapping of output members, an error code
        string, an exception (class or instance), or a mapping with exactly
        ``status_code``, ``headers`` and ``body``. Stubs are returned in
        order; the last one repeats.

            client = Client(api, stub_responses=True)
            client.stub_responses("head_object", "NotFound", {"content_length": 150})
        """
        if not self.config.stub_responses:
            raise StubbingDisabledError(
                "stubbing is not enabled; enable stubbing in the constructor with `stub_responses=True`"
            )
        self._stubs.configure(operation_name, _flatten(stubs))

    def next_stub(self, operation_name: str) -> StubEntry:
        return self._stubs.next(operation_name)

    def clear_stubs(self, operation_name: str | None = None) -> None:
        self._stubs.clear(operation_name)

    def invoke(self, operation_name: str, params: Mapping | None = None) -> Response:
        operation = self.api.operation(operation_name)
        params = dict(params or {})
        self._validate_params(operation, params)
        if self.config.stub_responses:
            self.logger.debug("Stubbed call to %s", operation.name)
            return self._send_stubbed(operation)
        self.logger.debug("Live call to %s", operation.name)
        return self._send_live(operation, params)

    @property
    def protocol(self) -> WireProtocol:
        return get_protocol(self.api.protocol, self.api.metadata)

    def __getattr__(self, name: str):
        api = self.__dict__.get("api")
        if name.startswith("_") or api is None or name not in api.operations:
            raise AttributeError(name)

        def _call(**params: Any) -> Response:
            return self.invoke(name, params)

        _call.__name__ = name
        return _call

    # --- internal helpers ---
    def _validate_params(self, operation: Operation, params: Dict[str, Any]) -> None:
        if operation.input is None:
            if params:
                raise ParamValidationError([f"unexpected value at params.{name}" for name in params])
            return
        if self.config.validate_params:
            ParamValidator(operation.input).validate(params)

    def _send_stubbed(self, operation: Operation) -> Response:
        entry = self._stubs.next(operation.name)
        if isinstance(entry, ErrorStub):
            raise entry.build()
        if isinstance(entry, HttpStub):
            return self._handle_http(operation, entry.response)
        if isinstance(entry, DataStub):
            return Response(operation.name, entry.data)
        raise TypeError(f"Unexpected stub entry: {entry!r}")

    def _send_live(self, operation: Operation, params: Dict[str, Any]) -> Response:
        if self._transport is None:
            if not self.config.endpoint_url:
                raise ConfigError("Live calls require endpoint_url")
            self._transport = Transport(self.config.endpoint_url, timeout=self.config.timeout)
        request = self.protocol.build_request(operation, params)
        return self._handle_http(operation, self._transport.send(request))

    def _handle_http(self, operation: Operation, response: HttpResponse) -> Response:
        protocol = self.protocol
        if response.status_code >= 300:
            code, message = protocol.extract_error(response)
            raise self.exceptions.from_response(code, message, response)
        return Response(operation.name, protocol.parse_response(operation, response), response)


def _flatten(stubs: Any) -> list:
    out: list = []
    for stub in stubs:
        if isinstance(stub, (list, tuple)):
            out.extend(_flatten(stub))
        else:
            out.append(stub)
    return out
