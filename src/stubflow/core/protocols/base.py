"""Wire protocol abstraction."""
from __future__ import annotations

import re
from http import HTTPStatus
from typing import Any, Dict, Mapping, Protocol, Tuple
from urllib.parse import quote

from .. import config
from ..models.http import HttpRequest, HttpResponse
from ..models.shapes import MapShape, Operation, StructureShape
from ..models.structures import EmptyStructure, Structure
from .serialization import scalar_to_text, text_to_scalar


class WireProtocol(Protocol):
    name: str

    def stub_error(self, error_code: str) -> HttpResponse:
        ...

    def stub_data(self, operation: Operation, data: Mapping) -> HttpResponse:
        ...

    def parse_response(self, operation: Operation, response: HttpResponse) -> Any:
        ...

    def extract_error(self, response: HttpResponse) -> Tuple[str, str]:
        ...

    def build_request(self, operation: Operation, params: Mapping) -> HttpRequest:
        ...


def status_error_code(status_code: int) -> str:
    """``404`` -> ``NotFound``; used when an error response has no body."""
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        return f"Http{status_code}Error"
    return re.sub(r"[^A-Za-z0-9]", "", phrase.title())


class ProtocolBase:
    """Shared behaviour: metadata access and the rest-style member locations."""

    name = ""

    def __init__(self, metadata: Mapping | None = None) -> None:
        self.metadata = dict(metadata or {})

    @property
    def error_message(self) -> str:
        return config.DEFAULTS.error_message

    def parse_response(self, operation: Operation, response: HttpResponse) -> Any:
        if operation.output is None:
            return EmptyStructure()
        return self._parse_data(operation, response)

    def _parse_data(self, operation: Operation, response: HttpResponse) -> Structure:
        raise NotImplementedError

    # --- rest helpers ---

    def _apply_located_members(self, shape: StructureShape, data: Mapping, response: HttpResponse) -> None:
        for name, value in data.items():
            ref = shape.members.get(name)
            if ref is None or value is None:
                continue
            if ref.location == "header":
                response.headers[ref.location_name] = scalar_to_text(ref.shape, value, header=True)
            elif ref.location == "headers" and isinstance(ref.shape, MapShape):
                for key, item in value.items():
                    response.headers[f"{ref.location_name}{key}"] = scalar_to_text(ref.shape.value, item, header=True)
            elif ref.location == "statusCode":
                response.status_code = int(value)

    def _read_located_members(self, shape: StructureShape, response: HttpResponse, out: Structure) -> None:
        for name, ref in shape.members.items():
            if ref.location == "header":
                out[name] = text_to_scalar(ref.shape, response.header(ref.location_name))
            elif ref.location == "headers" and isinstance(ref.shape, MapShape):
                prefix = ref.location_name.lower()
                out[name] = {
                    key[len(prefix):]: text_to_scalar(ref.shape.value, value)
                    for key, value in response.headers.items()
                    if key.lower().startswith(prefix)
                }
            elif ref.location == "statusCode":
                out[name] = response.status_code

    def _rest_request(self, operation: Operation, params: Mapping) -> Tuple[HttpRequest, Dict[str, Any]]:
        """Place uri/querystring/header members; return the request and the body members."""
        request = HttpRequest(method=operation.http_method)
        shape = operation.input
        uri = operation.request_uri
        body: Dict[str, Any] = {}
        if shape is None:
            request.path = uri.split("?", 1)[0]
            return request, body
        for name, value in params.items():
            ref = shape.members.get(name)
            if ref is None or value is None:
                continue
            if ref.location == "uri":
                text = scalar_to_text(ref.shape, value)
                uri = uri.replace("{%s+}" % ref.location_name, quote(text, safe="/"))
                uri = uri.replace("{%s}" % ref.location_name, quote(text, safe=""))
            elif ref.location == "querystring":
                request.query[ref.location_name] = scalar_to_text(ref.shape, value)
            elif ref.location == "header":
                request.headers[ref.location_name] = scalar_to_text(ref.shape, value, header=True)
            elif ref.location == "headers" and isinstance(ref.shape, MapShape):
                for key, item in value.items():
                    request.headers[f"{ref.location_name}{key}"] = str(item)
            else:
                body[name] = value
        path, _, static_query = uri.partition("?")
        request.path = path
        for part in filter(None, static_query.split("&")):
            key, _, val = part.partition("=")
            request.query.setdefault(key, val)
        return request, body
