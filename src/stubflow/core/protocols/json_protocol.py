"""JSON and REST-JSON protocols."""
from __future__ import annotations

import json
from typing import Any, Mapping, Tuple

from .. import config
from ..errors import ResponseParseError
from ..models.http import HttpRequest, HttpResponse
from ..models.shapes import Operation
from ..models.structures import Structure
from .base import ProtocolBase, status_error_code
from .serialization import from_json_value, to_json_value


def _load_json(response: HttpResponse) -> Any:
    raw = response.body_bytes()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw.decode("utf-8"))
    except ValueError as exc:
        raise ResponseParseError(f"Invalid JSON body: {exc}") from exc


def _clean_code(code: str) -> str:
    # "aws.protocol#NotFound" / "NotFound:http://..." -> "NotFound"
    return code.split("#")[-1].split(":")[0]


class JsonProtocol(ProtocolBase):
    name = "json"

    @property
    def content_type(self) -> str:
        version = self.metadata.get("jsonVersion") or config.DEFAULT_JSON_VERSION
        return f"application/x-amz-json-{version}"

    def stub_error(self, error_code: str) -> HttpResponse:
        body = {"__type": error_code, "message": self.error_message}
        return HttpResponse(
            status_code=config.DEFAULTS.error_status,
            headers={"Content-Type": self.content_type},
            body=json.dumps(body).encode("utf-8"),
        )

    def stub_data(self, operation: Operation, data: Mapping) -> HttpResponse:
        response = HttpResponse(headers={"Content-Type": self.content_type})
        if operation.output is not None:
            response.body = json.dumps(to_json_value(operation.output, data)).encode("utf-8")
        else:
            response.body = b"{}"
        return response

    def _parse_data(self, operation: Operation, response: HttpResponse) -> Structure:
        shape = operation.output
        return from_json_value(shape, _load_json(response))

    def extract_error(self, response: HttpResponse) -> Tuple[str, str]:
        body = _load_json(response)
        if not isinstance(body, dict):
            body = {}
        code = body.get("__type") or body.get("code")
        message = body.get("message") or body.get("Message") or ""
        if not code:
            code = status_error_code(response.status_code)
        return _clean_code(str(code)), str(message)

    def build_request(self, operation: Operation, params: Mapping) -> HttpRequest:
        target_prefix = self.metadata.get("targetPrefix")
        target = f"{target_prefix}.{operation.wire_name}" if target_prefix else operation.wire_name
        payload = to_json_value(operation.input, params) if operation.input else {}
        return HttpRequest(
            method="POST",
            path="/",
            headers={"Content-Type": self.content_type, "X-Amz-Target": target},
            body=json.dumps(payload or {}).encode("utf-8"),
        )


class RestJsonProtocol(JsonProtocol):
    name = "rest-json"

    def stub_error(self, error_code: str) -> HttpResponse:
        body = {"code": error_code, "message": self.error_message}
        return HttpResponse(
            status_code=config.DEFAULTS.error_status,
            headers={"Content-Type": "application/json", "x-amzn-errortype": error_code},
            body=json.dumps(body).encode("utf-8"),
        )

    def stub_data(self, operation: Operation, data: Mapping) -> HttpResponse:
        response = HttpResponse(headers={"Content-Type": "application/json"})
        shape = operation.output
        if shape is None:
            response.body = b"{}"
            return response
        self._apply_located_members(shape, data, response)
        body = {name: value for name, value in data.items() if name in shape.members and not shape.members[name].location}
        response.body = json.dumps(to_json_value(shape, body)).encode("utf-8")
        return response

    def _parse_data(self, operation: Operation, response: HttpResponse) -> Structure:
        shape = operation.output
        out = from_json_value(shape, _load_json(response))
        self._read_located_members(shape, response, out)
        return out

    def extract_error(self, response: HttpResponse) -> Tuple[str, str]:
        header_code = response.header("x-amzn-errortype")
        code, message = super().extract_error(response)
        if header_code:
            code = _clean_code(header_code)
        return code, message

    def build_request(self, operation: Operation, params: Mapping) -> HttpRequest:
        request, body = self._rest_request(operation, params)
        if body and operation.input is not None:
            request.headers.setdefault("Content-Type", "application/json")
            request.body = json.dumps(to_json_value(operation.input, body)).encode("utf-8")
        return request
