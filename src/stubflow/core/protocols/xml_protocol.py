"""XML protocols: query, ec2 and rest-xml."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Mapping, Tuple
from urllib.parse import urlencode

from .. import config
from ..models.http import HttpRequest, HttpResponse
from ..models.shapes import Operation
from ..models.structures import Structure
from .base import ProtocolBase, status_error_code
from .serialization import (
    build_xml_members,
    find_child,
    flatten_query,
    local_name,
    parse_xml_members,
    read_xml,
    xml_bytes,
)

XML_HEADERS = {"Content-Type": "text/xml"}


def _error_fields(error: ET.Element | None) -> Tuple[str | None, str]:
    if error is None:
        return None, ""
    code = find_child(error, "Code")
    message = find_child(error, "Message")
    return (
        code.text if code is not None else None,
        (message.text or "") if message is not None else "",
    )


class QueryProtocol(ProtocolBase):
    name = "query"

    @property
    def xmlns(self) -> str | None:
        return self.metadata.get("xmlNamespace")

    def stub_error(self, error_code: str) -> HttpResponse:
        root = ET.Element("ErrorResponse")
        error = ET.SubElement(root, "Error")
        ET.SubElement(error, "Code").text = error_code
        ET.SubElement(error, "Message").text = self.error_message
        ET.SubElement(root, "RequestId").text = config.DEFAULTS.request_id
        return HttpResponse(config.DEFAULTS.error_status, dict(XML_HEADERS), xml_bytes(root))

    def stub_data(self, operation: Operation, data: Mapping) -> HttpResponse:
        root = ET.Element(f"{operation.wire_name}Response")
        if self.xmlns:
            root.set("xmlns", self.xmlns)
        result = ET.SubElement(root, f"{operation.wire_name}Result")
        if operation.output is not None:
            build_xml_members(result, operation.output, data)
        metadata = ET.SubElement(root, "ResponseMetadata")
        ET.SubElement(metadata, "RequestId").text = config.DEFAULTS.request_id
        return HttpResponse(200, dict(XML_HEADERS), xml_bytes(root))

    def _parse_data(self, operation: Operation, response: HttpResponse) -> Structure:
        shape = operation.output
        root = read_xml(response.body_bytes())
        if root is None:
            return parse_xml_members(shape, ET.Element("empty"))
        result = find_child(root, f"{operation.wire_name}Result")
        return parse_xml_members(shape, result if result is not None else root)

    def extract_error(self, response: HttpResponse) -> Tuple[str, str]:
        root = read_xml(response.body_bytes())
        error = None
        if root is not None:
            error = root if local_name(root.tag) == "Error" else find_child(root, "Error")
        code, message = _error_fields(error)
        return code or status_error_code(response.status_code), message

    def build_request(self, operation: Operation, params: Mapping) -> HttpRequest:
        pairs = [("Action", operation.wire_name), ("Version", self.metadata.get("apiVersion", ""))]
        if operation.input is not None:
            pairs.extend(flatten_query(operation.input, params, "", ec2=self.name == "ec2"))
        return HttpRequest(
            method="POST",
            path="/",
            headers={"Content-Type": "application/x-www-form-urlencoded; charset=utf-8"},
            body=urlencode(pairs).encode("utf-8"),
        )


class Ec2Protocol(QueryProtocol):
    name = "ec2"

    @property
    def xmlns(self) -> str:
        return f"http://ec2.amazonaws.com/doc/{self.metadata.get('apiVersion', '')}/"

    def stub_error(self, error_code: str) -> HttpResponse:
        root = ET.Element("Response")
        errors = ET.SubElement(root, "Errors")
        error = ET.SubElement(errors, "Error")
        ET.SubElement(error, "Code").text = error_code
        ET.SubElement(error, "Message").text = self.error_message
        ET.SubElement(root, "RequestID").text = config.DEFAULTS.request_id
        return HttpResponse(config.DEFAULTS.error_status, dict(XML_HEADERS), xml_bytes(root))

    def stub_data(self, operation: Operation, data: Mapping) -> HttpResponse:
        root = ET.Element(f"{operation.wire_name}Response", {"xmlns": self.xmlns})
        ET.SubElement(root, "requestId").text = config.DEFAULTS.request_id
        if operation.output is not None:
            build_xml_members(root, operation.output, data)
        return HttpResponse(200, dict(XML_HEADERS), xml_bytes(root))

    def _parse_data(self, operation: Operation, response: HttpResponse) -> Structure:
        shape = operation.output
        root = read_xml(response.body_bytes())
        return parse_xml_members(shape, root if root is not None else ET.Element("empty"))

    def extract_error(self, response: HttpResponse) -> Tuple[str, str]:
        root = read_xml(response.body_bytes())
        error = None
        if root is not None:
            errors = find_child(root, "Errors")
            error = find_child(errors, "Error") if errors is not None else None
        code, message = _error_fields(error)
        return code or status_error_code(response.status_code), message


class RestXmlProtocol(ProtocolBase):
    name = "rest-xml"

    def stub_error(self, error_code: str) -> HttpResponse:
        root = ET.Element("Error")
        ET.SubElement(root, "Code").text = error_code
        ET.SubElement(root, "Message").text = self.error_message
        ET.SubElement(root, "RequestId").text = config.DEFAULTS.request_id
        return HttpResponse(config.DEFAULTS.error_status, dict(XML_HEADERS), xml_bytes(root))

    def stub_data(self, operation: Operation, data: Mapping) -> HttpResponse:
        response = HttpResponse(headers=dict(XML_HEADERS))
        shape = operation.output
        if shape is None:
            return response
        self._apply_located_members(shape, data, response)
        root = ET.Element(shape.name)
        if self.metadata.get("xmlNamespace"):
            root.set("xmlns", self.metadata["xmlNamespace"])
        build_xml_members(root, shape, data, skip_located=True)
        if len(root):
            response.body = xml_bytes(root)
        return response

    def _parse_data(self, operation: Operation, response: HttpResponse) -> Structure:
        shape = operation.output
        root = read_xml(response.body_bytes())
        out = parse_xml_members(shape, root if root is not None else ET.Element("empty"), skip_located=True)
        self._read_located_members(shape, response, out)
        return out

    def extract_error(self, response: HttpResponse) -> Tuple[str, str]:
        root = read_xml(response.body_bytes())
        error = None
        if root is not None:
            error = root if local_name(root.tag) == "Error" else find_child(root, "Error")
        code, message = _error_fields(error)
        return code or status_error_code(response.status_code), message

    def build_request(self, operation: Operation, params: Mapping) -> HttpRequest:
        request, body = self._rest_request(operation, params)
        if body and operation.input is not None:
            root = ET.Element(operation.input.name)
            build_xml_members(root, operation.input, body)
            request.headers.setdefault("Content-Type", "application/xml")
            request.body = xml_bytes(root)
        return request
