"""Wire protocol registry.

Each supported protocol family knows how to encode stub errors and stub
data as HTTP responses and how to parse responses back into data.
"""
from __future__ import annotations

from typing import Dict, Mapping, Type

from ..errors import UnsupportedProtocolError
from .base import ProtocolBase, WireProtocol
from .json_protocol import JsonProtocol, RestJsonProtocol
from .xml_protocol import Ec2Protocol, QueryProtocol, RestXmlProtocol

PROTOCOLS: Dict[str, Type[ProtocolBase]] = {
    "json": JsonProtocol,
    "rest-json": RestJsonProtocol,
    "query": QueryProtocol,
    "ec2": Ec2Protocol,
    "rest-xml": RestXmlProtocol,
}


def get_protocol(name: str | None, metadata: Mapping | None = None) -> WireProtocol:
    try:
        protocol_cls = PROTOCOLS[name]
    except KeyError:
        raise UnsupportedProtocolError(f"unsupported protocol '{name}'") from None
    return protocol_cls(metadata)


__all__ = [
    "PROTOCOLS",
    "WireProtocol",
    "JsonProtocol",
    "RestJsonProtocol",
    "QueryProtocol",
    "Ec2Protocol",
    "RestXmlProtocol",
    "get_protocol",
]
