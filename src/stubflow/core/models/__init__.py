"""Core models."""

from .shapes import (
    ApiModel,
    ListShape,
    MapShape,
    MemberRef,
    Operation,
    ScalarShape,
    Shape,
    StructureShape,
    parse_api,
    snake_case,
)
from .structures import EmptyStructure, Structure
from .http import HttpRequest, HttpResponse
from .stubs import DataStub, ErrorStub, HttpStub, StubEntry

__all__ = [
    "ApiModel",
    "ListShape",
    "MapShape",
    "MemberRef",
    "Operation",
    "ScalarShape",
    "Shape",
    "StructureShape",
    "parse_api",
    "snake_case",
    "EmptyStructure",
    "Structure",
    "HttpRequest",
    "HttpResponse",
    "DataStub",
    "ErrorStub",
    "HttpStub",
    "StubEntry",
]
