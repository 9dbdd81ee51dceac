"""Wire-level request and response containers."""
from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from typing import IO, Dict, Mapping, Union

Body = Union[bytes, str, IO[bytes], IO[str], None]


@dataclass
class HttpResponse:
    status_code: int = 200
    headers: Dict[str, str] = dataclass_field(default_factory=dict)
    body: Body = b""

    @classmethod
    def from_mapping(cls, data: Mapping) -> "HttpResponse":
        return cls(
            status_code=int(data["status_code"]),
            headers={str(k): str(v) for k, v in dict(data["headers"] or {}).items()},
            body=data["body"],
        )

    def header(self, name: str, default: str | None = None) -> str | None:
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default

    def body_bytes(self) -> bytes:
        """Read the body, rewinding seekable streams so repeated reads agree."""
        body = self.body
        if body is None:
            return b""
        if isinstance(body, bytes):
            return body
        if isinstance(body, str):
            return body.encode("utf-8")
        if hasattr(body, "seek"):
            body.seek(0)
        data = body.read()
        return data.encode("utf-8") if isinstance(data, str) else data

    def to_dict(self) -> dict:
        return {
            "status_code": self.status_code,
            "headers": dict(self.headers),
            "body": self.body_bytes().decode("utf-8", errors="replace"),
        }


@dataclass
class HttpRequest:
    method: str = "POST"
    path: str = "/"
    headers: Dict[str, str] = dataclass_field(default_factory=dict)
    query: Dict[str, str] = dataclass_field(default_factory=dict)
    body: bytes = b""
