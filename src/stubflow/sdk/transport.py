"""HTTP transport for live (non-stubbed) calls."""
from __future__ import annotations

import requests

from stubflow.core.models.http import HttpRequest, HttpResponse

from .errors import TransportError


class Transport:
    def __init__(self, endpoint_url: str, timeout: int = 60, session: requests.Session | None = None) -> None:
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, request: HttpRequest) -> HttpResponse:
        url = self.endpoint_url.rstrip("/") + request.path
        try:
            resp = self.session.request(
                request.method,
                url,
                params=request.query or None,
                headers=request.headers,
                data=request.body or None,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"Request error: {exc}") from exc
        return HttpResponse(status_code=resp.status_code, headers=dict(resp.headers), body=resp.content)
