"""Test doubles shared by fetch_conditional tests."""
from typing import Any, Dict, List, Optional

import httpx

from fetch_conditional import Transport, TransportResponse


class RecordingTransport(Transport):
    """Transport returning queued responses and recording every call."""

    def __init__(self, *responses: TransportResponse) -> None:
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def queue(self, response: Any) -> None:
        self.responses.append(response)

    async def get(self, url, *, accept_status, headers=None) -> TransportResponse:
        self.calls.append({"url": url, "accept_status": accept_status, "headers": headers})
        if not self.responses:
            response = TransportResponse(status=200, reason="OK")
        elif len(self.responses) > 1:
            response = self.responses.pop(0)
        else:
            # last queued response repeats
            response = self.responses[0]
        if isinstance(response, Exception):
            raise response
        if not accept_status(response.status):
            raise RuntimeError(f"Request failed with status code {response.status}")
        return response

    async def aclose(self) -> None:
        self.closed = True


class MockAsyncTransport(httpx.AsyncBaseTransport):
    """Mock httpx transport for testing."""

    def __init__(
        self,
        response_status: int = 200,
        response_content: bytes = b'{"success": true}',
        response_headers: Optional[dict] = None,
    ) -> None:
        self.response_status = response_status
        self.response_content = response_content
        self.response_headers = response_headers or {"content-type": "application/json"}
        self.requests: List[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Handle the async request and return a mock response."""
        self.requests.append(request)
        return httpx.Response(
            status_code=self.response_status,
            headers=self.response_headers,
            content=self.response_content,
        )


class ETagMockAsyncTransport(httpx.AsyncBaseTransport):
    """Mock httpx transport answering 304 when If-None-Match matches."""

    def __init__(
        self,
        etag: str = '"v1"',
        response_content: bytes = b'{"players": 20000}',
        expires: Optional[str] = None,
    ) -> None:
        self.etag = etag
        self.response_content = response_content
        self.expires = expires
        self.requests: List[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        headers = {"etag": self.etag}
        if self.expires:
            headers["expires"] = self.expires

        if request.headers.get("if-none-match") == self.etag:
            return httpx.Response(status_code=304, headers=headers, content=b"")

        headers["content-type"] = "application/json"
        return httpx.Response(status_code=200, headers=headers, content=self.response_content)


def ok(data: Any = None, **headers: str) -> TransportResponse:
    """Build a 200 response; header names use underscores for dashes."""
    return TransportResponse(
        status=200,
        headers={k.replace("_", "-"): v for k, v in headers.items()},
        data=data,
        reason="OK",
    )


def not_modified(**headers: str) -> TransportResponse:
    return TransportResponse(
        status=304,
        headers={k.replace("_", "-"): v for k, v in headers.items()},
        data=None,
        reason="Not Modified",
    )


