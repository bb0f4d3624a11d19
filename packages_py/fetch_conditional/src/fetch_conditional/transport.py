"""
Transport contract used by the conditional fetch client, and the default
implementation on top of httpx.
"""
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Callable, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

StatusPredicate = Callable[[int], bool]

ACCEPTED_STATUS_CODES = (HTTPStatus.OK, HTTPStatus.NOT_MODIFIED)


def accept_ok_or_not_modified(status: int) -> bool:
    """Treat 200 and 304 as successful, everything else as an error."""
    return status in ACCEPTED_STATUS_CODES


@dataclass
class TransportResponse:
    """Decoded response returned by a transport."""

    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    data: Any = None
    reason: str = ""


class Transport(ABC):
    """Issues GET requests on behalf of the fetch client."""

    @abstractmethod
    async def get(
        self,
        url: str,
        *,
        accept_status: StatusPredicate,
        headers: Optional[Dict[str, str]] = None,
    ) -> TransportResponse:
        """
        Perform a GET request.

        Must raise when ``accept_status(status)`` is False.
        """
        pass

    async def aclose(self) -> None:
        """Release resources held by the transport."""
        pass


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body: JSON when declared, text otherwise, None when empty."""
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return response.text
    return response.text


class HttpxTransport(Transport):
    """
    Transport backed by :class:`httpx.AsyncClient`.

    Example:
        transport = HttpxTransport(timeout=10.0)
        response = await transport.get(url, accept_status=lambda s: s == 200)
        await transport.aclose()
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, headers=headers)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def get(
        self,
        url: str,
        *,
        accept_status: StatusPredicate,
        headers: Optional[Dict[str, str]] = None,
    ) -> TransportResponse:
        response = await self._client.get(url, headers=headers)

        if not accept_status(response.status_code):
            raise httpx.HTTPStatusError(
                f"Request failed with status code {response.status_code} for url '{url}'",
                request=response.request,
                response=response,
            )

        return TransportResponse(
            status=response.status_code,
            headers=dict(response.headers),
            data=decode_body(response),
            reason=response.reason_phrase,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
