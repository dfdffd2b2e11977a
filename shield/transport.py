"""HTTP transport shared by the verification clients."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import requests

DEFAULT_TIMEOUT = 15


class TransportError(Exception):
    """Raised when an outbound request fails or returns an unusable body."""


@dataclass
class TransportResponse:
    status_code: int
    body: str
    payload: Any = None
    decode_error: Optional[str] = None  # set when the body is not JSON

    def json(self) -> Any:
        if self.decode_error is not None:
            raise TransportError(f"Invalid JSON body: {self.decode_error}")
        return self.payload


class Transport(Protocol):
    def get(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> TransportResponse: ...

    def post(
        self,
        url: str,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> TransportResponse: ...


class RequestsTransport:
    """Single-attempt blocking transport backed by a requests session."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def get(self, url, params=None, headers=None) -> TransportResponse:
        return self._send("GET", url, params=params, headers=headers)

    def post(self, url, json=None, headers=None) -> TransportResponse:
        return self._send("POST", url, json=json, headers=headers)

    def _send(self, method: str, url: str, **kwargs) -> TransportResponse:
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
            r.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"HTTP error: {e}") from e

        # Webhooks answer with plain text; only callers that read JSON see the error
        try:
            return TransportResponse(r.status_code, r.text, payload=r.json())
        except requests.JSONDecodeError as e:
            return TransportResponse(r.status_code, r.text, decode_error=str(e))
