# tracker_mcp/providers/http.py
"""Shared httpx plumbing for provider clients.

One bounded timeout, no retries. Every failure leaves this module as a
typed TrackerError; callers never see raw httpx exceptions.
"""

from typing import Any, Optional

import httpx

from ..config import Config
from ..errors import (
    AccessDeniedError,
    InvalidCredentialsError,
    NotFoundError,
    UpstreamError,
)
from ..utils.logging import logger


def _error_detail(response: httpx.Response) -> str:
    """Best-effort error text from a Redmine/Jira/Monday error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200].strip()

    if isinstance(body, dict):
        messages = []
        errors = body.get("errors")
        if isinstance(errors, list):
            messages.extend(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
        elif isinstance(errors, dict):
            messages.extend(f"{k}: {v}" for k, v in errors.items())
        messages.extend(str(m) for m in body.get("errorMessages") or [])
        if body.get("error_message"):
            messages.append(str(body["error_message"]))
        return "; ".join(messages)
    return ""


def raise_for_status(response: httpx.Response, provider: str) -> None:
    """Translate an HTTP error status into the matching TrackerError."""
    status = response.status_code
    if status < 400:
        return

    detail = _error_detail(response)
    suffix = f": {detail}" if detail else ""

    if status == 401:
        raise InvalidCredentialsError(f"{provider} rejected the API credentials{suffix}")
    if status == 403:
        raise AccessDeniedError(f"Access denied by {provider}{suffix}")
    if status == 404:
        raise NotFoundError(f"Resource not found on {provider}{suffix}")
    raise UpstreamError(f"{provider} API error (HTTP {status}){suffix}", status_code=status)


class HttpClient:
    """Thin JSON client bound to one provider base URL."""

    provider = "provider"

    def __init__(
        self,
        base_url: str,
        headers: Optional[dict] = None,
        auth: Any = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout if timeout is not None else Config.HTTP_TIMEOUT
        self._transport = transport
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"Accept": "application/json", **(headers or {})},
            auth=auth,
            timeout=self._timeout,
            transport=transport,
        )

    def request(self, method: str, path: str, **kwargs) -> httpx.Response:
        logger.debug(f"{self.provider} {method} {path}")
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise UpstreamError(f"{self.provider} request timed out: {method} {path}") from e
        except httpx.RequestError as e:
            raise UpstreamError(f"{self.provider} request failed: {e}") from e

        raise_for_status(response, self.provider)
        return response

    def get_json(self, path: str, params: Optional[dict] = None) -> Any:
        return self._json(self.request("GET", path, params=params))

    def post_json(self, path: str, payload: Any) -> Any:
        return self._json(self.request("POST", path, json=payload))

    def put_json(self, path: str, payload: Any) -> Any:
        return self._json(self.request("PUT", path, json=payload))

    def delete(self, path: str, params: Optional[dict] = None) -> None:
        self.request("DELETE", path, params=params)

    def get_bytes(self, path: str, params: Optional[dict] = None) -> bytes:
        return self.request(
            "GET", path, params=params, headers={"Accept": "*/*"}, follow_redirects=True
        ).content

    def fetch_external(self, url: str) -> bytes:
        """GET a pre-signed URL outside the API, without the provider auth headers."""
        with httpx.Client(timeout=self._timeout, transport=self._transport, follow_redirects=True) as client:
            try:
                response = client.get(url)
            except httpx.RequestError as e:
                raise UpstreamError(f"{self.provider} download failed: {e}") from e
        raise_for_status(response, self.provider)
        return response.content

    def close(self) -> None:
        self._client.close()

    def _json(self, response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"{self.provider} returned invalid JSON") from e
