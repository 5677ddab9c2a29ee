from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from collector.app.config import Settings
from collector.app.core.errors import AuthNotReadyError, RequestError


logger = logging.getLogger(__name__)

ACCEPT_JSON = "application/json;version=8.1;charset=UTF-8"
CONTENT_TYPE_JSON = "application/json;charset=UTF-8"


@dataclass(frozen=True, slots=True)
class Session:
    """Bearer token obtained from the login handshake."""

    token: str = field(repr=False)


def build_http_client(settings: Settings) -> httpx.Client:
    """Create the `httpx.Client` shared by login and the authenticated transport."""
    if not settings.verify_tls:
        logger.warning("TLS certificate verification is disabled for %s", settings.base_url or "the platform")
    return httpx.Client(
        verify=settings.verify_tls,
        timeout=httpx.Timeout(settings.request_timeout_seconds),
    )


def join_url(base: str, *parts: str | int) -> str:
    url = base.rstrip("/")
    for part in parts:
        segment = str(part).strip("/")
        if segment:
            url = f"{url}/{segment}"
    return url


class AuthTransport:
    """Wraps an HTTP client and stamps the session headers on every request."""

    def __init__(self, client: httpx.Client, session: Session | None = None) -> None:
        self._client = client
        self._session = session

    @property
    def ready(self) -> bool:
        return bool(self._session and self._session.token)

    def send(self, request: httpx.Request) -> httpx.Response:
        if not self.ready:
            raise AuthNotReadyError("Session token is empty; log in before sending requests")
        request.headers["X-Auth-Token"] = self._session.token
        request.headers["Accept"] = ACCEPT_JSON
        request.headers["Content-Type"] = CONTENT_TYPE_JSON
        return self._client.send(request)

    def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        return self.send(self._client.build_request(method, url, **kwargs))


def execute(transport: AuthTransport, method: str, url: str, **kwargs: Any) -> httpx.Response:
    """Send through the transport and turn HTTP failures into `RequestError`."""
    try:
        response = transport.request(method, url, **kwargs)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        body = exc.response.text[:200]
        raise RequestError(
            f"{method} {url} responded with {exc.response.status_code}: {body}",
            status_code=exc.response.status_code,
        ) from exc
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        raise RequestError(f"Could not reach {url}: {exc}") from exc
    return response
