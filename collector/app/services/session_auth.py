from __future__ import annotations

import logging

import httpx

from collector.app.core.errors import AuthenticationError
from collector.app.services.transport import ACCEPT_JSON, CONTENT_TYPE_JSON, Session, join_url


logger = logging.getLogger(__name__)


def login(client: httpx.Client, base_url: str, user: str, password: str) -> Session:
    """Exchange user credentials for a session token.

    The login call goes straight through ``client``; it is the only request
    that does not carry ``X-Auth-Token``.
    """
    url = join_url(base_url, "session")
    headers = {
        "Accept": ACCEPT_JSON,
        "Content-Type": CONTENT_TYPE_JSON,
        "Accept-Language": "zh_CN",
        "X-Auth-User": user,
        "X-Auth-Key": password,
        "X-Auth-UserType": "0",
    }
    try:
        response = client.post(url, headers=headers)
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        raise AuthenticationError(f"Could not reach {url}: {exc}") from exc

    if response.status_code != 200:
        status_text = f"{response.status_code} {response.reason_phrase}".strip()
        raise AuthenticationError(
            f"Login rejected ({status_text}); check user name and password",
            status_code=response.status_code,
        )

    token = response.headers.get("X-Auth-Token", "")
    if not token:
        raise AuthenticationError("Login succeeded but no X-Auth-Token header was returned", status_code=200)

    logger.info("Logged in to %s as %s", base_url, user)
    return Session(token=token)
