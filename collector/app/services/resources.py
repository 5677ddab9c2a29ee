from __future__ import annotations

import logging

from pydantic import ValidationError

from collector.app.core.errors import DecodeError
from collector.app.schemas import Host, HostList
from collector.app.services.transport import AuthTransport, execute, join_url


logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100
DEFAULT_OFFSET = 0


def site_url(base_url: str, site_id: str | int) -> str:
    """URL of a single site under the platform service root."""
    return join_url(base_url, "service", "sites", site_id)


def list_hosts(
    transport: AuthTransport,
    site: str,
    limit: int = DEFAULT_LIMIT,
    offset: int = DEFAULT_OFFSET,
) -> list[Host]:
    """Fetch one page of hosts registered at ``site``, in server order."""
    if limit < 1:
        raise ValueError("limit must be at least 1")
    if offset < 0:
        raise ValueError("offset must not be negative")

    url = join_url(site, "hosts")
    response = execute(transport, "GET", url, params={"limit": limit, "offset": offset})

    try:
        payload = HostList.model_validate(response.json())
    except (ValueError, ValidationError) as exc:
        raise DecodeError(f"Unexpected host list payload from {url}: {exc}") from exc

    logger.info("Fetched %d hosts from %s", len(payload.hosts), url)
    for host in payload.hosts:
        logger.debug("Host %s name=%s ip=%s", host.urn, host.name, host.ip)
    return payload.hosts
