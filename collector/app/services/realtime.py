from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from collector.app.catalog import HOST_METRICS
from collector.app.core.errors import BatchLimitError, DecodeError, EncodeError
from collector.app.schemas import Host, MetricRequestEntry, MetricResponseItem
from collector.app.services.transport import AuthTransport, execute, join_url


logger = logging.getLogger(__name__)

_REQUEST_ADAPTER = TypeAdapter(list[MetricRequestEntry])
_RESPONSE_ADAPTER = TypeAdapter(list[MetricResponseItem])


def build_metric_request(hosts: Sequence[Host], metric_ids: Sequence[str]) -> list[MetricRequestEntry]:
    """One entry per host, each carrying the whole catalog in catalog order."""
    return [MetricRequestEntry(urn=host.urn, metric_id=list(metric_ids)) for host in hosts]


def encode_metric_request(entries: Sequence[MetricRequestEntry]) -> bytes:
    try:
        return _REQUEST_ADAPTER.dump_json(list(entries))
    except PydanticSerializationError as exc:
        raise EncodeError(f"Could not serialize metric request: {exc}") from exc


def _unwrap_items(data: Any) -> Any:
    # Some platform versions wrap the result list as {"items": [...]}.
    if isinstance(data, dict) and "items" in data:
        return data["items"]
    return data


def decode_metric_response(data: Any) -> list[MetricResponseItem]:
    data = _unwrap_items(data)
    if not isinstance(data, list):
        raise DecodeError(f"Expected a list of metric results, got {type(data).__name__}")
    try:
        return _RESPONSE_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise DecodeError(f"Unexpected metric result payload: {exc}") from exc


def _warn_duplicates(items: Sequence[MetricResponseItem]) -> None:
    seen: set[str] = set()
    for item in items:
        if item.object_name in seen:
            logger.warning("Platform returned more than one result for %s", item.object_name)
        seen.add(item.object_name)


def request_metrics(
    transport: AuthTransport,
    site: str,
    hosts: Sequence[Host],
    metric_ids: Sequence[str] = HOST_METRICS,
    *,
    max_hosts: int | None = None,
) -> list[MetricResponseItem]:
    """Request current values of ``metric_ids`` for every host in a single call."""
    if not hosts:
        logger.info("No hosts to query; skipping realtime metric request")
        return []
    if max_hosts is not None and len(hosts) > max_hosts:
        raise BatchLimitError(f"Refusing to request metrics for {len(hosts)} hosts (limit {max_hosts})")

    body = encode_metric_request(build_metric_request(hosts, metric_ids))
    url = join_url(site, "monitors", "realtimedata")
    response = execute(transport, "POST", url, content=body)

    try:
        data = response.json()
    except ValueError as exc:
        raise DecodeError(f"Metric response from {url} is not JSON: {exc}") from exc

    items = decode_metric_response(data)
    _warn_duplicates(items)
    logger.info("Received %d metric results for %d hosts", len(items), len(hosts))
    return items
