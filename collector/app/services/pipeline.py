from __future__ import annotations

import logging
from enum import StrEnum

import httpx

from collector.app.catalog import metrics_for
from collector.app.config import Settings
from collector.app.core.errors import PipelineStateError
from collector.app.schemas import Host, MetricResponseItem
from collector.app.services.realtime import request_metrics
from collector.app.services.renderer import render
from collector.app.services.resources import list_hosts, site_url
from collector.app.services.session_auth import login
from collector.app.services.transport import AuthTransport


logger = logging.getLogger(__name__)


class PipelineStage(StrEnum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    HOSTS_LISTED = "hosts_listed"
    METRICS_FETCHED = "metrics_fetched"
    RENDERED = "rendered"


class MetricsPipeline:
    """Runs login, host listing, the realtime metric batch and rendering in order.

    Each step moves the pipeline one stage forward. A step that raises leaves
    the stage where it was, so no later step can run on a failed run.
    """

    def __init__(self, settings: Settings, client: httpx.Client) -> None:
        self._settings = settings
        self._client = client
        self._site = site_url(settings.base_url, settings.site_id)
        self._transport: AuthTransport | None = None
        self.stage = PipelineStage.UNAUTHENTICATED
        self.hosts: list[Host] = []
        self.items: list[MetricResponseItem] = []
        self.lines: list[str] = []

    def _expect(self, stage: PipelineStage, action: str) -> None:
        if self.stage is not stage:
            raise PipelineStateError(f"Cannot {action} while pipeline is {self.stage}")

    def authenticate(self) -> None:
        self._expect(PipelineStage.UNAUTHENTICATED, "authenticate")
        session = login(self._client, self._settings.base_url, self._settings.user, self._settings.password)
        self._transport = AuthTransport(self._client, session)
        self.stage = PipelineStage.AUTHENTICATED

    def list_hosts(self) -> list[Host]:
        self._expect(PipelineStage.AUTHENTICATED, "list hosts")
        self.hosts = list_hosts(
            self._transport,
            self._site,
            limit=self._settings.host_limit,
            offset=self._settings.host_offset,
        )
        self.stage = PipelineStage.HOSTS_LISTED
        return self.hosts

    def fetch_metrics(self) -> list[MetricResponseItem]:
        self._expect(PipelineStage.HOSTS_LISTED, "fetch metrics")
        metric_ids = metrics_for(self._settings.metric_catalog)
        self.items = request_metrics(
            self._transport,
            self._site,
            self.hosts,
            metric_ids,
            max_hosts=self._settings.host_batch_limit(),
        )
        self.stage = PipelineStage.METRICS_FETCHED
        return self.items

    def render(self) -> list[str]:
        self._expect(PipelineStage.METRICS_FETCHED, "render")
        self.lines = render(self.items)
        self.stage = PipelineStage.RENDERED
        return self.lines

    def run(self) -> list[str]:
        self.authenticate()
        self.list_hosts()
        self.fetch_metrics()
        lines = self.render()
        logger.info("Rendered %d metric lines for site %s", len(lines), self._settings.site_id)
        return lines
