from __future__ import annotations

import httpx
import pytest

from collector.app import main
from collector.app.config import Settings
from collector.app.catalog import MetricCatalog


def _platform(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/session":
        return httpx.Response(200, headers={"X-Auth-Token": "tok"})
    if request.url.path.endswith("/hosts"):
        return httpx.Response(200, json={"hosts": [{"urn": "u1", "name": "h1", "ip": "10.0.0.1"}]})
    if request.url.path.endswith("/monitors/realtimedata"):
        return httpx.Response(
            200, json=[{"object_name": "h1", "value": [{"metric_id": "cpu_usage", "metric_value": 42}]}]
        )
    return httpx.Response(404)


@pytest.fixture
def cli(monkeypatch):
    built: list[Settings] = []

    def fake_client(config: Settings) -> httpx.Client:
        built.append(config)
        return httpx.Client(transport=httpx.MockTransport(_platform))

    monkeypatch.setattr(main, "settings", Settings(_env_file=None), raising=False)
    monkeypatch.setattr(main, "build_http_client", fake_client)
    monkeypatch.setattr(main, "configure_logging", lambda debug=False: None)
    return built


ARGS = ["--url", "https://fc.example/", "--user", "admin", "--password", "secret"]


def test_main_prints_metric_lines(cli, capsys):
    assert main.main(ARGS) == 0

    assert capsys.readouterr().out == 'cpu_usage{name="h1"}=42\n'
    assert cli[0].base_url == "https://fc.example"
    assert cli[0].verify_tls is True


def test_main_flags_override_settings(cli):
    main.main([*ARGS, "--site", "3", "--catalog", "vm", "--insecure", "--limit", "5", "--timeout", "2.5"])

    config = cli[0]
    assert config.site_id == "3"
    assert config.metric_catalog is MetricCatalog.VM
    assert config.verify_tls is False
    assert config.host_limit == 5
    assert config.request_timeout_seconds == 2.5


def test_main_requires_credentials(cli, capsys):
    assert main.main(["--url", "https://fc.example"]) == 2
    assert cli == []
    assert capsys.readouterr().out == ""


def test_main_reports_failure_without_output(cli, monkeypatch, capsys):
    monkeypatch.setattr(
        main,
        "build_http_client",
        lambda config: httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(401))),
    )

    assert main.main(ARGS) == 1
    assert capsys.readouterr().out == ""


def test_main_rejects_invalid_flag_values(cli):
    with pytest.raises(SystemExit) as excinfo:
        main.main([*ARGS, "--limit", "0"])

    assert excinfo.value.code == 2
