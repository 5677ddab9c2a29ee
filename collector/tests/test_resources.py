import httpx
import pytest

from collector.app.core.errors import DecodeError, RequestError
from collector.app.schemas import Host
from collector.app.services.resources import list_hosts, site_url

SITE = "https://fc.example/service/sites/1"


def test_site_url():
    assert site_url("https://fc.example/", "1") == SITE


def test_list_hosts_decodes_single_host(make_transport):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"hosts": [{"urn": "u1", "name": "h1", "ip": "10.0.0.1"}]})

    hosts = list_hosts(make_transport(handler), SITE)

    assert hosts == [Host(urn="u1", name="h1", ip="10.0.0.1")]
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/service/sites/1/hosts"
    assert request.url.params["limit"] == "100"
    assert request.url.params["offset"] == "0"
    assert request.headers["X-Auth-Token"] == "fc-token"


def test_list_hosts_preserves_server_order_and_ignores_extra_fields(make_transport):
    payload = {
        "total": 3,
        "hosts": [
            {"urn": "u3", "name": "c", "ip": "10.0.0.3", "status": "normal"},
            {"urn": "u1", "name": "a", "ip": "10.0.0.1"},
            {"urn": "u2", "name": "b", "ip": "10.0.0.2"},
        ],
    }
    hosts = list_hosts(make_transport(lambda request: httpx.Response(200, json=payload)), SITE)

    assert [host.urn for host in hosts] == ["u3", "u1", "u2"]


def test_list_hosts_passes_page_selection(make_transport):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"hosts": []})

    assert list_hosts(make_transport(handler), SITE, limit=20, offset=40) == []
    assert seen[0].url.params["limit"] == "20"
    assert seen[0].url.params["offset"] == "40"


@pytest.mark.parametrize(("limit", "offset"), [(0, 0), (10, -1)])
def test_list_hosts_rejects_bad_page(make_transport, limit, offset):
    auth = make_transport(lambda request: pytest.fail("no request expected"))

    with pytest.raises(ValueError):
        list_hosts(auth, SITE, limit=limit, offset=offset)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=[{"urn": "u1"}]),
        httpx.Response(200, json={"items": []}),
        httpx.Response(200, json={"hosts": [{"name": "missing urn"}]}),
        httpx.Response(200, content=b"[\xff]"),
        httpx.Response(200, content=b"{\"hosts\": \"\xff\xfe\"}"),
    ],
)
def test_list_hosts_rejects_unexpected_payload(make_transport, response):
    with pytest.raises(DecodeError):
        list_hosts(make_transport(lambda request: response), SITE)


def test_list_hosts_raises_request_error_on_failure(make_transport):
    with pytest.raises(RequestError) as excinfo:
        list_hosts(make_transport(lambda request: httpx.Response(404, text="no such site")), SITE)

    assert excinfo.value.status_code == 404
