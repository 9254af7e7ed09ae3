from __future__ import annotations

import json

import pytest
import requests

from page_editor.cpanel import (
    SHAPE_DATA_CONTENT,
    SHAPE_FILE_CONTENT,
    CpanelClient,
    parse_file_content,
)
from page_editor.errors import NotFoundError, RemoteApiError


class FakeResponse:
    def __init__(self, payload=None, status_code: int = 200, text: str | None = None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        return json.loads(self.text)


class FakeSession(requests.Session):
    """Records calls and answers from a queue instead of the network."""

    def __init__(self, *responses):
        super().__init__()
        self.responses = list(responses)
        self.calls: list[tuple[str, str, dict]] = []

    def _next(self, method: str, url: str, kwargs: dict):
        self.calls.append((method, url, kwargs))
        r = self.responses.pop(0)
        if isinstance(r, Exception):
            raise r
        return r

    def get(self, url, **kwargs):
        return self._next("GET", url, kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, kwargs)


def _client(*responses) -> tuple[CpanelClient, FakeSession]:
    session = FakeSession(*responses)
    client = CpanelClient("https://cp.test:2083/", "user", "s3cret", "public_html", timeout=15, session=session)
    return client, session


def test_session_uses_basic_auth() -> None:
    client, session = _client()
    assert session.auth == ("user", "s3cret")
    assert client.base_url == "https://cp.test:2083"


def test_read_file_flat_shape() -> None:
    client, session = _client(FakeResponse({"status": 1, "data": {"content": "<html></html>"}}))
    assert client.read_file("about.html") == "<html></html>"

    method, url, kwargs = session.calls[0]
    assert method == "GET"
    assert url == "https://cp.test:2083/execute/Fileman/get_file_content"
    assert kwargs["params"] == {"dir": "public_html", "file": "about.html"}
    assert kwargs["timeout"] == 15


def test_read_file_nested_shape() -> None:
    client, _ = _client(FakeResponse({"status": 1, "data": {"file": {"content": "nested"}}}))
    assert client.read_file("about.html") == "nested"


def test_parse_file_content_reports_shape() -> None:
    assert parse_file_content({"status": 1, "data": {"content": "a"}}).shape == SHAPE_DATA_CONTENT
    assert parse_file_content({"status": 1, "data": {"file": {"content": "b"}}}).shape == SHAPE_FILE_CONTENT


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse({"status": 0, "errors": ["No such file"], "data": None}),
        FakeResponse({"status": 1, "data": {}}),
        FakeResponse({"status": 1, "data": {"content": ""}}),
        FakeResponse(text="<html>login</html>"),
        FakeResponse({"status": 0, "message": "denied"}, status_code=403),
        requests.exceptions.ConnectTimeout("timed out"),
    ],
)
def test_read_failures_become_not_found(response) -> None:
    client, session = _client(response)
    with pytest.raises(NotFoundError) as exc:
        client.read_file("about.html")
    assert exc.value.status_code == 404
    assert len(session.calls) == 1


def test_write_file_posts_form_fields() -> None:
    client, session = _client(FakeResponse({"status": 1, "data": {}}))
    client.write_file("about.html", "<html>new</html>")

    method, url, kwargs = session.calls[0]
    assert method == "POST"
    assert url.endswith("/execute/Fileman/save_file_content")
    assert kwargs["data"] == {"dir": "public_html", "file": "about.html", "content": "<html>new</html>"}


def test_write_status_error_uses_first_api_error() -> None:
    client, session = _client(FakeResponse({"status": 0, "errors": ["Disk quota exceeded", "other"]}))
    with pytest.raises(RemoteApiError) as exc:
        client.write_file("about.html", "x")
    assert exc.value.message == "Disk quota exceeded"
    assert exc.value.error_code == "API_STATUS"
    assert len(session.calls) == 1


def test_write_is_not_retried_on_timeout() -> None:
    client, session = _client(requests.exceptions.ReadTimeout("slow"), FakeResponse({"status": 1}))
    with pytest.raises(RemoteApiError) as exc:
        client.write_file("about.html", "x")
    assert exc.value.error_code == "OUTBOUND_TIMEOUT"
    assert len(session.calls) == 1


def test_call_classifies_dns_failure() -> None:
    client, _ = _client(requests.exceptions.ConnectionError("Failed to resolve 'cp.test'"))
    with pytest.raises(RemoteApiError) as exc:
        client.version()
    assert exc.value.error_code == "DNS_FAIL"
    assert exc.value.stage == "GET Version"


def test_call_rejects_non_json() -> None:
    client, _ = _client(FakeResponse(text="Bad gateway", status_code=502))
    with pytest.raises(RemoteApiError) as exc:
        client.call("Version")
    assert exc.value.error_code == "INVALID_JSON"
    assert exc.value.http_status == 502


def test_call_http_error_with_json_body() -> None:
    client, _ = _client(FakeResponse({"message": "Access denied"}, status_code=403))
    with pytest.raises(RemoteApiError) as exc:
        client.call("Version")
    assert exc.value.error_code == "HTTP_403"
    assert "Access denied" in exc.value.message


def test_list_files_defaults_to_base_dir() -> None:
    client, session = _client(FakeResponse({"status": 1, "data": []}))
    client.list_files()
    assert session.calls[0][2]["params"] == {"dir": "public_html", "show_hidden": 0}
