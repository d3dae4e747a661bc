# tests/test_http_clients.py
"""Tests for provider HTTP clients and status code mapping."""

import json

import httpx
import pytest


def _redmine(handler):
    from tracker_mcp.providers.redmine_client import RedmineClient

    return RedmineClient("https://redmine.example.com/", "secret", transport=httpx.MockTransport(handler))


@pytest.mark.parametrize("status,error_name", [
    (401, "InvalidCredentialsError"),
    (403, "AccessDeniedError"),
    (404, "NotFoundError"),
    (422, "UpstreamError"),
    (500, "UpstreamError"),
])
def test_status_codes_map_to_typed_errors(status, error_name):
    from tracker_mcp import errors

    client = _redmine(lambda request: httpx.Response(status, json={"errors": ["nope"]}))

    with pytest.raises(getattr(errors, error_name)) as exc_info:
        client.get_issue(1)

    assert "nope" in str(exc_info.value)


def test_upstream_error_keeps_status_code():
    from tracker_mcp.errors import UpstreamError

    client = _redmine(lambda request: httpx.Response(502, text="Bad gateway"))

    with pytest.raises(UpstreamError) as exc_info:
        client.get_my_account()

    assert exc_info.value.status_code == 502


def test_transport_errors_become_upstream_errors():
    from tracker_mcp.errors import UpstreamError

    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(UpstreamError, match="timed out"):
        _redmine(handler).get_my_account()


def test_redmine_sends_api_key_and_include_params():
    seen = {}

    def handler(request):
        seen["key"] = request.headers.get("X-Redmine-API-Key")
        seen["url"] = str(request.url)
        seen["include"] = request.url.params.get("include")
        return httpx.Response(200, json={"issue": {"id": 1}})

    data = _redmine(handler).get_issue(1)

    assert data == {"issue": {"id": 1}}
    assert seen["key"] == "secret"
    assert seen["url"].startswith("https://redmine.example.com/issues/1.json")
    assert seen["include"] == "journals,attachments,allowed_statuses"


def test_redmine_time_entries_follow_pagination():
    offsets = []

    def handler(request):
        offset = int(request.url.params["offset"])
        offsets.append(offset)
        batch = [{"id": offset + i} for i in range(100 if offset == 0 else 20)]
        return httpx.Response(200, json={"time_entries": batch, "total_count": 120})

    entries = _redmine(handler).get_time_entries({"user_id": 5})

    assert offsets == [0, 100]
    assert len(entries) == 120


def test_redmine_empty_write_response():
    client = _redmine(lambda request: httpx.Response(204))

    client.update_journal(101, "")


def test_jira_uses_basic_auth_and_follows_attachment_redirect():
    from tracker_mcp.providers.jira_client import JiraClient

    def handler(request):
        if request.url.path == "/rest/api/3/attachment/content/30001":
            assert request.headers["Authorization"].startswith("Basic ")
            return httpx.Response(303, headers={"Location": "https://media.example.com/file/30001"})
        if request.url.host == "media.example.com":
            return httpx.Response(200, content=b"\x89PNG")
        return httpx.Response(404)

    client = JiraClient("https://acme.atlassian.net", "alex@example.com", "token",
                        transport=httpx.MockTransport(handler))

    assert client.download_attachment(30001) == b"\x89PNG"


def test_jira_search_uses_jql_endpoint():
    from tracker_mcp.providers.jira_client import JiraClient

    def handler(request):
        assert request.url.path == "/rest/api/3/search/jql"
        assert request.url.params["jql"] == "assignee = currentUser()"
        return httpx.Response(200, json={"issues": [{"id": "1"}]})

    client = JiraClient("https://acme.atlassian.net", "a@b.c", "t", transport=httpx.MockTransport(handler))

    assert client.search_issues("assignee = currentUser()") == [{"id": "1"}]


def test_monday_graphql_errors_raise():
    from tracker_mcp.errors import UpstreamError
    from tracker_mcp.providers.monday_client import MondayClient

    def handler(request):
        assert request.headers["Authorization"] == "token"
        return httpx.Response(200, json={"errors": [{"message": "Complexity budget exhausted"}]})

    client = MondayClient("token", transport=httpx.MockTransport(handler))

    with pytest.raises(UpstreamError, match="Complexity budget exhausted"):
        client.get_me()


def test_monday_item_lookup_missing_item():
    from tracker_mcp.errors import NotFoundError
    from tracker_mcp.providers.monday_client import MondayClient

    client = MondayClient("token", transport=httpx.MockTransport(
        lambda request: httpx.Response(200, json={"data": {"items": []}})
    ))

    with pytest.raises(NotFoundError):
        client.get_item(123)


def test_monday_time_tracking_keeps_positive_durations():
    from tracker_mcp.providers.monday_client import MondayClient

    def handler(request):
        body = json.loads(request.content)
        assert body["variables"] == {"limit": 100}
        return httpx.Response(200, json={"data": {"boards": [{
            "id": "555",
            "name": "Docs",
            "items_page": {"items": [
                {"id": "1", "name": "Tracked", "column_values": [{"id": "time", "duration": 600}]},
                {"id": "2", "name": "Idle", "column_values": [{"id": "time", "duration": 0}]},
                {"id": "3", "name": "No column", "column_values": [{"id": "status", "text": "Done"}]},
            ]},
        }]}})

    items = MondayClient("token", transport=httpx.MockTransport(handler)).get_items_with_time_tracking()

    assert [i["id"] for i in items] == ["1"]
    assert items[0]["board"] == {"id": "555", "name": "Docs"}


def test_close_releases_connection_pool():
    client = _redmine(lambda request: httpx.Response(200, json={}))

    client.close()

    assert client._client.is_closed
