# tests/test_providers.py
"""Tests for provider adapters over mocked HTTP clients."""

from datetime import date

import pytest


def test_redmine_get_issues_uses_explicit_user_and_status(redmine_adapter):
    redmine_adapter.client.get_issues.return_value = {"issues": []}

    redmine_adapter.get_issues(limit=10, user_id=8, status_id="*")

    redmine_adapter.client.get_issues.assert_called_once_with(
        {"assigned_to_id": 8, "limit": 10, "status_id": "*"}
    )
    redmine_adapter.client.get_my_account.assert_not_called()


def test_redmine_current_user_is_memoized(redmine_adapter):
    first = redmine_adapter.get_current_user()
    second = redmine_adapter.get_current_user()

    assert first is second
    assert first.name == "Alex Martin"
    redmine_adapter.client.get_my_account.assert_called_once()


def test_redmine_log_time_sends_hours(redmine_adapter, redmine_time_entry_payload):
    redmine_adapter.client.log_time.return_value = {"time_entry": redmine_time_entry_payload}

    entry = redmine_adapter.log_time(42, 5400, "Login fix", date(2024, 1, 15), {"activity_id": 9})

    redmine_adapter.client.log_time.assert_called_once_with({
        "issue_id": 42,
        "hours": 1.5,
        "comments": "Login fix",
        "activity_id": 9,
        "spent_on": "2024-01-15",
    })
    assert entry.seconds == 5400
    assert entry.metadata == {"activity_id": 9}


def test_redmine_delete_comment_clears_notes(redmine_adapter):
    redmine_adapter.delete_comment(101)

    redmine_adapter.client.update_journal.assert_called_once_with(101, "")


def test_redmine_update_time_entry_payload(redmine_adapter):
    redmine_adapter.update_time_entry(900, comment="Review", spent_on=date(2024, 2, 1))

    redmine_adapter.client.update_time_entry.assert_called_once_with(
        900, {"comments": "Review", "spent_on": "2024-02-01"}
    )


def test_jira_get_issues_builds_jql(jira_adapter, jira_issue_payload):
    jira_adapter.client.search_issues.return_value = [jira_issue_payload]

    issues = jira_adapter.get_issues(project_id=10000, limit=20)

    jira_adapter.client.search_issues.assert_called_once_with(
        "project = 10000 AND assignee = currentUser() AND status != Done ORDER BY updated DESC",
        max_results=20,
    )
    assert issues[0].title == "Checkout button misaligned"


def test_jira_get_issues_status_filter(jira_adapter):
    jira_adapter.client.search_issues.return_value = []

    jira_adapter.get_issues(status_id="In Review", user_id=77)

    jql = jira_adapter.client.search_issues.call_args.args[0]
    assert jql == 'assignee = currentUser() AND status = "In Review" ORDER BY updated DESC'


def test_jira_time_entries_filter_author_and_range(jira_adapter, jira_issue_payload):
    me = "5b10a2844c20165700ede21g"
    jira_adapter.client.search_issues.return_value = [jira_issue_payload]
    jira_adapter.client.get_worklogs.return_value = [
        {"id": "1", "author": {"accountId": me, "displayName": "Alex Martin"},
         "timeSpentSeconds": 3600, "started": "2024-01-15T09:00:00.000+0000", "comment": "Pairing"},
        {"id": "2", "author": {"accountId": "someone-else"},
         "timeSpentSeconds": 7200, "started": "2024-01-15T09:00:00.000+0000"},
        {"id": "3", "author": {"accountId": me},
         "timeSpentSeconds": 1800, "started": "2023-12-31T09:00:00.000+0000"},
    ]

    entries = jira_adapter.get_time_entries(date(2024, 1, 1), date(2024, 1, 31))

    assert [e.id for e in entries] == [1]
    assert entries[0].hours == 1.0
    assert entries[0].comment == "Pairing"
    assert entries[0].issue.title == "Checkout button misaligned"
    assert entries[0].metadata == {"issueKey": "WEB-42"}
    jql = jira_adapter.client.search_issues.call_args.args[0]
    assert 'worklogDate >= "2024-01-01"' in jql
    assert 'worklogDate <= "2024-01-31"' in jql


def test_jira_log_time_posts_worklog(jira_adapter, jira_issue_payload):
    jira_adapter.client.get_issue.return_value = jira_issue_payload
    jira_adapter.client.add_worklog.return_value = {
        "id": "501", "timeSpentSeconds": 5400, "started": "2024-01-15T09:00:00.000+0000",
    }

    entry = jira_adapter.log_time(10042, 5400, "Fix\nTest", date(2024, 1, 15), {})

    issue_id, payload = jira_adapter.client.add_worklog.call_args.args
    assert issue_id == 10042
    assert payload["timeSpentSeconds"] == 5400
    assert payload["started"] == "2024-01-15T09:00:00.000+0000"
    assert len(payload["comment"]["content"]) == 2
    assert entry.id == 501


def test_jira_update_time_entry_resolves_issue(jira_adapter):
    jira_adapter.client.get_worklogs_by_ids.return_value = [{"id": "501", "issueId": "10042"}]

    jira_adapter.update_time_entry(501, hours=2.0)

    jira_adapter.client.update_worklog.assert_called_once_with("10042", 501, {"timeSpentSeconds": 7200})


def test_jira_delete_unknown_worklog(jira_adapter):
    from tracker_mcp.errors import NotFoundError

    jira_adapter.client.get_worklogs_by_ids.return_value = []

    with pytest.raises(NotFoundError):
        jira_adapter.delete_time_entry(999)
    jira_adapter.client.delete_worklog.assert_not_called()


def test_jira_update_time_entry_rejects_activity(jira_adapter):
    from tracker_mcp.errors import ValidationError

    with pytest.raises(ValidationError):
        jira_adapter.update_time_entry(501, activity_id=9)
    jira_adapter.client.get_worklogs_by_ids.assert_not_called()


def test_monday_get_issues_status_and_limit(monday_adapter, monday_item_payload):
    done = dict(monday_item_payload, id="2", column_values=[
        {"id": "status", "text": "Done", "value": None},
        {"id": "people", "text": "Alex Martin", "value": '{"personsAndTeams": [{"id": 321, "kind": "person"}]}'},
    ])
    monday_adapter.client.get_board_items.return_value = [monday_item_payload, done]

    issues = monday_adapter.get_issues(project_id=555, status_id="done")

    assert [i.id for i in issues] == [2]
    monday_adapter.client.get_board_items.assert_called_once_with(555, limit=100)
    assert monday_adapter.get_issues(project_id=555, limit=1)[0].id == 1234567890


def test_monday_time_entries_in_range(monday_adapter, monday_item_payload):
    tracked = dict(monday_item_payload, column_values=[
        {"id": "time_tracking", "duration": 5400, "updated_at": "2024-01-15T17:00:00Z"},
    ])
    stale = dict(monday_item_payload, id="2", column_values=[
        {"id": "time_tracking", "duration": 600, "updated_at": "2023-06-01T17:00:00Z"},
    ])
    monday_adapter.client.get_items_with_time_tracking.return_value = [tracked, stale]

    entries = monday_adapter.get_time_entries(date(2024, 1, 1), date(2024, 1, 31))

    assert len(entries) == 1
    assert entries[0].hours == 1.5
    assert entries[0].user.name == "Alex Martin"


def test_monday_download_without_public_url(monday_adapter):
    from tracker_mcp.errors import NotFoundError

    monday_adapter.client.get_asset.return_value = {"id": "777", "name": "diagram.png"}

    with pytest.raises(NotFoundError):
        monday_adapter.download_attachment(777)
    monday_adapter.client.download_asset.assert_not_called()


def test_jql_quote_escapes_quotes_and_backslashes():
    from tracker_mcp.providers.jira_provider import jql_quote

    assert jql_quote("In Review") == '"In Review"'
    assert jql_quote('say "hi"') == '"say \\"hi\\""'
    assert jql_quote("a\\b") == '"a\\\\b"'


def test_jira_status_filter_cannot_widen_query(jira_adapter):
    jira_adapter.client.search_issues.return_value = []

    jira_adapter.get_issues(status_id='x" OR project = SECRET OR status = "y')

    jql = jira_adapter.client.search_issues.call_args.args[0]
    assert jql == (
        'assignee = currentUser() AND status = "x\\" OR project = SECRET OR status = \\"y" '
        "ORDER BY updated DESC"
    )


@pytest.mark.parametrize("adapter_fixture", ["redmine_adapter", "jira_adapter", "monday_adapter"])
def test_adapter_close_releases_client(request, adapter_fixture):
    adapter = request.getfixturevalue(adapter_fixture)

    with adapter as entered:
        assert entered is adapter
        adapter.client.close.assert_not_called()

    adapter.client.close.assert_called_once_with()
