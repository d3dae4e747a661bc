# tests/test_normalizers.py
"""Tests for provider payload normalizers."""

import zlib
from datetime import date, datetime, timezone

import pytest


def test_redmine_issue_keeps_journals_and_attachments_in_order(redmine_issue_payload):
    from tracker_mcp.normalizers import TypeTag, normalize

    issue = normalize(TypeTag.ISSUE, "redmine", redmine_issue_payload)
    raw = redmine_issue_payload["issue"]

    assert len(issue.comments) == len(raw["journals"])
    assert len(issue.attachments) == len(raw["attachments"])
    assert [c.id for c in issue.comments] == [101, 102]
    assert [a.id for a in issue.attachments] == [7, 8, 9]


def test_redmine_issue_fields(redmine_issue_payload):
    from tracker_mcp.normalizers import TypeTag, normalize

    issue = normalize(TypeTag.ISSUE, "redmine", redmine_issue_payload)

    assert issue.title == "Fix login redirect"
    assert issue.status == "In Progress"
    assert issue.assignee == "Alex Martin"
    assert issue.type == "Bug"
    assert issue.priority == "High"
    assert issue.project.name == "Portal"
    assert issue.project.parent.id == 1
    assert [s.id for s in issue.allowed_statuses] == [2, 3, 5]
    assert issue.allowed_statuses[2].is_closed is True


def test_redmine_empty_journal_notes_become_none(redmine_issue_payload):
    from tracker_mcp.normalizers import TypeTag, normalize

    issue = normalize(TypeTag.ISSUE, "redmine", redmine_issue_payload)

    assert issue.comments[0].notes == "Reproduced on staging"
    assert issue.comments[1].notes is None
    assert issue.comments[1].author == "Sam Lee"
    assert issue.comments[0].created_on == datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)


def test_redmine_missing_keys_use_defaults():
    from tracker_mcp.normalizers import TypeTag, normalize

    issue = normalize(TypeTag.ISSUE, "redmine", {})

    assert issue.id == 0
    assert issue.title == ""
    assert issue.assignee is None
    assert issue.comments == ()
    assert issue.project.id == 0


def test_redmine_user_joins_first_and_last_name():
    from tracker_mcp.normalizers import TypeTag, normalize

    user = normalize(TypeTag.USER, "redmine", {"user": {"id": 5, "firstname": "Alex", "lastname": "", "mail": "a@x.io"}})

    assert user.id == 5
    assert user.name == "Alex"
    assert user.email == "a@x.io"


def test_redmine_time_entry(redmine_time_entry_payload):
    from tracker_mcp.normalizers import TypeTag, normalize

    entry = normalize(TypeTag.TIME_ENTRY, "redmine", redmine_time_entry_payload)

    assert entry.seconds == 5400
    assert entry.hours == 1.5
    assert entry.spent_at == date(2024, 1, 15)
    assert entry.issue.id == 42
    assert entry.issue.project.id == 3
    assert entry.activity.name == "Development"
    assert entry.metadata == {"activity_id": 9}


def test_redmine_membership_uses_group_when_no_user():
    from tracker_mcp.normalizers import TypeTag, normalize

    member = normalize(TypeTag.PROJECT_MEMBER, "redmine", {
        "group": {"id": 12, "name": "QA"},
        "roles": [{"id": 4, "name": "Reporter"}],
    })

    assert member.id == 12
    assert member.roles == ("Reporter",)


def test_jira_comment_adf_blocks_joined_with_newline(jira_issue_payload):
    from tracker_mcp.normalizers import TypeTag, normalize

    raw = jira_issue_payload["fields"]["comment"]["comments"][0]
    comment = normalize(TypeTag.COMMENT, "jira", raw)

    assert comment.notes == "First block\nSecond block"
    assert comment.author == "Sam Lee"


def test_jira_comment_prefers_rendered_body():
    from tracker_mcp.normalizers import TypeTag, normalize

    comment = normalize(TypeTag.COMMENT, "jira", {"id": "1", "renderedBody": " <p>Hi</p> ", "body": {}})

    assert comment.notes == "<p>Hi</p>"


def test_jira_issue_from_rest_shape(jira_issue_payload):
    from tracker_mcp.normalizers import TypeTag, normalize

    issue = normalize(TypeTag.ISSUE, "jira", jira_issue_payload)

    assert issue.id == 10042
    assert issue.title == "Checkout button misaligned"
    assert issue.description == "Seen on Safari."
    assert issue.project.name == "Website (WEB)"
    assert issue.project.parent is None
    assert issue.assignee == "Alex Martin"
    assert len(issue.comments) == 1
    assert issue.attachments[0].filesize == 1234
    assert issue.attachments[0].content_type == "image/png"
    assert issue.allowed_statuses == ()


def test_jira_issue_status_defaults_to_unknown():
    from tracker_mcp.normalizers import TypeTag, normalize

    issue = normalize(TypeTag.ISSUE, "jira", {"id": "1", "fields": {"summary": "x"}})

    assert issue.status == "Unknown"


def test_jira_user_id_is_crc32_of_account_id():
    from tracker_mcp.normalizers import TypeTag, normalize

    user = normalize(TypeTag.USER, "jira", {"accountId": "abc-123", "displayName": "Alex"})

    assert user.id == zlib.crc32(b"abc-123")
    assert user.id == normalize(TypeTag.USER, "jira", {"accountId": "abc-123"}).id


def test_jira_worklog_uses_issue_context(jira_issue_payload):
    from tracker_mcp.normalizers import TypeTag, normalize

    worklog = {
        "id": "4001",
        "issueId": "10042",
        "author": {"accountId": "5b10a2844c20165700ede21g", "displayName": "Alex Martin"},
        "comment": {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Pairing"}]}]},
        "started": "2024-01-15T09:00:00.000+0000",
        "timeSpentSeconds": 3600,
    }
    entry = normalize(TypeTag.TIME_ENTRY, "jira", worklog, {"issue": jira_issue_payload})

    assert entry.id == 4001
    assert entry.hours == 1.0
    assert entry.comment == "Pairing"
    assert entry.spent_at == date(2024, 1, 15)
    assert entry.issue.title == "Checkout button misaligned"
    assert entry.metadata == {"issueKey": "WEB-42"}
    assert entry.activity is None


def test_monday_item_description_and_images(monday_item_payload):
    from tracker_mcp.normalizers import TypeTag, normalize

    issue = normalize(TypeTag.ISSUE, "monday", monday_item_payload)

    assert issue.description == "Cover account setup\nand billing"
    assert len(issue.attachments) == 1
    assert issue.attachments[0].id == 777
    assert issue.attachments[0].filename == "diagram.png"
    assert issue.attachments[0].content_type == "image/png"


def test_monday_item_columns_and_updates(monday_item_payload):
    from tracker_mcp.normalizers import TypeTag, normalize

    issue = normalize(TypeTag.ISSUE, "monday", monday_item_payload)

    assert issue.project.name == "Docs"
    assert issue.status == "Working on it"
    assert issue.assignee == "Alex Martin"
    assert issue.priority == "High"
    assert issue.type is None
    assert issue.comments[0].notes == "Draft ready"
    assert issue.comments[0].author == "Alex Martin"


def test_monday_time_entry_attributed_to_current_user(monday_item_payload):
    from tracker_mcp.domain.models import ProviderUser
    from tracker_mcp.normalizers import TypeTag, normalize

    item = dict(monday_item_payload)
    item["column_values"] = [
        {"id": "time_tracking", "text": "01:30:00", "duration": 5400,
         "started_at": "2024-01-10T08:00:00Z", "updated_at": "2024-01-12T17:00:00Z"},
    ]
    me = ProviderUser(id=321, name="Alex Martin", email="")

    entry = normalize(TypeTag.TIME_ENTRY, "monday", item, {"current_user": me})

    assert entry.seconds == 5400
    assert entry.spent_at == date(2024, 1, 12)
    assert entry.user == me


def test_unknown_pair_raises():
    from tracker_mcp.errors import UnsupportedProviderError
    from tracker_mcp.normalizers import TypeTag, normalize

    with pytest.raises(UnsupportedProviderError):
        normalize(TypeTag.ISSUE, "youtrack", {})

    with pytest.raises(UnsupportedProviderError):
        normalize(TypeTag.WIKI_PAGE, "jira", {})


@pytest.mark.parametrize("value,expected", [
    ("2024-01-15T10:00:00Z", datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)),
    ("2024-01-15T10:00:00.000+0000", datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)),
    ("", None),
    (None, None),
    ("not a date", None),
])
def test_parse_datetime(value, expected):
    from tracker_mcp.normalizers.common import parse_datetime

    assert parse_datetime(value) == expected


def test_adf_nested_lists_and_hard_breaks():
    from tracker_mcp.normalizers.common import adf_to_text

    doc = {
        "type": "doc",
        "content": [
            {"type": "paragraph", "content": [
                {"type": "text", "text": "Line one"},
                {"type": "hardBreak"},
                {"type": "text", "text": "line two"},
            ]},
            {"type": "bulletList", "content": [
                {"type": "listItem", "content": [
                    {"type": "paragraph", "content": [{"type": "text", "text": "item A"}]},
                ]},
                {"type": "listItem", "content": [
                    {"type": "paragraph", "content": [{"type": "text", "text": "item B"}]},
                ]},
            ]},
        ],
    }

    assert adf_to_text(doc) == "Line one\nline two\nitem A\nitem B"


def test_adf_plain_string_and_none():
    from tracker_mcp.normalizers.common import adf_to_text

    assert adf_to_text("  legacy text \n") == "legacy text"
    assert adf_to_text(None) == ""
