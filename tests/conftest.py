"""Shared test fixtures: raw provider payloads and adapters over mock clients."""

from unittest.mock import Mock

import pytest


@pytest.fixture
def redmine_issue_payload():
    return {
        "issue": {
            "id": 42,
            "subject": "Fix login redirect",
            "description": "Users land on a blank page.",
            "project": {"id": 3, "name": "Portal", "parent": {"id": 1, "name": "Web"}},
            "status": {"id": 2, "name": "In Progress"},
            "assigned_to": {"id": 5, "name": "Alex Martin"},
            "tracker": {"id": 1, "name": "Bug"},
            "priority": {"id": 4, "name": "High"},
            "journals": [
                {"id": 101, "notes": "Reproduced on staging", "user": {"id": 5, "name": "Alex Martin"},
                 "created_on": "2024-01-15T10:00:00Z"},
                {"id": 102, "notes": "", "user": {"id": 6, "name": "Sam Lee"},
                 "created_on": "2024-01-16T08:30:00Z"},
            ],
            "attachments": [
                {"id": 7, "filename": "trace.log", "filesize": 2048, "content_type": "text/plain",
                 "content_url": "https://redmine.example.com/attachments/download/7/trace.log",
                 "author": {"id": 5, "name": "Alex Martin"}, "created_on": "2024-01-15T10:05:00Z"},
                {"id": 8, "filename": "screen.png", "filesize": 40960, "content_type": "image/png",
                 "author": {"id": 5, "name": "Alex Martin"}, "created_on": "2024-01-15T10:06:00Z"},
                {"id": 9, "filename": "spec.pdf", "filesize": 100, "content_type": "application/pdf"},
            ],
            "allowed_statuses": [
                {"id": 2, "name": "In Progress", "is_closed": False},
                {"id": 3, "name": "Resolved", "is_closed": False},
                {"id": 5, "name": "Closed", "is_closed": True},
            ],
        }
    }


@pytest.fixture
def redmine_time_entry_payload():
    return {
        "id": 900,
        "project": {"id": 3, "name": "Portal"},
        "issue": {"id": 42},
        "user": {"id": 5, "name": "Alex Martin"},
        "activity": {"id": 9, "name": "Development"},
        "hours": 1.5,
        "comments": "Login fix",
        "spent_on": "2024-01-15",
    }


@pytest.fixture
def jira_issue_payload():
    return {
        "id": "10042",
        "key": "WEB-42",
        "fields": {
            "summary": "Checkout button misaligned",
            "description": {
                "type": "doc",
                "version": 1,
                "content": [
                    {"type": "paragraph", "content": [{"type": "text", "text": "Seen on Safari."}]},
                ],
            },
            "status": {"name": "To Do"},
            "assignee": {"accountId": "5b10a2844c20165700ede21g", "displayName": "Alex Martin"},
            "issuetype": {"name": "Bug"},
            "priority": {"name": "Medium"},
            "project": {"id": "10000", "key": "WEB", "name": "Website"},
            "comment": {
                "comments": [
                    {
                        "id": "20001",
                        "author": {"displayName": "Sam Lee"},
                        "created": "2024-01-15T10:00:00.000+0000",
                        "body": {
                            "type": "doc",
                            "version": 1,
                            "content": [
                                {"type": "paragraph", "content": [{"type": "text", "text": "First block"}]},
                                {"type": "paragraph", "content": [{"type": "text", "text": "Second block"}]},
                            ],
                        },
                    }
                ]
            },
            "attachment": [
                {"id": "30001", "filename": "mockup.png", "size": 1234, "mimeType": "image/png",
                 "content": "https://acme.atlassian.net/rest/api/3/attachment/content/30001",
                 "author": {"displayName": "Sam Lee"}, "created": "2024-01-15T09:00:00.000+0000"},
            ],
        },
    }


@pytest.fixture
def monday_item_payload():
    return {
        "id": "1234567890",
        "name": "Write onboarding guide",
        "board": {"id": "555", "name": "Docs"},
        "description": {
            "blocks": [
                {"id": "b1", "content": '{"deltaFormat": [{"insert": "Cover account setup"}]}'},
                {"id": "b2", "content": '{"assetId": 777, "url": "https://files.monday.com/assets/777/diagram.png"}'},
                {"id": "b3", "content": '{"deltaFormat": [{"insert": "and billing"}]}'},
            ]
        },
        "column_values": [
            {"id": "status", "text": "Working on it", "value": None},
            {"id": "people", "text": "Alex Martin",
             "value": '{"personsAndTeams": [{"id": 321, "kind": "person"}]}'},
            {"id": "priority", "text": "High", "value": None},
        ],
        "updates": [
            {"id": "88", "body": "<p>Draft ready</p>", "text_body": "Draft ready",
             "created_at": "2024-01-15T10:00:00Z", "creator": {"id": "321", "name": "Alex Martin"}},
        ],
    }


@pytest.fixture
def redmine_adapter():
    from tracker_mcp.providers.redmine_provider import RedmineAdapter

    client = Mock()
    client.get_my_account.return_value = {"user": {"id": 5, "firstname": "Alex", "lastname": "Martin"}}
    return RedmineAdapter(client)


@pytest.fixture
def jira_adapter():
    from tracker_mcp.providers.jira_provider import JiraAdapter

    client = Mock()
    client.get_myself.return_value = {
        "accountId": "5b10a2844c20165700ede21g",
        "displayName": "Alex Martin",
        "emailAddress": "alex@example.com",
    }
    return JiraAdapter(client)


@pytest.fixture
def monday_adapter():
    from tracker_mcp.providers.monday_provider import MondayAdapter

    client = Mock()
    client.get_me.return_value = {"id": "321", "name": "Alex Martin", "email": "alex@example.com"}
    return MondayAdapter(client)
