# tracker_mcp/providers/jira_client.py
"""Jira Cloud REST v3 client (basic auth with account email + API token)."""

from typing import Optional

import httpx

from .http import HttpClient

ISSUE_FIELDS = "summary,description,status,assignee,issuetype,priority,project"


class JiraClient(HttpClient):
    provider = "Jira"

    def __init__(
        self,
        url: str,
        email: str,
        api_token: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        super().__init__(url, auth=(email, api_token), timeout=timeout, transport=transport)

    def get_myself(self) -> dict:
        return self.get_json("/rest/api/3/myself")

    def search_projects(self, max_results: int = 100) -> list[dict]:
        data = self.get_json("/rest/api/3/project/search", params={"maxResults": max_results})
        return data.get("values") or []

    def search_issues(self, jql: str, max_results: int = 50, fields: str = ISSUE_FIELDS) -> list[dict]:
        data = self.get_json(
            "/rest/api/3/search/jql",
            params={"jql": jql, "maxResults": max_results, "fields": fields},
        )
        return data.get("issues") or []

    def get_issue(self, issue_id) -> dict:
        return self.get_json(f"/rest/api/3/issue/{issue_id}", params={"expand": "renderedFields"})

    def get_worklogs(self, issue_id) -> list[dict]:
        data = self.get_json(f"/rest/api/3/issue/{issue_id}/worklog")
        return data.get("worklogs") or []

    def get_worklogs_by_ids(self, worklog_ids: list[int]) -> list[dict]:
        data = self.post_json("/rest/api/3/worklog/list", {"ids": worklog_ids})
        return data if isinstance(data, list) else []

    def add_worklog(self, issue_id, payload: dict) -> dict:
        return self.post_json(f"/rest/api/3/issue/{issue_id}/worklog", payload)

    def update_worklog(self, issue_id, worklog_id: int, payload: dict) -> dict:
        return self.put_json(f"/rest/api/3/issue/{issue_id}/worklog/{worklog_id}", payload)

    def delete_worklog(self, issue_id, worklog_id: int) -> None:
        self.delete(f"/rest/api/3/issue/{issue_id}/worklog/{worklog_id}")

    def get_attachment(self, attachment_id: int) -> dict:
        return self.get_json(f"/rest/api/3/attachment/{attachment_id}")

    def download_attachment(self, attachment_id: int) -> bytes:
        """Content endpoint redirects to the media store; follow it into memory."""
        return self.get_bytes(f"/rest/api/3/attachment/content/{attachment_id}")
