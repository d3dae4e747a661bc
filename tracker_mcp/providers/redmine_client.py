# tracker_mcp/providers/redmine_client.py
"""Redmine REST API client (JSON format, X-Redmine-API-Key auth)."""

from typing import Optional
from urllib.parse import quote

import httpx

from .http import HttpClient

# Redmine caps list endpoints at 100 items per page
PAGE_SIZE = 100


class RedmineClient(HttpClient):
    provider = "Redmine"

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        super().__init__(
            url,
            headers={"X-Redmine-API-Key": api_key},
            timeout=timeout,
            transport=transport,
        )

    def get_my_account(self) -> dict:
        return self.get_json("/users/current.json")

    def get_my_projects(self) -> dict:
        return self.get_json("/projects.json", params={"membership": 1, "limit": PAGE_SIZE})

    def get_issues(self, params: dict) -> dict:
        return self.get_json("/issues.json", params=params)

    def get_issue(self, issue_id: int) -> dict:
        return self.get_json(
            f"/issues/{issue_id}.json",
            params={"include": "journals,attachments,allowed_statuses"},
        )

    def get_issue_statuses(self) -> dict:
        return self.get_json("/issue_statuses.json")

    def get_time_entry_activities(self) -> dict:
        return self.get_json("/enumerations/time_entry_activities.json")

    def get_project_activities(self, project_id: int) -> dict:
        return self.get_json(f"/projects/{project_id}.json", params={"include": "time_entry_activities"})

    def get_time_entries(self, params: dict) -> list[dict]:
        """Fetch every page of /time_entries.json for the given filters."""
        entries = []
        offset = 0
        while True:
            page = self.get_json(
                "/time_entries.json",
                params={**params, "limit": PAGE_SIZE, "offset": offset},
            )
            batch = page.get("time_entries") or []
            entries.extend(batch)
            offset += len(batch)
            if not batch or offset >= int(page.get("total_count") or 0):
                return entries

    def log_time(self, payload: dict) -> dict:
        return self.post_json("/time_entries.json", {"time_entry": payload})

    def update_time_entry(self, time_entry_id: int, payload: dict) -> None:
        self.put_json(f"/time_entries/{time_entry_id}.json", {"time_entry": payload})

    def delete_time_entry(self, time_entry_id: int) -> None:
        self.delete(f"/time_entries/{time_entry_id}.json")

    def get_attachment(self, attachment_id: int) -> dict:
        return self.get_json(f"/attachments/{attachment_id}.json")

    def download_attachment(self, attachment_id: int) -> bytes:
        return self.get_bytes(f"/attachments/download/{attachment_id}")

    def add_issue_note(self, issue_id: int, notes: str, private: bool = False) -> None:
        self.put_json(f"/issues/{issue_id}.json", {"issue": {"notes": notes, "private_notes": private}})

    def update_journal(self, journal_id: int, notes: str) -> None:
        self.put_json(f"/journals/{journal_id}.json", {"journal": {"notes": notes}})

    def update_issue(self, issue_id: int, fields: dict) -> None:
        self.put_json(f"/issues/{issue_id}.json", {"issue": fields})

    def get_project_members(self, project_id: int) -> dict:
        return self.get_json(f"/projects/{project_id}/memberships.json", params={"limit": PAGE_SIZE})

    def get_wiki_pages(self, project_id: int) -> dict:
        return self.get_json(f"/projects/{project_id}/wiki/index.json")

    def get_wiki_page(self, project_id: int, title: str) -> dict:
        return self.get_json(f"/projects/{project_id}/wiki/{quote(title, safe='')}.json")
