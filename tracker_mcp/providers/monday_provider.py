# tracker_mcp/providers/monday_provider.py
"""Monday.com adapter: read-only.

Boards are projects and items are issues. Time entries come from time
tracking columns, which hold one running total per item.
"""

import json
from datetime import date
from typing import Optional

from ..domain.models import Attachment, Issue, PortCapabilities, Project, ProviderUser, TimeEntry
from ..domain.ports import ProviderAdapter
from ..errors import NotFoundError
from ..normalizers import TypeTag, normalize, normalize_many
from ..normalizers.monday import ASSIGNEE_COLUMNS, STATUS_COLUMNS
from .monday_client import MondayClient

PROVIDER = "monday"


def assigned_person_ids(item: dict) -> set[int]:
    """Person ids from an item's people columns (``personsAndTeams`` JSON)."""
    ids = set()
    for column in item.get("column_values") or []:
        if column.get("id") not in ASSIGNEE_COLUMNS or not column.get("value"):
            continue
        try:
            value = json.loads(column["value"])
        except (TypeError, json.JSONDecodeError):
            continue
        for person in (value or {}).get("personsAndTeams") or []:
            if person.get("kind", "person") == "person" and person.get("id") is not None:
                ids.add(int(person["id"]))
    return ids


def status_text(item: dict) -> Optional[str]:
    for column in item.get("column_values") or []:
        if column.get("id") in STATUS_COLUMNS and column.get("text"):
            return column["text"]
    return None


class MondayAdapter(ProviderAdapter):
    def __init__(self, client: MondayClient):
        self.client = client
        self._current_user: Optional[ProviderUser] = None
        super().__init__()

    @property
    def name(self) -> str:
        return PROVIDER

    def port_capabilities(self) -> PortCapabilities:
        return PortCapabilities(name=PROVIDER)

    def get_current_user(self) -> ProviderUser:
        if self._current_user is None:
            self._current_user = normalize(TypeTag.USER, PROVIDER, self.client.get_me())
        return self._current_user

    def get_projects(self) -> list[Project]:
        return list(normalize_many(TypeTag.PROJECT, PROVIDER, self.client.get_boards()))

    def get_issues(
        self,
        project_id: Optional[int] = None,
        limit: int = 50,
        user_id: Optional[int] = None,
        status_id: Optional[str] = None,
    ) -> list[Issue]:
        """Items assigned to a person, optionally on one board.

        ``status_id`` matches the status column label, case-insensitively.
        """
        if project_id is not None:
            items = self.client.get_board_items(project_id, limit=100)
        else:
            items = self.client.get_all_items(limit=100)

        person_id = user_id if user_id is not None else self.get_current_user().id
        selected = [item for item in items if person_id in assigned_person_ids(item)]
        if status_id:
            wanted = str(status_id).lower()
            selected = [item for item in selected if (status_text(item) or "").lower() == wanted]

        return list(normalize_many(TypeTag.ISSUE, PROVIDER, selected[:limit]))

    def get_issue(self, issue_id: int) -> Issue:
        return normalize(TypeTag.ISSUE, PROVIDER, self.client.get_item(issue_id))

    def get_time_entries(
        self, from_date: date, to_date: date, user_id: Optional[int] = None
    ) -> list[TimeEntry]:
        """Tracked items whose last time tracking update falls in the range.

        Time tracking totals aren't per user, so ``user_id`` is ignored and
        every entry is attributed to the current user.
        """
        context = {"current_user": self.get_current_user()}
        entries = normalize_many(
            TypeTag.TIME_ENTRY, PROVIDER, self.client.get_items_with_time_tracking(), context
        )
        return [entry for entry in entries if from_date <= entry.spent_at <= to_date]

    def get_attachment(self, attachment_id: int) -> Attachment:
        return normalize(TypeTag.ATTACHMENT, PROVIDER, self.client.get_asset(attachment_id))

    def download_attachment(self, attachment_id: int) -> bytes:
        asset = self.client.get_asset(attachment_id)
        url = asset.get("public_url")
        if not url:
            raise NotFoundError(f"Monday.com asset {attachment_id} has no downloadable URL")
        return self.client.download_asset(url)
