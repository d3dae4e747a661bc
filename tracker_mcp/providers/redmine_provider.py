# tracker_mcp/providers/redmine_provider.py
"""Redmine adapter: the only provider implementing every port."""

from datetime import date
from typing import Optional

from ..domain.models import (
    Activity,
    Attachment,
    Issue,
    PortCapabilities,
    Project,
    ProjectMember,
    ProviderUser,
    Status,
    TimeEntry,
    WikiPage,
)
from ..domain.ports import (
    ActivityPort,
    IssueWritePort,
    ProjectMemberPort,
    ProviderAdapter,
    StatusPort,
    TimeEntryWritePort,
    WikiPort,
)
from ..errors import ValidationError
from ..normalizers import TypeTag, normalize, normalize_many
from .redmine_client import RedmineClient

PROVIDER = "redmine"


class RedmineAdapter(
    ProviderAdapter,
    IssueWritePort,
    TimeEntryWritePort,
    ActivityPort,
    StatusPort,
    ProjectMemberPort,
    WikiPort,
):
    def __init__(self, client: RedmineClient):
        self.client = client
        self._current_user: Optional[ProviderUser] = None
        super().__init__()

    @property
    def name(self) -> str:
        return PROVIDER

    def port_capabilities(self) -> PortCapabilities:
        return PortCapabilities(
            name=PROVIDER,
            requires_activity=True,
            supports_project_hierarchy=True,
            supports_tags=False,
        )

    # -- reads ---------------------------------------------------------------

    def get_current_user(self) -> ProviderUser:
        if self._current_user is None:
            self._current_user = normalize(TypeTag.USER, PROVIDER, self.client.get_my_account())
        return self._current_user

    def get_projects(self) -> list[Project]:
        data = self.client.get_my_projects()
        return list(normalize_many(TypeTag.PROJECT, PROVIDER, data.get("projects")))

    def get_issues(
        self,
        project_id: Optional[int] = None,
        limit: int = 50,
        user_id: Optional[int] = None,
        status_id: Optional[str] = None,
    ) -> list[Issue]:
        params = {
            "assigned_to_id": user_id if user_id is not None else self.get_current_user().id,
            "limit": limit,
            "status_id": status_id or "open",
        }
        if project_id is not None:
            params["project_id"] = project_id

        data = self.client.get_issues(params)
        return list(normalize_many(TypeTag.ISSUE, PROVIDER, data.get("issues")))

    def get_issue(self, issue_id: int) -> Issue:
        return normalize(TypeTag.ISSUE, PROVIDER, self.client.get_issue(issue_id))

    def get_time_entries(
        self, from_date: date, to_date: date, user_id: Optional[int] = None
    ) -> list[TimeEntry]:
        entries = self.client.get_time_entries({
            "user_id": user_id if user_id is not None else self.get_current_user().id,
            "from": from_date.isoformat(),
            "to": to_date.isoformat(),
        })
        return list(normalize_many(TypeTag.TIME_ENTRY, PROVIDER, entries))

    def get_activities(self) -> list[Activity]:
        data = self.client.get_time_entry_activities()
        return list(normalize_many(TypeTag.ACTIVITY, PROVIDER, data.get("time_entry_activities")))

    def get_project_activities(self, project_id: int) -> list[Activity]:
        project = self.client.get_project_activities(project_id).get("project") or {}
        return list(normalize_many(TypeTag.ACTIVITY, PROVIDER, project.get("time_entry_activities")))

    def get_statuses(self) -> list[Status]:
        data = self.client.get_issue_statuses()
        return list(normalize_many(TypeTag.STATUS, PROVIDER, data.get("issue_statuses")))

    def get_project_members(self, project_id: int) -> list[ProjectMember]:
        data = self.client.get_project_members(project_id)
        return list(normalize_many(TypeTag.PROJECT_MEMBER, PROVIDER, data.get("memberships")))

    def get_wiki_pages(self, project_id: int) -> list[WikiPage]:
        data = self.client.get_wiki_pages(project_id)
        return list(normalize_many(TypeTag.WIKI_PAGE, PROVIDER, data.get("wiki_pages")))

    def get_wiki_page(self, project_id: int, title: str) -> WikiPage:
        return normalize(TypeTag.WIKI_PAGE, PROVIDER, self.client.get_wiki_page(project_id, title))

    def get_attachment(self, attachment_id: int) -> Attachment:
        return normalize(TypeTag.ATTACHMENT, PROVIDER, self.client.get_attachment(attachment_id))

    def download_attachment(self, attachment_id: int) -> bytes:
        return self.client.download_attachment(attachment_id)

    # -- writes --------------------------------------------------------------

    def add_comment(self, issue_id: int, text: str, private: bool = False) -> None:
        self.client.add_issue_note(issue_id, text, private)

    def update_comment(self, comment_id: int, text: str) -> None:
        self.client.update_journal(comment_id, text)

    def delete_comment(self, comment_id: int) -> None:
        # Redmine has no journal delete; clearing the notes removes it
        self.client.update_journal(comment_id, "")

    def update_issue(
        self,
        issue_id: int,
        status_id: Optional[int] = None,
        done_ratio: Optional[int] = None,
        assigned_to_id: Optional[int] = None,
    ) -> None:
        fields = {}
        if status_id is not None:
            fields["status_id"] = status_id
        if done_ratio is not None:
            fields["done_ratio"] = done_ratio
        if assigned_to_id is not None:
            fields["assigned_to_id"] = assigned_to_id
        if not fields:
            raise ValidationError("At least one field must be provided for update")
        self.client.update_issue(issue_id, fields)

    def requires_activity(self) -> bool:
        return True

    def log_time(
        self, issue_id: int, seconds: int, comment: str, spent_at: date, metadata: dict
    ) -> TimeEntry:
        data = self.client.log_time({
            "issue_id": issue_id,
            "hours": seconds / 3600,
            "comments": comment,
            "activity_id": metadata.get("activity_id"),
            "spent_on": spent_at.isoformat(),
        })
        return normalize(TypeTag.TIME_ENTRY, PROVIDER, data.get("time_entry"))

    def update_time_entry(
        self,
        time_entry_id: int,
        hours: Optional[float] = None,
        comment: Optional[str] = None,
        activity_id: Optional[int] = None,
        spent_on: Optional[date] = None,
    ) -> None:
        payload = {}
        if hours is not None:
            payload["hours"] = hours
        if comment is not None:
            payload["comments"] = comment
        if activity_id is not None:
            payload["activity_id"] = activity_id
        if spent_on is not None:
            payload["spent_on"] = spent_on.isoformat()
        if not payload:
            raise ValidationError("At least one field must be provided for update")
        self.client.update_time_entry(time_entry_id, payload)

    def delete_time_entry(self, time_entry_id: int) -> None:
        self.client.delete_time_entry(time_entry_id)
