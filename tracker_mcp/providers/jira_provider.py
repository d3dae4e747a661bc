# tracker_mcp/providers/jira_provider.py
"""Jira Cloud adapter.

Reads plus worklog writes. Jira has no activities or issue statuses
listing here, and comments/issue updates are not exposed.
"""

from datetime import date
from typing import Optional

from ..domain.models import Attachment, Issue, PortCapabilities, Project, ProviderUser, TimeEntry
from ..domain.ports import ProviderAdapter, TimeEntryWritePort
from ..errors import NotFoundError, ValidationError
from ..normalizers import TypeTag, normalize, normalize_many
from ..normalizers.common import as_str, nested, parse_date
from ..utils.logging import logger
from .jira_client import JiraClient

PROVIDER = "jira"


def text_to_adf(text: str) -> dict:
    """Wrap plain text in an ADF document, one paragraph per line."""
    paragraphs = [
        {"type": "paragraph", "content": [{"type": "text", "text": line}] if line else []}
        for line in (text or "").split("\n")
    ]
    return {"type": "doc", "version": 1, "content": paragraphs}


def jql_quote(value) -> str:
    """Double-quoted JQL string literal with backslashes and quotes escaped."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_started(day: date) -> str:
    """Worklog start timestamp in Jira's format (yyyy-MM-dd'T'HH:mm:ss.SSSZ)."""
    return f"{day.isoformat()}T09:00:00.000+0000"


class JiraAdapter(ProviderAdapter, TimeEntryWritePort):
    def __init__(self, client: JiraClient):
        self.client = client
        self._myself: Optional[dict] = None
        super().__init__()

    @property
    def name(self) -> str:
        return PROVIDER

    def port_capabilities(self) -> PortCapabilities:
        return PortCapabilities(
            name=PROVIDER,
            requires_activity=False,
            supports_project_hierarchy=False,
            supports_tags=True,
        )

    def _account(self) -> dict:
        if self._myself is None:
            self._myself = self.client.get_myself()
        return self._myself

    def get_current_user(self) -> ProviderUser:
        return normalize(TypeTag.USER, PROVIDER, self._account())

    def get_projects(self) -> list[Project]:
        return list(normalize_many(TypeTag.PROJECT, PROVIDER, self.client.search_projects()))

    def get_issues(
        self,
        project_id: Optional[int] = None,
        limit: int = 50,
        user_id: Optional[int] = None,
        status_id: Optional[str] = None,
    ) -> list[Issue]:
        """Issues assigned to the current user.

        ``user_id`` is ignored: Jira user ids here are display surrogates
        and can't be mapped back to an accountId.
        """
        if user_id is not None:
            logger.debug("Jira ignores user_id in list_issues; filtering on currentUser()")

        clauses = []
        if project_id is not None:
            clauses.append(f"project = {int(project_id)}")
        clauses.append("assignee = currentUser()")
        if status_id:
            clauses.append(f"status = {jql_quote(status_id)}")
        else:
            clauses.append("status != Done")
        jql = " AND ".join(clauses) + " ORDER BY updated DESC"

        return list(normalize_many(TypeTag.ISSUE, PROVIDER, self.client.search_issues(jql, max_results=limit)))

    def get_issue(self, issue_id: int) -> Issue:
        return normalize(TypeTag.ISSUE, PROVIDER, self.client.get_issue(issue_id))

    def get_time_entries(
        self, from_date: date, to_date: date, user_id: Optional[int] = None
    ) -> list[TimeEntry]:
        """Current user's worklogs between two dates (``user_id`` is ignored)."""
        account_id = self._account().get("accountId")
        jql = (
            f'worklogDate >= "{from_date.isoformat()}" AND worklogDate <= "{to_date.isoformat()}" '
            f"AND worklogAuthor = currentUser()"
        )
        issues = self.client.search_issues(jql, max_results=100, fields="summary,project,status")

        entries = []
        for raw_issue in issues:
            for worklog in self.client.get_worklogs(raw_issue.get("id")):
                if nested(worklog, "author", "accountId") != account_id:
                    continue
                started = parse_date(worklog.get("started"))
                if started is None or not (from_date <= started <= to_date):
                    continue
                entries.append(normalize(TypeTag.TIME_ENTRY, PROVIDER, worklog, {"issue": raw_issue}))
        return entries

    def get_attachment(self, attachment_id: int) -> Attachment:
        return normalize(TypeTag.ATTACHMENT, PROVIDER, self.client.get_attachment(attachment_id))

    def download_attachment(self, attachment_id: int) -> bytes:
        return self.client.download_attachment(attachment_id)

    # -- worklogs ------------------------------------------------------------

    def requires_activity(self) -> bool:
        return False

    def log_time(
        self, issue_id: int, seconds: int, comment: str, spent_at: date, metadata: dict
    ) -> TimeEntry:
        raw_issue = self.client.get_issue(issue_id)
        worklog = self.client.add_worklog(issue_id, {
            "timeSpentSeconds": seconds,
            "started": format_started(spent_at),
            "comment": text_to_adf(comment),
        })
        return normalize(TypeTag.TIME_ENTRY, PROVIDER, worklog, {"issue": raw_issue})

    def _worklog_issue(self, worklog_id: int) -> str:
        worklogs = self.client.get_worklogs_by_ids([worklog_id])
        if not worklogs:
            raise NotFoundError(f"Jira worklog {worklog_id} not found")
        return as_str(worklogs[0].get("issueId"))

    def update_time_entry(
        self,
        time_entry_id: int,
        hours: Optional[float] = None,
        comment: Optional[str] = None,
        activity_id: Optional[int] = None,
        spent_on: Optional[date] = None,
    ) -> None:
        if activity_id is not None:
            raise ValidationError("Jira worklogs have no activity; activity_id is not supported")

        payload = {}
        if hours is not None:
            payload["timeSpentSeconds"] = int(hours * 3600)
        if comment is not None:
            payload["comment"] = text_to_adf(comment)
        if spent_on is not None:
            payload["started"] = format_started(spent_on)
        if not payload:
            raise ValidationError("At least one field must be provided for update")

        self.client.update_worklog(self._worklog_issue(time_entry_id), time_entry_id, payload)

    def delete_time_entry(self, time_entry_id: int) -> None:
        self.client.delete_worklog(self._worklog_issue(time_entry_id), time_entry_id)
