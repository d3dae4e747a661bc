# tracker_mcp/domain/ports.py
"""Capability ports a provider adapter may implement.

An adapter subclasses exactly the ports its backing service supports.
Capability detection reads the adapter's ``capabilities`` descriptor,
which is derived from these base classes once at construction.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from .models import (
    Activity,
    Attachment,
    Comment,
    Issue,
    PortCapabilities,
    Project,
    ProjectMember,
    ProviderUser,
    Status,
    TimeEntry,
    WikiPage,
)


class UserPort(ABC):

    @abstractmethod
    def get_current_user(self) -> ProviderUser:
        """Return the tracker identity behind the configured API key."""
        pass


class ProjectPort(ABC):

    @abstractmethod
    def get_projects(self) -> list[Project]:
        pass


class IssueReadPort(ABC):

    @abstractmethod
    def get_issues(
        self,
        project_id: Optional[int] = None,
        limit: int = 50,
        user_id: Optional[int] = None,
        status_id: Optional[str] = None,
    ) -> list[Issue]:
        """
        List issues assigned to a user (default: the current user).

        Args:
            project_id: Restrict to one project
            limit: Maximum issues returned
            user_id: Assignee; None means the current user
            status_id: Provider status filter; None means open issues
        """
        pass

    @abstractmethod
    def get_issue(self, issue_id: int) -> Issue:
        """Return one issue with comments and attachments. Raises NotFoundError."""
        pass


class IssueWritePort(ABC):

    @abstractmethod
    def add_comment(self, issue_id: int, text: str, private: bool = False) -> None:
        pass

    @abstractmethod
    def update_comment(self, comment_id: int, text: str) -> None:
        pass

    @abstractmethod
    def delete_comment(self, comment_id: int) -> None:
        pass

    @abstractmethod
    def update_issue(
        self,
        issue_id: int,
        status_id: Optional[int] = None,
        done_ratio: Optional[int] = None,
        assigned_to_id: Optional[int] = None,
    ) -> None:
        pass


class TimeEntryReadPort(ABC):

    @abstractmethod
    def get_time_entries(
        self, from_date: date, to_date: date, user_id: Optional[int] = None
    ) -> list[TimeEntry]:
        """Entries spent between from_date and to_date inclusive."""
        pass


class TimeEntryWritePort(ABC):

    @abstractmethod
    def requires_activity(self) -> bool:
        """True when log_time needs an activity_id in metadata."""
        pass

    @abstractmethod
    def log_time(
        self, issue_id: int, seconds: int, comment: str, spent_at: date, metadata: dict
    ) -> TimeEntry:
        pass

    @abstractmethod
    def update_time_entry(
        self,
        time_entry_id: int,
        hours: Optional[float] = None,
        comment: Optional[str] = None,
        activity_id: Optional[int] = None,
        spent_on: Optional[date] = None,
    ) -> None:
        pass

    @abstractmethod
    def delete_time_entry(self, time_entry_id: int) -> None:
        pass


class ActivityPort(ABC):

    @abstractmethod
    def get_activities(self) -> list[Activity]:
        pass

    @abstractmethod
    def get_project_activities(self, project_id: int) -> list[Activity]:
        """Activities enabled for one project (subset of get_activities)."""
        pass


class StatusPort(ABC):

    @abstractmethod
    def get_statuses(self) -> list[Status]:
        pass


class AttachmentPort(ABC):

    @abstractmethod
    def get_attachment(self, attachment_id: int) -> Attachment:
        pass

    @abstractmethod
    def download_attachment(self, attachment_id: int) -> bytes:
        """Fetch attachment content fully into memory."""
        pass


class ProjectMemberPort(ABC):

    @abstractmethod
    def get_project_members(self, project_id: int) -> list[ProjectMember]:
        pass


class WikiPort(ABC):

    @abstractmethod
    def get_wiki_pages(self, project_id: int) -> list[WikiPage]:
        pass

    @abstractmethod
    def get_wiki_page(self, project_id: int, title: str) -> WikiPage:
        pass


class ProviderAdapter(UserPort, ProjectPort, IssueReadPort, TimeEntryReadPort, AttachmentPort):
    """Baseline every adapter implements: identity, projects, issues, time, attachments."""

    def __init__(self):
        from .capabilities import CapabilityDescriptor

        self._capabilities = CapabilityDescriptor.for_adapter(self)

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider key (e.g., 'redmine', 'jira')."""
        pass

    @property
    def capabilities(self):
        return self._capabilities

    @abstractmethod
    def port_capabilities(self) -> PortCapabilities:
        pass

    def close(self) -> None:
        """Release the upstream HTTP client; call once the session ends."""
        client = getattr(self, "client", None)
        if client is not None:
            client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
