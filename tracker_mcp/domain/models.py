# tracker_mcp/domain/models.py
"""Provider-agnostic domain records.

Every record is immutable and built fresh per request from a provider
payload. Sequences are tuples so a record can't be mutated after
normalization.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional


@dataclass(frozen=True)
class Project:
    """A tracker project (Redmine project, Jira project, Monday board)."""

    id: int
    name: str
    parent: Optional["Project"] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "parent": {"id": self.parent.id, "name": self.parent.name} if self.parent else None,
        }


@dataclass(frozen=True)
class Attachment:
    id: int
    filename: str
    filesize: int = 0
    content_type: str = ""
    description: Optional[str] = None
    content_url: Optional[str] = None
    author: Optional[str] = None
    created_on: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "filename": self.filename,
            "filesize": self.filesize,
            "content_type": self.content_type,
            "description": self.description,
            "content_url": self.content_url,
            "author": self.author,
            "created_on": self.created_on.isoformat() if self.created_on else None,
        }


@dataclass(frozen=True)
class Comment:
    """A comment on an issue.

    Redmine calls these journals; ``Journal`` is kept as an alias so
    provider code can use the name its API uses.
    """

    id: int
    notes: Optional[str] = None
    author: Optional[str] = None
    created_on: Optional[datetime] = None
    attachments: tuple = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "notes": self.notes,
            "author": self.author,
            "created_on": self.created_on.isoformat() if self.created_on else None,
            "attachments": [a.to_dict() for a in self.attachments],
        }


Journal = Comment


@dataclass(frozen=True)
class Status:
    id: int
    name: str
    is_closed: bool = False

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "is_closed": self.is_closed}


@dataclass(frozen=True)
class Activity:
    """Time-entry activity (Redmine only)."""

    id: int
    name: str
    is_default: bool = False

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "is_default": self.is_default}


@dataclass(frozen=True)
class Issue:
    id: int
    title: str
    description: str
    project: Project
    status: str
    assignee: Optional[str] = None
    type: Optional[str] = None
    priority: Optional[str] = None
    comments: tuple = ()
    attachments: tuple = ()
    allowed_statuses: tuple = ()

    def to_dict(self, detailed: bool = False) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "project": self.project.name,
            "project_id": self.project.id,
            "status": self.status,
            "assignee": self.assignee,
            "type": self.type,
            "priority": self.priority,
        }
        if detailed:
            data["description"] = self.description
            data["comments"] = [c.to_dict() for c in self.comments]
            data["attachments"] = [a.to_dict() for a in self.attachments]
            data["allowed_statuses"] = [s.to_dict() for s in self.allowed_statuses]
        return data


@dataclass(frozen=True)
class ProviderUser:
    """The user's identity inside the external tracker."""

    id: int
    name: str
    email: str = ""

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email}


@dataclass(frozen=True)
class TimeEntry:
    id: int
    issue: Issue
    seconds: int
    comment: str
    spent_at: date
    user: Optional[ProviderUser] = None
    activity: Optional[Activity] = None
    metadata: dict = field(default_factory=dict)

    @property
    def hours(self) -> float:
        return self.seconds / 3600

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "issue_id": self.issue.id,
            "issue_title": self.issue.title,
            "project": self.issue.project.name,
            "hours": round(self.hours, 2),
            "comment": self.comment,
            "spent_on": self.spent_at.isoformat() if self.spent_at else None,
            "activity": self.activity.name if self.activity else None,
        }


@dataclass(frozen=True)
class ProjectMember:
    id: int
    name: str
    roles: tuple = ()

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "roles": list(self.roles)}


@dataclass(frozen=True)
class WikiPage:
    title: str
    text: Optional[str] = None
    version: Optional[int] = None
    author: Optional[str] = None
    created_on: Optional[datetime] = None
    updated_on: Optional[datetime] = None


@dataclass(frozen=True)
class UserCredential:
    """Resolved credential for one authenticated platform user.

    Org config (base URL, shared across an organization's users) and user
    credentials (API key, email) are kept apart.
    """

    user_id: int
    provider: str
    org_config: dict = field(default_factory=dict)
    user_credentials: dict = field(default_factory=dict)
    role: str = "user"

    @property
    def url(self) -> Optional[str]:
        return self.org_config.get("url")

    @property
    def api_key(self) -> Optional[str]:
        return self.user_credentials.get("api_key")

    @property
    def email(self) -> Optional[str]:
        return self.user_credentials.get("email")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def get(self, key: str) -> Any:
        """Look up a credential field in user credentials, then org config."""
        value = self.user_credentials.get(key)
        if value in (None, ""):
            value = self.org_config.get(key)
        return value


@dataclass(frozen=True)
class PortCapabilities:
    name: str
    requires_activity: bool = False
    supports_project_hierarchy: bool = False
    supports_tags: bool = False
    max_daily_hours: float = 24.0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "requires_activity": self.requires_activity,
            "supports_project_hierarchy": self.supports_project_hierarchy,
            "supports_tags": self.supports_tags,
            "max_daily_hours": self.max_daily_hours,
        }
