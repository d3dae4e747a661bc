# tracker_mcp/normalizers/redmine.py
"""Redmine REST payloads to domain records."""

from ..domain.models import (
    Activity,
    Attachment,
    Issue,
    Journal,
    Project,
    ProjectMember,
    ProviderUser,
    Status,
    TimeEntry,
    WikiPage,
)
from .common import as_int, as_str, nested, optional_str, parse_date, parse_datetime
from .registry import TypeTag, normalize, normalize_many, normalizer

PROVIDER = "redmine"


def _unwrap(data: dict, key: str) -> dict:
    inner = data.get(key)
    return inner if isinstance(inner, dict) else data


@normalizer(TypeTag.PROJECT, PROVIDER)
def project(data: dict, context: dict) -> Project:
    data = _unwrap(data, "project")
    parent = data.get("parent")
    return Project(
        id=as_int(data.get("id")),
        name=as_str(data.get("name")),
        parent=normalize(TypeTag.PROJECT, PROVIDER, parent, context) if isinstance(parent, dict) else None,
    )


@normalizer(TypeTag.ATTACHMENT, PROVIDER)
def attachment(data: dict, context: dict) -> Attachment:
    data = _unwrap(data, "attachment")
    return Attachment(
        id=as_int(data.get("id")),
        filename=as_str(data.get("filename")),
        filesize=as_int(data.get("filesize")),
        content_type=as_str(data.get("content_type"), "application/octet-stream"),
        description=optional_str(data.get("description")),
        content_url=optional_str(data.get("content_url")),
        author=optional_str(nested(data, "author", "name")),
        created_on=parse_datetime(data.get("created_on")),
    )


@normalizer(TypeTag.COMMENT, PROVIDER)
def journal(data: dict, context: dict) -> Journal:
    return Journal(
        id=as_int(data.get("id")),
        notes=optional_str(data.get("notes")),
        author=optional_str(nested(data, "user", "name")),
        created_on=parse_datetime(data.get("created_on")),
        attachments=normalize_many(TypeTag.ATTACHMENT, PROVIDER, data.get("attachments"), context),
    )


@normalizer(TypeTag.STATUS, PROVIDER)
def status(data: dict, context: dict) -> Status:
    return Status(
        id=as_int(data.get("id")),
        name=as_str(data.get("name")),
        is_closed=bool(data.get("is_closed", False)),
    )


@normalizer(TypeTag.ISSUE, PROVIDER)
def issue(data: dict, context: dict) -> Issue:
    data = _unwrap(data, "issue")
    return Issue(
        id=as_int(data.get("id")),
        title=as_str(data.get("subject")),
        description=as_str(data.get("description")),
        project=normalize(TypeTag.PROJECT, PROVIDER, data.get("project"), context),
        status=as_str(nested(data, "status", "name")),
        assignee=optional_str(nested(data, "assigned_to", "name")),
        type=optional_str(nested(data, "tracker", "name")),
        priority=optional_str(nested(data, "priority", "name")),
        comments=normalize_many(TypeTag.COMMENT, PROVIDER, data.get("journals"), context),
        attachments=normalize_many(TypeTag.ATTACHMENT, PROVIDER, data.get("attachments"), context),
        allowed_statuses=normalize_many(TypeTag.STATUS, PROVIDER, data.get("allowed_statuses"), context),
    )


@normalizer(TypeTag.ACTIVITY, PROVIDER)
def activity(data: dict, context: dict) -> Activity:
    return Activity(
        id=as_int(data.get("id")),
        name=as_str(data.get("name")),
        is_default=bool(data.get("is_default", False)),
    )


@normalizer(TypeTag.USER, PROVIDER)
def user(data: dict, context: dict) -> ProviderUser:
    data = _unwrap(data, "user")
    name = data.get("name")
    if not name:
        name = f"{as_str(data.get('firstname'))} {as_str(data.get('lastname'))}".strip()
    return ProviderUser(
        id=as_int(data.get("id")),
        name=as_str(name),
        email=as_str(data.get("mail")),
    )


@normalizer(TypeTag.TIME_ENTRY, PROVIDER)
def time_entry(data: dict, context: dict) -> TimeEntry:
    # time entries only carry the issue id; the project comes from the entry itself
    project_ = normalize(TypeTag.PROJECT, PROVIDER, data.get("project"), context)
    issue_data = data.get("issue") or {}
    activity_data = data.get("activity")
    user_data = data.get("user")
    spent_at = parse_date(data.get("spent_on"))

    return TimeEntry(
        id=as_int(data.get("id")),
        issue=Issue(
            id=as_int(issue_data.get("id")),
            title=as_str(issue_data.get("subject")),
            description="",
            project=project_,
            status="",
        ),
        seconds=int(float(data.get("hours") or 0) * 3600),
        comment=as_str(data.get("comments")),
        spent_at=spent_at,
        user=normalize(TypeTag.USER, PROVIDER, user_data, context) if isinstance(user_data, dict) else None,
        activity=normalize(TypeTag.ACTIVITY, PROVIDER, activity_data, context) if isinstance(activity_data, dict) else None,
        metadata={"activity_id": as_int(activity_data.get("id"))} if isinstance(activity_data, dict) else {},
    )


@normalizer(TypeTag.PROJECT_MEMBER, PROVIDER)
def membership(data: dict, context: dict) -> ProjectMember:
    # memberships reference either a user or a group
    principal = data.get("user") or data.get("group") or {}
    return ProjectMember(
        id=as_int(principal.get("id")),
        name=as_str(principal.get("name")),
        roles=tuple(as_str(role.get("name")) for role in data.get("roles") or [] if isinstance(role, dict)),
    )


@normalizer(TypeTag.WIKI_PAGE, PROVIDER)
def wiki_page(data: dict, context: dict) -> WikiPage:
    data = _unwrap(data, "wiki_page")
    version = data.get("version")
    return WikiPage(
        title=as_str(data.get("title")),
        text=optional_str(data.get("text")),
        version=as_int(version) if version is not None else None,
        author=optional_str(nested(data, "author", "name")),
        created_on=parse_datetime(data.get("created_on")),
        updated_on=parse_datetime(data.get("updated_on")),
    )
