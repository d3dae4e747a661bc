# tracker_mcp/normalizers/jira.py
"""Jira Cloud REST v3 payloads to domain records.

Issues arrive in the raw ``{"id", "key", "fields": {...}}`` shape; a
flat dict without ``fields`` is accepted too. Account ids are opaque
strings and become CRC32 surrogates.
"""

from ..domain.models import Attachment, Comment, Issue, Project, ProviderUser, TimeEntry
from .common import (
    adf_to_text,
    as_int,
    as_str,
    nested,
    optional_str,
    parse_date,
    parse_datetime,
    surrogate_id,
)
from .registry import TypeTag, normalize, normalize_many, normalizer

PROVIDER = "jira"


def _name(value, key: str = "name"):
    if isinstance(value, dict):
        return optional_str(value.get(key))
    return optional_str(value)


@normalizer(TypeTag.PROJECT, PROVIDER)
def project(data: dict, context: dict) -> Project:
    name = as_str(data.get("name"))
    key = data.get("key")
    return Project(
        id=as_int(data.get("id")),
        name=f"{name} ({key})" if key else name,
        parent=None,
    )


@normalizer(TypeTag.USER, PROVIDER)
def user(data: dict, context: dict) -> ProviderUser:
    return ProviderUser(
        id=surrogate_id(data.get("accountId")),
        name=as_str(data.get("displayName")),
        email=as_str(data.get("emailAddress")),
    )


@normalizer(TypeTag.ATTACHMENT, PROVIDER)
def attachment(data: dict, context: dict) -> Attachment:
    return Attachment(
        id=as_int(data.get("id")),
        filename=as_str(data.get("filename")),
        filesize=as_int(data.get("size")),
        content_type=as_str(data.get("mimeType")) or "application/octet-stream",
        description=None,
        content_url=optional_str(data.get("content")),
        author=optional_str(nested(data, "author", "displayName")),
        created_on=parse_datetime(data.get("created")),
    )


@normalizer(TypeTag.COMMENT, PROVIDER)
def comment(data: dict, context: dict) -> Comment:
    rendered = data.get("renderedBody")
    text = as_str(rendered).strip() if rendered else adf_to_text(data.get("body"))
    return Comment(
        id=as_int(data.get("id")),
        notes=text or None,
        author=optional_str(nested(data, "author", "displayName")),
        created_on=parse_datetime(data.get("created")),
    )


@normalizer(TypeTag.ISSUE, PROVIDER)
def issue(data: dict, context: dict) -> Issue:
    fields = data.get("fields") if isinstance(data.get("fields"), dict) else data

    comments = fields.get("comment")
    if isinstance(comments, dict):
        comments = comments.get("comments")
    if comments is None:
        comments = fields.get("comments")

    attachments = fields.get("attachment")
    if attachments is None:
        attachments = fields.get("attachments")

    return Issue(
        id=as_int(data.get("id")),
        title=as_str(fields.get("summary")),
        description=adf_to_text(fields.get("description")),
        project=normalize(TypeTag.PROJECT, PROVIDER, fields.get("project"), context),
        status=_name(fields.get("status")) or "Unknown",
        assignee=_name(fields.get("assignee"), "displayName"),
        type=_name(fields.get("issuetype")),
        priority=_name(fields.get("priority")),
        comments=normalize_many(TypeTag.COMMENT, PROVIDER, comments, context),
        attachments=normalize_many(TypeTag.ATTACHMENT, PROVIDER, attachments, context),
        allowed_statuses=(),
    )


@normalizer(TypeTag.TIME_ENTRY, PROVIDER)
def worklog(data: dict, context: dict) -> TimeEntry:
    """Worklog to TimeEntry; pass the owning raw issue as ``context['issue']``."""
    issue_data = context.get("issue")
    if isinstance(issue_data, dict):
        issue_ = normalize(TypeTag.ISSUE, PROVIDER, issue_data, context)
        issue_key = issue_data.get("key")
    else:
        issue_ = Issue(
            id=as_int(data.get("issueId")),
            title="",
            description="",
            project=Project(id=0, name=""),
            status="Unknown",
        )
        issue_key = None

    author = data.get("author")
    return TimeEntry(
        id=as_int(data.get("id")),
        issue=issue_,
        seconds=as_int(data.get("timeSpentSeconds")),
        comment=adf_to_text(data.get("comment")),
        spent_at=parse_date(data.get("started")),
        user=normalize(TypeTag.USER, PROVIDER, author, context) if isinstance(author, dict) else None,
        activity=None,
        metadata={"issueKey": issue_key} if issue_key else {},
    )
