# tracker_mcp/normalizers/monday.py
"""Monday.com GraphQL payloads to domain records.

Boards map to projects, items to issues, updates to comments. Item
descriptions are doc blocks whose ``content`` is a JSON string: text
blocks carry a Quill ``deltaFormat``, image blocks an ``assetId``.
"""

import json
import mimetypes
from datetime import datetime
from pathlib import PurePosixPath
from urllib.parse import urlparse

from ..domain.models import Attachment, Comment, Issue, Project, ProviderUser, TimeEntry
from .common import as_int, as_str, nested, optional_str, parse_datetime
from .registry import TypeTag, normalize, normalize_many, normalizer

PROVIDER = "monday"

STATUS_COLUMNS = ("task_status", "status", "bug_status")
ASSIGNEE_COLUMNS = ("task_owner", "people", "people1")
TYPE_COLUMNS = ("task_type", "type")
PRIORITY_COLUMNS = ("priority", "priority_1")

# mimetypes misses webp on some platforms
_EXTRA_TYPES = {".webp": "image/webp", ".svg": "image/svg+xml"}


def guess_content_type(filename: str) -> str:
    suffix = PurePosixPath(filename).suffix.lower()
    if suffix in _EXTRA_TYPES:
        return _EXTRA_TYPES[suffix]
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or "application/octet-stream"


def _columns(column_values) -> dict:
    result = {"status": None, "assignee": None, "type": None, "priority": None}
    for column in column_values or []:
        if not isinstance(column, dict):
            continue
        text = column.get("text")
        if not isinstance(text, str) or not text:
            continue
        column_id = column.get("id", "")
        if column_id in STATUS_COLUMNS:
            result["status"] = text
        elif column_id in ASSIGNEE_COLUMNS:
            result["assignee"] = text
        elif column_id in TYPE_COLUMNS:
            result["type"] = text
        elif column_id in PRIORITY_COLUMNS:
            result["priority"] = text
    return result


def _description(description) -> tuple[str, tuple]:
    """Return (plain text, image attachments) from item description blocks."""
    texts = []
    attachments = []

    blocks = description.get("blocks") if isinstance(description, dict) else None
    for block in blocks or []:
        content = block.get("content") if isinstance(block, dict) else None
        if not content:
            continue
        try:
            decoded = json.loads(content) if isinstance(content, str) else content
        except json.JSONDecodeError:
            continue
        if not isinstance(decoded, dict):
            continue

        if "assetId" in decoded and "url" in decoded:
            url = as_str(decoded["url"])
            filename = PurePosixPath(urlparse(url).path).name or "image.jpg"
            attachments.append(Attachment(
                id=as_int(decoded["assetId"]),
                filename=filename,
                filesize=0,
                content_type=guess_content_type(filename),
                content_url=url,
            ))
            continue

        for delta in decoded.get("deltaFormat") or []:
            if isinstance(delta, dict) and isinstance(delta.get("insert"), str):
                texts.append(delta["insert"])

    return "\n".join(texts), tuple(attachments)


@normalizer(TypeTag.PROJECT, PROVIDER)
def board(data: dict, context: dict) -> Project:
    return Project(id=as_int(data.get("id")), name=as_str(data.get("name")), parent=None)


@normalizer(TypeTag.USER, PROVIDER)
def user(data: dict, context: dict) -> ProviderUser:
    return ProviderUser(
        id=as_int(data.get("id")),
        name=as_str(data.get("name")),
        email=as_str(data.get("email")),
    )


@normalizer(TypeTag.COMMENT, PROVIDER)
def update(data: dict, context: dict) -> Comment:
    body = data.get("text_body") or data.get("body")
    return Comment(
        id=as_int(data.get("id")),
        notes=optional_str(body),
        author=optional_str(nested(data, "creator", "name")),
        created_on=parse_datetime(data.get("created_at")),
    )


@normalizer(TypeTag.ATTACHMENT, PROVIDER)
def asset(data: dict, context: dict) -> Attachment:
    filename = as_str(data.get("name"))
    return Attachment(
        id=as_int(data.get("id")),
        filename=filename,
        filesize=as_int(data.get("file_size")),
        content_type=guess_content_type(filename),
        description=None,
        content_url=optional_str(data.get("public_url") or data.get("url")),
        author=optional_str(nested(data, "uploaded_by", "name")),
        created_on=parse_datetime(data.get("created_at")),
    )


@normalizer(TypeTag.ISSUE, PROVIDER)
def item(data: dict, context: dict) -> Issue:
    text, attachments = _description(data.get("description"))
    columns = _columns(data.get("column_values"))
    return Issue(
        id=as_int(data.get("id")),
        title=as_str(data.get("name")),
        description=text,
        project=normalize(TypeTag.PROJECT, PROVIDER, data.get("board"), context),
        status=columns["status"] or "Unknown",
        assignee=columns["assignee"],
        type=columns["type"],
        priority=columns["priority"],
        comments=normalize_many(TypeTag.COMMENT, PROVIDER, data.get("updates"), context),
        attachments=attachments,
        allowed_statuses=(),
    )


@normalizer(TypeTag.TIME_ENTRY, PROVIDER)
def time_tracking(data: dict, context: dict) -> TimeEntry:
    """Item with a time tracking column to TimeEntry; the user comes from ``context['current_user']``."""
    seconds = 0
    spent = None
    for column in data.get("column_values") or []:
        if isinstance(column, dict) and "duration" in column:
            seconds = as_int(column.get("duration"))
            spent = parse_datetime(column.get("updated_at")) or parse_datetime(column.get("started_at"))
            break

    current_user = context.get("current_user")
    if not isinstance(current_user, ProviderUser):
        current_user = ProviderUser(id=0, name="Unknown", email="")

    return TimeEntry(
        id=as_int(data.get("id")),
        issue=normalize(TypeTag.ISSUE, PROVIDER, data, context),
        seconds=seconds,
        comment="",
        spent_at=(spent or datetime.now()).date(),
        user=current_user,
        activity=None,
    )
