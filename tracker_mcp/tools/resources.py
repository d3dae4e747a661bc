"""
Provider resources
JSON documents clients read for IDs before calling write tools. Each
register function is gated on one adapter capability.
"""

import json
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote

from ..errors import TrackerError
from ..utils.logging import logger
from ..utils.validators import validate_project_id

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

JSON_MIME = "application/json"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def to_json(data: Any) -> str:
    """Pretty-printed JSON, non-ASCII kept as-is"""
    return json.dumps(data, indent=2, ensure_ascii=False)


def _format_dt(value):
    return value.strftime(DATETIME_FORMAT) if value else None


def _error(resource: str, e: Exception) -> str:
    if isinstance(e, TrackerError):
        logger.error(f"Tracker error in {resource} resource: {e}")
    else:
        logger.error(f"Unexpected error in {resource} resource: {e}", exc_info=True)
    return to_json({"error": str(e)})


def register_activity_resources(mcp: "FastMCP", adapter) -> None:
    """Time entry activities, globally and per project"""

    @mcp.resource("provider://activities", mime_type=JSON_MIME)
    def activities() -> str:
        """All time entry activities with their default flag"""
        try:
            return to_json([a.to_dict() for a in adapter.get_activities()])
        except Exception as e:
            return _error("activities", e)

    @mcp.resource("provider://projects/{project_id}/activities", mime_type=JSON_MIME)
    def project_activities(project_id: str) -> str:
        """Activities allowed when logging time on one project"""
        try:
            items = adapter.get_project_activities(validate_project_id(project_id))
            return to_json([{"id": a.id, "name": a.name} for a in items])
        except Exception as e:
            return _error("project activities", e)


def register_status_resources(mcp: "FastMCP", adapter) -> None:

    @mcp.resource("provider://statuses", mime_type=JSON_MIME)
    def statuses() -> str:
        """Issue statuses with their closed flag"""
        try:
            return to_json([s.to_dict() for s in adapter.get_statuses()])
        except Exception as e:
            return _error("statuses", e)


def register_member_resources(mcp: "FastMCP", adapter) -> None:

    @mcp.resource("provider://projects/{project_id}/members", mime_type=JSON_MIME)
    def project_members(project_id: str) -> str:
        """Project members and their roles, for assigned_to_id"""
        try:
            members = adapter.get_project_members(validate_project_id(project_id))
            return to_json([m.to_dict() for m in members])
        except Exception as e:
            return _error("project members", e)


def register_wiki_resources(mcp: "FastMCP", adapter) -> None:

    @mcp.resource("provider://projects/{project_id}/wiki", mime_type=JSON_MIME)
    def wiki_pages(project_id: str) -> str:
        """Wiki page index of a project"""
        try:
            pages = adapter.get_wiki_pages(validate_project_id(project_id))
            return to_json([
                {
                    "title": p.title,
                    "version": p.version,
                    "created_on": _format_dt(p.created_on),
                    "updated_on": _format_dt(p.updated_on),
                }
                for p in pages
            ])
        except Exception as e:
            return _error("wiki pages", e)

    @mcp.resource("provider://projects/{project_id}/wiki/{title}", mime_type=JSON_MIME)
    def wiki_page(project_id: str, title: str) -> str:
        """Full content of one wiki page"""
        try:
            page = adapter.get_wiki_page(validate_project_id(project_id), unquote(title))
            return to_json({
                "title": page.title,
                "text": page.text,
                "version": page.version,
                "author": page.author,
                "created_on": _format_dt(page.created_on),
                "updated_on": _format_dt(page.updated_on),
            })
        except Exception as e:
            return _error("wiki page", e)
