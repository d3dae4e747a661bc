# tracker_mcp/assembler.py
"""Builds the per-session MCP surface from an adapter's capabilities.

Baseline tools are always registered. Each gate adds its tools or
resources and one instruction line when the adapter's capability
descriptor has the matching flag. Gate order fixes the instruction
order; nothing is renegotiated once the server is built.
"""

from typing import Callable, NamedTuple, Optional

from mcp.server.fastmcp import FastMCP

from .config import Config
from .domain.ports import ProviderAdapter
from .tools.attachment_tools import register_attachment_tools
from .tools.issue_tools import register_issue_read_tools, register_issue_write_tools
from .tools.project_tools import register_project_tools
from .tools.resources import (
    register_activity_resources,
    register_member_resources,
    register_status_resources,
    register_wiki_resources,
)
from .tools.time_entry_tools import register_time_entry_read_tools, register_time_entry_write_tools
from .utils.logging import logger

BASELINE = (
    register_project_tools,
    register_issue_read_tools,
    register_time_entry_read_tools,
    register_attachment_tools,
)


def _activity_instructions(adapter) -> str:
    return (
        "When logging time with log_time, you need an activity_id. "
        'Read "provider://projects/{project_id}/activities" to get the list of available '
        'activities for that project ("provider://activities" lists all of them).'
    )


def _status_instructions(adapter) -> str:
    return 'Read "provider://statuses" to get status IDs for filtering issues or updating issue status.'


def _issue_write_instructions(adapter) -> str:
    return (
        "Use add_comment, update_comment and delete_comment to manage comments, and update_issue "
        "to change status, progress or assignee. The allowed_statuses of get_issue_details lists "
        "the status IDs update_issue accepts."
    )


def _time_entry_write_instructions(adapter) -> str:
    if adapter.requires_activity():
        return "log_time requires an activity_id (argument or metadata.activity_id); hours must be greater than 0."
    return "log_time takes hours, a comment and the day of work; no activity is needed. Hours must be greater than 0."


def _member_instructions(adapter) -> str:
    return 'To assign an issue to someone, read "provider://projects/{project_id}/members" to get user IDs.'


def _wiki_instructions(adapter) -> str:
    return (
        'Project documentation: read "provider://projects/{project_id}/wiki" for the page list and '
        '"provider://projects/{project_id}/wiki/{title}" for one page.'
    )


class Gate(NamedTuple):
    capability: str
    register: Callable[[FastMCP, ProviderAdapter], None]
    instructions: Callable[[ProviderAdapter], str]


GATES = (
    Gate("activity", register_activity_resources, _activity_instructions),
    Gate("status", register_status_resources, _status_instructions),
    Gate("issue_write", register_issue_write_tools, _issue_write_instructions),
    Gate("time_entry_write", register_time_entry_write_tools, _time_entry_write_instructions),
    Gate("members", register_member_resources, _member_instructions),
    Gate("wiki", register_wiki_resources, _wiki_instructions),
)


def open_gates(adapter: ProviderAdapter) -> list[Gate]:
    capabilities = adapter.capabilities.to_dict()
    return [gate for gate in GATES if capabilities[gate.capability]]


def collect_instructions(adapter: ProviderAdapter) -> list[str]:
    return [gate.instructions(adapter) for gate in open_gates(adapter)]


def assemble_server(adapter: ProviderAdapter, name: Optional[str] = None) -> FastMCP:
    """
    Create a FastMCP server exposing exactly what the adapter supports

    Args:
        adapter: Provider adapter built for this request
        name: Server name (default: Config.SERVER_NAME)

    Returns:
        Configured FastMCP server instance
    """
    gates = open_gates(adapter)
    instructions = "\n".join(gate.instructions(adapter) for gate in gates)

    mcp = FastMCP(name or Config.SERVER_NAME, instructions=instructions or None)

    for register in BASELINE:
        register(mcp, adapter)
    for gate in gates:
        gate.register(mcp, adapter)

    logger.info(
        f"Assembled {adapter.name} surface: baseline + "
        f"{', '.join(g.capability for g in gates) or 'no optional capabilities'}"
    )
    return mcp


def describe_surface(mcp: FastMCP) -> dict:
    """Registered tool names, resource URIs and instructions of a server"""
    resources = [str(r.uri) for r in mcp._resource_manager.list_resources()]
    templates = [t.uri_template for t in mcp._resource_manager.list_templates()]
    return {
        "tools": sorted(tool.name for tool in mcp._tool_manager.list_tools()),
        "resources": sorted(resources + templates),
        "instructions": mcp.instructions,
    }
