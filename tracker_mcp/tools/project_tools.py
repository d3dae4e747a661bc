"""
Project listing tool
"""

from typing import TYPE_CHECKING

from ..errors import TrackerError
from ..schemas.response_schemas import error_response, success_response
from ..utils.logging import logger

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from ..domain.ports import ProviderAdapter

def register_project_tools(mcp: "FastMCP", adapter: "ProviderAdapter") -> None:
    """
    Register project tools

    Args:
        mcp: FastMCP server instance
        adapter: Provider adapter for this session
    """

    @mcp.tool()
    def list_projects() -> dict:
        """List all projects (boards on Monday.com) the current user can access"""
        try:
            projects = adapter.get_projects()
            logger.info(f"Listed {len(projects)} projects ({adapter.name})")
            return success_response(
                projects=[p.to_dict() for p in projects],
                total=len(projects),
            )
        except TrackerError as e:
            logger.error(f"Tracker error in list_projects: {e}")
            return error_response(e)
        except Exception as e:
            logger.error(f"Unexpected error in list_projects: {e}", exc_info=True)
            return error_response(f"Unexpected error: {e}")
