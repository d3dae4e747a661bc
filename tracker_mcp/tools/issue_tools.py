"""
Issue tools
Read tools are always registered; write tools only for adapters that
implement IssueWritePort
"""

from typing import TYPE_CHECKING, Optional

from ..errors import TrackerError, ValidationError
from ..schemas.response_schemas import error_response, success_response
from ..schemas.tool_schemas import (
    AddCommentInput,
    CommentInput,
    IssueInput,
    ListIssuesInput,
    UpdateCommentInput,
    UpdateIssueInput,
)
from ..utils.logging import logger
from ..utils.validators import validate_input

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

def register_issue_read_tools(mcp: "FastMCP", adapter) -> None:
    """
    Register list_issues and get_issue_details

    Args:
        mcp: FastMCP server instance
        adapter: Provider adapter for this session
    """

    @mcp.tool()
    def list_issues(
        project_id: Optional[int] = None,
        limit: int = 50,
        user_id: Optional[int] = None,
        status_id: Optional[str] = None,
    ) -> dict:
        """
        List issues assigned to a user (default: you), newest activity first

        Args:
            project_id: Only issues of this project
            limit: Maximum number of issues (1-100, default: 50)
            user_id: Assignee ID (default: the current user)
            status_id: Status filter (default: open issues)
        """
        try:
            params = validate_input(
                ListIssuesInput,
                project_id=project_id,
                limit=limit,
                user_id=user_id,
                status_id=status_id,
            )
            issues = adapter.get_issues(
                project_id=params.project_id,
                limit=params.limit,
                user_id=params.user_id,
                status_id=params.status_id,
            )
            logger.info(f"Listed {len(issues)} issues ({adapter.name})")
            return success_response(issues=[i.to_dict() for i in issues], total=len(issues))
        except ValidationError as e:
            logger.warning(f"Validation error in list_issues: {e}")
            return error_response(e)
        except TrackerError as e:
            logger.error(f"Tracker error in list_issues: {e}")
            return error_response(e)
        except Exception as e:
            logger.error(f"Unexpected error in list_issues: {e}", exc_info=True)
            return error_response(f"Unexpected error: {e}")

    @mcp.tool()
    def get_issue_details(issue_id: int) -> dict:
        """
        Get an issue with its description, comments, attachments and allowed status transitions

        Args:
            issue_id: The issue ID
        """
        try:
            params = validate_input(IssueInput, issue_id=issue_id)
            issue = adapter.get_issue(params.issue_id)
            logger.info(f"Retrieved issue #{issue.id} ({adapter.name})")
            return success_response(issue=issue.to_dict(detailed=True))
        except ValidationError as e:
            logger.warning(f"Validation error in get_issue_details: {e}")
            return error_response(e)
        except TrackerError as e:
            logger.error(f"Tracker error in get_issue_details: {e}")
            return error_response(e)
        except Exception as e:
            logger.error(f"Unexpected error in get_issue_details: {e}", exc_info=True)
            return error_response(f"Unexpected error: {e}")


def register_issue_write_tools(mcp: "FastMCP", adapter) -> None:
    """Register comment and issue update tools (IssueWritePort adapters only)"""

    @mcp.tool()
    def add_comment(issue_id: int, comment: str, private: bool = False) -> dict:
        """
        Add a comment to an issue

        Args:
            issue_id: The issue ID
            comment: Comment text
            private: Visible only to users allowed to see private notes
        """
        try:
            params = validate_input(AddCommentInput, issue_id=issue_id, comment=comment, private=private)
            adapter.add_comment(params.issue_id, params.comment, params.private)
            logger.info(f"Added comment to issue #{params.issue_id} ({adapter.name})")
            return success_response(message=f"Comment added to issue #{params.issue_id}.")
        except ValidationError as e:
            logger.warning(f"Validation error in add_comment: {e}")
            return error_response(e)
        except TrackerError as e:
            logger.error(f"Tracker error in add_comment: {e}")
            return error_response(e)
        except Exception as e:
            logger.error(f"Unexpected error in add_comment: {e}", exc_info=True)
            return error_response(f"Unexpected error: {e}")

    @mcp.tool()
    def update_comment(comment_id: int, comment: str) -> dict:
        """
        Replace the text of an existing comment

        Args:
            comment_id: The comment (journal) ID
            comment: New comment text
        """
        try:
            params = validate_input(UpdateCommentInput, comment_id=comment_id, comment=comment)
            adapter.update_comment(params.comment_id, params.comment)
            logger.info(f"Updated comment {params.comment_id} ({adapter.name})")
            return success_response(message=f"Comment {params.comment_id} updated.")
        except ValidationError as e:
            logger.warning(f"Validation error in update_comment: {e}")
            return error_response(e)
        except TrackerError as e:
            logger.error(f"Tracker error in update_comment: {e}")
            return error_response(e)
        except Exception as e:
            logger.error(f"Unexpected error in update_comment: {e}", exc_info=True)
            return error_response(f"Unexpected error: {e}")

    @mcp.tool()
    def delete_comment(comment_id: int) -> dict:
        """
        Delete a comment

        Args:
            comment_id: The comment (journal) ID
        """
        try:
            params = validate_input(CommentInput, comment_id=comment_id)
            adapter.delete_comment(params.comment_id)
            logger.info(f"Deleted comment {params.comment_id} ({adapter.name})")
            return success_response(message=f"Comment {params.comment_id} deleted.")
        except ValidationError as e:
            logger.warning(f"Validation error in delete_comment: {e}")
            return error_response(e)
        except TrackerError as e:
            logger.error(f"Tracker error in delete_comment: {e}")
            return error_response(e)
        except Exception as e:
            logger.error(f"Unexpected error in delete_comment: {e}", exc_info=True)
            return error_response(f"Unexpected error: {e}")

    @mcp.tool()
    def update_issue(
        issue_id: int,
        status_id: Optional[int] = None,
        done_ratio: Optional[int] = None,
        assigned_to_id: Optional[int] = None,
    ) -> dict:
        """
        Update an issue's status, progress or assignee

        Args:
            issue_id: The issue ID
            status_id: New status, must be one of the issue's allowed_statuses
            done_ratio: Progress percentage (0-100)
            assigned_to_id: New assignee user ID
        """
        try:
            params = validate_input(
                UpdateIssueInput,
                issue_id=issue_id,
                status_id=status_id,
                done_ratio=done_ratio,
                assigned_to_id=assigned_to_id,
            )

            if params.status_id is not None:
                allowed = [s.id for s in adapter.get_issue(params.issue_id).allowed_statuses]
                if allowed and params.status_id not in allowed:
                    raise ValidationError(
                        f"Status ID {params.status_id} is not allowed for this issue. "
                        f"Allowed statuses: {', '.join(str(s) for s in allowed)}"
                    )

            adapter.update_issue(
                params.issue_id,
                status_id=params.status_id,
                done_ratio=params.done_ratio,
                assigned_to_id=params.assigned_to_id,
            )
            logger.info(f"Updated issue #{params.issue_id} ({adapter.name})")
            return success_response(message=f"Issue #{params.issue_id} updated successfully.")
        except ValidationError as e:
            logger.warning(f"Validation error in update_issue: {e}")
            return error_response(e)
        except TrackerError as e:
            logger.error(f"Tracker error in update_issue: {e}")
            return error_response(e)
        except Exception as e:
            logger.error(f"Unexpected error in update_issue: {e}", exc_info=True)
            return error_response(f"Unexpected error: {e}")
