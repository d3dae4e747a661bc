"""
Time entry tools
list_time_entries is always registered; log/update/delete only for
adapters that implement TimeEntryWritePort
"""

from datetime import date, timedelta
from typing import TYPE_CHECKING, Optional

from ..config import Config
from ..domain.time_entries import TimeEntryService
from ..errors import TrackerError, ValidationError
from ..schemas.response_schemas import error_response, success_response
from ..schemas.tool_schemas import (
    LogTimeInput,
    TimeEntryInput,
    TimeRangeInput,
    UpdateTimeEntryInput,
)
from ..utils.logging import logger
from ..utils.validators import validate_input

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

def register_time_entry_read_tools(mcp: "FastMCP", adapter) -> None:
    """Register list_time_entries"""
    service = TimeEntryService(adapter)

    @mcp.tool()
    def list_time_entries(
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> dict:
        """
        List logged time with totals per day, project and ISO week

        Args:
            from_date: Start date YYYY-MM-DD (default: 30 days ago)
            to_date: End date YYYY-MM-DD (default: today)
            user_id: User ID (default: the current user)
        """
        try:
            params = validate_input(TimeRangeInput, from_date=from_date, to_date=to_date, user_id=user_id)
            end = params.to_date or date.today()
            start = params.from_date or end - timedelta(days=Config.TIME_ENTRY_LOOKBACK_DAYS)

            report = service.summarize(start, end, params.user_id)
            logger.info(
                f"Listed {report['summary']['total_entries']} time entries "
                f"{start}..{end} ({adapter.name})"
            )
            return success_response(
                period={"from": start.isoformat(), "to": end.isoformat()},
                **report,
            )
        except ValidationError as e:
            logger.warning(f"Validation error in list_time_entries: {e}")
            return error_response(e)
        except TrackerError as e:
            logger.error(f"Tracker error in list_time_entries: {e}")
            return error_response(e)
        except Exception as e:
            logger.error(f"Unexpected error in list_time_entries: {e}", exc_info=True)
            return error_response(f"Unexpected error: {e}")


def register_time_entry_write_tools(mcp: "FastMCP", adapter) -> None:
    """Register log_time, update_time_entry and delete_time_entry"""
    service = TimeEntryService(adapter)

    @mcp.tool()
    def log_time(
        issue_id: int,
        hours: float,
        comment: str = "",
        spent_at: Optional[str] = None,
        metadata: Optional[dict] = None,
        activity_id: Optional[int] = None,
    ) -> dict:
        """
        Log time spent on an issue

        Args:
            issue_id: The issue ID
            hours: Hours spent (e.g., 1.5)
            comment: What was done
            spent_at: Day of work YYYY-MM-DD (default: today)
            metadata: Provider extras, e.g. {"activity_id": 9}
            activity_id: Shortcut for metadata.activity_id
        """
        try:
            extras = dict(metadata or {})
            if activity_id is not None:
                extras["activity_id"] = activity_id

            params = validate_input(
                LogTimeInput,
                issue_id=issue_id,
                hours=hours,
                comment=comment,
                spent_at=spent_at,
                metadata=extras,
            )
            spent = params.spent_at or date.today()

            entry = service.log_time(params.issue_id, params.hours, params.comment, spent, params.metadata)
            return success_response(
                message=f"Logged {params.hours:g}h on issue #{params.issue_id}.",
                time_entry={
                    "id": entry.id,
                    "issue_id": params.issue_id,
                    "hours": round(entry.hours, 2),
                    "comment": params.comment,
                    "spent_on": spent.isoformat(),
                    "activity": entry.activity.name if entry.activity else None,
                },
            )
        except ValidationError as e:
            logger.warning(f"Validation error in log_time: {e}")
            return error_response(e)
        except TrackerError as e:
            logger.error(f"Tracker error in log_time: {e}")
            return error_response(e)
        except Exception as e:
            logger.error(f"Unexpected error in log_time: {e}", exc_info=True)
            return error_response(f"Unexpected error: {e}")

    @mcp.tool()
    def update_time_entry(
        time_entry_id: int,
        hours: Optional[float] = None,
        comment: Optional[str] = None,
        activity_id: Optional[int] = None,
        spent_on: Optional[str] = None,
    ) -> dict:
        """
        Update an existing time entry; only the given fields change

        Args:
            time_entry_id: The time entry ID
            hours: New duration in hours
            comment: New comment
            activity_id: New activity (Redmine)
            spent_on: New day of work YYYY-MM-DD
        """
        try:
            params = validate_input(
                UpdateTimeEntryInput,
                time_entry_id=time_entry_id,
                hours=hours,
                comment=comment,
                activity_id=activity_id,
                spent_on=spent_on,
            )
            service.update_time_entry(
                params.time_entry_id,
                hours=params.hours,
                comment=params.comment,
                activity_id=params.activity_id,
                spent_on=params.spent_on,
            )
            return success_response(message=f"Time entry {params.time_entry_id} updated.")
        except ValidationError as e:
            logger.warning(f"Validation error in update_time_entry: {e}")
            return error_response(e)
        except TrackerError as e:
            logger.error(f"Tracker error in update_time_entry: {e}")
            return error_response(e)
        except Exception as e:
            logger.error(f"Unexpected error in update_time_entry: {e}", exc_info=True)
            return error_response(f"Unexpected error: {e}")

    @mcp.tool()
    def delete_time_entry(time_entry_id: int) -> dict:
        """
        Delete a time entry

        Args:
            time_entry_id: The time entry ID
        """
        try:
            params = validate_input(TimeEntryInput, time_entry_id=time_entry_id)
            service.delete_time_entry(params.time_entry_id)
            return success_response(message=f"Time entry {params.time_entry_id} deleted.")
        except ValidationError as e:
            logger.warning(f"Validation error in delete_time_entry: {e}")
            return error_response(e)
        except TrackerError as e:
            logger.error(f"Tracker error in delete_time_entry: {e}")
            return error_response(e)
        except Exception as e:
            logger.error(f"Unexpected error in delete_time_entry: {e}", exc_info=True)
            return error_response(f"Unexpected error: {e}")
