# tracker_mcp/domain/time_entries.py
"""Time entry business rules layered over the time entry ports."""

import math
from datetime import date
from typing import Optional

from ..errors import ValidationError
from ..utils.logging import logger
from .models import TimeEntry
from .ports import ActivityPort, TimeEntryReadPort, TimeEntryWritePort


class TimeEntryService:
    """Validates and aggregates time entries for one adapter.

    All checks that need no upstream data run before the first call to
    the adapter.
    """

    def __init__(self, adapter):
        self.adapter = adapter

    def _writer(self) -> TimeEntryWritePort:
        if not isinstance(self.adapter, TimeEntryWritePort):
            raise ValidationError(f"Provider '{self.adapter.name}' does not support logging time")
        return self.adapter

    def log_time(
        self,
        issue_id: int,
        hours: float,
        comment: str,
        spent_at: date,
        metadata: Optional[dict] = None,
    ) -> TimeEntry:
        """
        Log time against an issue.

        Args:
            issue_id: Issue to log against
            hours: Positive number of hours, truncated to whole seconds
            comment: Work description
            spent_at: Day the work was done
            metadata: Provider extras; Redmine needs ``activity_id``

        Raises:
            ValidationError: non-positive hours, more than a day's worth of
                hours, or a missing/disallowed activity
        """
        metadata = dict(metadata or {})
        writer = self._writer()

        self._check_hours(hours)

        activity_id = metadata.get("activity_id")
        if writer.requires_activity():
            if not activity_id:
                raise ValidationError("activity_id is required in metadata for this provider")
            try:
                activity_id = int(activity_id)
            except (TypeError, ValueError):
                raise ValidationError(f"activity_id must be a positive integer: {activity_id!r}")
            if activity_id <= 0:
                raise ValidationError("activity_id must be a positive integer")
            metadata["activity_id"] = activity_id

        seconds = int(hours * 3600)

        if activity_id and isinstance(self.adapter, ActivityPort):
            self._check_project_activity(issue_id, activity_id)

        entry = writer.log_time(issue_id, seconds, comment, spent_at, metadata)
        logger.info(f"Logged {seconds}s on issue {issue_id} ({self.adapter.name})")
        return entry

    def _check_hours(self, hours: float) -> None:
        if not math.isfinite(hours):
            raise ValidationError(f"Hours must be a finite number: {hours}")
        if hours <= 0:
            raise ValidationError("Hours must be greater than 0")
        max_hours = self.adapter.port_capabilities().max_daily_hours
        if hours > max_hours:
            raise ValidationError(f"Hours cannot exceed {max_hours:g} per entry")

    def _check_project_activity(self, issue_id: int, activity_id: int) -> None:
        issue = self.adapter.get_issue(issue_id)
        activities = self.adapter.get_project_activities(issue.project.id)
        allowed = [a.id for a in activities]
        if allowed and activity_id not in allowed:
            raise ValidationError(
                f"Activity ID {activity_id} is not allowed for this project. "
                f"Allowed activities: {', '.join(str(a) for a in allowed)}"
            )

    def update_time_entry(
        self,
        time_entry_id: int,
        hours: Optional[float] = None,
        comment: Optional[str] = None,
        activity_id: Optional[int] = None,
        spent_on: Optional[date] = None,
    ) -> None:
        writer = self._writer()

        if hours is None and comment is None and activity_id is None and spent_on is None:
            raise ValidationError("At least one field must be provided for update")
        if hours is not None:
            self._check_hours(hours)
        if activity_id is not None and activity_id <= 0:
            raise ValidationError("activity_id must be a positive integer")

        writer.update_time_entry(time_entry_id, hours, comment, activity_id, spent_on)
        logger.info(f"Updated time entry {time_entry_id} ({self.adapter.name})")

    def delete_time_entry(self, time_entry_id: int) -> None:
        self._writer().delete_time_entry(time_entry_id)
        logger.info(f"Deleted time entry {time_entry_id} ({self.adapter.name})")

    def get_time_entries(
        self, from_date: date, to_date: date, user_id: Optional[int] = None
    ) -> list[TimeEntry]:
        if from_date > to_date:
            raise ValidationError(f"'from' date {from_date} is after 'to' date {to_date}")
        reader: TimeEntryReadPort = self.adapter
        return reader.get_time_entries(from_date, to_date, user_id)

    def get_entries_by_day(
        self, from_date: date, to_date: date, user_id: Optional[int] = None
    ) -> dict:
        return group_by_day(self.get_time_entries(from_date, to_date, user_id))

    def get_entries_by_project(
        self, from_date: date, to_date: date, user_id: Optional[int] = None
    ) -> dict:
        return group_by_project(self.get_time_entries(from_date, to_date, user_id))

    def summarize(self, from_date: date, to_date: date, user_id: Optional[int] = None) -> dict:
        """Fetch entries once and build the summary plus daily breakdown."""
        entries = self.get_time_entries(from_date, to_date, user_id)
        return {
            "summary": summarize_entries(entries),
            "daily_breakdown": [
                {
                    "date": day["date"],
                    "hours": round(day["hours"], 2),
                    "entries": [e.to_dict() for e in day["entries"]],
                }
                for day in group_by_day(entries).values()
            ],
        }


def group_by_day(entries: list[TimeEntry]) -> dict:
    """Bucket entries by ISO spent-at date, keys ascending."""
    days = {}
    for entry in entries:
        key = entry.spent_at.isoformat() if entry.spent_at else ""
        bucket = days.setdefault(key, {"date": key, "hours": 0.0, "entries": []})
        bucket["hours"] += entry.hours
        bucket["entries"].append(entry)
    return {key: days[key] for key in sorted(days)}


def group_by_project(entries: list[TimeEntry]) -> dict:
    """Bucket entries by project id, in order of first appearance."""
    projects = {}
    for entry in entries:
        project = entry.issue.project
        bucket = projects.setdefault(project.id, {
            "project_id": project.id,
            "project_name": project.name,
            "hours": 0.0,
            "entries": [],
        })
        bucket["hours"] += entry.hours
        bucket["entries"].append(entry)
    return projects


def summarize_entries(entries: list[TimeEntry]) -> dict:
    total = sum(e.hours for e in entries)
    days = group_by_day(entries)
    working_days = len(days)

    weekly = {}
    for entry in entries:
        if entry.spent_at is None:
            continue
        iso = entry.spent_at.isocalendar()
        week = f"{iso[0]}-W{iso[1]:02d}"
        weekly[week] = weekly.get(week, 0.0) + entry.hours

    return {
        "total_hours": round(total, 2),
        "total_entries": len(entries),
        "working_days": working_days,
        "average_hours_per_day": round(total / working_days, 2) if working_days else 0.0,
        "project_breakdown": {
            p["project_name"]: round(p["hours"], 2) for p in group_by_project(entries).values()
        },
        "weekly_breakdown": {week: round(weekly[week], 2) for week in sorted(weekly)},
    }
