"""Tool input schemas - centralized validation

Every tool validates its arguments through one of these models before
touching the adapter, so malformed input never reaches the tracker.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..config import Config


class ListIssuesInput(BaseModel):
    """Schema for issue listing

    Used by: list_issues tool
    """
    model_config = ConfigDict(json_schema_extra={
        "example": {"project_id": 12, "limit": 25}
    })

    project_id: Optional[int] = Field(default=None, ge=1, description="Restrict to one project")
    limit: int = Field(
        default=Config.DEFAULT_ISSUE_LIMIT,
        ge=1,
        le=Config.MAX_ISSUE_LIMIT,
        description="Maximum number of issues",
    )
    user_id: Optional[int] = Field(default=None, ge=1, description="Assignee (default: current user)")
    status_id: Optional[str] = Field(default=None, description="Provider status filter (default: open)")


class IssueInput(BaseModel):
    """Used by: get_issue_details tool"""
    issue_id: int = Field(..., ge=1, description="Issue ID")


class AttachmentInput(BaseModel):
    """Used by: get_attachment tool"""
    attachment_id: int = Field(..., ge=1, description="Attachment ID")


class TimeRangeInput(BaseModel):
    """Schema for time entry listing

    Used by: list_time_entries tool
    """
    model_config = ConfigDict(json_schema_extra={
        "example": {"from_date": "2024-01-01", "to_date": "2024-01-31"}
    })

    from_date: Optional[date] = Field(default=None, description="Start date (YYYY-MM-DD)")
    to_date: Optional[date] = Field(default=None, description="End date (YYYY-MM-DD)")
    user_id: Optional[int] = Field(default=None, ge=1, description="User (default: current user)")

    @model_validator(mode="after")
    def check_order(self):
        if self.from_date and self.to_date and self.from_date > self.to_date:
            raise ValueError("from_date must be on or before to_date")
        return self


class AddCommentInput(BaseModel):
    """Used by: add_comment tool"""
    issue_id: int = Field(..., ge=1)
    comment: str = Field(..., min_length=1, max_length=65535, description="Comment text")
    private: bool = Field(default=False, description="Private note (Redmine)")

    @field_validator("comment")
    @classmethod
    def validate_comment(cls, v):
        if not v.strip():
            raise ValueError("Comment cannot be empty or whitespace only")
        return v


class UpdateCommentInput(BaseModel):
    """Used by: update_comment tool"""
    comment_id: int = Field(..., ge=1)
    comment: str = Field(..., min_length=1, max_length=65535)

    @field_validator("comment")
    @classmethod
    def validate_comment(cls, v):
        if not v.strip():
            raise ValueError("Comment cannot be empty or whitespace only")
        return v


class CommentInput(BaseModel):
    """Used by: delete_comment tool"""
    comment_id: int = Field(..., ge=1)


class UpdateIssueInput(BaseModel):
    """Schema for issue updates

    Used by: update_issue tool
    """
    model_config = ConfigDict(json_schema_extra={
        "example": {"issue_id": 42, "status_id": 3, "done_ratio": 50}
    })

    issue_id: int = Field(..., ge=1)
    status_id: Optional[int] = Field(default=None, ge=1, description="New status")
    done_ratio: Optional[int] = Field(default=None, ge=0, le=100, description="Progress percentage")
    assigned_to_id: Optional[int] = Field(default=None, ge=1, description="New assignee")

    @model_validator(mode="after")
    def require_one_field(self):
        if self.status_id is None and self.done_ratio is None and self.assigned_to_id is None:
            raise ValueError("At least one of status_id, done_ratio or assigned_to_id is required")
        return self


class LogTimeInput(BaseModel):
    """Schema for logging time

    Used by: log_time tool. Hour bounds are business rules checked by
    TimeEntryService, not here.
    """
    model_config = ConfigDict(json_schema_extra={
        "example": {"issue_id": 42, "hours": 1.5, "comment": "Code review", "metadata": {"activity_id": 9}}
    })

    issue_id: int = Field(..., ge=1)
    hours: float = Field(..., allow_inf_nan=False, description="Hours spent")
    comment: str = Field(default="", max_length=1024)
    spent_at: Optional[date] = Field(default=None, description="Day of work (default: today)")
    metadata: dict = Field(default_factory=dict, description="Provider extras, e.g. activity_id")


class UpdateTimeEntryInput(BaseModel):
    """Used by: update_time_entry tool"""
    time_entry_id: int = Field(..., ge=1)
    hours: Optional[float] = Field(default=None, allow_inf_nan=False)
    comment: Optional[str] = Field(default=None, max_length=1024)
    activity_id: Optional[int] = None
    spent_on: Optional[date] = None


class TimeEntryInput(BaseModel):
    """Used by: delete_time_entry tool"""
    time_entry_id: int = Field(..., ge=1)
