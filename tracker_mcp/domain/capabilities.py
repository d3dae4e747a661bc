# tracker_mcp/domain/capabilities.py
"""Capability descriptor computed once per adapter."""

from dataclasses import dataclass

from .ports import (
    ActivityPort,
    IssueWritePort,
    ProjectMemberPort,
    StatusPort,
    TimeEntryWritePort,
    WikiPort,
)


@dataclass(frozen=True)
class CapabilityDescriptor:
    """Which optional ports an adapter instance implements."""

    activity: bool = False
    status: bool = False
    issue_write: bool = False
    time_entry_write: bool = False
    members: bool = False
    wiki: bool = False

    @classmethod
    def for_adapter(cls, adapter) -> "CapabilityDescriptor":
        return cls(
            activity=isinstance(adapter, ActivityPort),
            status=isinstance(adapter, StatusPort),
            issue_write=isinstance(adapter, IssueWritePort),
            time_entry_write=isinstance(adapter, TimeEntryWritePort),
            members=isinstance(adapter, ProjectMemberPort),
            wiki=isinstance(adapter, WikiPort),
        )

    def to_dict(self) -> dict:
        return {
            "activity": self.activity,
            "status": self.status,
            "issue_write": self.issue_write,
            "time_entry_write": self.time_entry_write,
            "members": self.members,
            "wiki": self.wiki,
        }

    def enabled(self) -> list[str]:
        return [key for key, value in self.to_dict().items() if value]
