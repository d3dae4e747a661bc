"""Tool response envelope

Every tool returns {"success": true, ...payload} or
{"success": false, "error": message}.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Failed tool call"""
    success: bool = Field(default=False)
    error: str = Field(..., description="Human readable error message")


class SuccessResponse(BaseModel):
    """Successful tool call; payload keys are merged at the top level"""
    model_config = ConfigDict(extra="allow")

    success: bool = Field(default=True)


def error_response(message: Any) -> dict:
    return ErrorResponse(error=str(message)).model_dump()


def success_response(**payload) -> dict:
    return SuccessResponse(**payload).model_dump()
