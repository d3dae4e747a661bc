"""
Input validation utilities
Turns pydantic errors into the package ValidationError
"""

from typing import Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_input(schema: Type[ModelT], **kwargs) -> ModelT:
    """
    Validate tool arguments against a schema

    Args:
        schema: Pydantic model describing the tool input
        **kwargs: Raw tool arguments

    Returns:
        Validated model instance

    Raises:
        ValidationError: If any argument is invalid
    """
    try:
        return schema(**kwargs)
    except PydanticValidationError as e:
        messages = []
        for error in e.errors():
            location = ".".join(str(part) for part in error.get("loc", ()))
            message = error.get("msg", "invalid value")
            messages.append(f"{location}: {message}" if location else message)
        raise ValidationError("; ".join(messages)) from e


def validate_project_id(project_id) -> int:
    """Resource URI parameters arrive as strings"""
    try:
        value = int(project_id)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid project ID: {project_id}")
    if value < 1:
        raise ValidationError(f"Project ID must be positive: {project_id}")
    return value
