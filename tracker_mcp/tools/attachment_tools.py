"""
Attachment tool
Images are inlined as base64, text as decoded text; other types return
metadata only
"""

import base64
from typing import TYPE_CHECKING

from ..config import Config
from ..errors import TrackerError, ValidationError
from ..schemas.response_schemas import error_response, success_response
from ..schemas.tool_schemas import AttachmentInput
from ..utils.logging import logger
from ..utils.validators import validate_input

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

IMAGE_TYPES = {"image/png", "image/jpeg", "image/jpg", "image/gif", "image/webp"}

def register_attachment_tools(mcp: "FastMCP", adapter) -> None:
    """Register get_attachment"""

    @mcp.tool()
    def get_attachment(attachment_id: int) -> dict:
        """
        Get an attachment's metadata, plus its content for images and text files

        Args:
            attachment_id: The attachment ID (from get_issue_details)
        """
        try:
            params = validate_input(AttachmentInput, attachment_id=attachment_id)
            attachment = adapter.get_attachment(params.attachment_id)
            result = {"attachment": attachment.to_dict()}

            content_type = (attachment.content_type or "").lower()
            is_image = content_type in IMAGE_TYPES
            is_text = content_type.startswith("text/")

            if not (is_image or is_text):
                result["note"] = f"Content of type '{content_type or 'unknown'}' is not returned; use content_url."
            elif attachment.filesize > Config.MAX_ATTACHMENT_BYTES:
                result["note"] = (
                    f"Attachment is {attachment.filesize} bytes, above the "
                    f"{Config.MAX_ATTACHMENT_BYTES} byte limit; use content_url."
                )
            else:
                data = adapter.download_attachment(params.attachment_id)
                if is_image:
                    result["encoding"] = "base64"
                    result["content"] = base64.b64encode(data).decode("ascii")
                else:
                    result["encoding"] = "text"
                    result["content"] = data.decode("utf-8", errors="replace")

            logger.info(f"Retrieved attachment {attachment.id} ({adapter.name})")
            return success_response(**result)
        except ValidationError as e:
            logger.warning(f"Validation error in get_attachment: {e}")
            return error_response(e)
        except TrackerError as e:
            logger.error(f"Tracker error in get_attachment: {e}")
            return error_response(e)
        except Exception as e:
            logger.error(f"Unexpected error in get_attachment: {e}", exc_info=True)
            return error_response(f"Unexpected error: {e}")
