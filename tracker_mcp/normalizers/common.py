"""
Coercion helpers shared by provider normalizers
Missing or malformed values fall back to '', 0 or None
"""

import re
import zlib
from datetime import date, datetime
from typing import Any, Optional

_COMPACT_OFFSET = re.compile(r"([+-]\d{2})(\d{2})$")

# Inline ADF nodes are concatenated; everything else is a block
_INLINE_NODES = {"text", "hardBreak", "mention", "emoji", "inlineCard", "status", "date"}


def as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def as_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value)


def optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def nested(data: dict, *keys: str) -> Any:
    """Walk nested dicts, returning None as soon as a key is missing."""
    current = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse ISO-8601 timestamps from any provider ('Z' and '+0000' offsets included)."""
    if isinstance(value, datetime):
        return value
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _COMPACT_OFFSET.sub(r"\1:\2", text)

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def adf_to_text(document: Any) -> str:
    """
    Flatten an Atlassian Document Format body to plain text.

    Sibling blocks are joined with a newline, inline content is
    concatenated, and the result is stripped. Plain strings pass through.
    """
    if document is None:
        return ""
    if isinstance(document, str):
        return document.strip()
    if not isinstance(document, dict):
        return ""
    return _flatten(document).strip()


def _flatten(node: dict) -> str:
    node_type = node.get("type")
    if node_type == "text":
        return node.get("text", "")
    if node_type == "hardBreak":
        return "\n"
    if node_type in ("mention", "emoji", "status", "date"):
        attrs = node.get("attrs") or {}
        return as_str(attrs.get("text") or attrs.get("shortName"))

    children = [c for c in (node.get("content") or []) if isinstance(c, dict)]
    parts = [_flatten(child) for child in children]

    if children and all(c.get("type") not in _INLINE_NODES for c in children):
        return "\n".join(part.rstrip("\n") for part in parts)
    return "".join(parts)


def surrogate_id(value: Any) -> int:
    """
    Stable integer stand-in for an opaque string id (CRC32).

    Display only: collisions are possible, never join on it.
    """
    if value is None or value == "":
        return 0
    return zlib.crc32(str(value).encode("utf-8"))
