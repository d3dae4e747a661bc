# tracker_mcp/normalizers/registry.py
"""Lookup table from (type, provider) to a normalizer function.

Provider modules register their functions with ``@normalizer``. Composite
normalizers (an Issue holding Comments) call back into ``normalize`` for
the nested types instead of inlining them.
"""

from enum import Enum
from typing import Any, Callable, Optional

from ..errors import UnsupportedProviderError


class TypeTag(Enum):
    """Domain record types a payload can be normalized into."""

    PROJECT = "project"
    ISSUE = "issue"
    COMMENT = "comment"
    ATTACHMENT = "attachment"
    STATUS = "status"
    ACTIVITY = "activity"
    USER = "user"
    TIME_ENTRY = "time_entry"
    PROJECT_MEMBER = "project_member"
    WIKI_PAGE = "wiki_page"


Normalizer = Callable[[dict, dict], Any]

NORMALIZERS: dict[tuple[str, str], Normalizer] = {}


def _key(type_tag, provider) -> tuple[str, str]:
    tag = type_tag.value if isinstance(type_tag, Enum) else str(type_tag)
    name = provider.value if isinstance(provider, Enum) else str(provider)
    return tag, name


def normalizer(type_tag: TypeTag, provider: str):
    """Decorator registering a normalizer for one (type, provider) pair."""

    def register(fn: Normalizer) -> Normalizer:
        NORMALIZERS[_key(type_tag, provider)] = fn
        return fn

    return register


def normalize(type_tag: TypeTag, provider: str, data: Any, context: Optional[dict] = None):
    """
    Convert a raw provider payload into a domain record.

    Args:
        type_tag: Target record type
        provider: Provider key ('redmine', 'jira', 'monday')
        data: Raw payload (None is treated as an empty dict)
        context: Extra values a normalizer may need (e.g., current user)

    Raises:
        UnsupportedProviderError: No normalizer for this pair
    """
    key = _key(type_tag, provider)
    fn = NORMALIZERS.get(key)
    if fn is None:
        raise UnsupportedProviderError(f"No {key[0]} normalizer for provider '{key[1]}'", provider=key[1])
    return fn(data if isinstance(data, dict) else {}, context or {})


def normalize_many(type_tag: TypeTag, provider: str, items, context: Optional[dict] = None) -> tuple:
    return tuple(
        normalize(type_tag, provider, item, context)
        for item in (items or [])
        if isinstance(item, dict)
    )
