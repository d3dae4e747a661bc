# tracker_mcp/providers/registry.py
"""Provider metadata and the adapter factory.

The metadata drives both discovery (signup forms, CLI listing) and the
required-field check the factory runs before building a client.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..config import Config
from ..domain.models import UserCredential
from ..domain.ports import ProviderAdapter
from ..errors import ConfigurationError, UnsupportedProviderError
from ..utils.logging import logger


class ProviderKind(Enum):
    REDMINE = "redmine"
    JIRA = "jira"
    MONDAY = "monday"

    @classmethod
    def from_key(cls, key: str) -> "ProviderKind":
        normalized = (key or "").lower().strip()
        for member in cls:
            if member.value == normalized:
                return member
        raise UnsupportedProviderError(f"Unsupported provider: '{key}'", provider=key)


@dataclass(frozen=True)
class CredentialField:
    """One form field a provider needs (org-level or user-level)."""

    type: str
    label: str
    placeholder: str = ""
    help: str = ""
    required: bool = True

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "label": self.label,
            "placeholder": self.placeholder,
            "help": self.help,
            "required": self.required,
        }


@dataclass(frozen=True)
class ProviderMetadata:
    key: str
    label: str
    description: str
    url_placeholder: str = ""
    org_fields: dict = field(default_factory=dict)
    user_fields: dict = field(default_factory=dict)
    icon_path: str = ""

    @property
    def requires_url(self) -> bool:
        return "url" in self.org_fields

    def to_card(self) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            "description": self.description,
            "url_placeholder": self.url_placeholder,
            "requires_url": self.requires_url,
            "icon": self.icon_path,
        }


PROVIDERS: dict[ProviderKind, ProviderMetadata] = {
    ProviderKind.REDMINE: ProviderMetadata(
        key="redmine",
        label="Redmine",
        description="Flexible open source project management",
        url_placeholder="https://redmine.your-company.com",
        org_fields={
            "url": CredentialField(
                type="url",
                label="Redmine URL",
                placeholder="https://redmine.example.com",
                help="The full URL of your Redmine instance",
            ),
        },
        user_fields={
            "api_key": CredentialField(
                type="text",
                label="API Key",
                placeholder="Your API key",
                help="My account → API access key (right column)",
            ),
        },
        icon_path="/images/providers/redmine.svg",
    ),
    ProviderKind.JIRA: ProviderMetadata(
        key="jira",
        label="Jira Cloud",
        description="Atlassian's tracker for agile teams",
        url_placeholder="https://your-org.atlassian.net",
        org_fields={
            "url": CredentialField(
                type="url",
                label="Jira URL",
                placeholder="https://your-company.atlassian.net",
                help="Your Jira Cloud instance URL",
            ),
        },
        user_fields={
            "email": CredentialField(
                type="email",
                label="Email",
                placeholder="your-email@company.com",
                help="Your Atlassian account email",
            ),
            "api_key": CredentialField(
                type="text",
                label="API Token",
                placeholder="Your API token",
                help="Create at id.atlassian.com/manage-profile/security/api-tokens",
            ),
        },
        icon_path="/images/providers/jira.svg",
    ),
    ProviderKind.MONDAY: ProviderMetadata(
        key="monday",
        label="Monday.com",
        description="Visual, collaborative work management platform",
        url_placeholder="",
        org_fields={},
        user_fields={
            "api_key": CredentialField(
                type="text",
                label="API Token",
                placeholder="Your Monday.com API token",
                help="Monday.com → Profile → Developers → My Access Tokens",
            ),
        },
        icon_path="/images/providers/monday.svg",
    ),
}


def keys() -> list[str]:
    return [kind.value for kind in PROVIDERS]


def get(key: str) -> Optional[ProviderMetadata]:
    try:
        return PROVIDERS[ProviderKind.from_key(key)]
    except UnsupportedProviderError:
        return None


def form_choices() -> dict[str, str]:
    """Label to key, for select widgets."""
    return {meta.label: meta.key for meta in PROVIDERS.values()}


def provider_cards() -> list[dict]:
    return [meta.to_card() for meta in PROVIDERS.values()]


def org_fields(key: str) -> dict:
    meta = get(key)
    return dict(meta.org_fields) if meta else {}


def user_fields(key: str) -> dict:
    meta = get(key)
    return dict(meta.user_fields) if meta else {}


def _require(credential: UserCredential, meta: ProviderMetadata) -> None:
    """Raise ConfigurationError for the first missing required field."""
    for name, credential_field in meta.org_fields.items():
        if credential_field.required and not credential.org_config.get(name):
            raise ConfigurationError(f"{meta.label} requires '{name}' in organization config", field=name)
    for name, credential_field in meta.user_fields.items():
        if credential_field.required and not credential.user_credentials.get(name):
            raise ConfigurationError(f"{meta.label} requires '{name}' in user credentials", field=name)


def create_for_user(credential: UserCredential) -> ProviderAdapter:
    """
    Build the adapter for a resolved credential.

    Pure construction: validates fields and wires the HTTP client, no
    upstream request is made.

    Raises:
        UnsupportedProviderError: Unknown provider key
        ConfigurationError: A required credential field is missing
    """
    kind = ProviderKind.from_key(credential.provider)
    _require(credential, PROVIDERS[kind])

    timeout = Config.HTTP_TIMEOUT

    if kind is ProviderKind.REDMINE:
        from .redmine_client import RedmineClient
        from .redmine_provider import RedmineAdapter

        adapter = RedmineAdapter(RedmineClient(credential.url, credential.api_key, timeout=timeout))
    elif kind is ProviderKind.JIRA:
        from .jira_client import JiraClient
        from .jira_provider import JiraAdapter

        adapter = JiraAdapter(
            JiraClient(credential.url, credential.email, credential.api_key, timeout=timeout)
        )
    elif kind is ProviderKind.MONDAY:
        from .monday_client import MondayClient
        from .monday_provider import MondayAdapter

        adapter = MondayAdapter(MondayClient(credential.api_key, timeout=timeout))
    else:
        raise UnsupportedProviderError(f"Unsupported provider: '{credential.provider}'", provider=credential.provider)

    logger.debug(f"Built {adapter.name} adapter for user {credential.user_id}: {adapter.capabilities.enabled()}")
    return adapter
