"""
Tracker MCP Server
One FastMCP surface over Redmine, Jira Cloud and Monday.com

Per request: resolve the credential, build the provider adapter, and
assemble the tools/resources that adapter actually supports.
"""

from typing import Optional

from mcp.server.fastmcp import FastMCP

from .assembler import assemble_server
from .auth import CredentialResolver, EnvCredentialResolver
from .config import Config
from .domain.models import UserCredential
from .domain.ports import ProviderAdapter
from .errors import TrackerError
from .providers.registry import create_for_user
from .utils.logging import logger

def build_adapter(
    credential: Optional[UserCredential] = None,
    resolver: Optional[CredentialResolver] = None,
    token: Optional[str] = None,
) -> ProviderAdapter:
    """
    Resolve the caller's credential and build their provider adapter

    The adapter owns an HTTP connection pool: use it as a context manager
    (or call close()) when the request-scoped session ends.

    Args:
        credential: Already resolved credential (skips the resolver)
        resolver: Credential resolver (default: TRACKER_* environment)
        token: Bearer token handed to the resolver

    Raises:
        AuthenticationError: Credential could not be resolved
        UnsupportedProviderError, ConfigurationError: Adapter could not be built
    """
    try:
        Config.validate()
        if Config.DEBUG:
            logger.info(Config.display())
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        raise

    if credential is None:
        credential = (resolver or EnvCredentialResolver()).resolve(token)

    try:
        return create_for_user(credential)
    except TrackerError as e:
        logger.error(f"Cannot build adapter for provider '{credential.provider}': {e}")
        raise


def create_server(
    credential: Optional[UserCredential] = None,
    resolver: Optional[CredentialResolver] = None,
    token: Optional[str] = None,
    adapter: Optional[ProviderAdapter] = None,
) -> FastMCP:
    """
    Create and configure the MCP server for one credential

    Pass ``adapter`` (from build_adapter) to keep control of its lifetime;
    otherwise one is built from the credential arguments.

    Returns:
        Configured FastMCP server instance
    """
    if adapter is None:
        adapter = build_adapter(credential, resolver, token)

    mcp = assemble_server(adapter)
    logger.info(f"Server '{Config.SERVER_NAME}' v{Config.SERVER_VERSION} ready ({adapter.name})")
    return mcp

def main():
    """Main entry point (stdio transport)"""
    try:
        adapter = build_adapter()
    except Exception as e:
        logger.critical(f"Server failed to start: {e}")
        raise

    with adapter:
        create_server(adapter=adapter).run()

if __name__ == "__main__":
    main()
