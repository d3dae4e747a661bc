"""
Configuration management for Tracker MCP Server
Environment-based configuration, read once at import time
"""

import os


class Config:
    """Server configuration with environment variable support"""

    # Server metadata
    SERVER_NAME: str = os.getenv("MCP_SERVER_NAME", "tracker-mcp")
    SERVER_VERSION: str = os.getenv("MCP_SERVER_VERSION", "1.0.0")

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Upstream HTTP
    HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "30"))
    MONDAY_API_URL: str = os.getenv("MONDAY_API_URL", "https://api.monday.com/v2")

    # Limits
    DEFAULT_ISSUE_LIMIT: int = int(os.getenv("DEFAULT_ISSUE_LIMIT", "50"))
    MAX_ISSUE_LIMIT: int = int(os.getenv("MAX_ISSUE_LIMIT", "100"))
    TIME_ENTRY_LOOKBACK_DAYS: int = int(os.getenv("TIME_ENTRY_LOOKBACK_DAYS", "30"))
    MAX_ATTACHMENT_BYTES: int = int(os.getenv("MAX_ATTACHMENT_BYTES", "10485760"))  # 10MB

    # Sessions
    SESSION_TTL: int = int(os.getenv("SESSION_TTL", "3600"))  # 1 hour

    # Features
    ENABLE_LOGGING: bool = os.getenv("ENABLE_LOGGING", "true").lower() == "true"

    @classmethod
    def validate(cls) -> bool:
        """Validate configuration"""
        errors = []

        if cls.HTTP_TIMEOUT <= 0:
            errors.append(f"HTTP_TIMEOUT must be positive: {cls.HTTP_TIMEOUT}")

        if cls.DEFAULT_ISSUE_LIMIT < 1 or cls.DEFAULT_ISSUE_LIMIT > cls.MAX_ISSUE_LIMIT:
            errors.append(
                f"DEFAULT_ISSUE_LIMIT must be between 1 and {cls.MAX_ISSUE_LIMIT}: "
                f"{cls.DEFAULT_ISSUE_LIMIT}"
            )

        if cls.TIME_ENTRY_LOOKBACK_DAYS < 0:
            errors.append(f"TIME_ENTRY_LOOKBACK_DAYS cannot be negative: {cls.TIME_ENTRY_LOOKBACK_DAYS}")

        if cls.SESSION_TTL <= 0:
            errors.append(f"SESSION_TTL must be positive: {cls.SESSION_TTL}")

        if errors:
            raise ValueError("Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors))

        return True

    @classmethod
    def display(cls) -> str:
        """Display configuration (for debugging)"""
        return f"""
Tracker MCP Server Configuration
================================
Server: {cls.SERVER_NAME} v{cls.SERVER_VERSION}
Environment: {cls.ENVIRONMENT}
Debug: {cls.DEBUG}

Upstream:
  HTTP timeout: {cls.HTTP_TIMEOUT}s
  Monday API: {cls.MONDAY_API_URL}

Limits:
  Default issue limit: {cls.DEFAULT_ISSUE_LIMIT}
  Max issue limit: {cls.MAX_ISSUE_LIMIT}
  Time entry lookback: {cls.TIME_ENTRY_LOOKBACK_DAYS} days
  Max attachment size: {cls.MAX_ATTACHMENT_BYTES} bytes

Sessions:
  TTL: {cls.SESSION_TTL}s

Features:
  Logging: {cls.ENABLE_LOGGING}
================================
"""
