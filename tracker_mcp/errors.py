# tracker_mcp/errors.py
"""Error taxonomy shared by providers, services and tools."""


class TrackerError(Exception):
    """Base error for tracker operations."""
    pass


class AuthenticationError(TrackerError):
    """Inbound token is missing, invalid or expired."""
    pass


class UnsupportedProviderError(TrackerError):
    """Provider key is not known to the registry."""

    def __init__(self, message: str, provider: str = None):
        super().__init__(message)
        self.provider = provider


class ConfigurationError(TrackerError):
    """A required credential or config field is missing."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class NotFoundError(TrackerError):
    """Upstream resource does not exist (HTTP 404)."""
    pass


class AccessDeniedError(TrackerError):
    """Upstream refused the request (HTTP 403)."""
    pass


class InvalidCredentialsError(TrackerError):
    """Upstream rejected the stored API key (HTTP 401)."""
    pass


class ValidationError(TrackerError):
    """Business rule or input violation, raised before any upstream call."""
    pass


class UpstreamError(TrackerError):
    """Any other upstream failure: unexpected status, network error, timeout."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code
