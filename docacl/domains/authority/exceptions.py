"""Authority domain exceptions.

The authority client raises these instead of letting httpx exceptions
bubble up. Every one of them is fatal to the current request's filter
construction: callers must surface them as a request failure and never
fall back to "no tokens".
"""

from docacl.core.exceptions import DocAclException

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------


class AuthorityError(DocAclException):
    """Base exception for all authority service errors."""

    def __init__(self, message: str = "Authority service error"):
        """Initialize with message."""
        super().__init__(message)


# ---------------------------------------------------------------------------
# Configuration / lifecycle
# ---------------------------------------------------------------------------


class ConfigurationError(AuthorityError):
    """Missing authority base URL or other unusable configuration."""

    def __init__(self, message: str = "Authority service is not configured"):
        """Initialize with message."""
        super().__init__(message)


class PoolClosedError(ConfigurationError):
    """The shared connection pool was used after teardown."""

    def __init__(self, message: str = "Authority connection pool is closed"):
        """Initialize with message."""
        super().__init__(message)


# ---------------------------------------------------------------------------
# Communication
# ---------------------------------------------------------------------------


class TransportError(AuthorityError):
    """Connection refused, timeout, redirect loop or other I/O failure."""

    def __init__(self, message: str = "Could not reach the authority service"):
        """Initialize with message."""
        super().__init__(message)


class ResolutionError(AuthorityError):
    """The authority service answered with a non-success status."""

    def __init__(self, status_code: int, body: str = ""):
        """Initialize with the HTTP status and the full response body."""
        self.status_code = status_code
        self.body = body
        super().__init__(
            "Couldn't fetch user's access tokens from authority service: "
            f"{status_code}; {body}"
        )
