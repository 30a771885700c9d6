"""Authority domain: resolve identities to access tokens over HTTP."""

from docacl.domains.authority.client import AuthorityClient
from docacl.domains.authority.exceptions import (
    AuthorityError,
    ConfigurationError,
    PoolClosedError,
    ResolutionError,
    TransportError,
)
from docacl.domains.authority.pool import AuthorityConnectionPool
from docacl.domains.authority.protocols import AuthorityClientProtocol

__all__ = [
    "AuthorityClient",
    "AuthorityClientProtocol",
    "AuthorityConnectionPool",
    "AuthorityError",
    "ConfigurationError",
    "PoolClosedError",
    "ResolutionError",
    "TransportError",
]
