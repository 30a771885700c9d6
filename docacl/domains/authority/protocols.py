"""Protocols for the authority domain."""

from typing import List, Mapping, Protocol, runtime_checkable


@runtime_checkable
class AuthorityClientProtocol(Protocol):
    """Resolves identities to access tokens."""

    async def resolve_tokens(self, identities: Mapping[str, str]) -> List[str]:
        """Fetch the access tokens for an ordered domain -> username mapping.

        Raises:
            ConfigurationError: If the client cannot be used as configured.
            TransportError: On network/I/O failure.
            ResolutionError: On a non-success answer from the authority.
        """
        ...
