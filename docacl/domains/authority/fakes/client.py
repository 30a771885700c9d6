"""Fake authority client for testing.

Returns canned tokens without any HTTP traffic and records every call.
"""

from typing import Dict, List, Mapping, Optional


class FakeAuthorityClient:
    """Test implementation of AuthorityClientProtocol.

    Usage:
        fake = FakeAuthorityClient(tokens=["g1", "g2"])
        service = AccessFilterService(..., authority_client=fake)

        # Make the next lookups fail
        fake.fail_with(TransportError("down"))

        assert fake.calls == [{"": "alice"}]
    """

    def __init__(self, tokens: Optional[List[str]] = None) -> None:
        """Initialize with the tokens every lookup returns."""
        self.tokens: List[str] = list(tokens or [])
        self.calls: List[Dict[str, str]] = []
        self._error: Optional[Exception] = None

    async def resolve_tokens(self, identities: Mapping[str, str]) -> List[str]:
        """Record the call and return the canned tokens (or raise)."""
        self.calls.append(dict(identities))
        if self._error is not None:
            raise self._error
        return list(self.tokens)

    # Test helpers

    def fail_with(self, error: Exception) -> None:
        """Raise ``error`` from subsequent lookups."""
        self._error = error

    @property
    def call_count(self) -> int:
        """Number of lookups made."""
        return len(self.calls)
