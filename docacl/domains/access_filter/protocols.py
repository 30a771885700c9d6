"""Protocols for the access filter domain."""

from typing import Optional, Protocol, runtime_checkable

from docacl.core.logging import ContextualLogger
from docacl.domains.access_filter.types import AccessFilterResult
from docacl.domains.identity.types import RequestParams


@runtime_checkable
class AccessFilterServiceProtocol(Protocol):
    """Builds a request's access control filter from its parameters."""

    async def build(
        self, params: RequestParams, logger: Optional[ContextualLogger] = None
    ) -> AccessFilterResult:
        """Resolve the requester's tokens and compile them into a filter."""
        ...
