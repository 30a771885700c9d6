"""Identity resolution from request parameters.

Pure parsing, no I/O. Absence of an identity is a valid outcome, never an
error: the request is then treated as public, optionally with group tokens
asserted by an upstream proxy.
"""

from typing import List, Optional

from docacl.core.logging import ContextualLogger
from docacl.core.logging import logger as default_logger
from docacl.domains.identity.types import IdentityResolution, RequestParams

AUTHENTICATED_USER_NAME = "AuthenticatedUserName"
AUTHENTICATED_USER_DOMAIN = "AuthenticatedUserDomain"
AUTHENTICATED_USER_NAME_PREFIX = "AuthenticatedUserName_"
AUTHENTICATED_USER_DOMAIN_PREFIX = "AuthenticatedUserDomain_"
USER_TOKENS = "UserTokens"


def get_param(params: RequestParams, name: str) -> Optional[str]:
    """First value of a parameter, or None if absent."""
    value = params.get(name)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    for item in value:
        return item
    return None


def get_params(params: RequestParams, name: str) -> List[str]:
    """All values of a parameter (empty list if absent)."""
    value = params.get(name)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


class IdentityResolver:
    """Parses the requester's identity out of request parameters.

    Three forms are recognized, in priority order:

    1. ``AuthenticatedUserName`` (+ optional ``AuthenticatedUserDomain``)
    2. ``AuthenticatedUserName_0`` / ``AuthenticatedUserDomain_0``, ``_1``, ...
       scanned until the first missing name
    3. neither: ``UserTokens`` values, if any, are taken as the caller's tokens
    """

    def __init__(self, logger: Optional[ContextualLogger] = None) -> None:
        """Initialize the resolver.

        Args:
            logger: Optional logger for branch tracing
        """
        self._logger = logger or default_logger

    def resolve(self, params: RequestParams) -> IdentityResolution:
        """Resolve identities or caller-asserted tokens from the parameters."""
        identities = self._read_identities(params)
        if identities:
            return IdentityResolution(identities=identities)

        tokens = get_params(params, USER_TOKENS)
        if tokens:
            self._logger.info("[IdentityResolver] Group tokens received from caller")
        else:
            self._logger.info("[IdentityResolver] Default no-user response (open documents only)")
        return IdentityResolution(user_tokens=tokens)

    def _read_identities(self, params: RequestParams) -> dict:
        user_name = get_param(params, AUTHENTICATED_USER_NAME)
        if user_name is not None:
            domain = get_param(params, AUTHENTICATED_USER_DOMAIN) or ""
            return {domain: user_name}

        identities: dict = {}
        i = 0
        while True:
            user_name = get_param(params, f"{AUTHENTICATED_USER_NAME_PREFIX}{i}")
            if user_name is None:
                break
            domain = get_param(params, f"{AUTHENTICATED_USER_DOMAIN_PREFIX}{i}") or ""
            identities[domain] = user_name
            i += 1
        return identities
