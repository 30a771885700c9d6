"""Access filter service.

Runs the per-request pipeline: identity resolution, token lookup at the
authority service (only when an identity is present), then compilation.
Authority errors propagate unchanged; they must fail the request rather
than degrade into "no tokens".
"""

from typing import List, Optional

from docacl.core.logging import ContextualLogger
from docacl.core.logging import logger as default_logger
from docacl.domains.access_filter.types import AccessFilterResult
from docacl.domains.acl.compiler import AclQueryCompiler
from docacl.domains.authority.protocols import AuthorityClientProtocol
from docacl.domains.identity.resolver import IdentityResolver
from docacl.domains.identity.types import IdentityResolution, RequestParams


class AccessFilterService:
    """Builds access control filters satisfying AccessFilterServiceProtocol."""

    def __init__(
        self,
        *,
        resolver: IdentityResolver,
        authority_client: AuthorityClientProtocol,
        compiler: AclQueryCompiler,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize with the three collaborators.

        Args:
            resolver: Parses identities from request parameters
            authority_client: Resolves identities to access tokens
            compiler: Compiles tokens into the filter
            logger: Optional logger
        """
        self._resolver = resolver
        self._authority_client = authority_client
        self._compiler = compiler
        self._logger = logger or default_logger

    async def build(
        self, params: RequestParams, logger: Optional[ContextualLogger] = None
    ) -> AccessFilterResult:
        """Build the access filter for one request.

        Args:
            params: The request's parameters
            logger: Request-scoped logger (defaults to the service logger)

        Raises:
            ConfigurationError, TransportError, ResolutionError: From the
                authority lookup, when the request carries an identity.
        """
        log = logger or self._logger
        resolution = self._resolver.resolve(params)
        tokens = await self._resolve_tokens(resolution, log)

        if self._compiler.sentinel in tokens:
            log.warning(
                f"[AccessFilterService] Access token equals the reserved no-security token "
                f"'{self._compiler.sentinel}'; open-document and allow clauses overlap"
            )

        compiled = self._compiler.compile(tokens)
        return AccessFilterResult(
            identities=resolution.identities,
            tokens=tokens,
            filter=compiled,
        )

    async def _resolve_tokens(
        self, resolution: IdentityResolution, log: ContextualLogger
    ) -> List[str]:
        if not resolution.is_authenticated:
            return list(resolution.user_tokens)

        log.info(
            f"[AccessFilterService] Trying to match docs for user '{resolution.describe()}'"
        )
        tokens = await self._authority_client.resolve_tokens(resolution.identities)
        log.info(f"[AccessFilterService] ✓ Resolved {len(tokens)} access tokens")
        log.debug(f"[AccessFilterService] Tokens: {tokens}")
        return tokens
