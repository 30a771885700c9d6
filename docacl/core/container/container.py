"""Dependency Injection Container.

The container is a simple immutable dataclass that holds the process-scoped
components. It has no construction logic; that belongs in the factory.

Design principles:
- Container serves, factory builds
- Fail fast: all construction at startup
- Testing: construct directly with fakes
"""

from dataclasses import dataclass

from docacl.domains.access_filter.protocols import AccessFilterServiceProtocol
from docacl.domains.authority.pool import AuthorityConnectionPool
from docacl.domains.authority.protocols import AuthorityClientProtocol
from docacl.platform.destinations.solr.filter_translator import FilterTranslator


@dataclass(frozen=True)
class Container:
    """Immutable container holding the process-scoped components.

    Usage:
        # Production: use the global container built by the factory
        from docacl.core.container import container
        result = await container.access_filter_service.build(params)

        # Testing: construct directly with fakes
        test_container = Container(
            authority_pool=AuthorityConnectionPool(transport=httpx.MockTransport(handler)),
            authority_client=FakeAuthorityClient(tokens=["g1"]),
            access_filter_service=service,
            filter_translator=FilterTranslator(),
        )
    """

    # Owns the shared HTTP client; closed exactly once at shutdown
    authority_pool: AuthorityConnectionPool

    authority_client: AuthorityClientProtocol
    access_filter_service: AccessFilterServiceProtocol
    filter_translator: FilterTranslator
