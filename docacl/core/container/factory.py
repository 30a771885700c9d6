"""Container Factory.

All construction logic lives here. The factory reads settings and builds
the container.

Design principles:
- Single place for all wiring decisions
- Fail fast: broken wiring crashes at startup, not at 3am
- Testable: can unit test factory logic with custom settings
"""

from typing import Optional

import httpx

from docacl.core.config import Settings
from docacl.core.container.container import Container
from docacl.core.logging import LoggerConfigurator
from docacl.domains.access_filter.service import AccessFilterService
from docacl.domains.acl.compiler import AclQueryCompiler
from docacl.domains.acl.types import AclFieldSet
from docacl.domains.authority.client import AuthorityClient
from docacl.domains.authority.pool import AuthorityConnectionPool
from docacl.domains.identity.resolver import IdentityResolver
from docacl.platform.destinations.solr.filter_translator import FilterTranslator


def create_container(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> Container:
    """Build the container from settings.

    The authority pool's HTTP client is created eagerly so configuration
    problems surface at startup.

    Args:
        settings: Application settings
        transport: Optional HTTP transport override for the authority pool

    Returns:
        A fully wired Container
    """
    authority_logger = LoggerConfigurator.configure_logger(
        "docacl.domains.authority", dimensions={"component": "authority"}
    )
    acl_logger = LoggerConfigurator.configure_logger(
        "docacl.domains.acl", dimensions={"component": "acl"}
    )

    if not settings.AUTHORITY_SERVICE_BASE_URL:
        authority_logger.warning(
            "[Container] AUTHORITY_SERVICE_BASE_URL is not set; "
            "requests carrying an identity will fail"
        )

    pool = AuthorityConnectionPool(
        pool_size=settings.AUTHORITY_CONNECTION_POOL_SIZE,
        connect_timeout=settings.authority_connect_timeout,
        socket_timeout=settings.authority_socket_timeout,
        transport=transport,
        logger=authority_logger,
    )
    pool.initialize()

    authority_client = AuthorityClient(
        pool=pool,
        base_url=settings.AUTHORITY_SERVICE_BASE_URL,
        logger=authority_logger,
    )

    fields = AclFieldSet.from_prefixes(
        allow_prefix=settings.ALLOW_ATTRIBUTE_PREFIX,
        deny_prefix=settings.DENY_ATTRIBUTE_PREFIX,
    )
    compiler = AclQueryCompiler(fields, sentinel=settings.NOSECURITY_TOKEN, logger=acl_logger)

    service = AccessFilterService(
        resolver=IdentityResolver(logger=acl_logger),
        authority_client=authority_client,
        compiler=compiler,
        logger=acl_logger,
    )

    return Container(
        authority_pool=pool,
        authority_client=authority_client,
        access_filter_service=service,
        filter_translator=FilterTranslator(logger=acl_logger),
    )
