"""Root conftest for pytest configuration and shared fixtures.

This conftest is loaded before both testpaths (tests/ and docacl/domains/),
making its fixtures available to centralized tests AND colocated domain tests.
"""

import os

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables: must be set before any docacl module import
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("AUTHORITY_SERVICE_BASE_URL", "http://authority.test/mcf-authority-service")


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def acl_fields():
    """Default ACL field set (allow_token_*/deny_token_*)."""
    from docacl.domains.acl.types import AclFieldSet

    return AclFieldSet.from_prefixes()


@pytest.fixture
def compiler(acl_fields):
    """AclQueryCompiler over the default fields and sentinel."""
    from docacl.domains.acl.compiler import AclQueryCompiler

    return AclQueryCompiler(acl_fields)


@pytest.fixture
def fake_authority_client():
    """Fake AuthorityClient that returns canned tokens."""
    from docacl.domains.authority.fakes import FakeAuthorityClient

    return FakeAuthorityClient(tokens=["g1", "g2"])


@pytest.fixture
def access_filter_service(fake_authority_client, compiler):
    """AccessFilterService wired with the fake authority client."""
    from docacl.domains.access_filter.service import AccessFilterService
    from docacl.domains.identity.resolver import IdentityResolver

    return AccessFilterService(
        resolver=IdentityResolver(),
        authority_client=fake_authority_client,
        compiler=compiler,
    )
