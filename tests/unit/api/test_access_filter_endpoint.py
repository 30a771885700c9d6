"""Tests for the access filter and health endpoints.

The global container is swapped for one built from fakes; the app lifespan
is not run.
"""

from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from docacl.core import container as container_mod
from docacl.core.container import Container
from docacl.domains.access_filter.service import AccessFilterService
from docacl.domains.authority.exceptions import (
    ConfigurationError,
    ResolutionError,
    TransportError,
)
from docacl.domains.authority.fakes import FakeAuthorityClient
from docacl.domains.authority.pool import AuthorityConnectionPool
from docacl.domains.identity.resolver import IdentityResolver
from docacl.main import app
from docacl.platform.destinations.solr.filter_translator import FilterTranslator


@pytest.fixture
def fake_client():
    return FakeAuthorityClient(tokens=["g1"])


@pytest.fixture
def test_container(fake_client, compiler):
    """Install a container built from fakes as the global container."""
    service = AccessFilterService(
        resolver=IdentityResolver(logger=MagicMock()),
        authority_client=fake_client,
        compiler=compiler,
        logger=MagicMock(),
    )
    c = Container(
        authority_pool=AuthorityConnectionPool(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        ),
        authority_client=fake_client,
        access_filter_service=service,
        filter_translator=FilterTranslator(logger=MagicMock()),
    )
    previous = container_mod.container
    container_mod.container = c
    yield c
    container_mod.container = previous


@pytest.fixture
def client(test_container):
    return TestClient(app)


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestAccessFilterEndpoint:
    def test_authenticated_user(self, client, fake_client, compiler):
        response = client.get("/access-filter", params={"AuthenticatedUserName": "alice"})

        assert response.status_code == 200
        body = response.json()
        assert fake_client.calls == [{"": "alice"}]
        assert body["identities"] == {"": "alice"}
        assert body["tokens"] == ["g1"]
        assert body["filter"] == compiler.compile(["g1"]).to_dict()
        assert body["constant_score"] is True
        assert 'allow_token_document:"g1"' in body["fq"]

    def test_repeated_user_tokens(self, client, fake_client):
        response = client.get("/access-filter?UserTokens=t1&UserTokens=t2")

        assert response.status_code == 200
        assert response.json()["tokens"] == ["t1", "t2"]
        assert fake_client.call_count == 0

    def test_anonymous(self, client, compiler):
        response = client.get("/access-filter")

        assert response.status_code == 200
        assert response.json()["filter"] == compiler.compile([]).to_dict()

    @pytest.mark.parametrize(
        "error, status_code",
        [
            (TransportError("connection refused"), 502),
            (ResolutionError(503, "service unavailable"), 502),
            (ConfigurationError("no base url"), 500),
        ],
    )
    def test_authority_errors_mapped(self, client, fake_client, error, status_code):
        fake_client.fail_with(error)

        response = client.get("/access-filter", params={"AuthenticatedUserName": "alice"})

        assert response.status_code == status_code
        assert response.json() == {"detail": str(error)}
