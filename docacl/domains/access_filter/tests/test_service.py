"""Unit tests for AccessFilterService.

Uses FakeAuthorityClient, no HTTP traffic.
"""

from unittest.mock import MagicMock

import pytest

from docacl.domains.access_filter.service import AccessFilterService
from docacl.domains.acl.compiler import AclQueryCompiler
from docacl.domains.authority.exceptions import (
    ConfigurationError,
    ResolutionError,
    TransportError,
)
from docacl.domains.authority.fakes import FakeAuthorityClient
from docacl.domains.identity.resolver import IdentityResolver


@pytest.fixture
def log():
    return MagicMock()


def _build_service(fake, compiler, log=None) -> AccessFilterService:
    return AccessFilterService(
        resolver=IdentityResolver(logger=MagicMock()),
        authority_client=fake,
        compiler=compiler,
        logger=log or MagicMock(),
    )


@pytest.mark.asyncio
class TestAuthenticatedRequests:
    async def test_tokens_come_from_authority(self, access_filter_service, fake_authority_client, compiler):
        result = await access_filter_service.build({"AuthenticatedUserName": ["alice"]})

        assert fake_authority_client.calls == [{"": "alice"}]
        assert result.identities == {"": "alice"}
        assert result.tokens == ["g1", "g2"]
        assert result.filter == compiler.compile(["g1", "g2"])

    async def test_indexed_identities_passed_in_order(self, access_filter_service, fake_authority_client):
        await access_filter_service.build(
            {
                "AuthenticatedUserName_0": ["alice"],
                "AuthenticatedUserDomain_0": ["ad"],
                "AuthenticatedUserName_1": ["bob"],
                "AuthenticatedUserDomain_1": ["ldap"],
            }
        )

        assert list(fake_authority_client.calls[0].items()) == [("ad", "alice"), ("ldap", "bob")]

    async def test_caller_tokens_ignored_when_authenticated(self, access_filter_service):
        result = await access_filter_service.build(
            {"AuthenticatedUserName": ["alice"], "UserTokens": ["forged"]}
        )

        assert "forged" not in result.tokens

    async def test_authority_returning_nothing_sees_open_documents_only(self, compiler):
        service = _build_service(FakeAuthorityClient(tokens=[]), compiler)

        result = await service.build({"AuthenticatedUserName": ["alice"]})

        assert result.tokens == []
        assert result.filter == compiler.compile([])

    async def test_logs_user_being_matched(self, compiler, log):
        service = _build_service(FakeAuthorityClient(tokens=["g1"]), compiler)

        await service.build({"AuthenticatedUserName": ["alice"]}, logger=log)

        messages = [call.args[0] for call in log.info.call_args_list]
        assert any("Trying to match docs for user '[:alice]'" in m for m in messages)

    @pytest.mark.parametrize(
        "error",
        [
            ConfigurationError("no base url"),
            TransportError("connection refused"),
            ResolutionError(503, "service unavailable"),
        ],
    )
    async def test_authority_errors_propagate(self, compiler, error):
        fake = FakeAuthorityClient(tokens=["g1"])
        fake.fail_with(error)
        service = _build_service(fake, compiler)

        with pytest.raises(type(error)) as exc_info:
            await service.build({"AuthenticatedUserName": ["alice"]})

        assert exc_info.value is error


@pytest.mark.asyncio
class TestUnauthenticatedRequests:
    async def test_caller_tokens_used_without_lookup(self, access_filter_service, fake_authority_client, compiler):
        result = await access_filter_service.build({"UserTokens": ["t1", "t2"]})

        assert fake_authority_client.call_count == 0
        assert result.identities == {}
        assert result.tokens == ["t1", "t2"]
        assert result.filter == compiler.compile(["t1", "t2"])

    async def test_public_request_without_lookup(self, access_filter_service, fake_authority_client, compiler):
        result = await access_filter_service.build({})

        assert fake_authority_client.call_count == 0
        assert result.tokens == []
        assert result.filter == compiler.compile([])

    async def test_public_request_ignores_broken_authority(self, compiler):
        fake = FakeAuthorityClient()
        fake.fail_with(TransportError("down"))
        service = _build_service(fake, compiler)

        result = await service.build({"UserTokens": ["t1"]})

        assert result.tokens == ["t1"]


@pytest.mark.asyncio
class TestSentinelCollision:
    async def test_warns_when_token_equals_sentinel(self, acl_fields, log):
        compiler = AclQueryCompiler(acl_fields, logger=MagicMock())
        service = _build_service(FakeAuthorityClient(tokens=["__nosecurity__"]), compiler, log)

        result = await service.build({"AuthenticatedUserName": ["alice"]})

        assert result.tokens == ["__nosecurity__"]
        log.warning.assert_called_once()
