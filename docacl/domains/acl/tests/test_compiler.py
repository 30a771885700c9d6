"""Unit tests for AclQueryCompiler and the ACL filter types."""

import pytest
from pydantic import ValidationError

from docacl.domains.acl.compiler import AclQueryCompiler
from docacl.domains.acl.types import (
    NOSECURITY_TOKEN,
    AclAccess,
    AclFieldSet,
    AclRelation,
    BoolFilter,
    CompiledFilter,
    FieldMatch,
)

_S = NOSECURITY_TOKEN


def _match(key: str, value: str) -> dict:
    return {"key": key, "match": {"value": value}}


# ---------------------------------------------------------------------------
# AclFieldSet
# ---------------------------------------------------------------------------


class TestAclFieldSet:
    def test_from_prefixes_defaults(self):
        fields = AclFieldSet.from_prefixes()

        assert fields.allow_document == "allow_token_document"
        assert fields.deny_document == "deny_token_document"
        assert fields.allow_share == "allow_token_share"
        assert fields.deny_share == "deny_token_share"
        assert fields.allow_parent == "allow_token_parent"
        assert fields.deny_parent == "deny_token_parent"

    def test_from_custom_prefixes(self):
        fields = AclFieldSet.from_prefixes(allow_prefix="a_", deny_prefix="d_")

        assert fields.pair(AclRelation.SHARE) == ("a_share", "d_share")
        assert fields.field(AclAccess.DENY, AclRelation.PARENT) == "d_parent"

    def test_duplicate_field_names_rejected(self):
        with pytest.raises(ValidationError):
            AclFieldSet.from_prefixes(allow_prefix="x_", deny_prefix="x_")

    def test_is_immutable(self, acl_fields):
        with pytest.raises(ValidationError):
            acl_fields.allow_document = "other"


# ---------------------------------------------------------------------------
# Filter types
# ---------------------------------------------------------------------------


class TestFilterTypes:
    def test_field_match_to_dict(self):
        assert FieldMatch(key="f", value="v").to_dict() == _match("f", "v")

    def test_bool_filter_omits_empty_clauses(self):
        node = BoolFilter(must_not=(FieldMatch(key="f", value="v"),))

        assert node.to_dict() == {"must_not": [_match("f", "v")]}

    def test_nested_bool_filter_to_dict(self):
        inner = BoolFilter(should=(FieldMatch(key="a", value="1"),))
        node = BoolFilter(must=(inner, FieldMatch(key="b", value="2")))

        assert node.to_dict() == {
            "must": [{"should": [_match("a", "1")]}, _match("b", "2")]
        }

    def test_compiled_filter_is_constant_score(self):
        compiled = CompiledFilter(filter=BoolFilter())

        assert compiled.constant_score is True
        assert compiled.to_dict() == {}


# ---------------------------------------------------------------------------
# compile()
# ---------------------------------------------------------------------------


class TestCompileWithoutTokens:
    def test_requires_every_field_to_be_open(self, compiler):
        compiled = compiler.compile([])

        assert compiled.constant_score is True
        assert compiled.to_dict() == {
            "must": [
                _match("allow_token_document", _S),
                _match("deny_token_document", _S),
                _match("allow_token_share", _S),
                _match("deny_token_share", _S),
                _match("allow_token_parent", _S),
                _match("deny_token_parent", _S),
            ]
        }

    def test_custom_sentinel(self, acl_fields):
        compiled = AclQueryCompiler(acl_fields, sentinel="OPEN").compile([])

        values = {leaf["match"]["value"] for leaf in compiled.to_dict()["must"]}
        assert values == {"OPEN"}


class TestCompileWithTokens:
    def test_one_subquery_per_relation(self, compiler):
        compiled = compiler.compile(["g1"])

        assert compiled.to_dict() == {
            "must": [
                {
                    "should": [
                        {
                            "must": [
                                _match(f"allow_token_{relation}", _S),
                                _match(f"deny_token_{relation}", _S),
                            ]
                        },
                        _match(f"allow_token_{relation}", "g1"),
                    ],
                    "must_not": [_match(f"deny_token_{relation}", "g1")],
                }
                for relation in ("document", "share", "parent")
            ]
        }

    def test_duplicate_tokens_are_collapsed(self, compiler):
        assert compiler.compile(["g1", "g2", "g1"]) == compiler.compile(["g1", "g2"])

    def test_deterministic(self, compiler):
        assert compiler.compile(["b", "a"]).to_dict() == compiler.compile(["b", "a"]).to_dict()

    def test_accepts_any_iterable(self, compiler):
        assert compiler.compile(iter(["g1"])) == compiler.compile(["g1"])


class TestSubquery:
    def test_without_tokens_is_open_clause(self, compiler):
        node = compiler.subquery("allow", "deny", [])

        assert node.to_dict() == {"must": [_match("allow", _S), _match("deny", _S)]}

    def test_with_tokens(self, compiler):
        node = compiler.subquery("allow", "deny", ["g1", "g2"])

        assert node.to_dict() == {
            "should": [
                {"must": [_match("allow", _S), _match("deny", _S)]},
                _match("allow", "g1"),
                _match("allow", "g2"),
            ],
            "must_not": [_match("deny", "g1"), _match("deny", "g2")],
        }
