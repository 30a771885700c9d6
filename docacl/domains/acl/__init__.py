"""ACL domain: access tokens -> non-scoring boolean filter."""

from docacl.domains.acl.compiler import AclQueryCompiler
from docacl.domains.acl.evaluator import AclEvaluator
from docacl.domains.acl.types import (
    NOSECURITY_TOKEN,
    AclAccess,
    AclFieldSet,
    AclRelation,
    BoolFilter,
    CompiledFilter,
    Condition,
    FieldMatch,
)

__all__ = [
    "NOSECURITY_TOKEN",
    "AclAccess",
    "AclEvaluator",
    "AclFieldSet",
    "AclQueryCompiler",
    "AclRelation",
    "BoolFilter",
    "CompiledFilter",
    "Condition",
    "FieldMatch",
]
