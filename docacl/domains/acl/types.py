"""Types for the ACL domain.

The compiled filter is an immutable tree of field-equality leaves combined
with boolean nodes. ``to_dict`` renders it in the canonical filter format
used across the search stack:

    {"must": [...], "should": [...], "must_not": [...]}

with ``{"key": <field>, "match": {"value": <token>}}`` leaves.
"""

from enum import Enum
from typing import Any, Dict, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

NOSECURITY_TOKEN = "__nosecurity__"


class AclRelation(str, Enum):
    """The three independent ACL axes, each with its own allow/deny field pair."""

    DOCUMENT = "document"
    SHARE = "share"
    PARENT = "parent"


class AclAccess(str, Enum):
    """Which side of a relation a field records."""

    ALLOW = "allow"
    DENY = "deny"


class AclFieldSet(BaseModel):
    """Index field names for every (access, relation) role."""

    model_config = ConfigDict(frozen=True)

    allow_document: str
    deny_document: str
    allow_share: str
    deny_share: str
    allow_parent: str
    deny_parent: str

    @model_validator(mode="after")
    def validate_distinct(self) -> "AclFieldSet":
        """All six field names must be distinct."""
        names = list(self.model_dump().values())
        if len(set(names)) != len(names):
            raise ValueError(f"ACL field names must be distinct, got {names}")
        return self

    @classmethod
    def from_prefixes(
        cls, allow_prefix: str = "allow_token_", deny_prefix: str = "deny_token_"
    ) -> "AclFieldSet":
        """Build the field set as ``<prefix><relation>`` for every role."""
        prefixes = {AclAccess.ALLOW: allow_prefix, AclAccess.DENY: deny_prefix}
        return cls(
            **{
                f"{access.value}_{relation.value}": f"{prefix}{relation.value}"
                for access, prefix in prefixes.items()
                for relation in AclRelation
            }
        )

    def field(self, access: AclAccess, relation: AclRelation) -> str:
        """Field name for one role."""
        return getattr(self, f"{access.value}_{relation.value}")

    def pair(self, relation: AclRelation) -> Tuple[str, str]:
        """(allow field, deny field) for a relation."""
        return self.field(AclAccess.ALLOW, relation), self.field(AclAccess.DENY, relation)


# ---------------------------------------------------------------------------
# Filter tree
# ---------------------------------------------------------------------------


class FieldMatch(BaseModel):
    """True when the field holds the value."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        """Canonical leaf condition."""
        return {"key": self.key, "match": {"value": self.value}}


class BoolFilter(BaseModel):
    """Boolean combination of conditions.

    True when every ``must`` holds, at least one ``should`` holds (if any
    are given), and no ``must_not`` holds.
    """

    model_config = ConfigDict(frozen=True)

    must: Tuple[Union[FieldMatch, "BoolFilter"], ...] = ()
    should: Tuple[Union[FieldMatch, "BoolFilter"], ...] = ()
    must_not: Tuple[Union[FieldMatch, "BoolFilter"], ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Canonical filter dict; empty clause lists are omitted."""
        rendered: Dict[str, Any] = {}
        for clause in ("must", "should", "must_not"):
            conditions = getattr(self, clause)
            if conditions:
                rendered[clause] = [c.to_dict() for c in conditions]
        return rendered


BoolFilter.model_rebuild()

Condition = Union[FieldMatch, BoolFilter]


class CompiledFilter(BaseModel):
    """A request's access control filter.

    Non-scoring: it narrows eligibility and is meant to be ANDed with the
    request's other filters, never to influence ranking.
    """

    model_config = ConfigDict(frozen=True)

    filter: BoolFilter
    constant_score: bool = Field(True, description="Contributes no relevance score")

    def to_dict(self) -> Dict[str, Any]:
        """Canonical filter dict for the search pipeline."""
        return self.filter.to_dict()
