"""ACL query compiler.

Turns a requester's access tokens into a boolean filter over the index's
allow/deny fields. Pure transformation logic with no I/O dependencies.

For each relation (document, share, parent) a document is visible when

    (allow == open AND deny == open) OR allow == t1 OR allow == t2 ...

and, independently, deny matches none of the tokens. A document must be
visible on all three relations. With no tokens at all only documents that
are open on every relation are visible.
"""

from typing import Iterable, List, Optional

from docacl.core.logging import ContextualLogger
from docacl.core.logging import logger as default_logger
from docacl.domains.acl.types import (
    NOSECURITY_TOKEN,
    AclFieldSet,
    AclRelation,
    BoolFilter,
    CompiledFilter,
    Condition,
    FieldMatch,
)


class AclQueryCompiler:
    """Compiles access tokens into a CompiledFilter.

    Deterministic and total: every token list, including an empty one,
    compiles. A token equal to the sentinel is not special-cased; keeping the
    sentinel out of real tokens is up to the deployment.
    """

    def __init__(
        self,
        fields: AclFieldSet,
        sentinel: str = NOSECURITY_TOKEN,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the compiler.

        Args:
            fields: Index field names for the six ACL roles
            sentinel: Token indexed into ACL fields that carry no restriction
            logger: Optional logger for debug messages
        """
        self.fields = fields
        self.sentinel = sentinel
        self._logger = logger or default_logger

    def compile(self, tokens: Iterable[str]) -> CompiledFilter:
        """Build the non-scoring access filter for a token set."""
        unique = self._dedupe(tokens)

        if not unique:
            # Only documents without any ACL metadata are visible.
            open_fields = [
                field
                for relation in AclRelation
                for field in self.fields.pair(relation)
            ]
            root = BoolFilter(must=tuple(self._equals(f, self.sentinel) for f in open_fields))
        else:
            root = BoolFilter(
                must=tuple(
                    self.subquery(*self.fields.pair(relation), unique) for relation in AclRelation
                )
            )

        self._logger.debug(
            f"[AclQueryCompiler] Compiled filter over {len(unique)} distinct tokens"
        )
        return CompiledFilter(filter=root, constant_score=True)

    def subquery(self, allow_field: str, deny_field: str, tokens: Iterable[str]) -> Condition:
        """Visibility test for one relation.

        Any allow match, or the relation being open, is sufficient; any
        single deny match is disqualifying regardless of allow matches.
        """
        unique = self._dedupe(tokens)
        open_clause = BoolFilter(
            must=(
                self._equals(allow_field, self.sentinel),
                self._equals(deny_field, self.sentinel),
            )
        )
        if not unique:
            return open_clause

        return BoolFilter(
            should=(open_clause, *(self._equals(allow_field, t) for t in unique)),
            must_not=tuple(self._equals(deny_field, t) for t in unique),
        )

    @staticmethod
    def _equals(field: str, value: str) -> FieldMatch:
        return FieldMatch(key=field, value=value)

    @staticmethod
    def _dedupe(tokens: Iterable[str]) -> List[str]:
        # First occurrence wins so the compiled tree is stable for a given input.
        return list(dict.fromkeys(tokens))
