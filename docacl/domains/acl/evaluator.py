"""In-memory evaluation of compiled ACL filters.

Applies a filter tree to a document given as ``field -> value(s)``, the way
a search engine would apply it to an indexed document. Used by in-memory
indexes and to check filter semantics without a search engine.
"""

from typing import Any, Dict, Iterable, Mapping, Union

from docacl.domains.acl.types import BoolFilter, CompiledFilter, FieldMatch

Document = Mapping[str, Union[str, Iterable[str]]]


def _field_values(document: Document, key: str) -> set:
    value = document.get(key)
    if value is None:
        return set()
    if isinstance(value, str):
        return {value}
    return set(value)


class AclEvaluator:
    """Evaluates filter trees and canonical filter dicts against documents."""

    def matches(
        self,
        condition: Union[CompiledFilter, BoolFilter, FieldMatch, Dict[str, Any]],
        document: Document,
    ) -> bool:
        """Whether the document passes the condition."""
        if isinstance(condition, CompiledFilter):
            return self.matches(condition.filter, document)
        if isinstance(condition, FieldMatch):
            return condition.value in _field_values(document, condition.key)
        if isinstance(condition, BoolFilter):
            return self._matches_bool(
                condition.must, condition.should, condition.must_not, document
            )
        if isinstance(condition, dict):
            return self._matches_dict(condition, document)
        raise TypeError(f"Unsupported filter condition: {type(condition).__name__}")

    def _matches_bool(self, must, should, must_not, document: Document) -> bool:
        if not all(self.matches(c, document) for c in must):
            return False
        if should and not any(self.matches(c, document) for c in should):
            return False
        return not any(self.matches(c, document) for c in must_not)

    def _matches_dict(self, condition: Dict[str, Any], document: Document) -> bool:
        if "key" in condition and "match" in condition:
            match = condition["match"]
            value = match.get("value") if isinstance(match, dict) else match
            return value in _field_values(document, condition["key"])
        return self._matches_bool(
            condition.get("must", []),
            condition.get("should", []),
            condition.get("must_not", []),
            document,
        )
