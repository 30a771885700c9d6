"""Solr filter translator - converts canonical filters to Lucene query syntax.

Pure transformation logic with no I/O dependencies.
"""

from typing import Any, Dict, List, Optional, Union

from docacl.core.logging import ContextualLogger
from docacl.core.logging import logger as default_logger
from docacl.domains.acl.types import CompiledFilter

MATCH_ALL = "*:*"


class FilterTranslator:
    """Translates canonical filter dicts to Solr ``fq`` strings.

    Filter Structure:
        - must: conditions -> +clause (all required)
        - should: conditions -> +(a b ...) (at least one required)
        - must_not: conditions -> -clause (each excluded)

    Condition Types:
        - FieldCondition with match -> field:"value"
        - nested must/should/must_not -> parenthesized group

    Unknown conditions raise instead of being dropped: losing a clause from
    an access control filter would widen what the requester can see.
    """

    def __init__(self, logger: Optional[ContextualLogger] = None):
        """Initialize the filter translator.

        Args:
            logger: Optional logger for debug messages
        """
        self._logger = logger or default_logger

    def translate(self, filter: Optional[Union[CompiledFilter, Dict[str, Any]]]) -> Optional[str]:
        """Translate a filter to a Solr filter query string.

        Args:
            filter: CompiledFilter or canonical filter dict

        Returns:
            Lucene query string, or None if no filter

        Raises:
            ValueError: If the filter contains an unsupported condition
        """
        if filter is None:
            return None

        if isinstance(filter, CompiledFilter):
            filter_dict = filter.to_dict()
        elif isinstance(filter, dict):
            filter_dict = filter
        else:
            raise ValueError(f"Unsupported filter type: {type(filter).__name__}")

        fq = self._build_bool_clause(filter_dict)
        self._logger.debug(f"[FilterTranslator] Translated filter to fq: {fq}")
        return fq

    def _build_bool_clause(self, filter_dict: Dict[str, Any]) -> str:
        """Build a parenthesized Lucene boolean clause."""
        parts: List[str] = []

        for condition in filter_dict.get("must") or []:
            parts.append(f"+{self._translate_condition(condition)}")

        should = filter_dict.get("should") or []
        if should:
            should_clauses = " ".join(self._translate_condition(c) for c in should)
            parts.append(f"+({should_clauses})")

        must_not = filter_dict.get("must_not") or []
        if must_not and not parts:
            # A purely negative group matches nothing in Lucene without a positive clause.
            parts.append(MATCH_ALL)
        for condition in must_not:
            parts.append(f"-{self._translate_condition(condition)}")

        if not parts:
            return MATCH_ALL
        return f"({' '.join(parts)})"

    def _translate_condition(self, condition: Dict[str, Any]) -> str:
        """Translate a single filter condition."""
        if "must" in condition or "should" in condition or "must_not" in condition:
            return self._build_bool_clause(condition)

        if "key" in condition and "match" in condition:
            return self._translate_match_condition(condition)

        raise ValueError(f"Unsupported filter condition: {condition}")

    def _translate_match_condition(self, condition: Dict[str, Any]) -> str:
        """Translate a match condition to a term query."""
        match = condition["match"]
        value = match.get("value", "") if isinstance(match, dict) else match
        return f'{condition["key"]}:"{self._escape_value(str(value))}"'

    def _escape_value(self, value: str) -> str:
        """Escape special characters for a quoted Lucene term."""
        return value.replace("\\", "\\\\").replace('"', '\\"')
