"""Access control filter operation.

Resolves the requester's access tokens and builds the access control filter
that restricts search results to documents they may see.

This operation writes directly to state.filter, merging with any existing
filter the request already carries, so the ACL narrows eligibility without
touching the rest of the query.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from docacl.domains.access_filter.protocols import AccessFilterServiceProtocol
from docacl.domains.identity.resolver import get_param
from docacl.search.context import SearchContext

from ._base import SearchOperation

if TYPE_CHECKING:
    from docacl.search.state import SearchState

# Request parameter that switches the operation off for one request.
ENABLE_PARAM = "acl"
# Present on distributed sub-requests, which the coordinating request already filtered.
SHARDS_PARAM = "shards"
# Queries that are let through unfiltered (health checks).
GLOBAL_ALLOWED_QUERIES = ("solrpingquery",)

_FALSE_VALUES = {"false", "off", "no", "0"}


class AccessControlFilter(SearchOperation):
    """Resolve access tokens and build the access control filter.

    This operation:
    1. Skips requests that disabled it, distributed sub-requests and
       allow-listed health-check queries
    2. Builds the filter via the access filter service (identity -> tokens -> filter)
    3. Writes it to state.acl_filter and ANDs it into state.filter

    Authority failures are not caught: a request whose tokens cannot be
    resolved fails instead of running with a guessed filter.
    """

    def __init__(self, service: AccessFilterServiceProtocol) -> None:
        """Initialize with the access filter service.

        Args:
            service: Builds the filter from request parameters
        """
        self.service = service

    def depends_on(self) -> List[str]:
        """No dependencies - runs early in the pipeline."""
        return []

    async def execute(
        self,
        context: SearchContext,
        state: "SearchState",
    ) -> None:
        """Build the access filter and merge it into state.filter."""
        log = context.logger
        bypass_reason = self._bypass_reason(context)
        if bypass_reason is not None:
            log.info(f"[AccessControlFilter] Skipping access filtering: {bypass_reason}")
            state.access_tokens = None
            self._report_metrics(state, bypassed=True, reason=bypass_reason)
            return

        log.info("[AccessControlFilter] Resolving access tokens...")
        result = await self.service.build(context.params, logger=log)

        access_filter = result.filter.to_dict()
        state.acl_filter = access_filter
        state.filter = self._merge_with_existing_filter(access_filter, state.filter)
        state.access_tokens = list(result.tokens)

        self._report_metrics(
            state,
            bypassed=False,
            identity_count=len(result.identities),
            token_count=len(result.tokens),
        )
        log.info(
            f"[AccessControlFilter] ✓ Access control filter built with "
            f"{len(result.tokens)} tokens"
        )

    def _bypass_reason(self, context: SearchContext) -> Optional[str]:
        """Why this request skips access filtering, or None if it does not."""
        enabled = get_param(context.params, ENABLE_PARAM)
        if enabled is not None and enabled.strip().lower() in _FALSE_VALUES:
            return "disabled_by_request"

        if get_param(context.params, SHARDS_PARAM) is not None:
            return "distributed_sub_request"

        if context.query is not None:
            # Allow-list entries are trimmed, the query itself is compared as sent.
            query = context.query.lower()
            if any(query == allowed.strip().lower() for allowed in GLOBAL_ALLOWED_QUERIES):
                return "globally_allowed_query"

        return None

    def _merge_with_existing_filter(
        self,
        access_filter: Dict[str, Any],
        existing_filter: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        """Merge access control filter with existing filter using AND semantics.

        Results must satisfy BOTH:
        - Access control filter
        - Existing filter (all conditions) if present

        Args:
            access_filter: The access control filter we just built
            existing_filter: Any filter already on the request

        Returns:
            Merged filter dict
        """
        if not existing_filter:
            return access_filter

        # Both present - wrap in must[] for AND semantics
        return {"must": [access_filter, existing_filter]}
