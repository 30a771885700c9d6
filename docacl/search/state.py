"""Typed search state model.

Defines the SearchState Pydantic model passed between search operations.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SearchState(BaseModel):
    """Typed state passed between search operations.

    The state is initialized by the host pipeline and updated by each operation:
    - AccessControlFilter -> acl_filter, access_tokens, filter (merged)
    """

    # =========================================================================
    # Filter components
    # =========================================================================
    acl_filter: Optional[Dict[str, Any]] = Field(
        default=None, description="Access control filter from ACL operation"
    )
    filter: Optional[Dict[str, Any]] = Field(
        default=None, description="Final merged filter (existing filters + acl)"
    )

    # =========================================================================
    # Access control
    # =========================================================================
    access_tokens: Optional[List[str]] = Field(
        default=None,
        description="Access tokens the ACL filter was built from (None = filtering bypassed)",
    )

    # =========================================================================
    # Operation metrics
    # =========================================================================
    operation_metrics: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict, description="Per-operation metrics reported by operations"
    )
