"""Access filter API schemas."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class AccessFilterResponse(BaseModel):
    """The access control filter built for a set of request parameters."""

    identities: Dict[str, str] = Field(
        default_factory=dict, description="Resolved domain -> username mapping"
    )
    tokens: List[str] = Field(default_factory=list, description="Access tokens used")
    filter: Dict[str, Any] = Field(..., description="Canonical must/should/must_not filter")
    fq: Optional[str] = Field(None, description="The filter as a Solr filter query")
    constant_score: bool = Field(True, description="The filter never affects ranking")
