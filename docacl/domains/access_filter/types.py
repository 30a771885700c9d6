"""Types for the access filter domain."""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from docacl.domains.acl.types import CompiledFilter


class AccessFilterResult(BaseModel):
    """Outcome of building one request's access filter."""

    model_config = ConfigDict(frozen=True)

    identities: Dict[str, str] = Field(
        default_factory=dict, description="Resolved domain -> username mapping"
    )
    tokens: List[str] = Field(
        default_factory=list, description="Access tokens the filter was compiled from"
    )
    filter: CompiledFilter = Field(..., description="Non-scoring access control filter")
