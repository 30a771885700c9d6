"""Types for the identity domain."""

from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, Field

# Request parameters as the host pipeline hands them over: name -> one value or many.
RequestParams = Mapping[str, Any]


class IdentityResolution(BaseModel):
    """Who is asking, as far as the request parameters tell.

    Either ``identities`` is non-empty (authenticated, tokens come from the
    authority service) or it is empty and ``user_tokens`` holds whatever
    group tokens the caller asserted (possibly none).
    """

    model_config = ConfigDict(frozen=True)

    identities: Dict[str, str] = Field(
        default_factory=dict,
        description="Insertion-ordered mapping of domain -> username",
    )
    user_tokens: List[str] = Field(
        default_factory=list,
        description="Caller-supplied group tokens for unauthenticated requests",
    )

    @property
    def is_authenticated(self) -> bool:
        """True when at least one identity was supplied."""
        return bool(self.identities)

    def describe(self) -> str:
        """Render identities as ``[domain:user,...]`` for log lines."""
        return "[" + ",".join(f"{d}:{u}" for d, u in self.identities.items()) + "]"
