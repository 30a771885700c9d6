"""Identity domain: who is asking, parsed from request parameters."""

from docacl.domains.identity.resolver import IdentityResolver
from docacl.domains.identity.types import IdentityResolution, RequestParams

__all__ = ["IdentityResolution", "IdentityResolver", "RequestParams"]
