"""Access filter domain: request parameters -> access control filter."""

from docacl.domains.access_filter.protocols import AccessFilterServiceProtocol
from docacl.domains.access_filter.service import AccessFilterService
from docacl.domains.access_filter.types import AccessFilterResult

__all__ = ["AccessFilterResult", "AccessFilterService", "AccessFilterServiceProtocol"]
