"""API schemas."""

from docacl.schemas.access_filter import AccessFilterResponse
from docacl.schemas.health import HealthResponse

__all__ = ["AccessFilterResponse", "HealthResponse"]
