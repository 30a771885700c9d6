"""Search context."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from docacl.core.logging import logger as default_logger


class SearchContext(BaseModel):
    """Per-request inputs handed to search operations by the host pipeline."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    request_id: str = Field()
    query: Optional[str] = Field(default=None, description="The request's main query string")
    params: Dict[str, List[str]] = Field(
        default_factory=dict, description="All request parameters, multi-valued"
    )
    logger: Any = Field(default=None, exclude=True)

    def model_post_init(self, __context: Any) -> None:
        """Derive a request-scoped logger if none was given."""
        if self.logger is None:
            self.logger = default_logger.with_context(request_id=self.request_id)
