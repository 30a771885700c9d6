from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List

from docacl.search.context import SearchContext

if TYPE_CHECKING:
    from docacl.search.state import SearchState


class SearchOperation(ABC):
    """Base class for all search operations."""

    @abstractmethod
    def depends_on(self) -> List[str]:
        """List of operation names this operation depends on."""
        pass

    @abstractmethod
    async def execute(
        self,
        context: SearchContext,
        state: "SearchState",
    ) -> None:
        """Execute the operation."""
        pass

    def _report_metrics(self, state: "SearchState", **metrics: Any) -> None:
        """Report operation-specific metrics.

        Args:
            state: Shared SearchState instance
            **metrics: Key-value pairs of metrics to report

        Example:
            self._report_metrics(state, token_count=12, bypassed=False)
        """
        op_name = self.__class__.__name__
        if op_name not in state.operation_metrics:
            state.operation_metrics[op_name] = {}

        state.operation_metrics[op_name].update(metrics)
